"""Tests for CLI logging configuration (cli/logging_setup.py)."""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from naclseal.cli.logging_setup import configure_logging, resolve_level


class TestResolveLevel:
    def test_default_is_warning(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("NACLSEAL_LOG_LEVEL", raising=False)
        assert resolve_level(verbose=False) == logging.WARNING

    def test_verbose_is_debug(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NACLSEAL_LOG_LEVEL", "error")
        assert resolve_level(verbose=True) == logging.DEBUG

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NACLSEAL_LOG_LEVEL", "info")
        assert resolve_level(verbose=False) == logging.INFO

    def test_unknown_env_value_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NACLSEAL_LOG_LEVEL", "chatty")
        assert resolve_level(verbose=False) == logging.WARNING


class TestConfigureLogging:
    def test_single_rich_handler(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True)
        logger = logging.getLogger("naclseal")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)
        assert logger.level == logging.DEBUG
        assert logger.propagate is False
