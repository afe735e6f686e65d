"""Shared pytest fixtures and configuration for the naclseal test suite.

Guidelines
----------
* No network access in any test.
* Real stdin/stdout are never touched: ``main()`` receives ``BytesIO``.
* Key generation uses a seeded random source so failures reproduce.
* Tests must not depend on OS state beyond ``tmp_path``.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from pathlib import Path

import pytest

from naclseal.core.key_codec import encode_keypair, encode_public_key
from naclseal.core.models import BoxKeypair
from naclseal.infra.nacl_backend import PyNaclSealingBackend


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers the CLI attached so they never outlive a test."""
    yield
    logger = logging.getLogger("naclseal")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


class SeededRandomSource:
    """Deterministic :class:`RandomSource` for tests.  Not secure."""

    def __init__(self, seed: int = 0) -> None:
        self._rng = random.Random(seed)

    def random_bytes(self, size: int) -> bytes:
        return self._rng.randbytes(size)


@pytest.fixture()
def make_random() -> type[SeededRandomSource]:
    return SeededRandomSource


@pytest.fixture()
def seeded_random() -> SeededRandomSource:
    return SeededRandomSource(seed=1234)


@pytest.fixture()
def backend(seeded_random: SeededRandomSource) -> PyNaclSealingBackend:
    return PyNaclSealingBackend(random_source=seeded_random)


@pytest.fixture()
def keypair(backend: PyNaclSealingBackend) -> BoxKeypair:
    return backend.generate_keypair()


@pytest.fixture()
def keypair_file(tmp_path: Path, keypair: BoxKeypair) -> Path:
    path = tmp_path / "priv.json"
    path.write_bytes(encode_keypair(keypair))
    return path


@pytest.fixture()
def pubkey_file(tmp_path: Path, keypair: BoxKeypair) -> Path:
    path = tmp_path / "pub.json"
    path.write_bytes(encode_public_key(keypair.public_key()))
    return path
