"""Tests for key file readers (infra/key_files.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from naclseal.core.models import BoxKeypair
from naclseal.exceptions import DecodeError, InputOutputError, InvalidKeyLengthError
from naclseal.infra.key_files import read_keypair_file, read_public_key_file


class TestReadKeypairFile:
    def test_reads_valid_file(self, keypair_file: Path, keypair: BoxKeypair) -> None:
        assert read_keypair_file(keypair_file) == keypair

    def test_accepts_str_path(self, keypair_file: Path, keypair: BoxKeypair) -> None:
        assert read_keypair_file(str(keypair_file)) == keypair

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputOutputError, match="failed to read") as exc_info:
            read_keypair_file(tmp_path / "absent.json")
        assert exc_info.value.hint is not None

    def test_directory_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(InputOutputError):
            read_keypair_file(tmp_path)

    def test_public_key_file_is_not_a_keypair(self, pubkey_file: Path) -> None:
        with pytest.raises(InvalidKeyLengthError):
            read_keypair_file(pubkey_file)


class TestReadPublicKeyFile:
    def test_reads_valid_file(self, pubkey_file: Path, keypair: BoxKeypair) -> None:
        assert read_public_key_file(pubkey_file) == keypair.public_key()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputOutputError):
            read_public_key_file(tmp_path / "absent.json")

    def test_malformed_contents(self, tmp_path: Path) -> None:
        path = tmp_path / "pub.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(DecodeError):
            read_public_key_file(path)
