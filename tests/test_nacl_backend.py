"""Tests for the PyNaCl sealing backend (infra/nacl_backend.py).

Uses the real libsodium bindings; randomness is seeded through the
injected random source.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from nacl.public import PrivateKey, SealedBox

from naclseal.core.models import BoxKeypair
from naclseal.core.protocols import RandomSource
from naclseal.exceptions import AuthenticationFailureError, SealingError
from naclseal.infra.nacl_backend import (
    PyNaclSealingBackend,
    SystemRandomSource,
    pynacl_version,
)
from naclseal.utils.constants import SEAL_OVERHEAD


class TestRandomSources:
    def test_system_source_length(self) -> None:
        assert len(SystemRandomSource().random_bytes(32)) == 32

    def test_system_source_not_constant(self) -> None:
        source = SystemRandomSource()
        assert source.random_bytes(32) != source.random_bytes(32)

    def test_short_random_source_is_rejected(self) -> None:
        class _Short:
            def random_bytes(self, size: int) -> bytes:
                return b"\x00" * (size - 1)

        with pytest.raises(SealingError, match="31 bytes"):
            PyNaclSealingBackend(random_source=_Short()).generate_keypair()


class TestGenerateKeypair:
    def test_lengths_and_distinct_halves(self, keypair: BoxKeypair) -> None:
        assert len(keypair.private) == 32
        assert len(keypair.public) == 32
        assert keypair.private != keypair.public

    def test_public_matches_libsodium_derivation(self, keypair: BoxKeypair) -> None:
        assert bytes(PrivateKey(keypair.private).public_key) == keypair.public

    def test_seeded_generation_is_deterministic(
        self, make_random: Callable[[int], RandomSource],
    ) -> None:
        first = PyNaclSealingBackend(make_random(7)).generate_keypair()
        second = PyNaclSealingBackend(make_random(7)).generate_keypair()
        assert first == second

    def test_default_source_gives_fresh_keys(self) -> None:
        backend = PyNaclSealingBackend()
        assert backend.generate_keypair() != backend.generate_keypair()


class TestSealOpen:
    @pytest.mark.parametrize(
        "message",
        [b"", b"x", b"hello, sealed world", bytes(range(256)) * 64],
    )
    def test_round_trip(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair, message: bytes,
    ) -> None:
        box = backend.seal(message, keypair.public_key())
        assert len(box) == len(message) + SEAL_OVERHEAD
        assert backend.open(box, keypair) == message

    def test_box_opens_with_stock_sealed_box(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair,
    ) -> None:
        box = backend.seal(b"interop", keypair.public_key())
        assert SealedBox(PrivateKey(keypair.private)).decrypt(box) == b"interop"

    def test_stock_sealed_box_opens_here(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair,
    ) -> None:
        box = SealedBox(PrivateKey(keypair.private).public_key).encrypt(b"interop")
        assert backend.open(box, keypair) == b"interop"

    def test_each_seal_uses_fresh_ephemeral_key(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair,
    ) -> None:
        first = backend.seal(b"same", keypair.public_key())
        second = backend.seal(b"same", keypair.public_key())
        assert first[:32] != second[:32]
        assert first != second

    def test_every_flipped_bit_is_rejected(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair,
    ) -> None:
        box = backend.seal(b"tamper me", keypair.public_key())
        for index in range(len(box)):
            for bit in range(8):
                tampered = bytearray(box)
                tampered[index] ^= 1 << bit
                with pytest.raises(AuthenticationFailureError):
                    backend.open(bytes(tampered), keypair)

    def test_wrong_key_is_rejected(self, backend: PyNaclSealingBackend) -> None:
        alice = backend.generate_keypair()
        bob = backend.generate_keypair()
        box = backend.seal(b"for alice", alice.public_key())
        with pytest.raises(AuthenticationFailureError):
            backend.open(box, bob)

    def test_mismatched_public_half_is_rejected(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair,
    ) -> None:
        box = backend.seal(b"msg", keypair.public_key())
        forged = BoxKeypair(private=keypair.private, public=b"\x09" * 32)
        with pytest.raises(AuthenticationFailureError):
            backend.open(box, forged)

    @pytest.mark.parametrize("size", [0, 1, SEAL_OVERHEAD - 1])
    def test_truncated_box_is_rejected(
        self, backend: PyNaclSealingBackend, keypair: BoxKeypair, size: int,
    ) -> None:
        with pytest.raises(AuthenticationFailureError) as exc_info:
            backend.open(b"\x00" * size, keypair)
        assert str(SEAL_OVERHEAD) in (exc_info.value.hint or "")


def test_pynacl_version_reported() -> None:
    assert pynacl_version()
