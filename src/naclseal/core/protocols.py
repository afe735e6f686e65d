"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from typing import Protocol

from naclseal.core.models import BoxKeypair, BoxPublicKey


class RandomSource(Protocol):
    """Contract for a cryptographically secure source of random bytes.

    Injected into the sealing backend instead of relying on a hidden
    process-wide generator, so tests can substitute a seeded source.
    """

    def random_bytes(self, size: int) -> bytes:
        """Return exactly *size* random bytes."""
        ...  # pragma: no cover


class SealingBackend(Protocol):
    """Contract for anonymous sealed-box backends.

    Implementations must map all backend-specific exceptions to
    :class:`~naclseal.exceptions.NaclSealError` subclasses.
    """

    def generate_keypair(self) -> BoxKeypair:
        """Generate a fresh keypair."""
        ...  # pragma: no cover

    def seal(self, message: bytes, public_key: BoxPublicKey) -> bytes:
        """Encrypt *message* to *public_key* with a fresh ephemeral sender key."""
        ...  # pragma: no cover

    def open(self, ciphertext: bytes, keypair: BoxKeypair) -> bytes:
        """Decrypt and verify *ciphertext* with *keypair*.

        Raises
        ------
        AuthenticationFailureError
            When the box is malformed, tampered with, or sealed to a
            different key.
        """
        ...  # pragma: no cover
