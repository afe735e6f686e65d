"""Core sealing service — orchestrates key generation, seal and unseal.

This is the central service class consumed by the CLI layer.  It
depends on a :class:`~naclseal.core.protocols.SealingBackend` injected
at construction time (dependency inversion), keeping the core free of
any PyNaCl import.

Guarantees
----------
* Pure orchestration — no I/O, no ``print()``, no filesystem access.
* Only :class:`~naclseal.exceptions.NaclSealError` subclasses escape.
* ``unseal`` either returns the full verified plaintext or raises.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from naclseal.core.models import BoxKeypair, BoxPublicKey
from naclseal.core.protocols import SealingBackend
from naclseal.exceptions import NaclSealError, SealingError

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


class SealingService:
    """Stateless service driving the four key and box operations.

    Parameters
    ----------
    backend:
        Any object satisfying the :class:`SealingBackend` protocol.
    """

    def __init__(self, backend: SealingBackend) -> None:
        self._backend: SealingBackend = backend

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def generate_keypair(self) -> BoxKeypair:
        """Generate a fresh keypair from the backend's random source."""
        keypair = self._call("key generation", self._backend.generate_keypair)
        logger.debug("Generated keypair with public key %s", keypair.public.hex())
        return keypair

    @staticmethod
    def derive_public_key(keypair: BoxKeypair) -> BoxPublicKey:
        """Return the public key of *keypair*."""
        return keypair.public_key()

    def seal(self, message: bytes, public_key: BoxPublicKey) -> bytes:
        """Seal *message* for *public_key*.

        Raises
        ------
        SealingError
            When the backend fails unexpectedly.
        """
        logger.debug("Sealing %d byte message", len(message))
        return self._call("seal", lambda: self._backend.seal(message, public_key))

    def unseal(self, ciphertext: bytes, keypair: BoxKeypair) -> bytes:
        """Open *ciphertext* with *keypair*.

        Raises
        ------
        AuthenticationFailureError
            When the box cannot be verified.
        SealingError
            When the backend fails unexpectedly.
        """
        logger.debug("Unsealing %d byte box", len(ciphertext))
        return self._call("unseal", lambda: self._backend.open(ciphertext, keypair))

    # ------------------------------------------------------------------
    # Backend delegation (safe boundary)
    # ------------------------------------------------------------------

    @staticmethod
    def _call(operation: str, func: Callable[[], _T]) -> _T:
        """Call the backend and ensure only our exceptions escape."""
        try:
            return func()
        except NaclSealError:
            # Already one of ours — let it propagate unchanged.
            raise
        except Exception as exc:
            raise SealingError(
                f"Unexpected backend error during {operation}: {exc}",
            ) from exc
