"""PyNaCl backed implementation of :class:`~naclseal.core.protocols.SealingBackend`.

This module is the **only** place in the codebase that imports ``nacl``.
All PyNaCl exceptions are caught here and re-raised as typed
:class:`~naclseal.exceptions.NaclSealError` subclasses — nothing raw
escapes the infrastructure boundary.

The sealed box is libsodium's ``crypto_box_seal`` format::

    ephemeral_pk || crypto_box(message, nonce, recipient_pk, ephemeral_sk)
    nonce = BLAKE2b-192(ephemeral_pk || recipient_pk)

Sealing is composed from ``crypto_box`` so that the ephemeral key comes
from the injected :class:`~naclseal.core.protocols.RandomSource`.
Opening goes straight to libsodium's ``crypto_box_seal_open``.
"""

from __future__ import annotations

import logging
from types import ModuleType

from naclseal.core.models import BoxKeypair, BoxPublicKey
from naclseal.core.protocols import RandomSource
from naclseal.exceptions import (
    AuthenticationFailureError,
    EnvironmentError,
    SealingError,
)
from naclseal.utils.constants import KEY_LENGTH, NONCE_LENGTH, SEAL_OVERHEAD

logger = logging.getLogger(__name__)

_INSTALL_HINT = "Install with: pip install pynacl"


def _load_nacl() -> ModuleType:
    """Import PyNaCl lazily or raise ``EnvironmentError``."""
    try:
        import nacl
        import nacl.bindings
        import nacl.encoding
        import nacl.exceptions
        import nacl.hash
        import nacl.utils
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "PyNaCl is not installed.",
            hint=_INSTALL_HINT,
        ) from exc
    return nacl


class SystemRandomSource:
    """:class:`RandomSource` backed by libsodium's ``randombytes_buf``."""

    def random_bytes(self, size: int) -> bytes:
        nacl = _load_nacl()
        return nacl.utils.random(size)


class PyNaclSealingBackend:
    """Concrete :class:`SealingBackend` backed by PyNaCl.

    Usage::

        backend = PyNaclSealingBackend()
        keypair = backend.generate_keypair()
        box = backend.seal(b"hello", keypair.public_key())
        assert backend.open(box, keypair) == b"hello"

    Parameters
    ----------
    random_source:
        Source of key and ephemeral-key material.  Defaults to
        :class:`SystemRandomSource`.
    """

    def __init__(self, random_source: RandomSource | None = None) -> None:
        self._random: RandomSource = (
            random_source if random_source is not None else SystemRandomSource()
        )

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def generate_keypair(self) -> BoxKeypair:
        """Generate a keypair: 32 random bytes and their X25519 public point."""
        nacl = _load_nacl()
        private = self._random_key()
        public = nacl.bindings.crypto_scalarmult_base(private)
        return BoxKeypair(private=private, public=public)

    def seal(self, message: bytes, public_key: BoxPublicKey) -> bytes:
        """Seal *message* to *public_key* under a fresh ephemeral key."""
        nacl = _load_nacl()
        ephemeral_sk = self._random_key()
        try:
            ephemeral_pk = nacl.bindings.crypto_scalarmult_base(ephemeral_sk)
            nonce = nacl.hash.blake2b(
                ephemeral_pk + public_key.key,
                digest_size=NONCE_LENGTH,
                encoder=nacl.encoding.RawEncoder,
            )
            boxed = nacl.bindings.crypto_box(
                message, nonce, public_key.key, ephemeral_sk,
            )
        except nacl.exceptions.CryptoError as exc:
            raise SealingError(f"failed to seal the box: {exc}") from exc
        return ephemeral_pk + boxed

    def open(self, ciphertext: bytes, keypair: BoxKeypair) -> bytes:
        """Open a sealed box, verifying it before returning any plaintext.

        Raises
        ------
        AuthenticationFailureError
            When the box is shorter than the seal overhead, was tampered
            with, or was sealed to a different key.
        """
        nacl = _load_nacl()
        if len(ciphertext) < SEAL_OVERHEAD:
            raise AuthenticationFailureError(
                "failed to open the box",
                hint=f"A sealed box is at least {SEAL_OVERHEAD} bytes; "
                f"got {len(ciphertext)}.",
            )
        try:
            return nacl.bindings.crypto_box_seal_open(
                ciphertext, keypair.public, keypair.private,
            )
        except nacl.exceptions.CryptoError as exc:
            logger.debug("crypto_box_seal_open rejected the box: %s", exc)
            raise AuthenticationFailureError(
                "failed to open the box",
                hint="The box was tampered with or sealed to a different key.",
            ) from exc

    # ------------------------------------------------------------------
    # Randomness
    # ------------------------------------------------------------------

    def _random_key(self) -> bytes:
        material = self._random.random_bytes(KEY_LENGTH)
        if len(material) != KEY_LENGTH:
            raise SealingError(
                f"random source returned {len(material)} bytes, "
                f"expected {KEY_LENGTH}",
            )
        return material


def pynacl_version() -> str:
    """Return the installed PyNaCl version for diagnostics."""
    nacl = _load_nacl()
    return str(getattr(nacl, "__version__", "unknown"))
