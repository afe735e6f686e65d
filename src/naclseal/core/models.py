"""Domain models for naclseal.

All models are **frozen** dataclasses — immutable value objects.  The
only behaviour they carry is the length invariant on their key
material, enforced at construction so that a malformed key can never
reach the sealing backend.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from naclseal.exceptions import InvalidKeyLengthError
from naclseal.utils.constants import KEY_LENGTH


# ---------------------------------------------------------------------------
# Public key
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoxPublicKey:
    """A recipient's X25519 public key."""

    key: bytes
    """Raw 32-byte public key."""

    def __post_init__(self) -> None:
        if len(self.key) != KEY_LENGTH:
            raise InvalidKeyLengthError(
                f"bad key length (not {KEY_LENGTH} bytes but {len(self.key)})",
            )


# ---------------------------------------------------------------------------
# Keypair
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class BoxKeypair:
    """A matched private/public X25519 keypair.

    The private key is excluded from ``repr`` so that it never ends up
    in logs or tracebacks.
    """

    private: bytes = field(repr=False)
    """Raw 32-byte private key."""

    public: bytes
    """Raw 32-byte public key."""

    def __post_init__(self) -> None:
        if len(self.private) != KEY_LENGTH or len(self.public) != KEY_LENGTH:
            raise InvalidKeyLengthError(
                f"bad key length, not {KEY_LENGTH} bytes but "
                f"{len(self.private)} for private and "
                f"{len(self.public)} for public",
            )

    def public_key(self) -> BoxPublicKey:
        """Return the public half as a :class:`BoxPublicKey`."""
        return BoxPublicKey(key=self.public)
