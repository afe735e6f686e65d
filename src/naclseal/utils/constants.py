"""Wire-level constants shared by the codec, the backend and the CLI."""

from __future__ import annotations

KEY_LENGTH: int = 32
"""Length in bytes of an X25519 private or public key."""

KEYPAIR_ENVELOPE: str = "sealed-box-privkey"
"""Top-level JSON field naming a keypair envelope."""

PUBLIC_KEY_ENVELOPE: str = "sealed-box-pubkey"
"""Top-level JSON field naming a public-key envelope."""

PRIVATE_FIELD: str = "private"
PUBLIC_FIELD: str = "public"

MAC_LENGTH: int = 16
"""Poly1305 authenticator length."""

SEAL_OVERHEAD: int = KEY_LENGTH + MAC_LENGTH
"""Bytes a sealed box adds to its message (ephemeral key + MAC)."""

NONCE_LENGTH: int = 24

LOG_LEVEL_ENV: str = "NACLSEAL_LOG_LEVEL"
"""Environment variable overriding the default log level."""
