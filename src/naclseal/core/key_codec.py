"""JSON envelope codec for keypairs and public keys.

Envelopes wrap base64 byte arrays under a single named field::

    {"sealed-box-privkey": {"private": "<b64>", "public": "<b64>"}}
    {"sealed-box-pubkey": {"public": "<b64>"}}

JSON has no fixed-length byte array, so every decode path validates the
key length strictly instead of trusting the envelope.  An absent or
``null`` key field decodes as zero bytes and fails that check.

Guarantees
----------
* Pure — no I/O.
* Only :class:`~naclseal.exceptions.NaclSealError` subclasses escape.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from naclseal.core.models import BoxKeypair, BoxPublicKey
from naclseal.exceptions import DecodeError
from naclseal.utils.constants import (
    KEYPAIR_ENVELOPE,
    PRIVATE_FIELD,
    PUBLIC_FIELD,
    PUBLIC_KEY_ENVELOPE,
)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _dump(document: dict[str, Any]) -> bytes:
    return json.dumps(document, separators=(",", ":")).encode("utf-8")


def encode_keypair(keypair: BoxKeypair) -> bytes:
    """Serialize *keypair* into a keypair envelope."""
    return _dump(
        {
            KEYPAIR_ENVELOPE: {
                PRIVATE_FIELD: _b64(keypair.private),
                PUBLIC_FIELD: _b64(keypair.public),
            },
        },
    )


def encode_public_key(public_key: BoxPublicKey) -> bytes:
    """Serialize *public_key* into a public-key envelope."""
    return _dump({PUBLIC_KEY_ENVELOPE: {PUBLIC_FIELD: _b64(public_key.key)}})


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _load_envelope(blob: bytes, envelope: str) -> dict[str, Any]:
    """Parse *blob* and return the inner object stored under *envelope*."""
    try:
        document: Any = json.loads(blob)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise DecodeError(f"failed to read JSON key: {exc}") from exc

    if not isinstance(document, dict):
        raise DecodeError("failed to read JSON key: expected a JSON object")

    inner: Any = document.get(envelope)
    if inner is None:
        return {}
    if not isinstance(inner, dict):
        raise DecodeError(
            f"failed to read JSON key: {envelope!r} must be a JSON object",
        )
    return inner


def _field_bytes(inner: dict[str, Any], name: str) -> bytes:
    """Base64-decode one key field; absent or ``null`` yields ``b""``."""
    value: Any = inner.get(name)
    if value is None:
        return b""
    if not isinstance(value, str):
        raise DecodeError(
            f"failed to read JSON key: {name!r} must be a base64 string",
        )
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(
            f"failed to read JSON key: {name!r} is not valid base64",
        ) from exc


def decode_keypair(blob: bytes) -> BoxKeypair:
    """Parse a keypair envelope.

    Raises
    ------
    DecodeError
        Malformed JSON, wrong envelope structure, or invalid base64.
    InvalidKeyLengthError
        Either key is not exactly 32 bytes.
    """
    inner = _load_envelope(blob, KEYPAIR_ENVELOPE)
    return BoxKeypair(
        private=_field_bytes(inner, PRIVATE_FIELD),
        public=_field_bytes(inner, PUBLIC_FIELD),
    )


def decode_public_key(blob: bytes) -> BoxPublicKey:
    """Parse a public-key envelope.

    Raises
    ------
    DecodeError
        Malformed JSON, wrong envelope structure, or invalid base64.
    InvalidKeyLengthError
        The key is not exactly 32 bytes.
    """
    inner = _load_envelope(blob, PUBLIC_KEY_ENVELOPE)
    return BoxPublicKey(key=_field_bytes(inner, PUBLIC_FIELD))
