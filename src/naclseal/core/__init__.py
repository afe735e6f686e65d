"""Core / service layer — pure business logic and data transformations.

Rules
-----
* No ``print()`` calls.
* No filesystem or stream I/O.
* No imports from ``cli`` or ``infra``.
* All functions must be fully typed and deterministic.
"""

from naclseal.core.key_codec import (
    decode_keypair,
    decode_public_key,
    encode_keypair,
    encode_public_key,
)
from naclseal.core.models import BoxKeypair, BoxPublicKey
from naclseal.core.protocols import RandomSource, SealingBackend
from naclseal.core.sealing_service import SealingService

__all__: list[str] = [
    "BoxKeypair",
    "BoxPublicKey",
    "RandomSource",
    "SealingBackend",
    "SealingService",
    "decode_keypair",
    "decode_public_key",
    "encode_keypair",
    "encode_public_key",
]
