"""Key file readers.

Reads a whole key file and hands its bytes to the pure codec in
:mod:`naclseal.core.key_codec`.  ``OSError`` is mapped to
:class:`~naclseal.exceptions.InputOutputError` here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from naclseal.core.key_codec import decode_keypair, decode_public_key
from naclseal.core.models import BoxKeypair, BoxPublicKey
from naclseal.exceptions import InputOutputError

logger = logging.getLogger(__name__)


def _read_file(path: str | Path) -> bytes:
    target = Path(path)
    try:
        blob = target.read_bytes()
    except OSError as exc:
        raise InputOutputError(
            f"failed to read {target}: {exc.strerror or exc}",
            hint="Check that the key file exists and is readable.",
        ) from exc
    logger.debug("Read %d bytes from %s", len(blob), target)
    return blob


def read_keypair_file(path: str | Path) -> BoxKeypair:
    """Read and decode the keypair envelope stored at *path*."""
    return decode_keypair(_read_file(path))


def read_public_key_file(path: str | Path) -> BoxPublicKey:
    """Read and decode the public-key envelope stored at *path*."""
    return decode_public_key(_read_file(path))
