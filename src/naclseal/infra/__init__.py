"""Infrastructure layer — external system integration.

This layer wraps all interaction with PyNaCl, the filesystem and the
standard streams.  Every raw third-party exception must be caught here
and re-raised as a :class:`~naclseal.exceptions.NaclSealError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from naclseal.infra.key_files import read_keypair_file, read_public_key_file
from naclseal.infra.nacl_backend import PyNaclSealingBackend, SystemRandomSource
from naclseal.infra.streams import (
    Base64DecodingReader,
    Base64EncodingWriter,
    StreamReader,
    StreamWriter,
    open_input,
    open_output,
)

__all__: list[str] = [
    "Base64DecodingReader",
    "Base64EncodingWriter",
    "PyNaclSealingBackend",
    "StreamReader",
    "StreamWriter",
    "SystemRandomSource",
    "open_input",
    "open_output",
    "read_keypair_file",
    "read_public_key_file",
]
