"""Custom exception hierarchy for naclseal.

All exceptions that cross layer boundaries must inherit from
:class:`NaclSealError`.  Raw third-party exceptions (PyNaCl's
``CryptoError``, ``OSError``, JSON and base64 decoding errors) must
NEVER propagate beyond the layer that produced them — they must be
caught and re-raised as a typed subclass defined here.

Hierarchy
---------
NaclSealError
├── InputOutputError
├── DecodeError
├── InvalidKeyLengthError
├── AuthenticationFailureError
├── SealingError
├── UsageError
└── EnvironmentError
"""

from __future__ import annotations


class NaclSealError(Exception):
    """Base exception for all naclseal errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- I/O -------------------------------------------------------------------

class InputOutputError(NaclSealError):
    """Raised when a key file or a standard stream cannot be read or written."""


# --- Key envelopes ---------------------------------------------------------

class DecodeError(NaclSealError):
    """Raised when a key envelope is not valid JSON or has the wrong shape."""


class InvalidKeyLengthError(NaclSealError):
    """Raised when decoded key material is not exactly 32 bytes."""


# --- Sealing ---------------------------------------------------------------

class AuthenticationFailureError(NaclSealError):
    """Raised when a sealed box fails verification on unseal."""


class SealingError(NaclSealError):
    """Raised when the sealing backend fails unexpectedly."""


# --- Command line ----------------------------------------------------------

class UsageError(NaclSealError):
    """Raised when the command line does not name a known operation."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(NaclSealError):
    """Raised when a required runtime dependency is not available."""
