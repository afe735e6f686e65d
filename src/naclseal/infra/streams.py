"""Binary stream adapters and the base64 recoding decorators.

Readers return the whole stream in one ``read()``; writers are context
managers whose exit flushes (and, for base64, writes the final padded
quantum) on every exit path.  Recoding is layered by wrapping::

    reader = Base64DecodingReader(StreamReader(sys.stdin.buffer))
    with Base64EncodingWriter(StreamWriter(sys.stdout.buffer)) as writer:
        writer.write(payload)

Sealing code never knows whether it is talking to base64 or raw bytes.
"""

from __future__ import annotations

import base64
import binascii
from types import TracebackType
from typing import BinaryIO, Protocol, TypeVar

from naclseal.exceptions import DecodeError, InputOutputError

_W = TypeVar("_W", bound="_WriterContext")


# ---------------------------------------------------------------------------
# Interfaces
# ---------------------------------------------------------------------------

class Reader(Protocol):
    def read(self) -> bytes:
        """Return the remaining contents of the stream."""
        ...  # pragma: no cover


class Writer(Protocol):
    def write(self, data: bytes) -> None: ...  # pragma: no cover

    def close(self) -> None: ...  # pragma: no cover


class _WriterContext:
    """Mixin giving writers ``with`` support that always closes."""

    def close(self) -> None:  # pragma: no cover - overridden
        raise NotImplementedError

    def __enter__(self: _W) -> _W:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


# ---------------------------------------------------------------------------
# Raw adapters
# ---------------------------------------------------------------------------

class StreamReader:
    """Read everything from a binary file object."""

    def __init__(self, raw: BinaryIO, *, name: str = "stdin") -> None:
        self._raw = raw
        self._name = name

    def read(self) -> bytes:
        try:
            return self._raw.read()
        except OSError as exc:
            raise InputOutputError(f"failed to read from {self._name}: {exc}") from exc


class StreamWriter(_WriterContext):
    """Write to a binary file object; ``close`` flushes but never closes it."""

    def __init__(self, raw: BinaryIO, *, name: str = "stdout") -> None:
        self._raw = raw
        self._name = name

    def write(self, data: bytes) -> None:
        try:
            self._raw.write(data)
        except OSError as exc:
            raise InputOutputError(f"failed to write to {self._name}: {exc}") from exc

    def close(self) -> None:
        try:
            self._raw.flush()
        except OSError as exc:
            raise InputOutputError(f"failed to flush {self._name}: {exc}") from exc


# ---------------------------------------------------------------------------
# Base64 decorators
# ---------------------------------------------------------------------------

class Base64DecodingReader:
    """Decode standard, padded base64 from the wrapped reader.

    Line breaks and other ASCII whitespace are ignored, so wrapped
    output from tools such as ``base64(1)`` is accepted.
    """

    def __init__(self, inner: Reader) -> None:
        self._inner = inner

    def read(self) -> bytes:
        encoded = b"".join(self._inner.read().split())
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DecodeError(
                f"failed to decode base64 input: {exc}",
                hint="Drop -b when the input is raw binary.",
            ) from exc


class Base64EncodingWriter(_WriterContext):
    """Encode everything written as standard, padded base64.

    Complete 3-byte groups are emitted as they arrive; the trailing
    partial group is held back until :meth:`close`, which pads it and
    then closes the wrapped writer.  Output is a single unwrapped line
    without a trailing newline.
    """

    def __init__(self, inner: Writer) -> None:
        self._inner = inner
        self._pending = b""
        self._closed = False

    def write(self, data: bytes) -> None:
        if self._closed:
            raise InputOutputError("write to a closed base64 encoder")
        buffered = self._pending + data
        cut = len(buffered) - len(buffered) % 3
        self._pending = buffered[cut:]
        if cut:
            self._inner.write(base64.b64encode(buffered[:cut]))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._pending:
                self._inner.write(base64.b64encode(self._pending))
                self._pending = b""
        finally:
            self._inner.close()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def open_input(raw: BinaryIO, *, base64_recoding: bool = False) -> Reader:
    """Wrap *raw* in a reader, decoding base64 when requested."""
    reader: Reader = StreamReader(raw)
    if base64_recoding:
        reader = Base64DecodingReader(reader)
    return reader


def open_output(
    raw: BinaryIO,
    *,
    base64_recoding: bool = False,
) -> StreamWriter | Base64EncodingWriter:
    """Wrap *raw* in a writer, encoding base64 when requested."""
    writer = StreamWriter(raw)
    if base64_recoding:
        return Base64EncodingWriter(writer)
    return writer
