"""Byte sources that MessagePack values are decoded from."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from msgwire.errors import InsufficientBytesError


@runtime_checkable
class Reader(Protocol):
    """Anything the decoding functions can pull bytes from."""

    def read_u8(self) -> int: ...

    def read_exact(self, n: int) -> bytes: ...


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError(f"cannot read a negative number of bytes: {n}")


class Bytes:
    """An in-memory input that tracks how far it has been read.

    Running out of input raises :class:`InsufficientBytesError`, which
    reports how many bytes were wanted, how many were left and where.
    """

    __slots__ = ("_data", "_offset")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._data = bytes(data)
        self._offset = 0

    def read_u8(self) -> int:
        """Read one unsigned byte."""
        if self._offset >= len(self._data):
            raise InsufficientBytesError(expected=1, actual=0, position=self._offset)
        value = self._data[self._offset]
        self._offset += 1
        return value

    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes, consuming nothing if fewer are left."""
        _check_count(n)
        available = len(self._data) - self._offset
        if n > available:
            raise InsufficientBytesError(
                expected=n, actual=available, position=self._offset
            )
        chunk = self._data[self._offset : self._offset + n]
        self._offset += n
        return chunk

    def remaining_slice(self) -> bytes:
        """The bytes not read yet."""
        return self._data[self._offset :]

    def position(self) -> int:
        """Number of bytes read so far."""
        return self._offset

    def __len__(self) -> int:
        return len(self._data) - self._offset

    def __repr__(self) -> str:
        return f"Bytes(position={self._offset}, remaining={len(self)})"


class StreamReader:
    """Reads from a binary file-like object that has a ``read`` method.

    Short reads are retried until the requested amount has arrived; an end
    of stream before that raises :class:`EOFError`.
    """

    __slots__ = ("_stream",)

    def __init__(self, stream) -> None:
        self._stream = stream

    @property
    def stream(self):
        """The wrapped stream."""
        return self._stream

    def read_u8(self) -> int:
        """Read one unsigned byte."""
        return self.read_exact(1)[0]

    def read_exact(self, n: int) -> bytes:
        """Read exactly ``n`` bytes from the stream."""
        _check_count(n)
        buf = bytearray()
        while len(buf) < n:
            chunk = self._stream.read(n - len(buf))
            if chunk is None:
                raise BlockingIOError("stream has no data available")
            if not chunk:
                raise EOFError(
                    f"failed to fill whole buffer: wanted {n} bytes, got {len(buf)}"
                )
            buf += chunk
        return bytes(buf)


def as_reader(source) -> Reader:
    """Turn bytes, a binary stream or an existing reader into a reader."""
    if isinstance(source, (Bytes, StreamReader)):
        return source
    if isinstance(source, (bytes, bytearray, memoryview)):
        return Bytes(source)
    if callable(getattr(source, "read_u8", None)) and callable(
        getattr(source, "read_exact", None)
    ):
        return source
    if callable(getattr(source, "read", None)):
        return StreamReader(source)
    raise TypeError(f"cannot read MessagePack data from {type(source).__name__}")