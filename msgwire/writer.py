"""Byte sinks that MessagePack values are encoded into."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from msgwire.errors import MsgPackError


class CapacityOverflowError(MsgPackError):
    """A fixed-size buffer has no room for the bytes being written."""

    def __init__(self) -> None:
        super().__init__("Capacity overflow for fixed-size byte buffer")


@runtime_checkable
class Writer(Protocol):
    """Anything the encoding functions can push bytes into."""

    def write_u8(self, value: int) -> None: ...

    def write_bytes(self, data: bytes) -> None: ...


class ByteBuf:
    """A growable in-memory output; writing to it never fails.

    Given a ``bytearray`` it appends to that very object; any other
    bytes-like value is copied.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes | bytearray | memoryview | None = None) -> None:
        if isinstance(data, bytearray):
            self._data = data
        else:
            self._data = bytearray(data or b"")

    def write_u8(self, value: int) -> None:
        """Append one byte."""
        self._data.append(value)

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Append all of ``data``."""
        self._data += data

    def to_bytes(self) -> bytes:
        """An immutable copy of everything written."""
        return bytes(self._data)

    @property
    def data(self) -> bytearray:
        """The underlying buffer."""
        return self._data

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteBuf):
            return self._data == other._data
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ByteBuf({bytes(self._data)!r})"


class FixedBuffer:
    """Writes into a pre-allocated writable buffer of fixed capacity.

    A write that does not fit raises :class:`CapacityOverflowError` and
    leaves the buffer untouched.
    """

    __slots__ = ("_view", "_offset")

    def __init__(self, buffer) -> None:
        view = memoryview(buffer)
        if view.readonly:
            raise TypeError("buffer is read-only")
        self._view = view.cast("B")
        self._offset = 0

    @property
    def capacity(self) -> int:
        """Total size of the buffer."""
        return len(self._view)

    @property
    def position(self) -> int:
        """Number of bytes written so far."""
        return self._offset

    @property
    def remaining(self) -> int:
        """Bytes of room left."""
        return len(self._view) - self._offset

    def written(self) -> bytes:
        """A copy of the bytes written so far."""
        return self._view[: self._offset].tobytes()

    def write_u8(self, value: int) -> None:
        """Write one byte."""
        self.write_bytes(bytes((value,)))

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write all of ``data`` or nothing."""
        data = memoryview(data).cast("B")
        n = len(data)
        if n > self.remaining:
            raise CapacityOverflowError()
        self._view[self._offset : self._offset + n] = data
        self._offset += n


class StreamWriter:
    """Writes to a binary file-like object that has a ``write`` method.

    Partial writes are continued until every byte is out; a write that
    makes no progress raises :class:`OSError`.
    """

    __slots__ = ("_stream",)

    def __init__(self, stream) -> None:
        self._stream = stream

    @property
    def stream(self):
        """The wrapped stream."""
        return self._stream

    def write_u8(self, value: int) -> None:
        """Write one byte."""
        self.write_bytes(bytes((value,)))

    def write_bytes(self, data: bytes | bytearray | memoryview) -> None:
        """Write all of ``data``."""
        view = memoryview(data).cast("B")
        while view:
            written = self._stream.write(view)
            if written is None:
                return
            if written == 0:
                raise OSError("failed to write whole buffer")
            view = view[written:]


def as_writer(target) -> Writer:
    """Turn a bytearray, a writable buffer, a binary stream or a writer into a writer.

    A ``bytearray`` grows as it is written to; other writable buffers such
    as a ``memoryview`` are filled in place up to their size.
    """
    if isinstance(target, (ByteBuf, FixedBuffer, StreamWriter)):
        return target
    if isinstance(target, bytearray):
        return ByteBuf(target)
    if isinstance(target, memoryview):
        return FixedBuffer(target)
    if callable(getattr(target, "write_u8", None)) and callable(
        getattr(target, "write_bytes", None)
    ):
        return target
    if callable(getattr(target, "write", None)):
        return StreamWriter(target)
    raise TypeError(f"cannot write MessagePack data to {type(target).__name__}")