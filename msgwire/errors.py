"""Exceptions raised while reading and writing MessagePack data."""

from __future__ import annotations

from msgwire.marker import Marker


class MsgPackError(Exception):
    """Base class of every error raised by this package."""


class InsufficientBytesError(MsgPackError):
    """An in-memory input ran out of bytes."""

    def __init__(self, expected: int, actual: int, position: int) -> None:
        self.expected = expected
        self.actual = actual
        self.position = position
        super().__init__(
            f"Expected at least bytes {expected}, but only got {actual} (pos {position})"
        )


class ValueReadError(MsgPackError):
    """A MessagePack value could not be read."""


class _WrappingReadError(ValueReadError):
    _message = ""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        super().__init__(self._message)


class InvalidMarkerReadError(_WrappingReadError):
    """Reading the marker byte failed."""

    _message = "failed to read MessagePack marker"


class InvalidDataReadError(_WrappingReadError):
    """Reading the data after the marker failed."""

    _message = "failed to read MessagePack data"


class TypeMismatchError(ValueReadError):
    """The marker read does not denote the expected type."""

    def __init__(self, marker: Marker) -> None:
        self.marker = marker
        super().__init__("the type decoded isn't match with the expected one")


class OutOfRangeError(ValueReadError):
    """A decoded integer does not fit the requested range."""

    def __init__(self) -> None:
        super().__init__("out of range integral type conversion attempted")


class DecodeStringError(ValueReadError):
    """A string value could not be decoded."""

    def __init__(self) -> None:
        super().__init__("error while decoding string")


class BufferSizeTooSmallError(DecodeStringError):
    """The string is longer than the room available for it."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__()


class InvalidUtf8Error(DecodeStringError):
    """The string data is not valid UTF-8."""

    def __init__(self, data: bytes, error: UnicodeDecodeError | None = None) -> None:
        self.data = data
        self.error = error
        super().__init__()

    @property
    def valid_up_to(self) -> int:
        """Number of leading bytes that decode cleanly."""
        return self.error.start if self.error is not None else 0


class ValueWriteError(MsgPackError):
    """A multi-byte MessagePack value could not be written."""

    def __init__(self, error: BaseException | None = None) -> None:
        self.error = error
        super().__init__("error while writing multi-byte MessagePack value")


class InvalidMarkerWriteError(ValueWriteError):
    """Writing the marker byte failed."""


class InvalidDataWriteError(ValueWriteError):
    """Writing the data after the marker failed."""