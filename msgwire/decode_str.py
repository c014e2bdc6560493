"""Decoding of MessagePack strings."""

from __future__ import annotations

import struct

from msgwire.decode import read_marker
from msgwire.errors import (
    BufferSizeTooSmallError,
    InvalidDataReadError,
    InvalidUtf8Error,
    MsgPackError,
    TypeMismatchError,
)
from msgwire.marker import MarkerKind
from msgwire.reader import Bytes, Reader, as_reader

_READ_ERRORS = (MsgPackError, OSError, EOFError)

# Marker kind -> (format of the length field, bytes consumed by the header).
_STR_HEADERS = {
    MarkerKind.STR8: (">B", 2),
    MarkerKind.STR16: (">H", 3),
    MarkerKind.STR32: (">I", 5),
}


def _read_exact(rd: Reader, n: int) -> bytes:
    try:
        return rd.read_exact(n)
    except _READ_ERRORS as err:
        raise InvalidDataReadError(err) from err


def _read_str_len_with_nread(rd: Reader) -> tuple[int, int]:
    marker = read_marker(rd)
    if marker.kind is MarkerKind.FIX_STR:
        return marker.value, 1
    header = _STR_HEADERS.get(marker.kind)
    if header is None:
        raise TypeMismatchError(marker)
    fmt, nread = header
    (length,) = struct.unpack(fmt, _read_exact(rd, struct.calcsize(fmt)))
    return length, nread


def _decode_utf8(data: bytes, reported: bytes) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise InvalidUtf8Error(reported, err) from err


def read_str_len(rd) -> int:
    """Read a string header and return the length of the data in bytes."""
    return _read_str_len_with_nread(as_reader(rd))[0]


def read_str(rd, max_len: int) -> str:
    """Read a whole string whose data may be at most ``max_len`` bytes long.

    Raises :class:`BufferSizeTooSmallError` for longer strings, without
    reading their data.
    """
    rd = as_reader(rd)
    length = read_str_len(rd)
    if length > max_len:
        raise BufferSizeTooSmallError(length)
    return read_str_data(rd, length)


def read_str_data(rd, length: int) -> str:
    """Read ``length`` bytes of string data and decode them as UTF-8."""
    data = _read_exact(as_reader(rd), length)
    return _decode_utf8(data, data)


def read_str_from_slice(buf) -> tuple[str, bytes]:
    """Decode a string at the start of ``buf``; return it and the bytes after it."""
    data = bytes(buf)
    length, nread = _read_str_len_with_nread(Bytes(data))
    if len(data) - nread < length:
        raise BufferSizeTooSmallError(length)
    end = nread + length
    return _decode_utf8(data[nread:end], data), data[end:]