"""Decoding of MessagePack extension values."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from msgwire.decode import read_marker
from msgwire.errors import InvalidDataReadError, MsgPackError, TypeMismatchError
from msgwire.marker import MarkerKind
from msgwire.reader import Reader, as_reader

_READ_ERRORS = (MsgPackError, OSError, EOFError)

_FIX_EXT_SIZES = {
    MarkerKind.FIX_EXT1: 1,
    MarkerKind.FIX_EXT2: 2,
    MarkerKind.FIX_EXT4: 4,
    MarkerKind.FIX_EXT8: 8,
    MarkerKind.FIX_EXT16: 16,
}

_EXT_LEN_FORMATS = {
    MarkerKind.EXT8: ">B",
    MarkerKind.EXT16: ">H",
    MarkerKind.EXT32: ">I",
}


@dataclass(frozen=True)
class ExtMeta:
    """Header of an extension value: application type and data size.

    Types 0 to 127 are for applications; negative types are reserved.
    """

    typeid: int
    size: int


def _read_exact(rd: Reader, n: int) -> bytes:
    try:
        return rd.read_exact(n)
    except _READ_ERRORS as err:
        raise InvalidDataReadError(err) from err


def _read_i8(rd: Reader) -> int:
    return struct.unpack(">b", _read_exact(rd, 1))[0]


def _read_fixext(rd, kind: MarkerKind) -> tuple[int, bytes]:
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    typeid = _read_i8(rd)
    return typeid, _read_exact(rd, _FIX_EXT_SIZES[kind])


def read_fixext1(rd) -> tuple[int, int]:
    """Read a fixext1 value; return its type and its single data byte."""
    typeid, data = _read_fixext(rd, MarkerKind.FIX_EXT1)
    return typeid, data[0]


def read_fixext2(rd) -> tuple[int, bytes]:
    """Read a fixext2 value; return its type and 2 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT2)


def read_fixext4(rd) -> tuple[int, bytes]:
    """Read a fixext4 value; return its type and 4 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT4)


def read_fixext8(rd) -> tuple[int, bytes]:
    """Read a fixext8 value; return its type and 8 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT8)


def read_fixext16(rd) -> tuple[int, bytes]:
    """Read a fixext16 value; return its type and 16 data bytes."""
    return _read_fixext(rd, MarkerKind.FIX_EXT16)


def read_ext_meta(rd) -> ExtMeta:
    """Read the header of any extension value, leaving its data unread."""
    rd = as_reader(rd)
    marker = read_marker(rd)
    kind = marker.kind
    if kind in _FIX_EXT_SIZES:
        size = _FIX_EXT_SIZES[kind]
    elif kind in _EXT_LEN_FORMATS:
        fmt = _EXT_LEN_FORMATS[kind]
        size = struct.unpack(fmt, _read_exact(rd, struct.calcsize(fmt)))[0]
    else:
        raise TypeMismatchError(marker)
    return ExtMeta(typeid=_read_i8(rd), size=size)