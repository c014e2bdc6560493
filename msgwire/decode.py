"""Decoding of MessagePack markers, nil, booleans, numbers and lengths."""

from __future__ import annotations

import struct

from msgwire.errors import (
    InvalidDataReadError,
    InvalidMarkerReadError,
    MsgPackError,
    OutOfRangeError,
    TypeMismatchError,
)
from msgwire.marker import Marker, MarkerKind
from msgwire.reader import Reader, as_reader

_READ_ERRORS = (MsgPackError, OSError, EOFError)

_INT_FORMATS = {
    MarkerKind.U8: ">B",
    MarkerKind.U16: ">H",
    MarkerKind.U32: ">I",
    MarkerKind.U64: ">Q",
    MarkerKind.I8: ">b",
    MarkerKind.I16: ">h",
    MarkerKind.I32: ">i",
    MarkerKind.I64: ">q",
}


def _read_data(rd: Reader, fmt: str):
    try:
        raw = rd.read_exact(struct.calcsize(fmt))
    except _READ_ERRORS as err:
        raise InvalidDataReadError(err) from err
    return struct.unpack(fmt, raw)[0]


def _read_typed(rd, kind: MarkerKind, fmt: str):
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is not kind:
        raise TypeMismatchError(marker)
    return _read_data(rd, fmt)


def read_marker(rd) -> Marker:
    """Read one byte and decode it as a marker."""
    rd = as_reader(rd)
    try:
        byte = rd.read_u8()
    except _READ_ERRORS as err:
        raise InvalidMarkerReadError(err) from err
    return Marker.from_u8(byte)


def read_nil(rd) -> None:
    """Read a nil value (a single ``0xc0`` byte)."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.NULL:
        raise TypeMismatchError(marker)


def read_bool(rd) -> bool:
    """Read a boolean value."""
    marker = read_marker(rd)
    if marker.kind is MarkerKind.TRUE:
        return True
    if marker.kind is MarkerKind.FALSE:
        return False
    raise TypeMismatchError(marker)


def read_int(rd, min_value: int | None = None, max_value: int | None = None) -> int:
    """Read an integer of any encoding and check it lies within the given bounds.

    Raises :class:`OutOfRangeError` when it does not.
    """
    rd = as_reader(rd)
    marker = read_marker(rd)
    kind = marker.kind
    if kind is MarkerKind.FIX_POS or kind is MarkerKind.FIX_NEG:
        value = marker.value
    elif kind in _INT_FORMATS:
        value = _read_data(rd, _INT_FORMATS[kind])
    else:
        raise TypeMismatchError(marker)
    if (min_value is not None and value < min_value) or (
        max_value is not None and value > max_value
    ):
        raise OutOfRangeError()
    return value


def read_array_len(rd) -> int:
    """Read an array header and return its number of items."""
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is MarkerKind.FIX_ARRAY:
        return marker.value
    if marker.kind is MarkerKind.ARRAY16:
        return _read_data(rd, ">H")
    if marker.kind is MarkerKind.ARRAY32:
        return _read_data(rd, ">I")
    raise TypeMismatchError(marker)


def read_map_len(rd) -> int:
    """Read a map header and return its number of key/value pairs."""
    rd = as_reader(rd)
    return marker_to_len(rd, read_marker(rd))


def marker_to_len(rd, marker: Marker) -> int:
    """Finish reading a map header whose marker was already read."""
    if marker.kind is MarkerKind.FIX_MAP:
        return marker.value
    if marker.kind is MarkerKind.MAP16:
        return _read_data(as_reader(rd), ">H")
    if marker.kind is MarkerKind.MAP32:
        return _read_data(as_reader(rd), ">I")
    raise TypeMismatchError(marker)


def read_bin_len(rd) -> int:
    """Read a binary header and return the number of data bytes."""
    rd = as_reader(rd)
    marker = read_marker(rd)
    if marker.kind is MarkerKind.BIN8:
        return _read_data(rd, ">B")
    if marker.kind is MarkerKind.BIN16:
        return _read_data(rd, ">H")
    if marker.kind is MarkerKind.BIN32:
        return _read_data(rd, ">I")
    raise TypeMismatchError(marker)


def read_f32(rd) -> float:
    """Read a 32-bit float (5 bytes)."""
    return _read_typed(rd, MarkerKind.F32, ">f")


def read_f64(rd) -> float:
    """Read a 64-bit float (9 bytes)."""
    return _read_typed(rd, MarkerKind.F64, ">d")


def read_pfix(rd) -> int:
    """Read a positive fixint."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.FIX_POS:
        raise TypeMismatchError(marker)
    return marker.value


def read_nfix(rd) -> int:
    """Read a negative fixint."""
    marker = read_marker(rd)
    if marker.kind is not MarkerKind.FIX_NEG:
        raise TypeMismatchError(marker)
    return marker.value


def read_u8(rd) -> int:
    """Read a value encoded strictly as u8."""
    return _read_typed(rd, MarkerKind.U8, ">B")


def read_u16(rd) -> int:
    """Read a value encoded strictly as u16."""
    return _read_typed(rd, MarkerKind.U16, ">H")


def read_u32(rd) -> int:
    """Read a value encoded strictly as u32."""
    return _read_typed(rd, MarkerKind.U32, ">I")


def read_u64(rd) -> int:
    """Read a value encoded strictly as u64."""
    return _read_typed(rd, MarkerKind.U64, ">Q")


def read_i8(rd) -> int:
    """Read a value encoded strictly as i8."""
    return _read_typed(rd, MarkerKind.I8, ">b")


def read_i16(rd) -> int:
    """Read a value encoded strictly as i16."""
    return _read_typed(rd, MarkerKind.I16, ">h")


def read_i32(rd) -> int:
    """Read a value encoded strictly as i32."""
    return _read_typed(rd, MarkerKind.I32, ">i")


def read_i64(rd) -> int:
    """Read a value encoded strictly as i64."""
    return _read_typed(rd, MarkerKind.I64, ">q")