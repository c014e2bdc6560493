"""Encoding of MessagePack markers, lengths, floats, strings and binaries."""

from __future__ import annotations

import struct

from msgwire.errors import InvalidDataWriteError, InvalidMarkerWriteError
from msgwire.marker import Marker, MarkerKind
from msgwire.writer import Writer, as_writer

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF

_FIX_EXT_KINDS = {
    1: MarkerKind.FIX_EXT1,
    2: MarkerKind.FIX_EXT2,
    4: MarkerKind.FIX_EXT4,
    8: MarkerKind.FIX_EXT8,
    16: MarkerKind.FIX_EXT16,
}


def _check_u32(length: int) -> None:
    if not 0 <= length <= _U32_MAX:
        raise ValueError(f"length does not fit in 32 bits: {length}")


def _put_marker(wr: Writer, marker: Marker) -> None:
    try:
        wr.write_u8(marker.to_u8())
    except Exception as err:
        raise InvalidMarkerWriteError(err) from err


def _put_data(wr: Writer, payload: bytes) -> None:
    try:
        wr.write_bytes(payload)
    except Exception as err:
        raise InvalidDataWriteError(err) from err


def _write_sized(wr: Writer, marker: Marker, width: int, length: int) -> Marker:
    _put_marker(wr, marker)
    if width:
        _put_data(wr, length.to_bytes(width, "big"))
    return marker


def write_marker(wr, marker: Marker) -> None:
    """Write a single marker byte; errors of the writer propagate unchanged."""
    as_writer(wr).write_u8(marker.to_u8())


def write_nil(wr) -> None:
    """Write the nil value (a single ``0xc0`` byte)."""
    write_marker(wr, Marker(MarkerKind.NULL))


def write_bool(wr, val: bool) -> None:
    """Write a boolean value as a single marker byte."""
    write_marker(wr, Marker(MarkerKind.TRUE if val else MarkerKind.FALSE))


def write_array_len(wr, length: int) -> Marker:
    """Write the most compact array header for ``length`` items."""
    _check_u32(length)
    wr = as_writer(wr)
    if length < 16:
        return _write_sized(wr, Marker(MarkerKind.FIX_ARRAY, length), 0, length)
    if length <= _U16_MAX:
        return _write_sized(wr, Marker(MarkerKind.ARRAY16), 2, length)
    return _write_sized(wr, Marker(MarkerKind.ARRAY32), 4, length)


def write_map_len(wr, length: int) -> Marker:
    """Write the most compact map header for ``length`` key/value pairs."""
    _check_u32(length)
    wr = as_writer(wr)
    if length < 16:
        return _write_sized(wr, Marker(MarkerKind.FIX_MAP, length), 0, length)
    if length <= _U16_MAX:
        return _write_sized(wr, Marker(MarkerKind.MAP16), 2, length)
    return _write_sized(wr, Marker(MarkerKind.MAP32), 4, length)


def write_ext_meta(wr, length: int, typeid: int) -> Marker:
    """Write the most compact extension header for ``length`` data bytes."""
    _check_u32(length)
    if not -128 <= typeid <= 127:
        raise ValueError(f"extension type does not fit in a signed byte: {typeid}")
    wr = as_writer(wr)
    fix_kind = _FIX_EXT_KINDS.get(length)
    if fix_kind is not None:
        marker = _write_sized(wr, Marker(fix_kind), 0, length)
    elif length <= 0xFF:
        marker = _write_sized(wr, Marker(MarkerKind.EXT8), 1, length)
    elif length <= _U16_MAX:
        marker = _write_sized(wr, Marker(MarkerKind.EXT16), 2, length)
    else:
        marker = _write_sized(wr, Marker(MarkerKind.EXT32), 4, length)
    _put_data(wr, struct.pack(">b", typeid))
    return marker


def write_bin_len(wr, length: int) -> Marker:
    """Write the most compact binary header for ``length`` bytes."""
    _check_u32(length)
    wr = as_writer(wr)
    if length <= 0xFF:
        return _write_sized(wr, Marker(MarkerKind.BIN8), 1, length)
    if length <= _U16_MAX:
        return _write_sized(wr, Marker(MarkerKind.BIN16), 2, length)
    return _write_sized(wr, Marker(MarkerKind.BIN32), 4, length)


def write_bin(wr, data) -> None:
    """Write a binary value: header followed by the bytes."""
    payload = bytes(data)
    wr = as_writer(wr)
    write_bin_len(wr, len(payload))
    _put_data(wr, payload)


def write_f32(wr, val: float) -> None:
    """Write a 32-bit float as a 5-byte sequence."""
    payload = struct.pack(">f", val)
    wr = as_writer(wr)
    _put_marker(wr, Marker(MarkerKind.F32))
    _put_data(wr, payload)


def write_f64(wr, val: float) -> None:
    """Write a 64-bit float as a 9-byte sequence."""
    payload = struct.pack(">d", val)
    wr = as_writer(wr)
    _put_marker(wr, Marker(MarkerKind.F64))
    _put_data(wr, payload)


def write_str_len(wr, length: int) -> Marker:
    """Write the most compact string header for ``length`` UTF-8 bytes."""
    _check_u32(length)
    wr = as_writer(wr)
    if length < 32:
        return _write_sized(wr, Marker(MarkerKind.FIX_STR, length), 0, length)
    if length <= 0xFF:
        return _write_sized(wr, Marker(MarkerKind.STR8), 1, length)
    if length <= _U16_MAX:
        return _write_sized(wr, Marker(MarkerKind.STR16), 2, length)
    return _write_sized(wr, Marker(MarkerKind.STR32), 4, length)


def write_str(wr, data: str) -> None:
    """Write a string value encoded as UTF-8."""
    payload = data.encode("utf-8")
    wr = as_writer(wr)
    write_str_len(wr, len(payload))
    _put_data(wr, payload)