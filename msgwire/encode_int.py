"""Encoding of MessagePack integers, both fixed-width and most compact."""

from __future__ import annotations

import struct

from msgwire.encode import _put_data, _put_marker, write_marker
from msgwire.marker import Marker, MarkerKind
from msgwire.writer import as_writer

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF
_U64_MAX = (1 << 64) - 1
_I8_MIN, _I8_MAX = -(1 << 7), (1 << 7) - 1
_I16_MIN, _I16_MAX = -(1 << 15), (1 << 15) - 1
_I32_MIN, _I32_MAX = -(1 << 31), (1 << 31) - 1
_I64_MIN, _I64_MAX = -(1 << 63), (1 << 63) - 1


def _check(val: int, low: int, high: int, what: str) -> None:
    if not low <= val <= high:
        raise ValueError(f"{what} out of range [{low}, {high}]: {val}")


def _write_fixed(wr, kind: MarkerKind, fmt: str, val: int) -> None:
    payload = struct.pack(fmt, val)
    wr = as_writer(wr)
    _put_marker(wr, Marker(kind))
    _put_data(wr, payload)


def write_pfix(wr, val: int) -> None:
    """Write a positive fixint in ``[0, 128)``; writer errors propagate unchanged.

    Raises :class:`ValueError` if ``val`` does not fit.
    """
    _check(val, 0, 127, "positive fixint")
    write_marker(wr, Marker(MarkerKind.FIX_POS, val))


def write_nfix(wr, val: int) -> None:
    """Write a negative fixint in ``[-32, 0)``; writer errors propagate unchanged.

    Raises :class:`ValueError` if ``val`` does not fit.
    """
    _check(val, -32, -1, "negative fixint")
    write_marker(wr, Marker(MarkerKind.FIX_NEG, val))


def write_u8(wr, val: int) -> None:
    """Write ``val`` strictly as a 2-byte u8."""
    _check(val, 0, _U8_MAX, "u8")
    _write_fixed(wr, MarkerKind.U8, ">B", val)


def write_u16(wr, val: int) -> None:
    """Write ``val`` strictly as a 3-byte u16."""
    _check(val, 0, _U16_MAX, "u16")
    _write_fixed(wr, MarkerKind.U16, ">H", val)


def write_u32(wr, val: int) -> None:
    """Write ``val`` strictly as a 5-byte u32."""
    _check(val, 0, _U32_MAX, "u32")
    _write_fixed(wr, MarkerKind.U32, ">I", val)


def write_u64(wr, val: int) -> None:
    """Write ``val`` strictly as a 9-byte u64."""
    _check(val, 0, _U64_MAX, "u64")
    _write_fixed(wr, MarkerKind.U64, ">Q", val)


def write_i8(wr, val: int) -> None:
    """Write ``val`` strictly as a 2-byte i8."""
    _check(val, _I8_MIN, _I8_MAX, "i8")
    _write_fixed(wr, MarkerKind.I8, ">b", val)


def write_i16(wr, val: int) -> None:
    """Write ``val`` strictly as a 3-byte i16."""
    _check(val, _I16_MIN, _I16_MAX, "i16")
    _write_fixed(wr, MarkerKind.I16, ">h", val)


def write_i32(wr, val: int) -> None:
    """Write ``val`` strictly as a 5-byte i32."""
    _check(val, _I32_MIN, _I32_MAX, "i32")
    _write_fixed(wr, MarkerKind.I32, ">i", val)


def write_i64(wr, val: int) -> None:
    """Write ``val`` strictly as a 9-byte i64."""
    _check(val, _I64_MIN, _I64_MAX, "i64")
    _write_fixed(wr, MarkerKind.I64, ">q", val)


def _write_fix(wr, marker: Marker) -> Marker:
    _put_marker(as_writer(wr), marker)
    return marker


def write_uint8(wr, val: int) -> Marker:
    """Write a u8 value in its most compact form and return the marker used."""
    _check(val, 0, _U8_MAX, "u8")
    if val < 128:
        return _write_fix(wr, Marker(MarkerKind.FIX_POS, val))
    write_u8(wr, val)
    return Marker(MarkerKind.U8)


def write_uint(wr, val: int) -> Marker:
    """Write an unsigned value in its most compact form and return the marker used."""
    _check(val, 0, _U64_MAX, "u64")
    if val < 256:
        return write_uint8(wr, val)
    if val < 65536:
        write_u16(wr, val)
        return Marker(MarkerKind.U16)
    if val < 4294967296:
        write_u32(wr, val)
        return Marker(MarkerKind.U32)
    write_u64(wr, val)
    return Marker(MarkerKind.U64)


def write_sint(wr, val: int) -> Marker:
    """Write a signed 64-bit value in its most compact form and return the marker used.

    Non-negative values beyond the positive fixint range use the unsigned
    encodings.
    """
    _check(val, _I64_MIN, _I64_MAX, "i64")
    if -32 <= val < 0:
        return _write_fix(wr, Marker(MarkerKind.FIX_NEG, val))
    if -128 <= val < -32:
        write_i8(wr, val)
        return Marker(MarkerKind.I8)
    if -32768 <= val < -128:
        write_i16(wr, val)
        return Marker(MarkerKind.I16)
    if -2147483648 <= val < -32768:
        write_i32(wr, val)
        return Marker(MarkerKind.I32)
    if val < -2147483648:
        write_i64(wr, val)
        return Marker(MarkerKind.I64)
    if val < 128:
        return _write_fix(wr, Marker(MarkerKind.FIX_POS, val))
    if val < 256:
        write_u8(wr, val)
        return Marker(MarkerKind.U8)
    if val < 65536:
        write_u16(wr, val)
        return Marker(MarkerKind.U16)
    if val < 4294967296:
        write_u32(wr, val)
        return Marker(MarkerKind.U32)
    write_u64(wr, val)
    return Marker(MarkerKind.U64)