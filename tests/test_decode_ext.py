import pytest

from msgwire.decode_ext import (
    ExtMeta,
    read_ext_meta,
    read_fixext1,
    read_fixext16,
    read_fixext2,
    read_fixext4,
    read_fixext8,
)
from msgwire.encode import write_ext_meta, write_nil
from msgwire.errors import (
    InvalidDataReadError,
    InvalidMarkerReadError,
    TypeMismatchError,
)
from msgwire.marker import MarkerKind
from msgwire.reader import Bytes


def _ext(typeid, data):
    buf = bytearray()
    write_ext_meta(buf, len(data), typeid)
    buf += data
    return bytes(buf)


def test_fixext1_wire_format():
    encoded = _ext(42, b"\xff")
    assert encoded[0] == 0xD4
    assert read_fixext1(encoded) == (42, 0xFF)


def test_fixext1_negative_type():
    assert read_fixext1(_ext(-3, b"\x07")) == (-3, 7)


@pytest.mark.parametrize(
    "reader, size",
    [
        (read_fixext2, 2),
        (read_fixext4, 4),
        (read_fixext8, 8),
        (read_fixext16, 16),
    ],
)
def test_fixext_round_trip(reader, size):
    data = bytes(range(1, size + 1))
    rd = Bytes(_ext(7, data) + b"\xc0")
    assert reader(rd) == (7, data)
    assert rd.remaining_slice() == b"\xc0"


@pytest.mark.parametrize(
    "reader", [read_fixext1, read_fixext2, read_fixext4, read_fixext8, read_fixext16]
)
def test_fixext_type_mismatch(reader):
    buf = bytearray()
    write_nil(buf)
    with pytest.raises(TypeMismatchError) as info:
        reader(bytes(buf))
    assert info.value.marker.kind is MarkerKind.NULL


def test_fixext_wrong_size_is_mismatch():
    with pytest.raises(TypeMismatchError) as info:
        read_fixext4(_ext(1, b"ab"))
    assert info.value.marker.kind is MarkerKind.FIX_EXT2


def test_fixext_truncated_data():
    encoded = _ext(1, b"abcd")[:-1]
    with pytest.raises(InvalidDataReadError):
        read_fixext4(encoded)


def test_fixext_missing_type():
    with pytest.raises(InvalidDataReadError):
        read_fixext2(_ext(1, b"ab")[:1])


def test_fixext_empty_input():
    with pytest.raises(InvalidMarkerReadError):
        read_fixext8(b"")


@pytest.mark.parametrize("size", [1, 2, 4, 8, 16, 0, 3, 255, 256, 65535, 65536])
def test_ext_meta_round_trip(size):
    buf = bytearray()
    write_ext_meta(buf, size, 5)
    rd = Bytes(bytes(buf) + b"\x01")
    assert read_ext_meta(rd) == ExtMeta(typeid=5, size=size)
    assert rd.remaining_slice() == b"\x01"


def test_ext_meta_leaves_data_unread():
    rd = Bytes(_ext(-1, b"xyz"))
    meta = read_ext_meta(rd)
    assert meta == ExtMeta(typeid=-1, size=3)
    assert rd.read_exact(meta.size) == b"xyz"


def test_ext_meta_type_mismatch():
    with pytest.raises(TypeMismatchError):
        read_ext_meta(b"\xc0")


def test_ext_meta_truncated_length():
    buf = bytearray()
    write_ext_meta(buf, 256, 1)
    with pytest.raises(InvalidDataReadError):
        read_ext_meta(bytes(buf[:2]))


def test_ext_meta_missing_type():
    buf = bytearray()
    write_ext_meta(buf, 4, 1)
    with pytest.raises(InvalidDataReadError):
        read_ext_meta(bytes(buf[:1]))