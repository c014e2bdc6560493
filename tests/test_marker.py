import pytest

from msgwire.marker import Marker, MarkerKind


@pytest.mark.parametrize("n", range(256))
def test_every_byte_round_trips(n):
    assert Marker.from_u8(n).to_u8() == n


def test_null_marker():
    assert Marker.from_u8(0xC0) == Marker(MarkerKind.NULL)
    assert Marker(MarkerKind.NULL).to_u8() == 0xC0


def test_booleans():
    assert Marker.from_u8(0xC3).kind is MarkerKind.TRUE
    assert Marker.from_u8(0xC2).kind is MarkerKind.FALSE


def test_reserved_byte():
    assert Marker.from_u8(0xC1).kind is MarkerKind.RESERVED


def test_fixstr_carries_length():
    marker = Marker.from_u8(0xAA)
    assert marker.kind is MarkerKind.FIX_STR
    assert marker.value == 10


def test_fixarray_and_fixmap_lengths():
    assert Marker.from_u8(0x92) == Marker(MarkerKind.FIX_ARRAY, 2)
    assert Marker.from_u8(0x82) == Marker(MarkerKind.FIX_MAP, 2)


def test_fixpos_and_fixneg():
    assert Marker.from_u8(0x7F) == Marker(MarkerKind.FIX_POS, 127)
    assert Marker.from_u8(0xFF) == Marker(MarkerKind.FIX_NEG, -1)
    assert Marker.from_u8(0xE0) == Marker(MarkerKind.FIX_NEG, -32)


def test_fixneg_encodes_as_unsigned_byte():
    assert Marker(MarkerKind.FIX_NEG, -32).to_u8() == 0xE0


def test_fixstr_length_is_masked():
    assert Marker(MarkerKind.FIX_STR, 0x3F).to_u8() == 0xBF


@pytest.mark.parametrize(
    "kind, byte",
    [
        (MarkerKind.U8, 0xCC),
        (MarkerKind.U64, 0xCF),
        (MarkerKind.I64, 0xD3),
        (MarkerKind.F32, 0xCA),
        (MarkerKind.F64, 0xCB),
        (MarkerKind.BIN8, 0xC4),
        (MarkerKind.STR32, 0xDB),
        (MarkerKind.MAP32, 0xDF),
        (MarkerKind.FIX_EXT16, 0xD8),
        (MarkerKind.EXT8, 0xC7),
    ],
)
def test_plain_kinds(kind, byte):
    assert Marker(kind).to_u8() == byte
    assert Marker.from_u8(byte).kind is kind


def test_int_conversion_matches_to_u8():
    marker = Marker.from_u8(0xDC)
    assert int(marker) == marker.to_u8() == 0xDC


@pytest.mark.parametrize("bad", [-1, 256])
def test_out_of_range_byte_rejected(bad):
    with pytest.raises(ValueError):
        Marker.from_u8(bad)


def test_decoded_fix_values_stay_in_range():
    for n in range(256):
        marker = Marker.from_u8(n)
        if marker.kind is MarkerKind.FIX_NEG:
            assert -32 <= marker.value < 0
        elif marker.kind is MarkerKind.FIX_STR:
            assert 0 <= marker.value < 32
        elif marker.kind in (MarkerKind.FIX_ARRAY, MarkerKind.FIX_MAP):
            assert 0 <= marker.value < 16
        elif marker.kind is MarkerKind.FIX_POS:
            assert 0 <= marker.value < 128
        else:
            assert marker.value == 0