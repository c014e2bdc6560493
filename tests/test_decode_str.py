import io

import pytest

from msgwire.decode_str import (
    read_str,
    read_str_data,
    read_str_from_slice,
    read_str_len,
)
from msgwire.encode import write_str, write_str_len
from msgwire.errors import (
    BufferSizeTooSmallError,
    InvalidDataReadError,
    InvalidMarkerReadError,
    InvalidUtf8Error,
    TypeMismatchError,
)
from msgwire.marker import MarkerKind
from msgwire.reader import Bytes

LE_MESSAGE = bytes([0xAA, 0x6C, 0x65, 0x20, 0x6D, 0x65, 0x73, 0x73, 0x61, 0x67, 0x65])


def test_read_str_doc_example():
    assert read_str(LE_MESSAGE, 16) == "le message"


def test_read_str_exact_room():
    assert read_str(LE_MESSAGE, 10) == "le message"


def test_read_str_buffer_too_small():
    with pytest.raises(BufferSizeTooSmallError) as info:
        read_str(LE_MESSAGE, 5)
    assert info.value.length == 10


def test_read_str_len_of_doc_example():
    assert read_str_len(LE_MESSAGE) == 10


@pytest.mark.parametrize("length", [0, 31, 32, 255, 256, 0xFFFF, 0x10000])
def test_str_len_round_trip(length):
    buf = bytearray()
    write_str_len(buf, length)
    assert read_str_len(bytes(buf)) == length


@pytest.mark.parametrize("text", ["", "le message", "x" * 40, "zażółć"])
def test_str_round_trip(text):
    buf = bytearray()
    write_str(buf, text)
    rd = Bytes(buf)
    assert read_str(rd, 1000) == text
    assert len(rd) == 0


def test_read_str_type_mismatch():
    with pytest.raises(TypeMismatchError) as info:
        read_str_len(b"\xc4\x00")
    assert info.value.marker.kind is MarkerKind.BIN8


def test_read_str_empty_input():
    with pytest.raises(InvalidMarkerReadError):
        read_str_len(b"")


def test_read_str_data():
    rd = Bytes(b"abcdef")
    assert read_str_data(rd, 3) == "abc"
    assert rd.remaining_slice() == b"def"


def test_read_str_data_truncated():
    with pytest.raises(InvalidDataReadError):
        read_str_data(Bytes(b"ab"), 3)


def test_read_str_truncated_data():
    with pytest.raises(InvalidDataReadError):
        read_str(LE_MESSAGE[:5], 16)


def test_invalid_utf8():
    with pytest.raises(InvalidUtf8Error) as info:
        read_str(b"\xa2\xff\xfe", 10)
    assert info.value.data == b"\xff\xfe"
    assert info.value.valid_up_to == 0


def test_read_str_from_stream():
    stream = io.BytesIO(LE_MESSAGE + b"\xc0")
    assert read_str(stream, 16) == "le message"


def test_read_str_from_slice_multiple():
    buf = bytearray()
    for word in ("Unpacking", "multiple", "strings"):
        write_str(buf, word)
    chunks = []
    unparsed = bytes(buf)
    while unparsed:
        chunk, unparsed = read_str_from_slice(unparsed)
        chunks.append(chunk)
    assert chunks == ["Unpacking", "multiple", "strings"]


def test_read_str_from_slice_returns_tail():
    text, tail = read_str_from_slice(LE_MESSAGE + b"\xc0\xc3")
    assert text == "le message"
    assert tail == b"\xc0\xc3"


def test_read_str_from_slice_truncated():
    with pytest.raises(BufferSizeTooSmallError) as info:
        read_str_from_slice(LE_MESSAGE[:-1])
    assert info.value.length == 10


def test_read_str_from_slice_invalid_utf8_reports_whole_buffer():
    data = b"\xa2\xff\xfe\xc0"
    with pytest.raises(InvalidUtf8Error) as info:
        read_str_from_slice(data)
    assert info.value.data == data


def test_read_str_from_slice_empty():
    with pytest.raises(InvalidMarkerReadError):
        read_str_from_slice(b"")