import pytest

from msgwire.errors import (
    BufferSizeTooSmallError,
    DecodeStringError,
    InsufficientBytesError,
    InvalidDataReadError,
    InvalidDataWriteError,
    InvalidMarkerReadError,
    InvalidMarkerWriteError,
    InvalidUtf8Error,
    MsgPackError,
    OutOfRangeError,
    TypeMismatchError,
    ValueReadError,
    ValueWriteError,
)
from msgwire.marker import Marker, MarkerKind


def test_insufficient_bytes_message_and_fields():
    err = InsufficientBytesError(expected=4, actual=1, position=7)
    assert str(err) == "Expected at least bytes 4, but only got 1 (pos 7)"
    assert (err.expected, err.actual, err.position) == (4, 1, 7)


def test_marker_read_error_wraps_cause():
    cause = InsufficientBytesError(1, 0, 0)
    err = InvalidMarkerReadError(cause)
    assert err.error is cause
    assert str(err) == "failed to read MessagePack marker"


def test_data_read_error_message():
    cause = OSError("boom")
    err = InvalidDataReadError(cause)
    assert err.error is cause
    assert str(err) == "failed to read MessagePack data"


def test_type_mismatch_keeps_marker():
    marker = Marker(MarkerKind.NULL)
    err = TypeMismatchError(marker)
    assert err.marker == marker
    assert str(err) == "the type decoded isn't match with the expected one"


def test_out_of_range_message():
    assert str(OutOfRangeError()) == "out of range integral type conversion attempted"


@pytest.mark.parametrize(
    "err, message",
    [
        (InvalidMarkerReadError(), "failed to read MessagePack marker"),
        (InvalidDataReadError(), "failed to read MessagePack data"),
        (
            TypeMismatchError(Marker(MarkerKind.TRUE)),
            "the type decoded isn't match with the expected one",
        ),
        (OutOfRangeError(), "out of range integral type conversion attempted"),
        (BufferSizeTooSmallError(3), "error while decoding string"),
        (InvalidUtf8Error(b"\xff"), "error while decoding string"),
    ],
)
def test_read_errors_share_base(err, message):
    assert isinstance(err, ValueReadError)
    assert isinstance(err, MsgPackError)
    assert str(err) == message


def test_buffer_too_small_is_string_error():
    err = BufferSizeTooSmallError(40)
    assert err.length == 40
    assert isinstance(err, DecodeStringError)
    assert str(err) == "error while decoding string"


def test_invalid_utf8_reports_valid_prefix():
    data = b"ab\xffcd"
    try:
        data.decode("utf-8")
    except UnicodeDecodeError as exc:
        err = InvalidUtf8Error(data, exc)
    assert err.data == data
    assert err.valid_up_to == 2
    assert str(err) == "error while decoding string"


def test_write_errors():
    cause = OSError("disk full")
    marker_err = InvalidMarkerWriteError(cause)
    data_err = InvalidDataWriteError(cause)
    for err in (marker_err, data_err):
        assert err.error is cause
        assert str(err) == "error while writing multi-byte MessagePack value"
        assert isinstance(err, ValueWriteError)


def test_everything_is_msgpack_error():
    assert issubclass(ValueWriteError, MsgPackError)
    err = InsufficientBytesError(1, 0, 0)
    assert isinstance(err, MsgPackError)
    assert str(err) == "Expected at least bytes 1, but only got 0 (pos 0)"


def test_write_errors_are_not_read_errors():
    err = InvalidDataWriteError()
    assert isinstance(err, ValueWriteError)
    assert not isinstance(err, ValueReadError)
    assert str(err) == "error while writing multi-byte MessagePack value"