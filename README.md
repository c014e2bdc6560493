# msgwire

Low-level building blocks for the MessagePack wire format. There is one
function for each MessagePack format family. Each one writes or reads a single
marker together with its length or payload. You decide exactly which bytes are
produced and consumed. This is useful when you write your own serializer,
frame messages on a socket, or check the bytes of a protocol.

`msgwire` uses only the standard library and supports Python 3.10 and later.

## Installation

```
pip install msgwire
```

## Modules

- `msgwire.marker` holds `Marker`, `MarkerKind` and `MSGPACK_VERSION` (5).
  - `Marker.from_u8(byte)` decodes a marker byte. A byte outside 0..255
    raises `ValueError`.
  - `Marker.to_u8()` (or `int(marker)`) encodes a marker back to its byte.
  - `marker.kind` is the format family: `FIX_POS`, `FIX_STR`, `STR8`,
    `MAP16`, `EXT32` and so on.
  - `marker.value` holds the integer of a positive or negative fixint. For a
    fixmap, fixarray or fixstr it holds the length. For every other kind it is
    0.
- `msgwire.writer` provides the places that bytes are written to.
  - `ByteBuf` is a growable buffer. It has `to_bytes()`, `data` and `len()`.
    Given a `bytearray`, it appends to that same object.
  - `FixedBuffer` writes into a writable buffer of fixed size. It has
    `capacity`, `position`, `remaining` and `written()`. A write that does not
    fit raises `CapacityOverflowError` and leaves the buffer untouched.
  - `StreamWriter` wraps a binary file-like object. It keeps writing until
    every byte is out, and raises `OSError` if a write makes no progress.
  - `as_writer(target)` accepts any of the above, or a `bytearray` (wrapped
    in a `ByteBuf`), a `memoryview` (wrapped in a `FixedBuffer`), or an object
    with a `write` method (wrapped in a `StreamWriter`).
- `msgwire.reader` provides the places that bytes are read from.
  - `Bytes` reads from memory. It has `position()`, `remaining_slice()` and
    `len()`. Running out of input raises `InsufficientBytesError`, which
    carries `expected`, `actual` and `position`.
  - `StreamReader` wraps a binary file-like object. It retries short reads,
    and raises `EOFError` if the stream ends early.
  - `as_reader(source)` accepts any of the above, or `bytes`, `bytearray` or
    `memoryview` (wrapped in a new `Bytes`), or an object with a `read`
    method (wrapped in a `StreamReader`).
- `msgwire.encode` writes nil, booleans, floats, strings and binaries, and
  the headers of arrays, maps and extensions.
- `msgwire.encode_int` writes integers, in a fixed width or in the most
  compact form.
- `msgwire.decode` reads markers, nil, booleans, integers, floats, and the
  lengths of arrays, maps and binaries.
- `msgwire.decode_str` reads strings.
- `msgwire.decode_ext` reads extension values and their headers.
- `msgwire.msglen` measures how long a message is without decoding it.
- `msgwire.errors` holds the exceptions.

Every function in the encode modules calls `as_writer` on its first argument.
Every function in the decode modules calls `as_reader` on its first argument.
If you pass raw `bytes` to a reader function, a fresh `Bytes` is created on
each call. To read several values one after another, wrap the data in a
`Bytes` once and pass that object to each call.

## Encoding

```python
from msgwire.writer import ByteBuf
from msgwire.encode import write_array_len, write_str, write_nil
from msgwire.encode_int import write_uint, write_sint

buf = ByteBuf()
write_array_len(buf, 3)
write_str(buf, "le message")
write_uint(buf, 300)      # most compact unsigned form: u16
write_sint(buf, -18)      # most compact signed form: negative fixint
write_nil(buf)            # a fourth value, after the array
data = buf.to_bytes()
```

The functions that pick the most compact form return the `Marker` they used:

- `write_array_len`, `write_map_len`, `write_str_len`, `write_bin_len`;
- `write_ext_meta(wr, length, typeid)`;
- `write_uint8`, `write_uint`, `write_sint`.

`write_sint` uses the unsigned encodings for non-negative values above 127.

The fixed-width writers are:

- `write_u8`, `write_u16`, `write_u32`, `write_u64`;
- `write_i8`, `write_i16`, `write_i32`, `write_i64`;
- `write_f32`, `write_f64`;
- `write_pfix` for values in `[0, 128)`;
- `write_nfix` for values in `[-32, 0)`.

An argument outside the range of its encoding raises `ValueError`. This
covers integers, lengths above 32 bits, and extension types outside a signed
byte.

When a writer fails, the error depends on the function:

- Multi-byte values raise `InvalidMarkerWriteError` or
  `InvalidDataWriteError`, both subclasses of `ValueWriteError`. The
  original exception is in `.error`.
- The single-byte functions let the writer's own exception through
  unchanged. These are `write_marker`, `write_nil`, `write_bool`,
  `write_pfix` and `write_nfix`.

## Decoding

```python
from msgwire.reader import Bytes
from msgwire.decode import read_array_len, read_int, read_nil
from msgwire.decode_str import read_str

rd = Bytes(data)
count = read_array_len(rd)           # 3
text = read_str(rd, 64)              # "le message"
number = read_int(rd, 0, 2**16 - 1)  # 300
negative = read_int(rd)              # -18
read_nil(rd)
```

Integer readers:

- `read_int(rd, min_value=None, max_value=None)` accepts any integer
  encoding. It raises `OutOfRangeError` when the value lies outside the
  bounds.
- The strict readers accept only their own marker: `read_pfix`, `read_nfix`,
  `read_u8` … `read_u64` and `read_i8` … `read_i64`.

Length readers:

- `read_array_len`, `read_map_len` and `read_bin_len` return a header's
  length.
- `marker_to_len(rd, marker)` finishes reading a map header whose marker was
  already read with `read_marker`.

Strings (`msgwire.decode_str`):

- `read_str_len(rd)` reads the header only.
- `read_str(rd, max_len)` reads the whole string. If the string is longer
  than `max_len` bytes, it raises `BufferSizeTooSmallError` without reading
  the data.
- `read_str_data(rd, length)` reads and decodes `length` bytes.
- `read_str_from_slice(buf)` returns the string at the start of `buf` and the
  bytes after it. It raises `BufferSizeTooSmallError` if `buf` ends before
  the string does.
- Data that is not UTF-8 raises `InvalidUtf8Error`. Its `valid_up_to` gives
  the length of the valid prefix.

Extensions (`msgwire.decode_ext`):

- `read_fixext1` returns `(typeid, byte)`.
- `read_fixext2`, `read_fixext4`, `read_fixext8` and `read_fixext16` return
  `(typeid, bytes)`.
- `read_ext_meta` reads the header of any extension and returns an
  `ExtMeta(typeid, size)`. The data itself is left unread.

Errors raised while decoding:

- A marker of the wrong kind raises `TypeMismatchError`. Its `.marker` is
  the marker that was found.
- Failing to read the marker raises `InvalidMarkerReadError`.
- Failing to read the data after it raises `InvalidDataReadError`.
- For both of these, the underlying exception is in `.error`.
- All of these are subclasses of `ValueReadError`. Every exception in the
  package is a subclass of `MsgPackError`.

## Finding message boundaries

`MessageLen` works out how long one MessagePack object is without decoding
it. The object may be nested.

```python
from msgwire.msglen import MessageLen, TruncatedError

MessageLen.len_of(b"\x92\x01\x02extra")   # 3; trailing bytes are ignored

parser = MessageLen(max_depth=1024)
try:
    size = parser.incremental_len(first_chunk)
except TruncatedError as err:
    needed = err.length   # lower bound on the total size; feed more bytes
```

`incremental_len` keeps its state from one call to the next, so you can feed
it chunks as they arrive. Sizes are counted from the first byte fed since the
last `reset()`. Once the size is known, later calls return it again. Call
`reset()` before you measure the next message.

The limits:

- `max_depth` limits how deeply arrays and maps may nest.
- `max_len` limits the size of any string, binary or extension, and the
  number of items in any array or map.
- A message over a limit raises `LenParseError`. So does every later call
  until `reset()`.
- `len_of` uses a depth limit of 1024 and a length limit of 2**30.

## What this package does not do

`msgwire` works one marker at a time. It has no function that packs a whole
Python object, such as a dict, list or nested structure, into bytes. It has
no function that unpacks bytes back into such objects. It also has no
registry of extension types. You build those on top of the functions above.

## Running the tests

```
pip install -e .[test]
pytest
```