"""Incremental measurement of the encoded length of a MessagePack object."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from msgwire.errors import MsgPackError
from msgwire.marker import Marker, MarkerKind

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF


class LenError(MsgPackError):
    """The length of a message could not be determined (yet)."""

    length = 0


class TruncatedError(LenError):
    """The message is incomplete; ``length`` is the lower bound of its size."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"message is truncated, needs at least {length} bytes")


class LenParseError(LenError):
    """The message is invalid or exceeds the configured limits."""

    def __init__(self) -> None:
        self.length = 0
        super().__init__("message is invalid or exceeds the configured limits")


class _State(enum.Enum):
    NEXT_MARKER = enum.auto()
    LIMIT_EXCEEDED = enum.auto()


@dataclass
class _Data:
    bytes_left: int


_LEN_WIDTHS = {
    MarkerKind.BIN8: 1,
    MarkerKind.BIN16: 2,
    MarkerKind.BIN32: 4,
    MarkerKind.EXT8: 1,
    MarkerKind.EXT16: 2,
    MarkerKind.EXT32: 4,
    MarkerKind.STR8: 1,
    MarkerKind.STR16: 2,
    MarkerKind.STR32: 4,
    MarkerKind.ARRAY16: 2,
    MarkerKind.ARRAY32: 4,
    MarkerKind.MAP16: 2,
    MarkerKind.MAP32: 4,
}

# Payload sizes after the marker, extension type byte included.
_FIXED_SIZES = {
    MarkerKind.F32: 4,
    MarkerKind.F64: 8,
    MarkerKind.U8: 1,
    MarkerKind.U16: 2,
    MarkerKind.U32: 4,
    MarkerKind.U64: 8,
    MarkerKind.I8: 1,
    MarkerKind.I16: 2,
    MarkerKind.I32: 4,
    MarkerKind.I64: 8,
    MarkerKind.FIX_EXT1: 2,
    MarkerKind.FIX_EXT2: 3,
    MarkerKind.FIX_EXT4: 5,
    MarkerKind.FIX_EXT8: 9,
    MarkerKind.FIX_EXT16: 17,
}

_NO_PAYLOAD = frozenset(
    {
        MarkerKind.FIX_POS,
        MarkerKind.FIX_NEG,
        MarkerKind.NULL,
        MarkerKind.RESERVED,
        MarkerKind.FALSE,
        MarkerKind.TRUE,
    }
)
_BLOBS = frozenset(
    {
        MarkerKind.BIN8,
        MarkerKind.BIN16,
        MarkerKind.BIN32,
        MarkerKind.STR8,
        MarkerKind.STR16,
        MarkerKind.STR32,
    }
)
_EXTS = frozenset({MarkerKind.EXT8, MarkerKind.EXT16, MarkerKind.EXT32})
_ARRAYS = frozenset({MarkerKind.ARRAY16, MarkerKind.ARRAY32})
_MAPS = frozenset({MarkerKind.MAP16, MarkerKind.MAP32})


@dataclass
class _MarkerLen:
    kind: MarkerKind
    buf: bytearray = field(default_factory=bytearray)

    @property
    def size(self) -> int:
        return _LEN_WIDTHS[self.kind]


class MessageLen:
    """Parses possibly incomplete messages and reports their total length.

    ``max_depth`` limits the nesting of arrays and maps; ``max_len`` limits
    the size of any string, binary or extension, and the number of items of
    any array or map.
    """

    def __init__(self, max_depth: int = 1024, max_len: int = _U32_MAX) -> None:
        if max_depth < 0 or max_len < 0:
            raise ValueError("limits must not be negative")
        self._max_depth = min(max_depth, _U16_MAX)
        self._max_len = min(max_len, _U32_MAX)
        self._chunk = b""
        self._cursor = 0
        self.reset()

    @classmethod
    def len_of(cls, complete_message) -> int:
        """Size in bytes of the single object at the start of ``complete_message``.

        Raises :class:`TruncatedError` when the data ends early and
        :class:`LenParseError` when the end cannot be determined.
        """
        return cls(1024, 1 << 30).incremental_len(complete_message)

    def incremental_len(self, fragment) -> int:
        """Feed more bytes and return the object's total size once known.

        Sizes count from the start of all data fed since the last reset.
        Bytes past the end of the object are ignored.
        """
        wip, self._wip = self._wip, None
        if wip is None:
            return self._position
        if wip is _State.LIMIT_EXCEEDED:
            self._wip = wip
            raise LenParseError()

        self._chunk = bytes(fragment)
        self._cursor = 0
        try:
            if isinstance(wip, _Data):
                done = self._skip_data(wip.bytes_left)
            elif isinstance(wip, _MarkerLen):
                done = self._read_marker_with_len(wip)
            else:
                done = self._read_one_item()
            if not done:
                raise self._stopped()
            while self._sequences:
                items_left, depth = self._sequences.pop()
                self._depth = depth
                if not self._read_sequence(items_left - 1):
                    raise self._stopped()
            return self._position
        finally:
            self._chunk = b""
            self._cursor = 0

    def reset(self) -> None:
        """Forget all state; the next bytes start a new message."""
        self._wip = _State.NEXT_MARKER
        self._max_position = 1
        self._position = 0
        self._depth = 0
        self._sequences: list[tuple[int, int]] = []

    def _stopped(self) -> LenError:
        if self._wip is _State.LIMIT_EXCEEDED:
            return LenParseError()
        return TruncatedError(self._max_position)

    def _read_one_item(self) -> bool:
        marker = self._read_marker()
        if marker is None:
            return False
        kind = marker.kind
        if kind in _NO_PAYLOAD:
            return True
        if kind is MarkerKind.FIX_MAP:
            return self._read_sequence(marker.value * 2)
        if kind is MarkerKind.FIX_ARRAY:
            return self._read_sequence(marker.value)
        if kind is MarkerKind.FIX_STR:
            return self._skip_data(marker.value)
        if kind in _LEN_WIDTHS:
            return self._read_marker_with_len(_MarkerLen(kind))
        return self._skip_data(_FIXED_SIZES[kind])

    def _read_marker_with_len(self, wip: _MarkerLen) -> bool:
        size = wip.size
        wip.buf += self._take(size - len(wip.buf))
        if len(wip.buf) < size:
            return self._fail(wip)
        length = int.from_bytes(wip.buf, "big")
        if length >= self._max_len:
            return self._fail(_State.LIMIT_EXCEEDED)
        kind = wip.kind
        if kind in _BLOBS:
            return self._skip_data(length)
        if kind in _EXTS:
            return self._skip_data(length + 1)
        if kind in _ARRAYS:
            return self._read_sequence(length)
        doubled = length * 2
        if doubled < self._max_len:
            return self._read_sequence(doubled)
        return self._fail(_State.LIMIT_EXCEEDED)

    def _read_sequence(self, items_left: int) -> bool:
        self._depth += 1
        if self._depth > self._max_depth:
            return self._fail(_State.LIMIT_EXCEEDED)
        while items_left:
            position_before = self._position
            mark = len(self._sequences)
            if not self._read_one_item():
                self._set_max_position(position_before + items_left)
                # Inner sequences pushed above; resume them before this one.
                self._sequences.insert(mark, (items_left, self._depth - 1))
                return False
            items_left -= 1
        self._depth -= 1
        return True

    def _skip_data(self, wanted: int) -> bool:
        left = wanted - len(self._take(wanted))
        if left:
            return self._fail(_Data(left))
        return True

    def _read_marker(self) -> Marker | None:
        if self._cursor >= len(self._chunk):
            self._fail(_State.NEXT_MARKER)
            return None
        byte = self._chunk[self._cursor]
        self._cursor += 1
        self._position += 1
        return Marker.from_u8(byte)

    def _take(self, wanted: int) -> bytes:
        taken = self._chunk[self._cursor : self._cursor + wanted]
        self._cursor += len(taken)
        self._position += len(taken)
        return taken

    def _set_max_position(self, position: int) -> None:
        self._max_position = max(self._max_position, position)

    def _fail(self, wip) -> bool:
        self._wip = wip
        if wip is _State.NEXT_MARKER:
            needed = self._position + 1
        elif isinstance(wip, _Data):
            needed = self._position + wip.bytes_left
        elif isinstance(wip, _MarkerLen):
            needed = self._position + wip.size - len(wip.buf)
        else:
            needed = 0
        self._set_max_position(needed)
        return False