"""MessagePack format markers: the first byte of every encoded value."""

from __future__ import annotations

import enum
from dataclasses import dataclass

MSGPACK_VERSION = 5
"""Version of the MessagePack specification implemented by this package."""

_FIXSTR_SIZE = 0x1F
_FIXARRAY_SIZE = 0x0F
_FIXMAP_SIZE = 0x0F


class MarkerKind(enum.Enum):
    """Kinds of format markers, valued by their (base) byte."""

    FIX_POS = 0x00
    FIX_MAP = 0x80
    FIX_ARRAY = 0x90
    FIX_STR = 0xA0
    NULL = 0xC0
    RESERVED = 0xC1
    FALSE = 0xC2
    TRUE = 0xC3
    BIN8 = 0xC4
    BIN16 = 0xC5
    BIN32 = 0xC6
    EXT8 = 0xC7
    EXT16 = 0xC8
    EXT32 = 0xC9
    F32 = 0xCA
    F64 = 0xCB
    U8 = 0xCC
    U16 = 0xCD
    U32 = 0xCE
    U64 = 0xCF
    I8 = 0xD0
    I16 = 0xD1
    I32 = 0xD2
    I64 = 0xD3
    FIX_EXT1 = 0xD4
    FIX_EXT2 = 0xD5
    FIX_EXT4 = 0xD6
    FIX_EXT8 = 0xD7
    FIX_EXT16 = 0xD8
    STR8 = 0xD9
    STR16 = 0xDA
    STR32 = 0xDB
    ARRAY16 = 0xDC
    ARRAY32 = 0xDD
    MAP16 = 0xDE
    MAP32 = 0xDF
    FIX_NEG = 0xE0

    @property
    def carries_value(self) -> bool:
        """Whether markers of this kind embed a value in the marker byte."""
        return self in _FIX_KINDS


_FIX_KINDS = frozenset(
    {
        MarkerKind.FIX_POS,
        MarkerKind.FIX_MAP,
        MarkerKind.FIX_ARRAY,
        MarkerKind.FIX_STR,
        MarkerKind.FIX_NEG,
    }
)


@dataclass(frozen=True)
class Marker:
    """A format marker.

    ``value`` holds the embedded payload of the fix kinds: the integer of a
    positive or negative fixint, or the length of a fixmap, fixarray or fixstr.
    It is zero for every other kind.
    """

    kind: MarkerKind
    value: int = 0

    @classmethod
    def from_u8(cls, n: int) -> Marker:
        """Decode a marker from a single byte."""
        if not 0 <= n <= 0xFF:
            raise ValueError(f"marker byte out of range: {n}")
        if n <= 0x7F:
            return cls(MarkerKind.FIX_POS, n)
        if n <= 0x8F:
            return cls(MarkerKind.FIX_MAP, n & _FIXMAP_SIZE)
        if n <= 0x9F:
            return cls(MarkerKind.FIX_ARRAY, n & _FIXARRAY_SIZE)
        if n <= 0xBF:
            return cls(MarkerKind.FIX_STR, n & _FIXSTR_SIZE)
        if n >= 0xE0:
            return cls(MarkerKind.FIX_NEG, n - 0x100)
        return cls(MarkerKind(n))

    def to_u8(self) -> int:
        """Encode this marker as a single byte."""
        kind = self.kind
        if kind is MarkerKind.FIX_POS or kind is MarkerKind.FIX_NEG:
            return self.value & 0xFF
        if kind is MarkerKind.FIX_STR:
            return 0xA0 | (self.value & _FIXSTR_SIZE)
        if kind is MarkerKind.FIX_ARRAY:
            return 0x90 | (self.value & _FIXARRAY_SIZE)
        if kind is MarkerKind.FIX_MAP:
            return 0x80 | (self.value & _FIXMAP_SIZE)
        return kind.value

    def __int__(self) -> int:
        return self.to_u8()

    def __repr__(self) -> str:
        if self.kind.carries_value:
            return f"Marker({self.kind.name}, {self.value})"
        return f"Marker({self.kind.name})"