"""Low-level MessagePack wire format primitives: markers, readers, writers,
per-format encoding and decoding, and message length measurement."""

__version__ = "0.1.0"

__all__ = [
    "decode",
    "decode_ext",
    "decode_str",
    "encode",
    "encode_int",
    "errors",
    "marker",
    "msglen",
    "reader",
    "writer",
]