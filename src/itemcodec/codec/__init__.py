"""Type-directed binary codec for itemcodec.

This module provides the codec contract, the primitive and composite codecs,
and the encode/decode entry points built on them.
"""

from __future__ import annotations

from .api import decode, decode_from, encode, encode_into
from .base import ClassCodec, Codec, Decodable, Decoder, Encodable, Encoder
from .composites import Array, Option, Pair, Seq
from .primitives import (
    BOOL,
    BYTES,
    CHAR,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    RAW,
    TEXT,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
    BoolCodec,
    BytesCodec,
    CharCodec,
    FloatCodec,
    IntCodec,
    RawCodec,
    SizeCodec,
    TextCodec,
)
from .resolve import codec_for
from .typeexpr import parse_type

__all__ = [
    "encode",
    "decode",
    "encode_into",
    "decode_from",
    "codec_for",
    "parse_type",
    # Contract
    "Codec",
    "ClassCodec",
    "Decoder",
    "Encoder",
    "Decodable",
    "Encodable",
    # Composites
    "Seq",
    "Array",
    "Option",
    "Pair",
    # Primitive codec classes
    "IntCodec",
    "SizeCodec",
    "FloatCodec",
    "BoolCodec",
    "CharCodec",
    "BytesCodec",
    "TextCodec",
    "RawCodec",
    # Primitive codec instances
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "I8",
    "I16",
    "I32",
    "I64",
    "I128",
    "USIZE",
    "ISIZE",
    "F32",
    "F64",
    "BOOL",
    "CHAR",
    "BYTES",
    "TEXT",
    "RAW",
]
