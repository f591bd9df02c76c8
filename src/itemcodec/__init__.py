"""itemcodec: Type-Directed Binary Codec

A Python library for reading and writing strongly-typed values from streams of
items, without any self-describing schema: the reader must already know the
static type of what it decodes.

Key Features:
- Pull sources and push sinks over any kind of item (bytes by default)
- Big-endian fixed-width integers, IEEE-754 floats, bool, char and UTF-8 text
- Composable optional values, pairs, fixed-length arrays and sequences
- Python annotations resolve to codecs (``list[Annotated[int, U16]]``)
- File and socket adapters for any binary reader/writer

Quick Start:
    >>> from itemcodec import U16, TEXT, Option, Pair, decode, encode
    >>>
    >>> codec = Pair(U16, Option(TEXT))
    >>> data = encode(codec, (7, "café"))
    >>> decode(codec, data)
    (7, 'café')
"""

from __future__ import annotations

from .codec import (
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
    Array,
    ClassCodec,
    Codec,
    Decodable,
    Encodable,
    Option,
    Pair,
    Seq,
    codec_for,
    decode,
    decode_from,
    encode,
    encode_into,
    parse_type,
)
from .exceptions import (
    EncodeError,
    EndOfStream,
    ItemCodecError,
    ParseError,
    SchemaError,
    TransportError,
)
from .stream import (
    BytesSink,
    BytesSource,
    IterSource,
    ListSink,
    ReaderConfig,
    ReaderSource,
    Sink,
    Source,
    WriterSink,
)
from .utils import encoded_size, fixed_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "encode_into",
    "decode_from",
    "codec_for",
    "parse_type",
    # Codec contract
    "Codec",
    "ClassCodec",
    "Decodable",
    "Encodable",
    # Codecs
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
    "Seq",
    "Array",
    "Option",
    "Pair",
    # Streams
    "Source",
    "Sink",
    "BytesSource",
    "BytesSink",
    "IterSource",
    "ListSink",
    "ReaderSource",
    "WriterSink",
    "ReaderConfig",
    # Exceptions
    "ItemCodecError",
    "EndOfStream",
    "TransportError",
    "ParseError",
    "SchemaError",
    "EncodeError",
    # Sizing
    "encoded_size",
    "fixed_size",
    # Version
    "__version__",
]
