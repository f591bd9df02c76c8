"""Top-level encode/decode entry points.

Codecs can be given as Codec instances or as Python annotations (see codec_for()).
"""

from __future__ import annotations

from typing import Any

from ..stream.base import Sink, Source
from ..stream.memory import BytesSink, BytesSource
from .base import Codec
from .resolve import codec_for


def encode(codec: Codec[Any] | Any, value: Any) -> bytes:
    """Encode a value to bytes.

    Args:
        codec: Codec, or annotation resolvable by codec_for()
        value: Value to encode

    Returns:
        Encoded bytes

    Raises:
        SchemaError: If no codec can be derived from ``codec``
        EncodeError: If the value does not fit the codec

    Examples:
        ```python
        from itemcodec import U16, Pair, encode

        encode(Pair(U16, U16), (1, 2))  # b"\\x00\\x01\\x00\\x02"
        ```
    """
    sink = BytesSink()
    encode_into(codec, value, sink)
    return sink.getvalue()


def decode(codec: Codec[Any] | Any, data: bytes | bytearray | memoryview) -> Any:
    """Decode one value from the start of ``data``.

    Bytes after the value are ignored, so a buffer holding several consecutive
    values can be decoded value by value through a BytesSource instead.

    Args:
        codec: Codec, or annotation resolvable by codec_for()
        data: Encoded bytes

    Returns:
        Decoded value

    Raises:
        SchemaError: If no codec can be derived from ``codec``
        EndOfStream: If ``data`` is too short
        ParseError: If the bytes do not form a valid value
    """
    return decode_from(codec, BytesSource(data))


def decode_from(codec: Codec[Any] | Any, source: Source[Any]) -> Any:
    """Decode one value from a source, leaving it positioned after the value."""
    return codec_for(codec).decode(source)


def encode_into(codec: Codec[Any] | Any, value: Any, sink: Sink[Any]) -> None:
    """Encode one value into a sink."""
    codec_for(codec).encode(sink, value)
