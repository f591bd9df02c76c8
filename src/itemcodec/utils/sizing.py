"""Encoded size calculation utilities.

This module provides functions to calculate how many items a value occupies
without keeping the encoded output.
"""

from __future__ import annotations

from typing import Any

from ..codec.base import Codec
from ..codec.resolve import codec_for
from ..stream.memory import CountingSink


def fixed_size(codec: Codec[Any] | Any) -> int | None:
    """Return the number of items every value of the type occupies.

    Args:
        codec: Codec, or annotation resolvable by codec_for()

    Returns:
        Size in items, or None if it depends on the value

    Example:
        >>> fixed_size(Pair(U16, Array(U8, 3)))
        5
        >>> fixed_size(TEXT) is None
        True
    """
    return codec_for(codec).fixed_size


def encoded_size(codec: Codec[Any] | Any, value: Any) -> int:
    """Calculate the encoded size of a value in items (bytes for byte codecs).

    Args:
        codec: Codec, or annotation resolvable by codec_for()
        value: Value to measure

    Returns:
        Number of items encoding ``value`` produces

    Raises:
        EncodeError: If the value does not fit the codec

    Example:
        >>> encoded_size(TEXT, "café")
        13  # 8-byte length + 5 UTF-8 bytes
    """
    sink = CountingSink()
    codec_for(codec).encode(sink, value)
    return sink.count
