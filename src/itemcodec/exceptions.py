"""Exception hierarchy for itemcodec.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from ItemCodecError for easy catching of any itemcodec-specific error.

Decoding can fail in exactly three ways: EndOfStream, TransportError and ParseError.
Codecs never catch, wrap or annotate these; the exception raised by the innermost
failing pull is the one the caller sees.
"""

from __future__ import annotations

from typing import Any


class ItemCodecError(Exception):
    """Base exception for all itemcodec errors."""

    pass


class EndOfStream(ItemCodecError):
    """Raised when a source has no more items but at least one more is required.

    This is raised regardless of how many items were already consumed by the
    current decode call; the source position is left wherever the pulls stopped.
    """

    def __init__(self, message: str = "reached end of stream before expecting it") -> None:
        super().__init__(message)


class TransportError(ItemCodecError):
    """Raised when the underlying stream implementation fails.

    The failure is unrelated to parsing. The backend-specific error is
    kept as ``cause`` (and chained as ``__cause__`` where raised with ``from``).

    Examples:
        - OSError while reading from a file or socket
        - Write to a closed pipe
    """

    def __init__(self, cause: BaseException | None, message: str | None = None) -> None:
        self.cause = cause
        if message is None:
            message = f"the stream backend had an error: {cause!r}"
        super().__init__(message)


class ParseError(ItemCodecError):
    """Raised when the retrieved items do not form a valid value.

    Attributes:
        value: The offending raw value, if there is a single one (e.g. a code point)

    Examples:
        - Invalid UTF-8 in a text payload
        - Code point that is not a Unicode scalar value
    """

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


class SchemaError(ItemCodecError):
    """Raised when a codec cannot be built for a type.

    Examples:
        - Unsupported integer width
        - Negative fixed array length
        - Annotation with no known codec (e.g. a bare ``int``)
        - Malformed type expression
    """

    pass


class EncodeError(ItemCodecError):
    """Raised when a Python value cannot be encoded by the requested codec.

    Examples:
        - Value out of range for a fixed-width integer
        - Wrong Python type for the codec
        - Fixed-length array with the wrong number of elements
    """

    pass
