"""Primitive codecs.

Wire formats (all multi-byte values big-endian):

| codec        | items                                                  |
|--------------|--------------------------------------------------------|
| u8 … u128    | 1/2/4/8/16 bytes, unsigned                             |
| i8 … i128    | 1/2/4/8/16 bytes, two's complement                     |
| usize/isize  | always 8 bytes (u64/i64), whatever the platform width  |
| f32/f64      | IEEE-754 bit pattern through u32/u64                   |
| bool         | 1 byte; 0 is false, anything else true; writes 0 or 1  |
| char         | code point through u32                                 |
| bytes        | usize length + raw bytes (same layout as list[u8])     |
| str          | UTF-8, in the bytes layout                             |

Every byte-level codec bottoms out at U8-sized pulls from the source, so any
Source of byte items can be decoded, and bulk-capable sources are used in bulk.
"""

from __future__ import annotations

import math
import struct
import sys
from dataclasses import dataclass
from typing import Annotated, Any

from pydantic import Field

from ..exceptions import EncodeError, ParseError, SchemaError
from ..stream.base import Sink, Source
from .base import Codec

_INT_WIDTHS = (1, 2, 4, 8, 16)

# Bits in the platform's native size type (sys.maxsize is its signed maximum)
PLATFORM_SIZE_BITS = sys.maxsize.bit_length() + 1

MAX_CODE_POINT = 0x10FFFF
_SURROGATES = range(0xD800, 0xE000)

_F32_EXPONENT = 0xFF << 23
_F32_MANTISSA = (1 << 23) - 1
_F32_QUIET_BIT = 1 << 22
_F64_EXPONENT = 0x7FF << 52
# Mantissa bits f64 has beyond f32
_MANTISSA_SHIFT = 52 - 23


@dataclass(frozen=True, repr=False)
class IntCodec(Codec[int]):
    """Fixed-width integer, big-endian, two's complement when signed.

    Attributes:
        width: Width in bytes (1, 2, 4, 8 or 16)
        signed: Whether the integer is signed

    Example:
        >>> from itemcodec import encode
        >>> encode(IntCodec(2), 258)
        b'\\x01\\x02'
        >>> encode(IntCodec(2, signed=True), -2)
        b'\\xff\\xfe'
    """

    width: int
    signed: bool = False

    def __post_init__(self) -> None:
        if self.width not in _INT_WIDTHS:
            raise SchemaError(f"integer width must be one of {_INT_WIDTHS} bytes, got {self.width}")

    @property
    def min_value(self) -> int:
        return -(1 << (self.width * 8 - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        bits = self.width * 8 - 1 if self.signed else self.width * 8
        return (1 << bits) - 1

    @property
    def name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.width * 8}"

    @property
    def python_type(self) -> Any:
        return Annotated[int, Field(ge=self.min_value, le=self.max_value)]

    @property
    def fixed_size(self) -> int:
        return self.width

    def decode(self, source: Source[Any]) -> int:
        if self.width == 1:
            raw = bytes((source.get(),))
        else:
            raw = bytes(source.take(self.width))
        return int.from_bytes(raw, "big", signed=self.signed)

    def encode(self, sink: Sink[Any], value: int) -> None:
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError(f"{self.name}: expected int, got {type(value).__name__}")
        if value < self.min_value or value > self.max_value:
            raise EncodeError(
                f"{self.name}: value {value} out of bounds [{self.min_value}, {self.max_value}]"
            )

        raw = value.to_bytes(self.width, "big", signed=self.signed)
        if self.width == 1:
            sink.accept(raw[0])
        else:
            sink.accept_bulk(raw)


U8 = IntCodec(1)
U16 = IntCodec(2)
U32 = IntCodec(4)
U64 = IntCodec(8)
U128 = IntCodec(16)
I8 = IntCodec(1, signed=True)
I16 = IntCodec(2, signed=True)
I32 = IntCodec(4, signed=True)
I64 = IntCodec(8, signed=True)
I128 = IntCodec(16, signed=True)


def check_platform_width() -> None:
    """Assert the platform size type fits the 64-bit wire representation.

    This is a fatal condition, not a reported error: such a platform cannot
    represent the format at all.
    """
    assert PLATFORM_SIZE_BITS <= 64, (
        f"platform size type has {PLATFORM_SIZE_BITS} bits, the wire format allows at most 64"
    )


@dataclass(frozen=True, repr=False)
class SizeCodec(Codec[int]):
    """Platform-width size, always carried as a 64-bit value.

    The unsigned variant is the length prefix of sequences, bytes and text.
    """

    signed: bool = False

    @property
    def wire(self) -> IntCodec:
        return I64 if self.signed else U64

    @property
    def name(self) -> str:
        return "isize" if self.signed else "usize"

    @property
    def python_type(self) -> Any:
        return self.wire.python_type

    @property
    def fixed_size(self) -> int:
        return 8

    def decode(self, source: Source[Any]) -> int:
        check_platform_width()
        return self.wire.decode(source)

    def encode(self, sink: Sink[Any], value: int) -> None:
        check_platform_width()
        self.wire.encode(sink, value)


USIZE = SizeCodec()
ISIZE = SizeCodec(signed=True)


@dataclass(frozen=True, repr=False)
class FloatCodec(Codec[float]):
    """IEEE-754 float carried as its bit pattern in a same-width unsigned integer.

    NaN payloads are passed through untouched; there is no canonicalization.
    An f32 NaN is held in a Python float with its payload shifted into the top
    of the f64 mantissa, so signaling NaNs keep their bits in both directions.
    """

    width: int

    def __post_init__(self) -> None:
        if self.width not in (4, 8):
            raise SchemaError(f"float width must be 4 or 8 bytes, got {self.width}")

    @property
    def _formats(self) -> tuple[str, str]:
        return (">f", ">I") if self.width == 4 else (">d", ">Q")

    @property
    def bits(self) -> IntCodec:
        return U32 if self.width == 4 else U64

    @property
    def name(self) -> str:
        return f"f{self.width * 8}"

    @property
    def python_type(self) -> Any:
        return float

    @property
    def fixed_size(self) -> int:
        return self.width

    def to_bits(self, value: float) -> int:
        """Reinterpret a float as its unsigned bit pattern."""
        if self.width == 4 and isinstance(value, float) and math.isnan(value):
            # Narrow by hand: C float conversion would quiet signaling NaNs
            wide = F64.to_bits(value)
            mantissa = (wide >> _MANTISSA_SHIFT) & _F32_MANTISSA
            if not mantissa:
                mantissa = _F32_QUIET_BIT
            return (wide >> 63) << 31 | _F32_EXPONENT | mantissa

        float_fmt, int_fmt = self._formats
        try:
            packed = struct.pack(float_fmt, value)
        except (OverflowError, struct.error) as err:
            raise EncodeError(f"{self.name}: cannot represent {value!r}: {err}") from err
        return struct.unpack(int_fmt, packed)[0]

    def from_bits(self, bits: int) -> float:
        """Reinterpret an unsigned bit pattern as a float."""
        if self.width == 4 and (bits & _F32_EXPONENT) == _F32_EXPONENT and bits & _F32_MANTISSA:
            wide = (bits >> 31) << 63 | _F64_EXPONENT | (bits & _F32_MANTISSA) << _MANTISSA_SHIFT
            return F64.from_bits(wide)

        float_fmt, int_fmt = self._formats
        return struct.unpack(float_fmt, struct.pack(int_fmt, bits))[0]

    def decode(self, source: Source[Any]) -> float:
        return self.from_bits(self.bits.decode(source))

    def encode(self, sink: Sink[Any], value: float) -> None:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError(f"{self.name}: expected float, got {type(value).__name__}")
        self.bits.encode(sink, self.to_bits(value))


F32 = FloatCodec(4)
F64 = FloatCodec(8)


class BoolCodec(Codec[bool]):
    """Boolean as one byte."""

    name = "bool"
    python_type = bool
    fixed_size = 1

    def decode(self, source: Source[Any]) -> bool:
        return U8.decode(source) != 0

    def encode(self, sink: Sink[Any], value: bool) -> None:
        if not isinstance(value, bool):
            raise EncodeError(f"bool: expected bool, got {type(value).__name__}")
        U8.encode(sink, 1 if value else 0)


class CharCodec(Codec[str]):
    """Unicode scalar value as its 32-bit code point.

    Decoding rejects surrogates and anything above U+10FFFF with a ParseError
    whose ``value`` is the offending number.
    """

    name = "char"
    python_type = Annotated[str, Field(min_length=1, max_length=1)]
    fixed_size = 4

    def decode(self, source: Source[Any]) -> str:
        code_point = U32.decode(source)
        if code_point > MAX_CODE_POINT or code_point in _SURROGATES:
            raise ParseError(
                f"cannot parse char from u32 0x{code_point:x} (not a valid unicode scalar value)",
                value=code_point,
            )
        return chr(code_point)

    def encode(self, sink: Sink[Any], value: str) -> None:
        if not isinstance(value, str) or len(value) != 1:
            raise EncodeError(f"char: expected a single character, got {value!r}")
        code_point = ord(value)
        if code_point in _SURROGATES:
            raise EncodeError(f"char: surrogate 0x{code_point:x} is not a unicode scalar value")
        U32.encode(sink, code_point)


@dataclass(frozen=True, repr=False)
class BytesCodec(Codec[bytes]):
    """Raw byte string: element count, then the bytes.

    Same items as ``Seq(U8)``, but moved with take()/accept_bulk() and
    decoded to ``bytes`` instead of a list of ints.
    """

    length: Codec[int] = USIZE

    @property
    def name(self) -> str:
        return "bytes"

    @property
    def python_type(self) -> Any:
        return bytes

    def decode(self, source: Source[Any]) -> bytes:
        count = self.length.decode(source)
        return bytes(source.take(count))

    def encode(self, sink: Sink[Any], value: bytes) -> None:
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodeError(f"bytes: expected bytes, got {type(value).__name__}")
        data = bytes(value)
        self.length.encode(sink, len(data))
        sink.accept_bulk(data)


BYTES = BytesCodec()


@dataclass(frozen=True, repr=False)
class TextCodec(Codec[str]):
    """UTF-8 text in the bytes layout (byte count, then the encoded bytes)."""

    raw: BytesCodec = BYTES

    @property
    def name(self) -> str:
        return "str"

    @property
    def python_type(self) -> Any:
        return str

    def decode(self, source: Source[Any]) -> str:
        data = self.raw.decode(source)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as err:
            raise ParseError(f"invalid UTF-8: {err}") from err

    def encode(self, sink: Sink[Any], value: str) -> None:
        if not isinstance(value, str):
            raise EncodeError(f"str: expected str, got {type(value).__name__}")
        try:
            data = value.encode("utf-8")
        except UnicodeEncodeError as err:
            raise EncodeError(f"str: cannot encode as UTF-8: {err}") from err
        self.raw.encode(sink, data)


class RawCodec(Codec[Any]):
    """Exactly one item, passed through as is.

    Lets the composite codecs work over streams whose items are not bytes.
    """

    name = "raw"
    python_type = Any
    fixed_size = 1

    def decode(self, source: Source[Any]) -> Any:
        return source.get()

    def encode(self, sink: Sink[Any], value: Any) -> None:
        sink.accept(value)


BOOL = BoolCodec()
CHAR = CharCodec()
TEXT = TextCodec()
RAW = RawCodec()
