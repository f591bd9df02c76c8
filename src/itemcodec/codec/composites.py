"""Composite codecs.

Composites delegate every item to their constituent codecs:

- Seq(element): length (usize) + each element, in order
- Array(element, n): exactly n elements, no length prefix
- Option(payload): presence flag (bool) + payload only if present
- Pair(first, second): first's items immediately followed by second's

They add no validation of their own beyond shape checks on the Python side
(EncodeError) and never retry. The first constituent failure propagates
unchanged, with no indication of which element failed.

``length`` and ``flag`` are codecs too, so a composite can run over a stream
whose items are not bytes by swapping them for item-level codecs.
"""

from __future__ import annotations

from collections.abc import Sequence, Sized
from dataclasses import dataclass
from typing import Annotated, Any, Optional

from pydantic import Field

from ..exceptions import EncodeError, SchemaError
from ..stream.base import Sink, Source
from .base import Codec
from .primitives import BOOL, USIZE


@dataclass(frozen=True, repr=False)
class Seq(Codec[list[Any]]):
    """Dynamically-sized sequence.

    Attributes:
        element: Codec of each element
        length: Codec of the element count (default usize)

    Example:
        >>> from itemcodec import U16, encode
        >>> encode(Seq(U16), [1, 2])
        b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x02\\x00\\x01\\x00\\x02'
    """

    element: Codec[Any]
    length: Codec[int] = USIZE

    @property
    def name(self) -> str:
        return f"list[{self.element.name}]"

    @property
    def python_type(self) -> Any:
        return list[self.element.python_type]  # type: ignore[name-defined]

    def decode(self, source: Source[Any]) -> list[Any]:
        count = self.length.decode(source)
        items = []
        for _ in range(count):
            items.append(self.element.decode(source))
        return items

    def encode(self, sink: Sink[Any], value: Any) -> None:
        if not isinstance(value, Sized):
            raise EncodeError(f"{self.name}: expected a sized iterable, got {type(value).__name__}")

        self.length.encode(sink, len(value))
        for item in value:
            self.element.encode(sink, item)


@dataclass(frozen=True, repr=False)
class Array(Codec[list[Any]]):
    """Fixed-length array; the length is part of the type, not the data.

    Attributes:
        element: Codec of each element
        length: Number of elements
    """

    element: Codec[Any]
    length: int

    def __post_init__(self) -> None:
        if isinstance(self.length, bool) or not isinstance(self.length, int) or self.length < 0:
            raise SchemaError(f"array length must be a non-negative int, got {self.length!r}")

    @property
    def name(self) -> str:
        return f"array[{self.element.name}, {self.length}]"

    @property
    def python_type(self) -> Any:
        return Annotated[
            list[self.element.python_type],  # type: ignore[name-defined]
            Field(min_length=self.length, max_length=self.length),
        ]

    @property
    def fixed_size(self) -> int | None:
        if self.length == 0:
            return 0
        element_size = self.element.fixed_size
        return None if element_size is None else element_size * self.length

    def decode(self, source: Source[Any]) -> list[Any]:
        return [self.element.decode(source) for _ in range(self.length)]

    def encode(self, sink: Sink[Any], value: Any) -> None:
        if not isinstance(value, Sized):
            raise EncodeError(f"{self.name}: expected a sized iterable, got {type(value).__name__}")
        if len(value) != self.length:
            raise EncodeError(
                f"{self.name}: expected {self.length} elements, got {len(value)} elements"
            )

        for item in value:
            self.element.encode(sink, item)


@dataclass(frozen=True, repr=False)
class Option(Codec[Any]):
    """Optional value; ``None`` is the absent case.

    ``Option(Option(x))`` cannot tell an absent outer value from a present outer
    value wrapping an absent inner one on the Python side: ``None`` always
    encodes as the outer flag alone.
    """

    payload: Codec[Any]
    flag: Codec[bool] = BOOL

    @property
    def name(self) -> str:
        return f"option[{self.payload.name}]"

    @property
    def python_type(self) -> Any:
        return Optional[self.payload.python_type]

    def decode(self, source: Source[Any]) -> Any:
        if self.flag.decode(source):
            return self.payload.decode(source)
        return None

    def encode(self, sink: Sink[Any], value: Any) -> None:
        if value is None:
            self.flag.encode(sink, False)
            return

        self.flag.encode(sink, True)
        self.payload.encode(sink, value)


@dataclass(frozen=True, repr=False)
class Pair(Codec[tuple[Any, Any]]):
    """Two heterogeneous values, first then second, with nothing in between.

    This is the building block for aggregates: a struct with fields a, b, c is
    ``Pair(A, Pair(B, C))`` or simply the three codecs applied in field order.
    """

    first: Codec[Any]
    second: Codec[Any]

    @property
    def name(self) -> str:
        return f"tuple[{self.first.name}, {self.second.name}]"

    @property
    def python_type(self) -> Any:
        return tuple[self.first.python_type, self.second.python_type]  # type: ignore[name-defined]

    @property
    def fixed_size(self) -> int | None:
        first_size = self.first.fixed_size
        second_size = self.second.fixed_size
        if first_size is None or second_size is None:
            return None
        return first_size + second_size

    def decode(self, source: Source[Any]) -> tuple[Any, Any]:
        first = self.first.decode(source)
        second = self.second.decode(source)
        return (first, second)

    def encode(self, sink: Sink[Any], value: Any) -> None:
        if (
            not isinstance(value, Sequence)
            or isinstance(value, (str, bytes, bytearray))
            or len(value) != 2
        ):
            raise EncodeError(f"{self.name}: expected a 2-tuple, got {value!r}")

        first, second = value
        self.first.encode(sink, first)
        self.second.encode(sink, second)
