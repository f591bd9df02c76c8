"""Codec contract.

Decoding and encoding are two independent capabilities:

- Decoder: build one value from a source, consuming exactly its items
- Encoder: append exactly the items Decoder expects to a sink, in the same order

Built-in codecs are Codec instances and implement both. User-defined types take
part by implementing the Decodable and/or Encodable protocols on the class
itself; ClassCodec adapts such a class to the Codec interface.

Round-trip law: for every codec ``c`` and every value ``v`` that ``c`` accepts,
``c.decode(source_over(c.encode(v))) == v``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from ..exceptions import EncodeError, SchemaError
from ..stream.base import Sink, Source

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)
D = TypeVar("D", bound="Decodable")


class Decoder(Protocol[T_co]):
    def decode(self, source: Source[Any], /) -> T_co: ...


class Encoder(Protocol[T_contra]):
    def encode(self, sink: Sink[Any], value: T_contra, /) -> None: ...


@runtime_checkable
class Decodable(Protocol):
    """Capability of a class whose instances can be read from a source.

    Example:
        ```python
        class Point:
            def __init__(self, x: int, y: int) -> None:
                self.x, self.y = x, y

            @classmethod
            def decode_from(cls, source):
                x, y = source.decode(Pair(I32, I32))
                return cls(x, y)
        ```
    """

    @classmethod
    def decode_from(cls: type[D], source: Source[Any]) -> D: ...


@runtime_checkable
class Encodable(Protocol):
    """Capability of an object that can write itself to a sink."""

    def encode_into(self, sink: Sink[Any]) -> None: ...


class Codec(ABC, Generic[T]):
    """Decoder and Encoder for one static type.

    Subclasses describe their values with ``python_type`` (a Python annotation,
    used to validate loose input such as JSON), report ``fixed_size`` when every
    value takes the same number of items, and spell themselves as a type
    expression in ``name``.
    """

    @abstractmethod
    def decode(self, source: Source[Any]) -> T:
        """Decode one value, consuming exactly its items.

        Raises:
            EndOfStream: If the source runs out
            TransportError: If the source backend fails
            ParseError: If the items do not form a valid value
        """

    @abstractmethod
    def encode(self, sink: Sink[Any], value: T) -> None:
        """Encode one value, appending exactly the items decode() reads back.

        Raises:
            EncodeError: If the value does not fit this codec
            TransportError: If the sink backend fails
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Type expression for this codec, e.g. ``list[u16]``."""

    @property
    @abstractmethod
    def python_type(self) -> Any:
        """Python annotation describing decoded values."""

    @property
    def fixed_size(self) -> int | None:
        """Number of items every value occupies, or None if it varies."""
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class ClassCodec(Codec[Any]):
    """Codec for a class implementing Decodable and/or Encodable.

    Only the direction(s) the class implements are usable; the other raises
    SchemaError when called.
    """

    def __init__(self, cls: type[Any]) -> None:
        if not (_is_decodable(cls) or _is_encodable(cls)):
            raise SchemaError(
                f"{cls.__name__} implements neither decode_from() nor encode_into()"
            )
        self.cls = cls

    def decode(self, source: Source[Any]) -> Any:
        if not _is_decodable(self.cls):
            raise SchemaError(f"{self.cls.__name__} is not decodable (no decode_from())")
        return self.cls.decode_from(source)

    def encode(self, sink: Sink[Any], value: Any) -> None:
        if not _is_encodable(self.cls):
            raise SchemaError(f"{self.cls.__name__} is not encodable (no encode_into())")
        if not isinstance(value, self.cls):
            raise EncodeError(f"expected {self.cls.__name__}, got {type(value).__name__}")
        value.encode_into(sink)

    @property
    def name(self) -> str:
        return self.cls.__name__

    @property
    def python_type(self) -> Any:
        return self.cls

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ClassCodec) and other.cls is self.cls

    def __hash__(self) -> int:
        return hash((ClassCodec, self.cls))


def _is_decodable(cls: type[Any]) -> bool:
    return callable(getattr(cls, "decode_from", None))


def _is_encodable(cls: type[Any]) -> bool:
    return callable(getattr(cls, "encode_into", None))
