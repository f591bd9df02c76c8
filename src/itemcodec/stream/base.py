"""Abstract item streams.

A Source hands out items one at a time (pull), a Sink takes them (push).
Items can be anything; byte-oriented backends hand out ``int`` items in 0..255.

Both sides have a single-item operation that backends must implement and a bulk
operation with a default built on the single-item one. Backends that can move
many items at once (a bytes buffer, a file) override the bulk operation while
keeping the same ordering and all-or-nothing guarantees.

Design Pattern: Template Method
- Source.get / Sink.accept: implemented by every backend
- Source.fill / Source.take / Sink.accept_bulk: default loops, optional overrides
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, MutableSequence, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from ..codec.base import Codec

ItemT = TypeVar("ItemT")


class Source(ABC, Generic[ItemT]):
    """Pull-based, consumed-once source of items.

    The position only ever moves forward. A failed call leaves the position
    wherever the underlying pulls stopped; there is no rollback.

    Examples:
        ```python
        from itemcodec import BytesSource, U16

        source = BytesSource(b"\\x00\\x01\\x00\\x02")
        first = source.decode(U16)   # 1
        second = source.decode(U16)  # 2
        ```
    """

    @abstractmethod
    def get(self) -> ItemT:
        """Retrieve exactly one item.

        Returns:
            The next item

        Raises:
            EndOfStream: If no item remains
            TransportError: If the backend fails
        """

    def fill(self, buffer: MutableSequence[ItemT]) -> None:
        """Fill ``buffer`` completely with the next ``len(buffer)`` items.

        Either every slot is filled, or an exception is raised and the buffer
        contents are unspecified. The canonical implementation calls get() as
        often as necessary; override it if the backend can do better.

        Args:
            buffer: Mutable sequence (list, bytearray, ...) to overwrite in place

        Raises:
            EndOfStream: If fewer than ``len(buffer)`` items remain
            TransportError: If the backend fails
        """
        for i in range(len(buffer)):
            buffer[i] = self.get()

    def take(self, count: int) -> Sequence[ItemT]:
        """Retrieve exactly ``count`` items as a new sequence.

        Args:
            count: Number of items to retrieve

        Returns:
            Sequence of ``count`` items (``bytes`` for byte backends)

        Raises:
            EndOfStream: If fewer than ``count`` items remain
            TransportError: If the backend fails
        """
        return [self.get() for _ in range(count)]

    def decode(self, codec: Codec[Any] | Any) -> Any:
        """Decode one value of a known type from this source.

        Args:
            codec: Codec instance, or a Python annotation resolvable by codec_for()

        Returns:
            The decoded value
        """
        # Import here to avoid circular dependency
        from ..codec.resolve import codec_for

        return codec_for(codec).decode(self)


class Sink(ABC, Generic[ItemT]):
    """Push-based destination for items; submission order is preserved."""

    @abstractmethod
    def accept(self, item: ItemT) -> None:
        """Submit exactly one item.

        Raises:
            TransportError: If the backend fails
        """

    def accept_bulk(self, items: Iterable[ItemT]) -> None:
        """Submit items in order.

        The canonical implementation calls accept() for each item.

        Args:
            items: Items to submit

        Raises:
            TransportError: If the backend fails
        """
        for item in items:
            self.accept(item)

    def encode(self, codec: Codec[Any] | Any, value: Any) -> None:
        """Encode one value into this sink.

        Args:
            codec: Codec instance, or a Python annotation resolvable by codec_for()
            value: Value to encode
        """
        from ..codec.resolve import codec_for

        codec_for(codec).encode(self, value)
