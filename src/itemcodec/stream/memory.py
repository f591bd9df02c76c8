"""In-memory stream backends.

BytesSource and BytesSink are the canonical byte backends and move data in bulk.
IterSource and ListSink carry arbitrary items, and CountingSink only counts.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, MutableSequence
from typing import Any, Generic

from ..exceptions import EndOfStream
from .base import ItemT, Sink, Source


class BytesSource(Source[int]):
    """Source of byte items over a bytes-like buffer.

    Example:
        >>> source = BytesSource(b"\\x12\\x34")
        >>> source.get()
        18
        >>> source.take(1)
        b'4'
        >>> source.remaining()
        0
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize a source reading from the start of ``data``.

        Args:
            data: Buffer to read; it is copied
        """
        self._data = bytes(data)
        self._position = 0

    def get(self) -> int:
        if self._position >= len(self._data):
            raise EndOfStream()

        item = self._data[self._position]
        self._position += 1
        return item

    def fill(self, buffer: MutableSequence[int]) -> None:
        buffer[:] = self.take(len(buffer))

    def take(self, count: int) -> bytes:
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if count > self.remaining():
            raise EndOfStream(
                f"reached end of stream: need {count} bytes, have {self.remaining()}"
            )

        end = self._position + count
        chunk = self._data[self._position : end]
        self._position = end
        return chunk

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position


class BytesSink(Sink[int]):
    """Sink collecting byte items into a growing buffer.

    Example:
        >>> sink = BytesSink()
        >>> sink.accept(0x12)
        >>> sink.accept_bulk(b"\\x34\\x56")
        >>> sink.getvalue()
        b'\\x124V'
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def accept(self, item: int) -> None:
        self._buffer.append(item)

    def accept_bulk(self, items: Iterable[int]) -> None:
        self._buffer.extend(items)

    def getvalue(self) -> bytes:
        """Return everything accepted so far."""
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class IterSource(Source[ItemT]):
    """Source of arbitrary items drawn from an iterable."""

    def __init__(self, items: Iterable[ItemT]) -> None:
        self._iterator: Iterator[ItemT] = iter(items)

    def get(self) -> ItemT:
        try:
            return next(self._iterator)
        except StopIteration:
            raise EndOfStream() from None


class ListSink(Sink[ItemT], Generic[ItemT]):
    """Sink collecting arbitrary items into ``items``."""

    def __init__(self) -> None:
        self.items: list[ItemT] = []

    def accept(self, item: ItemT) -> None:
        self.items.append(item)

    def accept_bulk(self, items: Iterable[ItemT]) -> None:
        self.items.extend(items)


class CountingSink(Sink[Any]):
    """Sink that drops every item and keeps only ``count``."""

    def __init__(self) -> None:
        self.count = 0

    def accept(self, item: Any) -> None:
        self.count += 1

    def accept_bulk(self, items: Iterable[Any]) -> None:
        if isinstance(items, (bytes, bytearray, memoryview, list, tuple)):
            self.count += len(items)
        else:
            self.count += sum(1 for _ in items)
