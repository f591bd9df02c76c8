"""Unit tests for item stream backends."""

from __future__ import annotations

import pytest

from itemcodec import U16, BytesSink, BytesSource, EndOfStream, IterSource, ListSink
from itemcodec.stream import CountingSink, Sink, Source


class GetOnlySource(Source[int]):
    """Source implementing only get(), to exercise the default bulk operations."""

    def __init__(self, items: list[int]) -> None:
        self.items = list(items)
        self.calls = 0

    def get(self) -> int:
        self.calls += 1
        if not self.items:
            raise EndOfStream()
        return self.items.pop(0)


class AcceptOnlySink(Sink[int]):
    """Sink implementing only accept()."""

    def __init__(self) -> None:
        self.items: list[int] = []

    def accept(self, item: int) -> None:
        self.items.append(item)


class TestBytesSource:
    """Test BytesSource functionality."""

    def test_get(self) -> None:
        """Test reading single items."""
        source = BytesSource(b"\x12\x34")

        assert source.get() == 0x12
        assert source.get() == 0x34
        assert source.position() == 2
        assert source.remaining() == 0

    def test_get_past_end(self) -> None:
        """Test reading past the end raises EndOfStream."""
        source = BytesSource(b"\x01")
        source.get()

        with pytest.raises(EndOfStream):
            source.get()

    def test_take(self) -> None:
        """Test bulk reads return bytes."""
        source = BytesSource(b"\x01\x02\x03")

        assert source.take(2) == b"\x01\x02"
        assert source.take(0) == b""
        assert source.remaining() == 1

    def test_take_too_many(self) -> None:
        """Test bulk reads past the end raise EndOfStream."""
        source = BytesSource(b"\x01\x02")

        with pytest.raises(EndOfStream, match="need 3 bytes, have 2"):
            source.take(3)

    def test_take_negative(self) -> None:
        """Test a negative count is rejected without moving the position."""
        source = BytesSource(b"\x01\x02")
        source.get()

        with pytest.raises(ValueError, match="count must be >= 0"):
            source.take(-1)
        assert source.position() == 1
        assert source.get() == 2

    def test_fill_bytearray(self) -> None:
        """Test filling a caller-provided bytearray."""
        source = BytesSource(b"\xaa\xbb\xcc")
        buffer = bytearray(2)
        source.fill(buffer)

        assert buffer == bytearray(b"\xaa\xbb")
        assert source.remaining() == 1

    def test_fill_list(self) -> None:
        """Test filling a caller-provided list."""
        source = BytesSource(b"\x05\x06")
        buffer = [0, 0]
        source.fill(buffer)

        assert buffer == [5, 6]

    def test_accepts_memoryview(self) -> None:
        """Test construction from other bytes-like objects."""
        source = BytesSource(memoryview(b"\x00\x07"))

        assert source.decode(U16) == 7


class TestBytesSink:
    """Test BytesSink functionality."""

    def test_accept(self, sink: BytesSink) -> None:
        """Test single item submission."""
        sink.accept(0x12)
        sink.accept(0x34)

        assert sink.getvalue() == b"\x12\x34"
        assert len(sink) == 2

    def test_accept_bulk_preserves_order(self, sink: BytesSink) -> None:
        """Test bulk submission keeps order across calls."""
        sink.accept(1)
        sink.accept_bulk(b"\x02\x03")
        sink.accept_bulk([4, 5])

        assert sink.getvalue() == b"\x01\x02\x03\x04\x05"

    def test_empty(self, sink: BytesSink) -> None:
        """Test empty sink."""
        assert sink.getvalue() == b""
        assert len(sink) == 0


class TestDefaultBulkOperations:
    """Test the default fill/take/accept_bulk built on get/accept."""

    def test_take_calls_get(self) -> None:
        """Test default take() pulls one item per get()."""
        source = GetOnlySource([1, 2, 3])

        assert list(source.take(2)) == [1, 2]
        assert source.calls == 2

    def test_fill_calls_get(self) -> None:
        """Test default fill() overwrites every slot."""
        source = GetOnlySource([7, 8])
        buffer = [0, 0]
        source.fill(buffer)

        assert buffer == [7, 8]

    def test_fill_end_of_stream(self) -> None:
        """Test default fill() fails if too few items remain."""
        source = GetOnlySource([7])

        with pytest.raises(EndOfStream):
            source.fill([0, 0])

    def test_decode_through_default_take(self) -> None:
        """Test multi-byte codecs work on sources with only get()."""
        source = GetOnlySource([0x01, 0x02])

        assert source.decode(U16) == 0x0102

    def test_accept_bulk_calls_accept(self) -> None:
        """Test default accept_bulk() submits items in order."""
        sink = AcceptOnlySink()
        sink.accept_bulk([3, 1, 2])
        sink.encode(U16, 0x0405)

        assert sink.items == [3, 1, 2, 4, 5]


class TestGenericBackends:
    """Test backends carrying arbitrary items."""

    def test_iter_source(self) -> None:
        """Test IterSource hands out items from an iterable."""
        source = IterSource(iter(["a", "b"]))

        assert source.get() == "a"
        assert list(source.take(1)) == ["b"]

        with pytest.raises(EndOfStream):
            source.get()

    def test_list_sink(self) -> None:
        """Test ListSink collects items."""
        sink: ListSink[str] = ListSink()
        sink.accept("x")
        sink.accept_bulk(["y", "z"])

        assert sink.items == ["x", "y", "z"]

    def test_counting_sink(self) -> None:
        """Test CountingSink only counts."""
        sink = CountingSink()
        sink.accept(1)
        sink.accept_bulk(b"\x00\x00")
        sink.accept_bulk(iter([1, 2, 3]))

        assert sink.count == 6
