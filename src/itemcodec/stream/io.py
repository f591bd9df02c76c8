"""Adapters turning binary file objects into item streams.

Any object with ``read(n)`` becomes a Source of bytes and any object with
``write(data)`` becomes a Sink of bytes. Adapters never open or close the
underlying object.

Failure mapping:
- reader returns fewer bytes than required at end of input -> EndOfStream
- OSError raised by the reader or writer -> TransportError (error kept as ``cause``)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableSequence
from typing import Protocol

from ..exceptions import EndOfStream, TransportError
from .base import Sink, Source
from .config import ReaderConfig

logger = logging.getLogger(__name__)


class Reader(Protocol):
    def read(self, size: int = -1, /) -> bytes | None: ...


class Writer(Protocol):
    def write(self, data: bytes, /) -> int | None: ...
    def flush(self) -> None: ...


class ReaderSource(Source[int]):
    """Source of byte items read from a binary reader.

    Examples:
        ```python
        from itemcodec import TEXT
        from itemcodec.stream import ReaderSource

        with open("data.bin", "rb") as f:
            name = ReaderSource(f).decode(TEXT)
        ```
    """

    def __init__(self, reader: Reader, config: ReaderConfig | None = None) -> None:
        """Wrap an open binary reader.

        Args:
            reader: Object with a ``read(n)`` method (file, BytesIO, socket file)
            config: Adapter configuration (defaults to ReaderConfig())
        """
        self._reader = reader
        self.config = config or ReaderConfig()

    def get(self) -> int:
        return self._read_exact(1)[0]

    def fill(self, buffer: MutableSequence[int]) -> None:
        buffer[:] = self._read_exact(len(buffer))

    def take(self, count: int) -> bytes:
        return self._read_exact(count)

    def _read_exact(self, count: int) -> bytes:
        chunks: list[bytes] = []
        remaining = count
        while remaining > 0:
            try:
                chunk = self._reader.read(min(remaining, self.config.chunk_size))
            except OSError as err:
                logger.debug("read of %d bytes failed: %r", remaining, err)
                raise TransportError(err) from err

            if chunk is None:
                # Non-blocking reader with no data available
                raise TransportError(None, "reader has no data available (non-blocking)")
            if not chunk:
                raise EndOfStream(
                    f"reached end of stream: need {count} bytes, got {count - remaining}"
                )

            chunks.append(chunk)
            remaining -= len(chunk)

        return b"".join(chunks)


class WriterSink(Sink[int]):
    """Sink writing byte items to a binary writer.

    Examples:
        ```python
        from itemcodec import TEXT
        from itemcodec.stream import WriterSink

        with open("data.bin", "wb") as f:
            WriterSink(f).encode(TEXT, "hello")
        ```
    """

    def __init__(self, writer: Writer) -> None:
        """Wrap an open binary writer.

        Args:
            writer: Object with ``write(data)`` and ``flush()`` methods
        """
        self._writer = writer

    def accept(self, item: int) -> None:
        self._write_all(bytes((item,)))

    def accept_bulk(self, items: Iterable[int]) -> None:
        self._write_all(bytes(items))

    def flush(self) -> None:
        """Flush the underlying writer.

        Raises:
            TransportError: If the writer fails
        """
        try:
            self._writer.flush()
        except OSError as err:
            logger.debug("flush failed: %r", err)
            raise TransportError(err) from err

    def _write_all(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                written = self._writer.write(view)
            except OSError as err:
                logger.debug("write of %d bytes failed: %r", len(view), err)
                raise TransportError(err) from err

            if written is None:
                # Writer does not report a count; it took everything
                return
            if written == 0:
                raise TransportError(None, "writer accepted no data")
            view = view[written:]
