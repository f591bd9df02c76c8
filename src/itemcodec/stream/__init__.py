"""Item streams: abstract sources/sinks and concrete backends."""

from __future__ import annotations

from .base import Sink, Source
from .config import ReaderConfig
from .io import ReaderSource, WriterSink
from .memory import BytesSink, BytesSource, CountingSink, IterSource, ListSink

__all__ = [
    "Source",
    "Sink",
    "BytesSource",
    "BytesSink",
    "IterSource",
    "ListSink",
    "CountingSink",
    "ReaderSource",
    "WriterSink",
    "ReaderConfig",
]
