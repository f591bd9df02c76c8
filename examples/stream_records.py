#!/usr/bin/env python3
"""Streaming records through a file with itemcodec.

A user-defined type implements decode_from()/encode_into() by chaining the
built-in codecs. Records are written back to back and read until the stream
ends.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from itemcodec import F64, TEXT, U32, EndOfStream, ReaderSource, Seq, Sink, Source, WriterSink


@dataclass
class Reading:
    """Sensor reading."""

    sensor: str
    timestamp: int
    samples: list[float]

    @classmethod
    def decode_from(cls, source: Source[Any]) -> Reading:
        return cls(source.decode(TEXT), source.decode(U32), source.decode(Seq(F64)))

    def encode_into(self, sink: Sink[Any]) -> None:
        sink.encode(TEXT, self.sensor)
        sink.encode(U32, self.timestamp)
        sink.encode(Seq(F64), self.samples)


def main() -> None:
    """Run the streaming example."""
    readings = [
        Reading("thermo-1", 1_700_000_000, [21.5, 21.75]),
        Reading("thermo-2", 1_700_000_060, []),
        Reading("baro", 1_700_000_120, [1013.25]),
    ]

    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "readings.bin"

        with open(path, "wb") as f:
            sink = WriterSink(f)
            for reading in readings:
                sink.encode(Reading, reading)
            sink.flush()
        print(f"Wrote {len(readings)} readings ({path.stat().st_size} bytes)")

        with open(path, "rb") as f:
            source = ReaderSource(f)
            while True:
                try:
                    reading = source.decode(Reading)
                except EndOfStream:
                    break
                print(f"  {reading.sensor} @ {reading.timestamp}: {reading.samples}")


if __name__ == "__main__":
    main()
