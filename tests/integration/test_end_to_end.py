"""End-to-end integration tests."""

from __future__ import annotations

import enum
import io
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import pytest

from itemcodec import (
    F32,
    F64,
    TEXT,
    U8,
    U16,
    ClassCodec,
    EndOfStream,
    Option,
    Pair,
    ParseError,
    ReaderSource,
    Seq,
    Sink,
    Source,
    WriterSink,
    codec_for,
    decode,
    encode,
    encoded_size,
)


class MissionPhase(enum.Enum):
    """Mission phase carried as a one-byte tag."""

    STARTUP = 1
    TRANSIT = 2
    SURVEY = 3

    @classmethod
    def decode_from(cls, source: Source[Any]) -> MissionPhase:
        tag = source.decode(U8)
        try:
            return cls(tag)
        except ValueError as err:
            raise ParseError(f"unknown mission phase tag {tag}", value=tag) from err

    def encode_into(self, sink: Sink[Any]) -> None:
        sink.encode(U8, self.value)


WAYPOINTS = Seq(Pair(F64, F64))


@dataclass
class StatusReport:
    """Vehicle status record encoded field by field."""

    vehicle_id: int
    phase: MissionPhase
    depth_m: float
    name: str
    waypoints: list[tuple[float, float]] = field(default_factory=list)
    note: Optional[str] = None

    @classmethod
    def decode_from(cls, source: Source[Any]) -> StatusReport:
        return cls(
            vehicle_id=source.decode(U16),
            phase=source.decode(MissionPhase),
            depth_m=source.decode(F32),
            name=source.decode(TEXT),
            waypoints=source.decode(WAYPOINTS),
            note=source.decode(Option(TEXT)),
        )

    def encode_into(self, sink: Sink[Any]) -> None:
        sink.encode(U16, self.vehicle_id)
        sink.encode(MissionPhase, self.phase)
        sink.encode(F32, self.depth_m)
        sink.encode(TEXT, self.name)
        sink.encode(WAYPOINTS, self.waypoints)
        sink.encode(Option(TEXT), self.note)


@pytest.fixture
def reports() -> list[StatusReport]:
    return [
        StatusReport(7, MissionPhase.STARTUP, 0.0, "auv-7"),
        StatusReport(
            8,
            MissionPhase.SURVEY,
            12.5,
            "glider-β",
            waypoints=[(42.5, -70.25), (42.75, -70.5)],
            note="low battery",
        ),
    ]


class TestUserDefinedTypes:
    """Test user-defined records built from the built-in codecs."""

    def test_record_layout(self) -> None:
        """Test a record is its fields' encodings in declaration order."""
        report = StatusReport(1, MissionPhase.TRANSIT, 1.0, "a")

        expected = (
            b"\x00\x01"
            + b"\x02"
            + b"\x3f\x80\x00\x00"
            + b"\x00\x00\x00\x00\x00\x00\x00\x01a"
            + b"\x00" * 8
            + b"\x00"
        )
        assert encode(StatusReport, report) == expected
        assert encoded_size(StatusReport, report) == len(expected)

    def test_record_roundtrip(self, reports: list[StatusReport]) -> None:
        """Test records round-trip through bytes."""
        for report in reports:
            assert decode(StatusReport, encode(StatusReport, report)) == report

    def test_records_in_sequence(self, reports: list[StatusReport]) -> None:
        """Test records nest inside composites via annotations."""
        codec = codec_for(list[StatusReport])

        assert codec == Seq(ClassCodec(StatusReport))
        assert decode(codec, encode(codec, reports)) == reports

    def test_unknown_enum_tag(self) -> None:
        """Test a user-defined parse failure propagates unchanged."""
        data = bytearray(encode(StatusReport, StatusReport(1, MissionPhase.STARTUP, 0.0, "")))
        data[2] = 99

        with pytest.raises(ParseError, match="unknown mission phase") as exc_info:
            decode(StatusReport, bytes(data))
        assert exc_info.value.value == 99


class TestFileStreams:
    """Test records written to and read back from files."""

    def test_file_roundtrip(self, tmp_path: Path, reports: list[StatusReport]) -> None:
        """Test consecutive records in a file decode in order, then end of stream."""
        path = tmp_path / "reports.bin"

        with open(path, "wb") as f:
            sink = WriterSink(f)
            for report in reports:
                sink.encode(StatusReport, report)
            sink.flush()

        with open(path, "rb") as f:
            source = ReaderSource(f)
            decoded = [source.decode(StatusReport) for _ in reports]

            with pytest.raises(EndOfStream):
                source.decode(StatusReport)

        assert decoded == reports

    def test_truncated_file(self, tmp_path: Path, reports: list[StatusReport]) -> None:
        """Test a record cut short in a file ends the stream."""
        path = tmp_path / "truncated.bin"
        path.write_bytes(encode(StatusReport, reports[1])[:-3])

        with open(path, "rb") as f, pytest.raises(EndOfStream):
            ReaderSource(f).decode(StatusReport)

    def test_in_memory_file(self, reports: list[StatusReport]) -> None:
        """Test adapters over BytesIO match the in-memory encoding."""
        buffer = io.BytesIO()
        WriterSink(buffer).encode(StatusReport, reports[1])

        assert buffer.getvalue() == encode(StatusReport, reports[1])

        buffer.seek(0)
        assert ReaderSource(buffer).decode(StatusReport) == reports[1]


class TestSocketStreams:
    """Test records sent over a connected socket pair."""

    def test_socket_roundtrip(self, reports: list[StatusReport]) -> None:
        """Test records survive a trip through a socket."""
        left, right = socket.socketpair()
        try:
            with left.makefile("wb") as writer, right.makefile("rb") as reader:
                sink = WriterSink(writer)
                for report in reports:
                    sink.encode(StatusReport, report)
                sink.flush()

                source = ReaderSource(reader)
                assert [source.decode(StatusReport) for _ in reports] == reports
        finally:
            left.close()
            right.close()

    def test_socket_closed_by_peer(self) -> None:
        """Test a peer closing mid-value ends the stream."""
        left, right = socket.socketpair()
        try:
            left.sendall(encode(TEXT, "hello")[:10])
            left.close()

            with right.makefile("rb") as reader, pytest.raises(EndOfStream):
                ReaderSource(reader).decode(TEXT)
        finally:
            right.close()
