"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from itemcodec import BytesSink


@pytest.fixture
def sample_text() -> str:
    """Sample text containing a multi-byte UTF-8 code point."""
    return "café"


@pytest.fixture
def sample_text_bytes() -> bytes:
    """Encoding of sample_text: 8-byte length followed by UTF-8 bytes."""
    return b"\x00\x00\x00\x00\x00\x00\x00\x05caf\xc3\xa9"


@pytest.fixture
def sink() -> BytesSink:
    """Empty in-memory byte sink."""
    return BytesSink()
