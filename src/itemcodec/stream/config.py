"""Configuration for byte-stream adapters."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ReaderConfig:
    """Configuration for ReaderSource.

    Attributes:
        chunk_size: Largest number of bytes requested from the reader in a single
            ``read()`` call (default 65536). Bulk reads of N bytes are split into
            chunks of at most this size, so a corrupt length prefix cannot make
            the adapter request an arbitrarily large buffer up front.

    Examples:
        ```python
        from itemcodec.stream import ReaderConfig, ReaderSource

        # Small chunks for a slow serial link
        source = ReaderSource(port, ReaderConfig(chunk_size=64))
        ```
    """

    chunk_size: int = 65536

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {self.chunk_size}")
