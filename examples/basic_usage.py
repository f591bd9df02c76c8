#!/usr/bin/env python3
"""Basic usage example for itemcodec.

This example demonstrates:
1. Building codecs from constructors and from annotations
2. Encoding to bytes
3. Decoding back from bytes
4. Calculating encoded sizes
"""

from __future__ import annotations

from typing import Annotated, Optional

from itemcodec import (
    CHAR,
    TEXT,
    U16,
    Array,
    Option,
    Pair,
    ParseError,
    codec_for,
    decode,
    encode,
    encoded_size,
    fixed_size,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("itemcodec Basic Usage Example")
    print("=" * 60)
    print()

    # Build a codec by hand
    print("1. Building a codec for (u16, option[str])...")
    codec = Pair(U16, Option(TEXT))
    print(f"   Codec: {codec.name}")
    print()

    # Encode a value
    print("2. Encoding (7, 'café')...")
    encoded_data = encode(codec, (7, "café"))

    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex(' ')}")
    print()

    # Decode it back
    print("3. Decoding from binary...")
    decoded = decode(codec, encoded_data)
    print(f"   Value: {decoded!r}")
    if decoded == (7, "café"):
        print("   ✓ Round-trip successful! Values match.")
    else:
        print("   ✗ Round-trip failed! Values don't match.")
    print()

    # The same codec from an annotation
    print("4. Resolving an annotation...")
    annotated = codec_for(tuple[Annotated[int, U16], Optional[str]])
    print(f"   tuple[Annotated[int, U16], Optional[str]] -> {annotated.name}")
    print(f"   Same codec: {annotated == codec}")
    print()

    # Sizes
    print("5. Sizes...")
    print(f"   array[u16, 4] always takes {fixed_size(Array(U16, 4))} bytes")
    print(f"   str has a fixed size: {fixed_size(TEXT) is not None}")
    print(f"   (7, None) takes {encoded_size(codec, (7, None))} bytes")
    print()

    # Invalid input
    print("6. Decoding an invalid char...")
    try:
        decode(CHAR, bytes.fromhex("00110000"))
    except ParseError as e:
        print(f"   ParseError: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
