"""Main CLI entry point for itemcodec."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ConfigDict, TypeAdapter

from .. import __version__
from ..codec.base import Codec
from ..codec.typeexpr import parse_type
from ..exceptions import ItemCodecError
from ..stream.io import ReaderSource, WriterSink
from ..stream.memory import BytesSink, BytesSource
from ..utils.sizing import fixed_size

logger = logging.getLogger(__name__)

# JSON has no bytes type and no NaN: carry bytes as hex, floats as JS constants
_JSON_CONFIG = ConfigDict(
    ser_json_bytes="hex",
    val_json_bytes="hex",
    ser_json_inf_nan="constants",
)


def value_adapter(codec: Codec[Any]) -> TypeAdapter[Any]:
    """Build a pydantic adapter validating and dumping values of ``codec``."""
    return TypeAdapter(codec.python_type, config=_JSON_CONFIG)


def cmd_encode(args: argparse.Namespace) -> int:
    codec = parse_type(args.type)
    value = value_adapter(codec).validate_json(args.value)
    logger.debug("encoding %r as %s", value, codec.name)

    if args.output:
        with open(args.output, "wb") as f:
            sink = WriterSink(f)
            sink.encode(codec, value)
            sink.flush()
        return 0

    sink = BytesSink()
    sink.encode(codec, value)
    print(sink.getvalue().hex())
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    codec = parse_type(args.type)

    if args.input:
        file_path = Path(args.input)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1
        with open(file_path, "rb") as f:
            value = ReaderSource(f).decode(codec)
    else:
        source = BytesSource(bytes.fromhex(args.hex))
        value = source.decode(codec)
        if source.remaining():
            logger.debug("%d trailing bytes ignored", source.remaining())

    print(value_adapter(codec).dump_json(value).decode())
    return 0


def cmd_size(args: argparse.Namespace) -> int:
    size = fixed_size(parse_type(args.type))
    print("variable" if size is None else size)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="itemcodec",
        description="itemcodec: Type-Directed Binary Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  itemcodec encode "tuple[u16, u16]" "[1, 2]"      Print hex encoding
  itemcodec decode "option[str]" --hex 00           Print decoded value as JSON
  itemcodec decode "list[f64]" --input data.bin     Decode from a file
  itemcodec size "array[u32, 4]"                    Show fixed size in bytes
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"itemcodec {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    encode_parser = subparsers.add_parser("encode", help="Encode a JSON value")
    encode_parser.add_argument("type", help="Type expression, e.g. list[u16]")
    encode_parser.add_argument("value", help="Value as JSON (bytes as hex strings)")
    encode_parser.add_argument("--output", metavar="FILE", help="Write bytes to FILE instead of printing hex")
    encode_parser.set_defaults(handler=cmd_encode)

    decode_parser = subparsers.add_parser("decode", help="Decode bytes and print JSON")
    decode_parser.add_argument("type", help="Type expression, e.g. list[u16]")
    source_group = decode_parser.add_mutually_exclusive_group(required=True)
    source_group.add_argument("--hex", help="Encoded bytes as hex")
    source_group.add_argument("--input", metavar="FILE", help="Read encoded bytes from FILE")
    decode_parser.set_defaults(handler=cmd_decode)

    size_parser = subparsers.add_parser("size", help="Show the fixed encoded size of a type")
    size_parser.add_argument("type", help="Type expression, e.g. array[u32, 4]")
    size_parser.set_defaults(handler=cmd_size)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the itemcodec CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # If no command specified, show help
    if args.command is None:
        parser.print_help()
        return 0

    try:
        return args.handler(args)
    except (ItemCodecError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
