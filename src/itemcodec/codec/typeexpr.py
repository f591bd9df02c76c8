"""Parse textual type expressions into codecs.

Grammar:

    type   := scalar | list[type] | option[type] | tuple[type, type] | array[type, N]
    scalar := u8 | u16 | u32 | u64 | u128 | i8 | i16 | i32 | i64 | i128
            | usize | isize | f32 | f64 | bool | char | str | bytes

Every built-in codec's ``name`` is a valid expression for an equal codec.
"""

from __future__ import annotations

import re
from typing import Any, NoReturn

from ..exceptions import SchemaError
from .base import Codec
from .composites import Array, Option, Pair, Seq
from .primitives import (
    BOOL,
    BYTES,
    CHAR,
    F32,
    F64,
    I8,
    I16,
    I32,
    I64,
    I128,
    ISIZE,
    TEXT,
    U8,
    U16,
    U32,
    U64,
    U128,
    USIZE,
)

SCALARS: dict[str, Codec[Any]] = {
    codec.name: codec
    for codec in (
        U8, U16, U32, U64, U128, I8, I16, I32, I64, I128,
        USIZE, ISIZE, F32, F64, BOOL, CHAR, TEXT, BYTES,
    )
}

_TOKEN = re.compile(r"\s*(?:(\w+)|(\S))")


def parse_type(text: str) -> Codec[Any]:
    """Parse a type expression such as ``list[tuple[u16, str]]``.

    Args:
        text: Type expression

    Returns:
        Codec described by the expression

    Raises:
        SchemaError: If the expression is malformed or names an unknown type
    """
    return _Parser(text).parse()


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens: list[str] = []
        for word, symbol in _TOKEN.findall(text):
            self.tokens.append(word or symbol)
        self.position = 0

    def parse(self) -> Codec[Any]:
        codec = self._type()
        if self.position != len(self.tokens):
            self._fail(f"unexpected {self.tokens[self.position]!r}")
        return codec

    def _type(self) -> Codec[Any]:
        name = self._next()
        if name in SCALARS:
            return SCALARS[name]

        if name in ("list", "option"):
            self._expect("[")
            inner = self._type()
            self._expect("]")
            return Seq(inner) if name == "list" else Option(inner)

        if name == "tuple":
            self._expect("[")
            first = self._type()
            self._expect(",")
            second = self._type()
            self._expect("]")
            return Pair(first, second)

        if name == "array":
            self._expect("[")
            element = self._type()
            self._expect(",")
            length = self._next()
            if not (length.isascii() and length.isdigit()):
                self._fail(f"array length must be a number, got {length!r}")
            self._expect("]")
            return Array(element, int(length))

        self._fail(f"unknown type {name!r}")

    def _next(self) -> str:
        if self.position >= len(self.tokens):
            self._fail("unexpected end of expression")
        token = self.tokens[self.position]
        self.position += 1
        return token

    def _expect(self, symbol: str) -> None:
        token = self._next()
        if token != symbol:
            self._fail(f"expected {symbol!r}, got {token!r}")

    def _fail(self, reason: str) -> NoReturn:
        raise SchemaError(f"invalid type expression {self.text!r}: {reason}")
