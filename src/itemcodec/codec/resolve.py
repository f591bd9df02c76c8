"""Resolve Python annotations to codecs.

This lets callers name the static type they want with ordinary annotations
instead of building codec objects by hand:

    >>> from typing import Annotated, Optional
    >>> codec_for(list[Annotated[int, U16]])
    <Seq list[u16]>
    >>> codec_for(Optional[str])
    <Option option[str]>

Integers have no implied width, so a bare ``int`` is rejected; attach the
intended codec with ``Annotated[int, U32]``.
"""

from __future__ import annotations

import types
from typing import Annotated, Any, Union, get_args, get_origin

from ..exceptions import SchemaError
from .base import ClassCodec, Codec, _is_decodable, _is_encodable
from .composites import Option, Pair, Seq
from .primitives import BOOL, BYTES, F64, TEXT

_BUILTIN_CODECS: dict[type, Codec[Any]] = {
    bool: BOOL,
    str: TEXT,
    bytes: BYTES,
    float: F64,
}


def codec_for(annotation: Any) -> Codec[Any]:
    """Return the codec for a codec instance or a Python annotation.

    Args:
        annotation: A Codec, a builtin type, a supported generic alias, or a class
            implementing Decodable/Encodable

    Returns:
        Codec for the annotation

    Raises:
        SchemaError: If no codec can be derived
    """
    if isinstance(annotation, Codec):
        return annotation

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        for metadata in annotation.__metadata__:
            if isinstance(metadata, Codec):
                return metadata
        return codec_for(args[0])

    if origin is list:
        if len(args) != 1:
            raise SchemaError(f"list annotation needs an element type: {annotation!r}")
        return Seq(codec_for(args[0]))

    if origin is tuple:
        if len(args) != 2 or args[1] is Ellipsis:
            raise SchemaError(f"only 2-tuples are supported, got {annotation!r}")
        return Pair(codec_for(args[0]), codec_for(args[1]))

    if origin is Union or origin is types.UnionType:
        non_none_args = [arg for arg in args if arg is not type(None)]
        if len(non_none_args) == 1 and len(args) == 2:
            return Option(codec_for(non_none_args[0]))
        raise SchemaError(f"complex Union types not supported: {annotation!r}")

    if isinstance(annotation, type):
        if annotation in _BUILTIN_CODECS:
            return _BUILTIN_CODECS[annotation]
        if annotation is int:
            raise SchemaError(
                "integer annotations need an explicit width, e.g. Annotated[int, U32]"
            )
        if _is_decodable(annotation) or _is_encodable(annotation):
            return ClassCodec(annotation)

    raise SchemaError(f"unsupported type {annotation!r}")
