# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Schema capability backed by msgspec.

A schema is any type ``msgspec.convert`` understands: ``msgspec.Struct``
subclasses, dataclasses, ``TypedDict``, builtins and typing aliases such
as ``list[int]`` or ``Annotated[int, msgspec.Meta(ge=0)]``.
"""

from __future__ import annotations

import typing
from typing import Any

import msgspec

from . import errors as _err

__all__ = ("is_schema", "decode", "decode_json", "encode", "to_json")


def is_schema(obj: Any) -> bool:
    """Structural check separating schemas from plain resolver functions.

    Classes, parameterised typing aliases and ``NewType`` aliases are
    schemas. Any other callable (a function, lambda, bound method or
    callable instance) is a resolver function.
    """
    if isinstance(obj, type) or hasattr(obj, "__supertype__"):
        return True
    return typing.get_origin(obj) is not None


def decode(schema: Any, raw: Any) -> Any:
    """Validate already-parsed JSON data against ``schema``."""
    try:
        return msgspec.convert(raw, type=schema)
    except msgspec.ValidationError as e:
        raise _err.DecodeError(
            f"Response does not match schema: {e}",
            context={"schema": _schema_name(schema)},
            cause=e,
        ) from e


def decode_json(schema: Any, content: bytes) -> Any:
    """Parse and validate a JSON document in one pass."""
    try:
        return msgspec.json.decode(content, type=schema)
    except msgspec.DecodeError as e:
        raise _err.DecodeError(
            f"Invalid JSON response: {e}",
            context={
                "schema": _schema_name(schema),
                "content_preview": content[:200].decode("utf-8", "replace"),
            },
            cause=e,
        ) from e


def encode(schema: Any, value: Any) -> Any:
    """Validate ``value`` against ``schema`` and return JSON-ready builtins."""
    try:
        validated = msgspec.convert(msgspec.to_builtins(value), type=schema)
        return msgspec.to_builtins(validated)
    except (msgspec.ValidationError, TypeError) as e:
        raise _err.EncodeError(
            f"Request body does not match schema: {e}",
            context={"schema": _schema_name(schema)},
            cause=e,
        ) from e


def to_json(value: Any) -> bytes:
    try:
        return msgspec.json.encode(value)
    except (msgspec.EncodeError, TypeError) as e:
        raise _err.EncodeError(f"Request body is not JSON serializable: {e}", cause=e) from e


def _schema_name(schema: Any) -> str:
    return getattr(schema, "__name__", None) or repr(schema)
