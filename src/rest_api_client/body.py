# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Request body descriptors.

``Schema`` validates the caller's body against a schema before encoding.
``Fn`` hands the body to a custom encoder that returns JSON-compatible
builtins.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

from . import errors as _err
from . import schema as _schema
from ._descriptor import FnDescriptor, SchemaDescriptor, call_fn

__all__ = ("Schema", "Fn", "Body", "MakerBody", "schema", "fn", "from_maker", "encode")


class Schema(SchemaDescriptor, frozen=True):
    pass


class Fn(FnDescriptor, frozen=True):
    pass


Body = Union[Schema, Fn]
MakerBody = Union[type, Callable[..., Any], Body]


def schema(s: Any) -> Schema:
    return Schema(s)


def fn(f: Callable[..., Any], *, requires: tuple[str, ...] = ()) -> Fn:
    return Fn(f, requires=tuple(requires))


def from_maker(maker: MakerBody | None) -> Body | None:
    if maker is None or isinstance(maker, (Schema, Fn)):
        return maker
    if _schema.is_schema(maker):
        return schema(maker)
    if callable(maker):
        return fn(maker)
    raise _err.DescriptorError(f"Cannot build a body descriptor from {type(maker).__name__}")


async def encode(
    body: Body | None, params: Mapping[str, Any], deps: Mapping[str, Any]
) -> bytes | None:
    """Return the JSON payload for this call, or None when nothing is sent."""
    if body is None or "body" not in params:
        return None
    match body:
        case Schema(schema=s):
            return _schema.to_json(_schema.encode(s, params["body"]))
        case Fn():
            return _schema.to_json(await call_fn(body, params["body"], deps))
        case _:
            raise _err.DescriptorError(f"Not a body descriptor: {body!r}")
