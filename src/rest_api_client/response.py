# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Response descriptors and the success-path resolver."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

import httpx

from . import errors as _err
from . import schema as _schema
from ._descriptor import FnDescriptor, SchemaDescriptor, call_fn

__all__ = ("Schema", "Fn", "Response", "MakerResponse", "schema", "fn", "from_maker", "resolve")


class Schema(SchemaDescriptor, frozen=True):
    pass


class Fn(FnDescriptor, frozen=True):
    pass


Response = Union[Schema, Fn]
MakerResponse = Union[type, Callable[[httpx.Response], Any], Response]


def schema(s: Any) -> Schema:
    return Schema(s)


def fn(f: Callable[..., Any], *, requires: tuple[str, ...] = ()) -> Fn:
    return Fn(f, requires=tuple(requires))


def from_maker(maker: MakerResponse | None) -> Response | None:
    if maker is None or isinstance(maker, (Schema, Fn)):
        return maker
    if _schema.is_schema(maker):
        return schema(maker)
    if callable(maker):
        return fn(maker)
    raise _err.DescriptorError(f"Cannot build a response descriptor from {type(maker).__name__}")


async def resolve(
    response: Response | None, raw: httpx.Response, deps: Mapping[str, Any]
) -> Any:
    """Produce the success value of an invocation classified OK."""
    match response:
        case None:
            return raw
        case Fn():
            return await call_fn(response, raw, deps)
        case Schema(schema=s):
            return _schema.decode_json(s, await raw.aread())
        case _:
            raise _err.DescriptorError(f"Not a response descriptor: {response!r}")
