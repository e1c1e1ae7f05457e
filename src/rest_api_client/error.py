# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error descriptors and the failure-path resolver.

The resolver never returns: it always raises, either the declared
business failure or a ``DecodeError`` when an error payload does not
match its schema.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, NoReturn, Union

import httpx

from . import errors as _err
from . import schema as _schema
from ._descriptor import FnDescriptor, SchemaDescriptor, call_fn

__all__ = ("Schema", "Fn", "Error", "MakerError", "schema", "fn", "from_maker", "resolve")


class Schema(SchemaDescriptor, frozen=True):
    pass


class Fn(FnDescriptor, frozen=True):
    pass


Error = Union[Schema, Fn]
MakerError = Union[type, Callable[[httpx.Response], Any], Error]


def schema(s: Any) -> Schema:
    return Schema(s)


def fn(f: Callable[..., Any], *, requires: tuple[str, ...] = ()) -> Fn:
    return Fn(f, requires=tuple(requires))


def from_maker(maker: MakerError | None) -> Error | None:
    if maker is None or isinstance(maker, (Schema, Fn)):
        return maker
    if _schema.is_schema(maker):
        return schema(maker)
    if callable(maker):
        return fn(maker)
    raise _err.DescriptorError(f"Cannot build an error descriptor from {type(maker).__name__}")


async def resolve(error: Error, raw: httpx.Response, deps: Mapping[str, Any]) -> NoReturn:
    """Fail an invocation classified FAILED.

    An error function may raise its own exception, return an exception
    instance to be raised, or return any other value, which is raised
    wrapped in ``BusinessError``.
    """
    match error:
        case Fn():
            value = await call_fn(error, raw, deps)
            if isinstance(value, BaseException):
                raise value
            raise _err.BusinessError(value, response=raw)
        case Schema(schema=s):
            value = _schema.decode_json(s, await raw.aread())
            raise _err.BusinessError(value, response=raw)
        case _:
            raise _err.DescriptorError(f"Not an error descriptor: {error!r}")
