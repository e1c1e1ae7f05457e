# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Header descriptors: a fixed header set or a function of the header params.

Header functions may be sync or async, may raise, and may declare named
dependencies that are supplied when the route is invoked.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Union

import msgspec

from . import errors as _err
from ._descriptor import FnDescriptor, call_fn

__all__ = ("Value", "Fn", "Headers", "MakerHeaders", "value", "fn", "from_maker", "resolve")


class Value(msgspec.Struct, frozen=True):
    headers: Mapping[str, str]


class Fn(FnDescriptor, frozen=True):
    pass


Headers = Union[Value, Fn]
MakerHeaders = Union[Mapping[str, str], Callable[..., Any], Headers]


def value(headers: Mapping[str, str]) -> Value:
    return Value(MappingProxyType(dict(headers)))


def fn(f: Callable[..., Any], *, requires: tuple[str, ...] = ()) -> Fn:
    return Fn(f, requires=tuple(requires))


def from_maker(maker: MakerHeaders | None) -> Headers | None:
    if maker is None or isinstance(maker, (Value, Fn)):
        return maker
    if isinstance(maker, Mapping):
        return value(maker)
    if callable(maker):
        return fn(maker)
    raise _err.DescriptorError(f"Cannot build a headers descriptor from {type(maker).__name__}")


async def resolve(
    headers: Headers | None, params: Mapping[str, Any], deps: Mapping[str, Any]
) -> Mapping[str, str]:
    match headers:
        case None:
            return {}
        case Value(headers=fixed):
            return fixed
        case Fn():
            return await call_fn(headers, params.get("headers"), deps)
        case _:
            raise _err.DescriptorError(f"Not a headers descriptor: {headers!r}")
