# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""URL descriptors: a fixed string or a function of the url params."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Union

import msgspec

from . import errors as _err
from ._descriptor import FnDescriptor, call_fn

__all__ = ("Value", "Fn", "Url", "MakerUrl", "value", "fn", "from_maker", "resolve")


class Value(msgspec.Struct, frozen=True):
    url: str


class Fn(FnDescriptor, frozen=True):
    pass


Url = Union[Value, Fn]
MakerUrl = Union[str, Callable[..., str], Url]


def value(url: str) -> Value:
    return Value(url)


def fn(f: Callable[..., str], *, requires: tuple[str, ...] = ()) -> Fn:
    return Fn(f, requires=tuple(requires))


def from_maker(maker: MakerUrl) -> Url:
    if isinstance(maker, (Value, Fn)):
        return maker
    if isinstance(maker, str):
        return value(maker)
    if callable(maker):
        return fn(maker)
    raise _err.DescriptorError(f"Cannot build a URL descriptor from {type(maker).__name__}")


async def resolve(url: Url, params: Mapping[str, Any], deps: Mapping[str, Any]) -> str:
    match url:
        case Value(url=fixed):
            return fixed
        case Fn():
            return await call_fn(url, params.get("url"), deps)
        case _:
            raise _err.DescriptorError(f"Not a URL descriptor: {url!r}")
