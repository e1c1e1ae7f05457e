# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Shared descriptor shapes.

Each route field module (url, headers, body, response, error) defines its
own tagged variants on top of these bases so a route field only ever
holds variants that belong to it.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Mapping
from typing import Any

import msgspec

__all__ = ("SchemaDescriptor", "FnDescriptor", "call_fn")


class SchemaDescriptor(msgspec.Struct, frozen=True):
    """Field resolved by validating JSON against a schema."""

    schema: Any


class FnDescriptor(msgspec.Struct, frozen=True):
    """Field resolved by calling a user function.

    ``requires`` names dependencies passed to ``fn`` as keyword arguments
    at call time.
    """

    fn: Callable[..., Any]
    requires: tuple[str, ...] = ()


async def call_fn(desc: FnDescriptor, arg: Any, deps: Mapping[str, Any]) -> Any:
    """Call a descriptor function, awaiting the result if needed."""
    result = desc.fn(arg, **{name: deps[name] for name in desc.requires})
    if inspect.isawaitable(result):
        result = await result
    return result
