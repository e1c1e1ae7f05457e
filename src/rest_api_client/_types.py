# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Final, Literal, TypeVar, Union

__all__ = ("MaybeUnset", "Unset", "UnsetType")

T = TypeVar("T")


class UnsetType:
    """Sentinel for a parameter that was not given a value.

    Distinguishes "not provided" from an explicit ``None``:

        >>> def route(headers=Unset):
        ...     if headers is not Unset:
        ...         # caller chose a value, possibly None
        ...         ...
    """

    __slots__ = ()
    _instance: UnsetType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Unset"]:
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "Unset"


Unset: Final = UnsetType()

MaybeUnset = Union[T, UnsetType]
