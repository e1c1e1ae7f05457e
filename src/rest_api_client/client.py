# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Reusable client holding default headers and error handling.

Routes built through a ``Client`` inherit its ``headers`` and ``error``
descriptors unless the call passes its own. The two defaults are
independent: overriding one leaves the other in place. Passing ``None``
explicitly drops the default for that route.

    >>> client = Client(headers={"x-api-version": "v1"}, error=ApiError)
    >>> get_todo = client.get("/todos/1", response=Todo)
    >>> create = client.post("/todos", body=NewTodo, response=Todo, error=None)
"""

from __future__ import annotations

from typing import Any

import msgspec

from ._types import MaybeUnset, Unset
from .body import MakerBody
from .error import MakerError
from .headers import MakerHeaders
from .make import CompiledRoute, provide_factory
from .make import delete as _delete
from .make import get as _get
from .make import post as _post
from .make import put as _put
from .response import MakerResponse
from .transport import Transport
from .url import MakerUrl

__all__ = ("Client", "BoundClient", "make_client")


def _pick(value: Any, default: Any) -> Any:
    return default if value is Unset else value


class Client(msgspec.Struct, frozen=True, kw_only=True):
    headers: MakerHeaders | None = None
    error: MakerError | None = None

    def get(
        self,
        url: MakerUrl,
        *,
        headers: MaybeUnset[MakerHeaders | None] = Unset,
        response: MakerResponse | None = None,
        error: MaybeUnset[MakerError | None] = Unset,
        filter_status_ok: bool = False,
    ) -> CompiledRoute:
        return _get(
            url,
            headers=_pick(headers, self.headers),
            response=response,
            error=_pick(error, self.error),
            filter_status_ok=filter_status_ok,
        )

    def post(
        self,
        url: MakerUrl,
        *,
        headers: MaybeUnset[MakerHeaders | None] = Unset,
        body: MakerBody | None = None,
        response: MakerResponse | None = None,
        error: MaybeUnset[MakerError | None] = Unset,
        filter_status_ok: bool = False,
    ) -> CompiledRoute:
        return _post(
            url,
            headers=_pick(headers, self.headers),
            body=body,
            response=response,
            error=_pick(error, self.error),
            filter_status_ok=filter_status_ok,
        )

    def put(
        self,
        url: MakerUrl,
        *,
        headers: MaybeUnset[MakerHeaders | None] = Unset,
        body: MakerBody | None = None,
        response: MakerResponse | None = None,
        error: MaybeUnset[MakerError | None] = Unset,
        filter_status_ok: bool = False,
    ) -> CompiledRoute:
        return _put(
            url,
            headers=_pick(headers, self.headers),
            body=body,
            response=response,
            error=_pick(error, self.error),
            filter_status_ok=filter_status_ok,
        )

    def delete(
        self,
        url: MakerUrl,
        *,
        headers: MaybeUnset[MakerHeaders | None] = Unset,
        body: MakerBody | None = None,
        response: MakerResponse | None = None,
        error: MaybeUnset[MakerError | None] = Unset,
        filter_status_ok: bool = False,
    ) -> CompiledRoute:
        return _delete(
            url,
            headers=_pick(headers, self.headers),
            body=body,
            response=response,
            error=_pick(error, self.error),
            filter_status_ok=filter_status_ok,
        )


class BoundClient:
    """A client whose routes come with a transport and dependencies bound.

    Lifts the transport requirement from every route to the place the
    client is built, so consumers call routes without passing it.
    """

    def __init__(self, client: Client, *, transport: Transport, **deps: Any):
        self.client = client
        self.transport = transport
        self.get = provide_factory(client.get, transport=transport, **deps)
        self.post = provide_factory(client.post, transport=transport, **deps)
        self.put = provide_factory(client.put, transport=transport, **deps)
        self.delete = provide_factory(client.delete, transport=transport, **deps)


def make_client(
    transport: Transport,
    *,
    headers: MakerHeaders | None = None,
    error: MakerError | None = None,
    **deps: Any,
) -> BoundClient:
    return BoundClient(Client(headers=headers, error=error), transport=transport, **deps)
