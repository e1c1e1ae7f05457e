# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Route compiler: turns a ``Route`` into an async callable.

Each invocation runs one sequential pipeline:

    check dependencies -> resolve headers -> encode body -> resolve url
    -> assemble request -> transport.execute -> classify
    -> resolve error (raises) | resolve response (returns)

Compiled routes hold no per-call state and can be invoked concurrently.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import Any

import httpx

from . import body as _body
from . import error as _error
from . import errors as _err
from . import headers as _headers
from . import response as _response
from . import url as _url
from .route import Route
from .transport import HttpRequest, StatusFilterTransport, Transport

__all__ = (
    "CompiledRoute",
    "Outcome",
    "assemble_request",
    "classify",
    "make",
    "get",
    "post",
    "put",
    "delete",
    "provide",
    "provide_factory",
)

logger = logging.getLogger(__name__)

TRANSPORT = "transport"

SENSITIVE_HEADERS = {
    "authorization",
    "proxy-authorization",
    "x-api-key",
    "api-key",
    "x-auth-token",
    "cookie",
}


class Outcome(str, Enum):
    OK = "ok"
    FAILED = "failed"


def classify(route: Route, raw: httpx.Response) -> Outcome:
    """Decide whether an exchange succeeded.

    Only routes with an error descriptor can fail on status: without one,
    any response (even 4xx/5xx) flows to the response resolver.
    """
    if route.error is not None and not 200 <= raw.status_code < 300:
        return Outcome.FAILED
    return Outcome.OK


def assemble_request(
    method: str, url: str, headers: Mapping[str, str], content: bytes | None
) -> HttpRequest:
    merged: dict[str, str] = {}
    for name, value in headers.items():
        merged[name.lower()] = value
    if content is not None:
        merged.setdefault("content-type", "application/json")
    return HttpRequest(
        method=method,
        url=url,
        headers=MappingProxyType(merged),
        content=content,
    )


def _redact(headers: Mapping[str, str]) -> dict[str, str]:
    return {k: "[REDACTED]" if k in SENSITIVE_HEADERS else v for k, v in headers.items()}


class CompiledRoute:
    """Executable form of a ``Route``.

    Call with an optional params mapping holding any of ``url``,
    ``headers`` and ``body``, plus the transport and any dependencies the
    route's functions declare. Returns the success value or raises one of
    the ``rest_api_client.errors`` types (or whatever a user function
    raised).
    """

    __slots__ = ("route", "_transport", "_deps")

    def __init__(
        self,
        route: Route,
        *,
        transport: Transport | None = None,
        deps: Mapping[str, Any] | None = None,
    ):
        self.route = route
        self._transport = transport
        self._deps = MappingProxyType(dict(deps or {}))

    def __repr__(self) -> str:
        return f"CompiledRoute({self.route.method} {self.route.url!r})"

    @property
    def requires(self) -> frozenset[str]:
        """Dependencies still needed before this route can run."""
        missing = set(self.route.requires - self._deps.keys())
        if self._transport is None:
            missing.add(TRANSPORT)
        return frozenset(missing)

    def provide(self, *, transport: Transport | None = None, **deps: Any) -> CompiledRoute:
        """Return a copy with the transport and/or dependencies bound."""
        return CompiledRoute(
            self.route,
            transport=transport if transport is not None else self._transport,
            deps={**self._deps, **deps},
        )

    async def __call__(
        self,
        params: Mapping[str, Any] | None = None,
        /,
        *,
        transport: Transport | None = None,
        **deps: Any,
    ) -> Any:
        route = self.route
        transport = transport if transport is not None else self._transport
        deps = {**self._deps, **deps}

        missing = set(route.requires - deps.keys())
        if transport is None:
            missing.add(TRANSPORT)
        if missing:
            raise _err.MissingDependencyError(
                missing, context={"method": route.method, "url": repr(route.url)}
            )

        params = params or {}
        headers = await _headers.resolve(route.headers, params, deps)
        content = await _body.encode(route.body, params, deps)
        url = await _url.resolve(route.url, params, deps)
        request = assemble_request(route.method, url, headers, content)

        if route.filter_status_ok:
            transport = StatusFilterTransport(transport)

        logger.debug(
            "Route request prepared",
            extra={
                "method": request.method,
                "url": request.url,
                "headers": _redact(request.headers),
                "has_body": request.content is not None,
            },
        )

        raw = await transport.execute(request)
        outcome = classify(route, raw)

        logger.debug(
            "Route response classified",
            extra={
                "method": request.method,
                "url": request.url,
                "status_code": raw.status_code,
                "outcome": outcome.value,
            },
        )

        if outcome is Outcome.FAILED:
            await _error.resolve(route.error, raw, deps)
        return await _response.resolve(route.response, raw, deps)


def make(route: Route) -> CompiledRoute:
    """Compile a route specification."""
    return CompiledRoute(route)


def get(
    url: _url.MakerUrl,
    *,
    headers: _headers.MakerHeaders | None = None,
    response: _response.MakerResponse | None = None,
    error: _error.MakerError | None = None,
    filter_status_ok: bool = False,
) -> CompiledRoute:
    """Compile a GET route. GET routes never carry a body."""
    return make(
        Route.of(
            "GET",
            url,
            headers=headers,
            response=response,
            error=error,
            filter_status_ok=filter_status_ok,
        )
    )


def _with_body(method: str):
    def builder(
        url: _url.MakerUrl,
        *,
        headers: _headers.MakerHeaders | None = None,
        body: _body.MakerBody | None = None,
        response: _response.MakerResponse | None = None,
        error: _error.MakerError | None = None,
        filter_status_ok: bool = False,
    ) -> CompiledRoute:
        return make(
            Route.of(
                method,
                url,
                headers=headers,
                body=body,
                response=response,
                error=error,
                filter_status_ok=filter_status_ok,
            )
        )

    builder.__name__ = builder.__qualname__ = method.lower()
    builder.__doc__ = f"Compile a {method} route."
    return builder


post = _with_body("POST")
put = _with_body("PUT")
delete = _with_body("DELETE")


def provide(
    fn: Callable[..., Any], *, transport: Transport | None = None, **deps: Any
) -> Callable[..., Any]:
    """Bind a transport and dependencies to a route function.

    The returned callable no longer needs them at call time.
    """
    if isinstance(fn, CompiledRoute):
        return fn.provide(transport=transport, **deps)
    if transport is not None:
        deps[TRANSPORT] = transport
    return functools.partial(fn, **deps)


def provide_factory(
    factory: Callable[..., Any], *, transport: Transport | None = None, **deps: Any
) -> Callable[..., Any]:
    """Wrap a route factory (e.g. ``client.get``) so every route it builds
    comes with the transport and dependencies already bound."""

    @functools.wraps(factory)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return provide(factory(*args, **kwargs), transport=transport, **deps)

    return wrapper
