# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Transport protocol for the HTTP IO boundary.

Compiled routes never dial a socket themselves: they hand a fully
assembled ``HttpRequest`` to a transport. Transports compose: the
rewriting and status-filtering transports decorate any other transport.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import httpx
import msgspec

from . import errors as _err

if TYPE_CHECKING:
    from .config import ClientConfig

__all__ = (
    "HttpRequest",
    "Transport",
    "HTTPXTransport",
    "StatusFilterTransport",
    "RewritingTransport",
    "rewrite_request",
    "transport_from_config",
)

logger = logging.getLogger(__name__)


class HttpRequest(msgspec.Struct, frozen=True, kw_only=True):
    """Transport-level request. Header names are lower-case."""

    method: str
    url: str
    headers: Mapping[str, str] = msgspec.field(default_factory=lambda: MappingProxyType({}))
    content: bytes | None = None

    def with_url(self, url: str) -> HttpRequest:
        return msgspec.structs.replace(self, url=url)

    def with_header(self, name: str, value: str) -> HttpRequest:
        return msgspec.structs.replace(
            self, headers=MappingProxyType({**self.headers, name.lower(): value})
        )


@runtime_checkable
class Transport(Protocol):
    """IO boundary for HTTP requests.

    Thin and swappable. Implementations own connection handling and
    timeouts; they return the raw response whatever its status.
    """

    async def execute(self, request: HttpRequest) -> httpx.Response:
        """Send the request and return the raw response."""
        ...


class HTTPXTransport:
    """httpx-based transport.

    Maps connection-level failures (timeouts, DNS, refused connections)
    to ``TransportError``. Responses of any status are returned as-is.

    ``timeout_s`` and ``follow_redirects`` are sent with every request, so
    they also apply to an injected ``client``. ``verify_ssl`` is a
    connection setting and only configures the client built here.
    """

    def __init__(
        self,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_s: float | None = None,
        verify_ssl: bool = True,
        follow_redirects: bool = False,
    ):
        self._timeout_s = timeout_s
        self._follow_redirects = follow_redirects
        self._client = client or httpx.AsyncClient(
            timeout=timeout_s,
            verify=verify_ssl,
            follow_redirects=follow_redirects,
        )

    async def __aenter__(self):
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(self, request: HttpRequest) -> httpx.Response:
        try:
            return await self._client.request(
                method=request.method,
                url=request.url,
                headers=dict(request.headers),
                content=request.content,
                timeout=(
                    self._timeout_s if self._timeout_s is not None else httpx.USE_CLIENT_DEFAULT
                ),
                follow_redirects=self._follow_redirects,
            )
        except httpx.TimeoutException as e:
            raise _err.TransportError(
                f"Request timed out: {e}",
                context={"method": request.method, "url": request.url},
                cause=e,
            ) from e
        except httpx.RequestError as e:
            raise _err.TransportError(
                f"Network error: {e}",
                context={"method": request.method, "url": request.url},
                cause=e,
            ) from e


class StatusFilterTransport:
    """Rejects non-2xx responses with ``StatusCodeError``."""

    def __init__(self, inner: Transport):
        self.inner = inner

    async def execute(self, request: HttpRequest) -> httpx.Response:
        response = await self.inner.execute(request)
        if not response.is_success:
            raise _err.StatusCodeError(
                response,
                context={"method": request.method, "url": request.url},
            )
        return response


def rewrite_request(
    request: HttpRequest, *, base_url: str, access_token: str | None = None
) -> HttpRequest:
    """Apply base-URL prefixing and bearer-token injection.

    Relative URLs (starting with ``/``) get ``base_url`` prepended; a
    token, when given, sets the ``authorization`` header. Absolute URLs
    and a missing token pass through unchanged.
    """
    if request.url.startswith("/"):
        request = request.with_url(base_url + request.url)
    if access_token:
        request = request.with_header("authorization", f"Bearer {access_token}")
    return request


class RewritingTransport:
    """Applies ``rewrite_request`` to every outgoing request."""

    def __init__(self, inner: Transport, *, base_url: str, access_token: str | None = None):
        self.inner = inner
        self.base_url = base_url
        self._access_token = access_token

    @classmethod
    def from_config(cls, inner: Transport, config: ClientConfig) -> RewritingTransport:
        return cls(inner, base_url=config.url, access_token=config.token())

    async def execute(self, request: HttpRequest) -> httpx.Response:
        rewritten = rewrite_request(
            request, base_url=self.base_url, access_token=self._access_token
        )
        logger.debug(
            "Request rewritten",
            extra={"method": rewritten.method, "url": rewritten.url},
        )
        return await self.inner.execute(rewritten)


def transport_from_config(
    config: ClientConfig, *, client: httpx.AsyncClient | None = None
) -> RewritingTransport:
    """Build the default transport stack for a configuration.

    The result rewrites relative URLs against ``config.url``, attaches the
    configured bearer token and sends through ``HTTPXTransport``.
    """
    inner = HTTPXTransport(
        client=client,
        timeout_s=config.timeout_s,
        verify_ssl=config.verify_ssl,
        follow_redirects=config.follow_redirects,
    )
    return RewritingTransport.from_config(inner, config)
