# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Route specification record."""

from __future__ import annotations

from typing import Literal

import msgspec
from msgspec.structs import force_setattr

from . import body as _body
from . import error as _error
from . import headers as _headers
from . import response as _response
from . import url as _url
from ._descriptor import FnDescriptor

__all__ = ("Route", "HttpMethod", "METHODS")

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
METHODS: frozenset[str] = frozenset(HttpMethod.__args__)


class Route(msgspec.Struct, frozen=True, kw_only=True):
    """Declarative description of one HTTP endpoint.

    Fields accept raw makers (strings, mappings, schemas, functions) as
    well as tagged descriptors. Raw makers are converted on construction,
    so a built ``Route`` only ever holds tagged descriptors (or None when
    absent). Values no field accepts raise ``DescriptorError``.
    """

    method: str
    url: _url.Url
    headers: _headers.Headers | None = None
    body: _body.Body | None = None
    response: _response.Response | None = None
    error: _error.Error | None = None
    filter_status_ok: bool = False

    def __post_init__(self):
        if self.method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {self.method!r}")
        force_setattr(self, "url", _url.from_maker(self.url))
        force_setattr(self, "headers", _headers.from_maker(self.headers))
        force_setattr(self, "body", _body.from_maker(self.body))
        force_setattr(self, "response", _response.from_maker(self.response))
        force_setattr(self, "error", _error.from_maker(self.error))

    @classmethod
    def of(
        cls,
        method: str,
        url: _url.MakerUrl,
        *,
        headers: _headers.MakerHeaders | None = None,
        body: _body.MakerBody | None = None,
        response: _response.MakerResponse | None = None,
        error: _error.MakerError | None = None,
        filter_status_ok: bool = False,
    ) -> Route:
        """Create a route, accepting the method name in any case."""
        return cls(
            method=method.upper(),
            url=url,
            headers=headers,
            body=body,
            response=response,
            error=error,
            filter_status_ok=filter_status_ok,
        )

    @property
    def requires(self) -> frozenset[str]:
        """Names of dependencies declared by this route's function descriptors."""
        names: set[str] = set()
        for desc in (self.url, self.headers, self.body, self.response, self.error):
            if isinstance(desc, FnDescriptor):
                names.update(desc.requires)
        return frozenset(names)
