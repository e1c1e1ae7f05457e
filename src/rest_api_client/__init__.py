# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Declarative HTTP routes compiled into async callables."""

from . import body, error, errors, headers, response, schema, url
from .client import BoundClient, Client, make_client
from .config import ClientConfig
from .errors import (
    BusinessError,
    DecodeError,
    DescriptorError,
    EncodeError,
    MissingDependencyError,
    RestApiClientError,
    StatusCodeError,
    TransportError,
)
from .make import CompiledRoute, delete, get, make, post, provide, provide_factory, put
from .route import Route
from .transport import (
    HttpRequest,
    HTTPXTransport,
    RewritingTransport,
    StatusFilterTransport,
    Transport,
    rewrite_request,
    transport_from_config,
)

__version__ = "0.1.0"

__all__ = [
    # Descriptor modules
    "url",
    "headers",
    "body",
    "response",
    "error",
    "schema",
    "errors",
    # Compiler
    "Route",
    "CompiledRoute",
    "make",
    "get",
    "post",
    "put",
    "delete",
    "provide",
    "provide_factory",
    # Client
    "Client",
    "BoundClient",
    "make_client",
    "ClientConfig",
    # Transport
    "HttpRequest",
    "Transport",
    "HTTPXTransport",
    "RewritingTransport",
    "StatusFilterTransport",
    "rewrite_request",
    "transport_from_config",
    # Errors
    "RestApiClientError",
    "EncodeError",
    "DecodeError",
    "TransportError",
    "StatusCodeError",
    "BusinessError",
    "MissingDependencyError",
    "DescriptorError",
]
