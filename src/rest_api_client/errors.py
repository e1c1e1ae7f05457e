# Copyright (c) 2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Error hierarchy for compiled routes.

Every failure a route invocation can produce is one of these types:
structural failures (encode, decode, transport, missing dependency) and
the declared business failure produced by a route's error descriptor.
Each carries a machine-readable code and serialises with ``to_dict`` for
logging.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    import httpx

__all__ = (
    "RestApiClientError",
    "EncodeError",
    "DecodeError",
    "TransportError",
    "StatusCodeError",
    "BusinessError",
    "MissingDependencyError",
    "DescriptorError",
)


class RestApiClientError(Exception):
    """Base for all rest-api-client errors.

    Provides:
    - Behavioral classification (retryable or not)
    - Context for observability
    - Machine-readable error code
    """

    default_message: ClassVar[str] = "REST API client error"
    default_status_code: ClassVar[int | None] = None
    retryable: ClassVar[bool] = False
    code: ClassVar[str] = "rest_api_client_error"
    severity: ClassVar[str] = "error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause is not None:
            self.__cause__ = cause
        self.message = message or self.default_message
        self.details = details or {}
        self.status_code = status_code or type(self).default_status_code
        self.context = context or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        """Serialize error to a structured dictionary for logging."""
        data = {
            "error": self.__class__.__name__,
            "code": type(self).code,
            "message": self.message,
            "status_code": self.status_code,
            "retryable": type(self).retryable,
            "severity": type(self).severity,
            **({"details": self.details} if self.details else {}),
            **({"context": self.context} if self.context else {}),
        }
        if include_cause and self.__cause__ is not None:
            data["cause"] = repr(self.__cause__)
        return data


class EncodeError(RestApiClientError):
    """Request body failed schema validation or JSON encoding."""

    default_message = "Request body could not be encoded"
    code = "encode_error"


class DecodeError(RestApiClientError):
    """Response body failed JSON parsing or schema validation.

    Indicates a contract violation by the remote side, not a declared
    application error.
    """

    default_message = "Response body could not be decoded"
    code = "decode_error"


class TransportError(RestApiClientError):
    """Network or connection level failure."""

    default_message = "Transport failure"
    retryable = True
    severity = "warning"
    code = "transport_error"


class StatusCodeError(TransportError):
    """Non-2xx response rejected by a status-filtering transport."""

    retryable = False
    severity = "error"
    code = "status_code"

    def __init__(self, response: httpx.Response, message: str | None = None, **kwargs):
        super().__init__(
            message or f"Unexpected status code {response.status_code}",
            status_code=response.status_code,
            **kwargs,
        )
        self.response = response


class BusinessError(RestApiClientError):
    """Declared failure produced by a route's error descriptor.

    ``value`` is the decoded error payload (or whatever the error function
    returned); ``response`` is the raw response it was produced from.
    """

    default_message = "Request failed with a declared error"
    code = "business_error"

    def __init__(
        self,
        value: Any,
        *,
        response: httpx.Response | None = None,
        message: str | None = None,
        **kwargs,
    ):
        status = response.status_code if response is not None else None
        super().__init__(
            message or f"Request failed with status {status}: {value!r}",
            status_code=status,
            **kwargs,
        )
        self.value = value
        self.response = response


class MissingDependencyError(RestApiClientError):
    """A route was invoked without a transport or declared dependency."""

    default_message = "Missing route dependencies"
    code = "missing_dependency"

    def __init__(self, missing: Iterable[str], message: str | None = None, **kwargs):
        missing = tuple(sorted(missing))
        super().__init__(
            message or f"Missing route dependencies: {', '.join(missing)}",
            details={"missing": list(missing)},
            **kwargs,
        )
        self.missing = missing


class DescriptorError(RestApiClientError, TypeError):
    """A value cannot be used as a descriptor for a route field."""

    default_message = "Invalid route descriptor"
    code = "invalid_descriptor"

