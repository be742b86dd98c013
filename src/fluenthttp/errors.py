# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Transport failures are not raised by default: they travel back to callers as
``HttpResponse(ok=False, ...)`` values tagged with an :class:`ErrorCategory`.
The exception classes below cover misuse of the builder, encoding problems
and waits on a completion handle that never finish.
"""

import socket
import ssl
from enum import Enum
from typing import Optional

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class FluentHttpError(Exception):
    """Base exception for all fluenthttp errors."""


class RequestBuildError(FluentHttpError):
    """Raised when a builder cannot be rendered (e.g. no URL was set)."""


class QueryEncodingError(RequestBuildError):
    """Raised when a query or body parameter cannot be encoded as UTF-8."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class HeaderInjectionError(RequestBuildError):
    """Raised in strict mode when a header cannot be added to a request."""

    def __init__(self, message: str, name: str | None = None) -> None:
        super().__init__(message)
        self.name = name


class DispatchError(FluentHttpError):
    """Base class for failures while waiting on a dispatched request."""


class DispatchTimeoutError(DispatchError):
    """The caller stopped waiting before the request completed."""


class DispatchCancelledError(DispatchError):
    """The completion handle was cancelled before a result was produced."""


class TransportError(FluentHttpError):
    """Raised by ``HttpResponse.raise_for_error`` for failed dispatches."""

    def __init__(
        self,
        message: str,
        error_type: str | None = None,
        category: "ErrorCategory | None" = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.category = category or ErrorCategory.UNKNOWN_ERROR


def _exception_chain(exc: BaseException, limit: int = 8) -> list[BaseException]:
    chain: list[BaseException] = []
    current: BaseException | None = exc
    while current is not None and len(chain) < limit:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps ssl and socket errors (via httpcore); inspect the whole chain.
    for link in _exception_chain(exc):
        if isinstance(link, (ssl.SSLError, ssl.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(link, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.RemoteProtocolError, httpx.LocalProtocolError, httpx.UnsupportedProtocol)):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.ConnectError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: Optional[ErrorCategory]) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Network timeout",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "Malformed HTTP exchange",
        ErrorCategory.UNKNOWN_ERROR: "Request failed",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed")
