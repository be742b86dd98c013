# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
fluenthttp package entrypoint.

A fluent HTTP request builder over httpx with a lazily-initialized shared
client, a pluggable TLS trust policy and three dispatch modes: blocking,
blocking-via-async and callback-based asynchronous. The transport sits behind
an injectable client interface, and requests/responses are typed dataclasses.
"""

from .builder import RequestBuilder, builder
from .config import HttpSettings, load_http_settings
from .dispatch import DispatchCallback, FunctionCallback, PreparedRequest
from .errors import (
    DispatchCancelledError,
    DispatchError,
    DispatchTimeoutError,
    ErrorCategory,
    FluentHttpError,
    HeaderInjectionError,
    QueryEncodingError,
    RequestBuildError,
    TransportError,
)
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    TrustPolicy,
    create_default_http_client,
)
from .log import setup_logging
from .runtime import FluentHttp, get_shared_client, reset_shared_client
from .utils.context import use_client
from .version import __version__

__all__ = [
    "DispatchCallback",
    "DispatchCancelledError",
    "DispatchError",
    "DispatchTimeoutError",
    "ErrorCategory",
    "FluentHttp",
    "FluentHttpError",
    "FunctionCallback",
    "HeaderInjectionError",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "PreparedRequest",
    "QueryEncodingError",
    "RequestBuildError",
    "RequestBuilder",
    "TransportError",
    "TrustPolicy",
    "builder",
    "create_default_http_client",
    "get_shared_client",
    "load_http_settings",
    "reset_shared_client",
    "setup_logging",
    "use_client",
    "__version__",
]
