# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP transport exports."""

from .adapters import CallableHttpClient, StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import apply_headers, header_value, normalize_headers
from .httpx_client import HttpxClient
from .models import FAILURE_PREFIX, Headers, HttpRequest, HttpResponse
from .trust import TrustPolicy, build_ssl_context, create_permissive_ssl_context
from .url import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, append_query, encode_pairs

__all__ = [
    "FAILURE_PREFIX",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "CallableHttpClient",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "StubHttpClient",
    "TrustPolicy",
    "append_query",
    "apply_headers",
    "build_ssl_context",
    "create_default_http_client",
    "create_permissive_ssl_context",
    "encode_pairs",
    "header_value",
    "normalize_headers",
]
