# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fluent request builder.

Usage::

    text = (
        builder()
        .url("https://example.com/search")
        .add_param("q", "fluent http")
        .add_header("Accept", "application/json")
        .render_for_read()
        .dispatch_blocking()
    )

Configuration methods return the builder. Rendering snapshots the builder into
a :class:`~fluenthttp.dispatch.PreparedRequest`, which is the only object that
can be dispatched; later changes to the builder do not affect it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .dispatch import PreparedRequest
from .errors import RequestBuildError
from .http.headers import apply_headers, set_header
from .http.models import HttpRequest
from .http.url import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    append_query,
    encode_form_body,
    encode_json_body,
)
from .utils.context import get_current_client

if TYPE_CHECKING:
    from .runtime import FluentHttp

logger = logging.getLogger(__name__)

BODY_METHODS = ("POST", "PUT", "DELETE")


class RequestBuilder:
    """Accumulates URL, method, headers and params for one request."""

    def __init__(self, client: FluentHttp | None = None):
        self._client = client if client is not None else get_current_client()
        self._url: str | None = None
        self._method: str | None = None
        self._headers: dict[str, str] = {}
        self._params: dict[str, str] = {}

    @property
    def client(self) -> FluentHttp:
        return self._client

    @property
    def params(self) -> dict[str, str]:
        return dict(self._params)

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._headers)

    def get_url(self) -> str | None:
        return self._url

    def get_method(self) -> str | None:
        return self._method

    def url(self, url: str) -> RequestBuilder:
        self._url = url
        return self

    def method(self, method: str) -> RequestBuilder:
        self._method = method.upper() if method else method
        return self

    def add_param(self, key: str, value: Any) -> RequestBuilder:
        self._params[str(key)] = str(value)
        return self

    def add_params(self, params: Mapping[str, Any]) -> RequestBuilder:
        for key, value in params.items():
            self.add_param(key, value)
        return self

    def add_header(self, key: str, value: Any) -> RequestBuilder:
        self._headers[str(key)] = str(value)
        return self

    def add_headers(self, headers: Mapping[str, Any]) -> RequestBuilder:
        for key, value in headers.items():
            self.add_header(key, value)
        return self

    def render_for_read(self) -> PreparedRequest:
        """GET with params appended to the URL as a query string."""
        url = append_query(self._require_url(), self._params)
        return self._prepare("GET", url)

    def render_for_write(self, use_json: bool = True) -> PreparedRequest:
        """POST/PUT/DELETE with params as a JSON object or a form body.

        Any other method cannot carry a body: the request goes out as a
        bodiless GET and is flagged ``incomplete``.
        """
        url = self._require_url()
        if self._method not in BODY_METHODS:
            logger.warning(
                "Method %r does not carry a request body; sending %s as a bodiless GET",
                self._method,
                url,
            )
            return self._prepare("GET", url, incomplete=True)

        if use_json:
            if not self._params:
                return self._prepare(self._method, url)
            return self._prepare(self._method, url, encode_json_body(self._params), JSON_CONTENT_TYPE)
        return self._prepare(self._method, url, encode_form_body(self._params), FORM_CONTENT_TYPE)

    def _require_url(self) -> str:
        if not self._url:
            raise RequestBuildError("url must be set before rendering a request")
        return self._url

    def _prepare(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        content_type: str | None = None,
        *,
        incomplete: bool = False,
    ) -> PreparedRequest:
        headers: dict[str, str] = {}
        rejected = apply_headers(headers, self._headers, strict=self._client.http_settings.strict_headers)
        # The body's media type wins over a caller-supplied Content-Type.
        if content_type is not None:
            set_header(headers, "Content-Type", content_type)
        request = HttpRequest(url=url, method=method, headers=headers, body=body)
        logger.debug(
            "Rendered %s %s (%d headers, %d params, content-type %s)",
            method,
            url,
            len(headers),
            len(self._params),
            request.content_type,
        )
        return PreparedRequest(
            request=request,
            client=self._client,
            rejected_headers=tuple(rejected),
            incomplete=incomplete,
        )


def builder(client: FluentHttp | None = None) -> RequestBuilder:
    """Start a request on *client*, the context-bound client, or the shared one."""
    return RequestBuilder(client)


__all__ = ["BODY_METHODS", "RequestBuilder", "builder"]
