# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import ssl

import httpx

from ..config import HttpSettings, load_http_settings
from .client import HttpClient
from .headers import has_header, normalize_headers
from .models import HttpRequest, HttpResponse
from .trust import ssl_context_from_settings

logger = logging.getLogger(__name__)


def build_timeout(settings: HttpSettings) -> httpx.Timeout:
    return httpx.Timeout(
        connect=settings.connect_timeout,
        read=settings.read_timeout,
        write=settings.write_timeout,
        pool=None,
    )


class HttpxClient(HttpClient):
    """Synchronous httpx client wrapper.

    One instance owns one connection pool and is safe to share between
    threads; the dispatcher's workers all call :meth:`request` concurrently.
    """

    def __init__(
        self,
        settings: HttpSettings | None = None,
        client: httpx.Client | None = None,
        *,
        ssl_context: ssl.SSLContext | None = None,
    ):
        self.settings = settings or load_http_settings()
        if client is None:
            context = ssl_context or ssl_context_from_settings(self.settings)
            client = httpx.Client(
                timeout=build_timeout(self.settings),
                transport=httpx.HTTPTransport(verify=context, retries=self.settings.connect_retries),
                follow_redirects=True,
            )
        self._client = client

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = list(request.headers.items())
        if not has_header(request.headers, "User-Agent"):
            headers.append(("User-Agent", self.settings.user_agent))

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                content=request.body,
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s failed: %s", request.method, request.url, exc)
            return HttpResponse.from_exception(exc, url=request.url)

        content = resp.content
        encoding = resp.encoding or "utf-8"
        try:
            text = content.decode(encoding, errors="replace")
        except LookupError:
            text = content.decode("utf-8", errors="replace")

        logger.debug("%s %s -> %s", request.method, request.url, resp.status_code)
        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            text=text,
            content=content,
            url=str(resp.url),
            meta={"http_version": resp.http_version},
        )

    def close(self) -> None:
        self._client.close()
