# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-memory HttpClient implementations for tests and offline use."""

from __future__ import annotations

import threading
from collections.abc import Callable

from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses are registered per URL (query string included); a registered
    exception is raised from :meth:`request` to emulate a misbehaving
    transport.
    """

    def __init__(self, responses: dict[str, HttpResponse | BaseException] | None = None):
        self._responses = dict(responses or {})
        self._lock = threading.Lock()
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, url: str, response: HttpResponse | BaseException) -> None:
        self._responses[url] = response

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.requests.append(request)
        configured = self._responses.get(request.url)
        if configured is None:
            return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")
        if isinstance(configured, BaseException):
            raise configured
        return configured

    def close(self) -> None:
        self.closed = True


class CallableHttpClient(HttpClient):
    """Routes every request through a function, e.g. to echo the request back."""

    def __init__(self, responder: Responder):
        self._responder = responder
        self.calls = 0
        self._lock = threading.Lock()

    def request(self, request: HttpRequest) -> HttpResponse:
        with self._lock:
            self.calls += 1
        return self._responder(request)

    def close(self) -> None:
        return None


__all__ = ["CallableHttpClient", "Responder", "StubHttpClient"]
