# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal dispatch operations for rendered requests.

A :class:`PreparedRequest` is what a builder renders into. It can be sent
three ways:

* blocking, on the calling thread (:meth:`PreparedRequest.execute`,
  :meth:`PreparedRequest.dispatch_blocking`);
* asynchronously with the caller parked on a per-call completion handle
  (:meth:`PreparedRequest.dispatch_blocking_via_signal`);
* asynchronously with a callback notified on a worker thread
  (:meth:`PreparedRequest.dispatch_async`).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import CancelledError, Future
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from .errors import DispatchCancelledError, DispatchTimeoutError
from .http.models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from .runtime import FluentHttp

logger = logging.getLogger(__name__)


class DispatchCallback(Protocol):
    """Receives the outcome of :meth:`PreparedRequest.dispatch_async`.

    Exactly one of the two methods is called, once, on a worker thread.
    """

    def on_successful(self, request: HttpRequest, data: str) -> None: ...

    def on_failure(self, request: HttpRequest, error_message: str) -> None: ...


class FunctionCallback:
    """Adapts two plain callables to :class:`DispatchCallback`."""

    def __init__(
        self,
        on_successful: Callable[[HttpRequest, str], None] | None = None,
        on_failure: Callable[[HttpRequest, str], None] | None = None,
    ):
        self._on_successful = on_successful
        self._on_failure = on_failure

    def on_successful(self, request: HttpRequest, data: str) -> None:
        if self._on_successful is not None:
            self._on_successful(request, data)

    def on_failure(self, request: HttpRequest, error_message: str) -> None:
        if self._on_failure is not None:
            self._on_failure(request, error_message)


def notify_callback(callback: DispatchCallback, request: HttpRequest, response: HttpResponse) -> None:
    """Route *response* to the matching callback method; callback errors are logged."""
    try:
        if response.ok:
            callback.on_successful(request, response.text)
        else:
            callback.on_failure(request, response.error_message or "")
    except Exception:  # noqa: BLE001
        logger.exception("Dispatch callback failed for %s %s", request.method, request.url)


@dataclass(frozen=True)
class PreparedRequest:
    """A rendered request bound to the client that will send it."""

    request: HttpRequest
    client: FluentHttp = field(repr=False, compare=False)
    rejected_headers: tuple[str, ...] = ()
    incomplete: bool = False

    @property
    def url(self) -> str:
        return self.request.url

    @property
    def method(self) -> str:
        return self.request.method

    @property
    def headers(self) -> dict[str, str]:
        return dict(self.request.headers)

    @property
    def body(self) -> bytes | None:
        return self.request.body

    def execute(self) -> HttpResponse:
        """Send on the calling thread and return the typed result."""
        return self.client.execute(self.request)

    def dispatch_blocking(self) -> str:
        """Send on the calling thread; body text or ``request failed: <message>``."""
        return self.execute().render()

    def submit(self) -> Future[HttpResponse]:
        """Queue the request and return a fresh completion handle."""
        return self.client.submit(self.request)

    def dispatch_blocking_via_signal(self, timeout: float | None = None) -> str:
        """Like :meth:`execute_via_signal`, rendered as body text or ``request failed: <message>``."""
        return self.execute_via_signal(timeout).render()

    def execute_via_signal(self, timeout: float | None = None) -> HttpResponse:
        """Send on a worker thread and wait for this call's own completion handle.

        Raises:
            DispatchTimeoutError: *timeout* seconds passed without a result;
                the queued request is cancelled if it has not started yet.
            DispatchCancelledError: the handle was cancelled by someone else.
        """
        future = self.submit()
        try:
            response = future.result(timeout=timeout)
        except FutureTimeoutError as exc:
            future.cancel()
            logger.warning("Gave up waiting for %s %s after %ss", self.method, self.url, timeout)
            raise DispatchTimeoutError(f"no response for {self.method} {self.url} within {timeout}s") from exc
        except CancelledError as exc:
            raise DispatchCancelledError(f"{self.method} {self.url} was cancelled") from exc
        return response

    def dispatch_async(self, callback: DispatchCallback) -> Future[HttpResponse]:
        """Queue the request and return immediately; *callback* gets the outcome."""
        return self.client.submit(self.request, callback)

    async def send_async(self) -> HttpResponse:
        """Await the completion handle from an asyncio event loop."""
        return await asyncio.wrap_future(self.submit())


__all__ = [
    "DispatchCallback",
    "FunctionCallback",
    "PreparedRequest",
    "notify_callback",
]
