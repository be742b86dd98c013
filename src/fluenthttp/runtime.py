# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Client facade that owns the transport and the dispatch worker pool."""

from __future__ import annotations

import logging
import ssl
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from contextlib import suppress
from typing import TYPE_CHECKING

from .config import HttpSettings, load_http_settings
from .dispatch import DispatchCallback, notify_callback
from .errors import DispatchError
from .http.client import HttpClient, create_default_http_client
from .http.models import HttpRequest, HttpResponse

if TYPE_CHECKING:
    from .builder import RequestBuilder

logger = logging.getLogger(__name__)

WORKER_THREAD_PREFIX = "fluenthttp"


class FluentHttp:
    """
    Shared client: one transport plus the worker pool used for asynchronous dispatch.

    Read-only after construction, so any number of builders and in-flight
    requests may use one instance concurrently. Callers that construct their
    own instance own it and should close it (or use it as a context manager);
    the process-wide instance from :func:`get_shared_client` lives until exit.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        settings: HttpSettings | None = None,
        *,
        ssl_context: ssl.SSLContext | None = None,
        max_workers: int | None = None,
    ):
        self.http_settings = settings or load_http_settings()
        self.http_client = http_client or create_default_http_client(self.http_settings, ssl_context=ssl_context)
        self.max_workers = max_workers or self.http_settings.max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()
        self._closed = False
        self._worker_state = threading.local()

    @property
    def closed(self) -> bool:
        return self._closed

    def builder(self) -> RequestBuilder:
        from .builder import RequestBuilder

        return RequestBuilder(client=self)

    def execute(self, request: HttpRequest) -> HttpResponse:
        """Send *request* on the calling thread; transport errors become ``ok=False``."""
        try:
            return self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Transport raised for %s %s: %s", request.method, request.url, exc)
            return HttpResponse.from_exception(exc, url=request.url)

    def submit(
        self,
        request: HttpRequest,
        callback: DispatchCallback | None = None,
    ) -> Future[HttpResponse]:
        """Queue *request* on the worker pool and return its completion handle.

        Each call gets a fresh future. When *callback* is given it is notified
        on the worker thread before the future resolves.
        """
        executor = self._get_executor()
        try:
            future = executor.submit(self._run, request, callback)
        except RuntimeError as exc:
            raise DispatchError(f"cannot dispatch {request.method} {request.url}: {exc}") from exc
        if callback is not None:
            future.add_done_callback(lambda done: self._notify_if_cancelled(done, request, callback))
        return future

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            executor, self._executor = self._executor, None
        try:
            if executor is not None:
                # A worker cannot join itself; let the pool drain on its own.
                executor.shutdown(wait=not self._on_worker_thread())
        finally:
            with suppress(Exception):
                if hasattr(self.http_client, "close"):
                    self.http_client.close()

    def __enter__(self) -> FluentHttp:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._closed:
                raise DispatchError("client is closed")
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix=WORKER_THREAD_PREFIX,
                )
            return self._executor

    def _on_worker_thread(self) -> bool:
        return getattr(self._worker_state, "active", False)

    def _run(self, request: HttpRequest, callback: DispatchCallback | None) -> HttpResponse:
        self._worker_state.active = True
        response = self.execute(request)
        if callback is not None:
            notify_callback(callback, request, response)
        return response

    @staticmethod
    def _notify_if_cancelled(future: Future[HttpResponse], request: HttpRequest, callback: DispatchCallback) -> None:
        if future.cancelled():
            notify_callback(
                callback,
                request,
                HttpResponse(ok=False, url=request.url, error_message="request cancelled", error_type="CancelledError"),
            )


_shared_client: FluentHttp | None = None
_shared_lock = threading.Lock()


def get_shared_client() -> FluentHttp:
    """Return the process-wide client, building it on first use (exactly once)."""
    global _shared_client
    client = _shared_client
    if client is None:
        with _shared_lock:
            if _shared_client is None:
                _shared_client = FluentHttp()
                logger.debug("Initialized shared fluenthttp client")
            client = _shared_client
    return client


def reset_shared_client(client: FluentHttp | None = None) -> FluentHttp | None:
    """Swap the process-wide client, closing and returning the previous one."""
    global _shared_client
    with _shared_lock:
        previous, _shared_client = _shared_client, client
    if previous is not None and previous is not client:
        previous.close()
    return previous


__all__ = ["FluentHttp", "get_shared_client", "reset_shared_client"]
