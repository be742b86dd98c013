# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across fluenthttp."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import ErrorCategory, TransportError, categorize_exception

Headers = dict[str, str]

FAILURE_PREFIX = "request failed: "


@dataclass(frozen=True)
class HttpRequest:
    """Rendered, transport-ready request consumed by HttpClient implementations.

    Headers keep insertion order; ``body`` is already encoded.
    """

    url: str
    method: str = "GET"
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None

    @property
    def content_type(self) -> str | None:
        for key, value in self.headers.items():
            if key.lower() == "content-type":
                return value
        return None


@dataclass
class HttpResponse:
    """Outcome of one dispatch.

    ``ok`` means the transport completed an HTTP exchange, whatever the status
    code; ``ok=False`` carries the transport error instead of raising it.
    """

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    error_category: ErrorCategory = ErrorCategory.NONE
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: BaseException, *, url: str | None = None) -> HttpResponse:
        """Wrap a transport exception into a failed response."""
        return cls(
            ok=False,
            url=url,
            error_message=str(exc) or type(exc).__name__,
            error_type=type(exc).__name__,
            error_category=categorize_exception(exc),
        )

    def render(self) -> str:
        """Plain string rendering: body text, or ``request failed: <message>``."""
        if self.ok:
            return self.text
        return f"{FAILURE_PREFIX}{self.error_message or ''}"

    def raise_for_error(self) -> HttpResponse:
        """Raise TransportError when the dispatch failed, otherwise return self."""
        if not self.ok:
            raise TransportError(
                self.error_message or "request failed",
                error_type=self.error_type,
                category=self.error_category,
            )
        return self


__all__ = ["FAILURE_PREFIX", "Headers", "HttpRequest", "HttpResponse"]
