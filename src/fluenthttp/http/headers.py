# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization and injection utilities.

HTTP header field names are case-insensitive (RFC 9110). Response headers are
stored lower-cased; request headers keep the caller's casing and insertion
order and are validated before they reach the transport.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from ..errors import HeaderInjectionError

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_VALUE_RE = re.compile(r"^[\t\x20-\x7e]*$")


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers, and iterables of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        try:
            return dict(items())
        except (TypeError, ValueError):
            pass

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Any, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def has_header(headers: Any, name: str) -> bool:
    coerced = _coerce_headers_mapping(headers) or {}
    lower = name.lower()
    return any(key is not None and str(key).lower() == lower for key in coerced)


def header_problem(name: str, value: str) -> str | None:
    """Describe why a header cannot be sent, or return None when it is valid."""
    if not name:
        return "empty header name"
    if not _TOKEN_RE.match(name):
        return f"invalid character in header name {name!r}"
    if not _VALUE_RE.match(value):
        return f"invalid character in value of header {name!r}"
    return None


def apply_headers(
    target: dict[str, str],
    headers: Mapping[str, str],
    *,
    strict: bool = False,
) -> list[str]:
    """Copy *headers* into *target* in insertion order.

    Invalid headers are skipped and logged; their names are returned so the
    caller can surface partial application. With ``strict=True`` the first
    invalid header raises :class:`HeaderInjectionError` instead.
    """
    rejected: list[str] = []
    for name, value in headers.items():
        problem = header_problem(name, value)
        if problem is not None:
            if strict:
                raise HeaderInjectionError(problem, name=name)
            logger.warning("Skipping header: %s", problem)
            rejected.append(name)
            continue
        target[name] = value
    return rejected


def set_header(target: dict[str, str], name: str, value: str) -> None:
    """Replace any existing header with the same name (case-insensitive)."""
    for key in [k for k in target if k.lower() == name.lower()]:
        del target[key]
    target[name] = value


__all__ = [
    "apply_headers",
    "has_header",
    "header_problem",
    "header_value",
    "normalize_headers",
    "set_header",
]
