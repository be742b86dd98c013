# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Query-string and request-body encoders."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from urllib.parse import quote_plus, urlsplit

from ..errors import QueryEncodingError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

# Letters, digits and "_.-~" always pass through quote_plus; "*" is kept too.
_FORM_SAFE = "*"


def _encode_component(text: str, *, key: str) -> str:
    try:
        return quote_plus(text, safe=_FORM_SAFE, encoding="utf-8", errors="strict")
    except UnicodeEncodeError as exc:
        logger.error("Cannot UTF-8 encode query parameter %r: %s", key, exc)
        raise QueryEncodingError(f"cannot encode query parameter {key!r}: {exc}", key=key) from exc


def encode_pairs(params: Mapping[str, str]) -> str:
    """``k=v`` pairs joined by ``&`` in insertion order, each side encoded independently."""
    return "&".join(
        f"{_encode_component(key, key=key)}={_encode_component(value, key=key)}"
        for key, value in params.items()
    )


def append_query(url: str, params: Mapping[str, str]) -> str:
    """Append *params* to *url*; an empty mapping returns the URL unchanged."""
    if not params:
        return url
    query = encode_pairs(params)
    base, _, fragment = url.partition("#")
    if urlsplit(base).query:
        separator = "&"
    elif base.endswith("?"):
        separator = ""
    else:
        separator = "?"
    rebuilt = f"{base}{separator}{query}"
    return f"{rebuilt}#{fragment}" if fragment else rebuilt


def encode_json_body(params: Mapping[str, str]) -> bytes:
    try:
        return json.dumps(dict(params), ensure_ascii=False, separators=(",", ":")).encode("utf-8")
    except UnicodeEncodeError as exc:
        key = _unencodable_key(params)
        logger.error("Cannot UTF-8 encode JSON body parameter %r: %s", key, exc)
        raise QueryEncodingError(f"cannot encode body parameter {key!r}: {exc}", key=key) from exc


def _unencodable_key(params: Mapping[str, str]) -> str | None:
    for key, value in params.items():
        try:
            key.encode("utf-8")
            value.encode("utf-8")
        except UnicodeEncodeError:
            return key
    return None


def encode_form_body(params: Mapping[str, str]) -> bytes:
    return encode_pairs(params).encode("ascii")


__all__ = [
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "append_query",
    "encode_form_body",
    "encode_json_body",
    "encode_pairs",
]
