# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Ambient client selection.

Builders created without an explicit client use the client bound by
:func:`use_client` in the current context, falling back to the process-wide
shared client.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..runtime import FluentHttp

_current_client: ContextVar[FluentHttp | None] = ContextVar("fluenthttp_client", default=None)


def get_current_client() -> FluentHttp:
    """Return the context-bound client or the shared one."""
    client = _current_client.get()
    if client is not None:
        return client
    from ..runtime import get_shared_client

    return get_shared_client()


@contextmanager
def use_client(client: FluentHttp) -> Iterator[FluentHttp]:
    """Bind *client* as the default for builders created inside the block."""
    token = _current_client.set(client)
    try:
        yield client
    finally:
        _current_client.reset(token)


__all__ = ["get_current_client", "use_client"]
