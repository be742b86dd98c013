# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for fluenthttp."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("FLUENTHTTP_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; only surface it when debugging.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | None = None) -> int:
    """Map a level name (or the env default) to a logging constant."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, effective_level, logging.WARNING)


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    numeric_level = resolve_level(level)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s %(levelname)s %(threadName)s %(name)s: %(message)s",
    )
    transport_level = numeric_level if numeric_level <= logging.DEBUG else max(numeric_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["resolve_level", "setup_logging"]
