# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for fluenthttp."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_12_6) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/63.0.3239.132 Safari/537.36"
)


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """Transport defaults shared by every request sent through one client.

    The defaults describe a permissive client: accept-all TLS trust,
    no hostname verification and a single transparent retry when a connection
    cannot be established.
    """

    connect_timeout: float = 15.0
    read_timeout: float = 20.0
    write_timeout: float = 20.0
    verify_ssl: bool = False
    verify_hostname: bool = False
    connect_retries: int = 1
    user_agent: str = DEFAULT_USER_AGENT
    max_workers: int = 8
    strict_headers: bool = False

    @property
    def retry_on_connection_failure(self) -> bool:
        return self.connect_retries > 0

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        connect_retries = _int_env("FLUENTHTTP_CONNECT_RETRIES", cls.connect_retries)
        if connect_retries < 0:
            connect_retries = cls.connect_retries
        max_workers = _int_env("FLUENTHTTP_MAX_WORKERS", cls.max_workers)
        if max_workers <= 0:
            max_workers = cls.max_workers
        return cls(
            connect_timeout=_float_env("FLUENTHTTP_CONNECT_TIMEOUT", cls.connect_timeout),
            read_timeout=_float_env("FLUENTHTTP_READ_TIMEOUT", cls.read_timeout),
            write_timeout=_float_env("FLUENTHTTP_WRITE_TIMEOUT", cls.write_timeout),
            verify_ssl=_bool_env("FLUENTHTTP_VERIFY_SSL", cls.verify_ssl),
            verify_hostname=_bool_env("FLUENTHTTP_VERIFY_HOSTNAME", cls.verify_hostname),
            connect_retries=connect_retries,
            user_agent=os.getenv("FLUENTHTTP_USER_AGENT", cls.user_agent),
            max_workers=max_workers,
            strict_headers=_bool_env("FLUENTHTTP_STRICT_HEADERS", cls.strict_headers),
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
