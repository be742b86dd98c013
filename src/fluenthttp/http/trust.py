# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""TLS trust policies for the httpx transport.

The permissive policy accepts every server certificate and skips hostname
checks, which is what the shared client uses unless configured otherwise.
"""

from __future__ import annotations

import logging
import ssl
from enum import Enum

from ..config import HttpSettings

logger = logging.getLogger(__name__)


class TrustPolicy(str, Enum):
    PERMISSIVE = "permissive"
    SYSTEM = "system"


def create_permissive_ssl_context() -> ssl.SSLContext:
    """Context that trusts any certificate chain and ignores hostnames."""
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def create_system_ssl_context(*, verify_hostname: bool = True) -> ssl.SSLContext:
    """Context backed by the platform trust store."""
    context = ssl.create_default_context()
    if not verify_hostname:
        context.check_hostname = False
    return context


def trust_policy_for(settings: HttpSettings) -> TrustPolicy:
    return TrustPolicy.SYSTEM if settings.verify_ssl else TrustPolicy.PERMISSIVE


def build_ssl_context(
    policy: TrustPolicy | str = TrustPolicy.PERMISSIVE,
    *,
    verify_hostname: bool = False,
) -> ssl.SSLContext:
    policy = TrustPolicy(policy)
    if policy is TrustPolicy.PERMISSIVE:
        if verify_hostname:
            logger.debug("Hostname verification is meaningless without certificate checks; ignoring")
        return create_permissive_ssl_context()
    return create_system_ssl_context(verify_hostname=verify_hostname)


def ssl_context_from_settings(settings: HttpSettings) -> ssl.SSLContext:
    return build_ssl_context(trust_policy_for(settings), verify_hostname=settings.verify_hostname)


__all__ = [
    "TrustPolicy",
    "build_ssl_context",
    "create_permissive_ssl_context",
    "create_system_ssl_context",
    "ssl_context_from_settings",
    "trust_policy_for",
]
