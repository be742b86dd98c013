# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Utility exports."""

from .context import get_current_client, use_client

__all__ = ["get_current_client", "use_client"]
