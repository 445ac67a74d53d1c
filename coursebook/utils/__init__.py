# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for Coursebook.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
- ids: Monotonic per-collection id allocation
"""

from coursebook.utils.datetime import ensure_utc, format_iso, parse_iso, utc_now
from coursebook.utils.ids import IdAllocator
from coursebook.utils.logging import get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Datetime
    "utc_now",
    "ensure_utc",
    "format_iso",
    "parse_iso",
    # Ids
    "IdAllocator",
]
