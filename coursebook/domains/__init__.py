# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain stores for courses and enrollments."""

from coursebook.domains.errors import (
    ConflictError,
    CoursebookError,
    NotFoundError,
    ValidationError,
)

__all__ = [
    "CoursebookError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
]
