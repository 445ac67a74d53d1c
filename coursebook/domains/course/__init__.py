# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course domain package.

This package provides course management functionality including:
- Course creation and editing with validation
- Deletion guarded by enrollment references
"""

from coursebook.domains.course.service import (
    MIN_DESCRIPTION_LENGTH,
    MIN_TITLE_LENGTH,
    CourseStore,
)

__all__ = [
    "CourseStore",
    "MIN_TITLE_LENGTH",
    "MIN_DESCRIPTION_LENGTH",
]
