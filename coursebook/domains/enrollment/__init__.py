# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides student enrollment functionality including:
- Enrolling students in existing courses
- Per-course email uniqueness
- Editing and removing enrollments
"""

from coursebook.domains.enrollment.service import (
    MIN_NAME_LENGTH,
    EnrollmentStore,
    coerce_course_id,
)

__all__ = [
    "EnrollmentStore",
    "MIN_NAME_LENGTH",
    "coerce_course_id",
]
