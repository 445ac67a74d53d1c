# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Record models for courses and enrollments.

Stored records use camelCase keys (``courseId``, ``studentEmail``,
``createdAt``). Records written by the original browser tool with ``desc``,
``name`` and ``email`` keys load as well.
"""

from coursebook.models.course import Course
from coursebook.models.enrollment import Enrollment

__all__ = [
    "Course",
    "Enrollment",
]
