# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""UI-facing layer: commands, results and view data."""

from coursebook.api.commands import (
    Category,
    Command,
    CommandDispatcher,
    DeleteCourse,
    DeleteEnrollment,
    EditCourse,
    EditEnrollment,
    ResetCourseForm,
    ResetEnrollmentForm,
    Result,
    SubmitCourse,
    SubmitEnrollment,
    View,
    parse_command,
)
from coursebook.api.views import course_items, course_options, enrollment_rows

__all__ = [
    "Command",
    "CommandDispatcher",
    "Result",
    "Category",
    "View",
    "parse_command",
    # Commands
    "SubmitCourse",
    "EditCourse",
    "DeleteCourse",
    "ResetCourseForm",
    "SubmitEnrollment",
    "EditEnrollment",
    "DeleteEnrollment",
    "ResetEnrollmentForm",
    # Views
    "course_items",
    "course_options",
    "enrollment_rows",
]
