# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Plain data for the views a UI renders.

Each function returns lists of dicts ready for a template or widget; none
of them touches a UI toolkit.
"""

from typing import Any

from coursebook.domains.course.service import CourseStore
from coursebook.domains.enrollment.service import EnrollmentStore

UNKNOWN_COURSE = "Unknown Course"


def course_items(courses: CourseStore) -> list[dict[str, Any]]:
    """Rows for the course list."""
    return [
        {"id": course.id, "title": course.title, "description": course.description}
        for course in courses.list()
    ]


def course_options(courses: CourseStore) -> list[dict[str, str]]:
    """Options for the course selector used by the enrollment form.

    An empty store yields a single placeholder option with an empty value.
    """
    items = courses.list()
    if not items:
        return [{"value": "", "label": "No courses available"}]
    return [
        {"value": str(course.id), "label": f"{course.title} (ID: {course.id})"}
        for course in items
    ]


def enrollment_rows(
    enrollments: EnrollmentStore,
    courses: CourseStore,
) -> list[dict[str, Any]]:
    """Rows for the enrollment list with the course title resolved."""
    rows = []
    for enrollment in enrollments.list():
        course = courses.get(enrollment.course_id)
        rows.append(
            {
                "id": enrollment.id,
                "studentName": enrollment.student_name,
                "studentEmail": enrollment.student_email,
                "courseId": enrollment.course_id,
                "courseTitle": course.title if course else UNKNOWN_COURSE,
            }
        )
    return rows
