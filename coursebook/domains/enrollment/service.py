# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment store for managing student course enrollments.

This module provides the EnrollmentStore class for:
- Enrollment CRUD operations with name/email validation
- Keeping every enrollment pointed at an existing course
- One enrollment per email within a course

Checks run in a fixed order so that only one error surfaces when several
conditions fail: field checks (course id, name, email), then the
enrollment being updated, then the course reference, then uniqueness.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional

from pydantic import ValidationError as RecordValidationError

from coursebook.domains.course.service import CourseStore
from coursebook.domains.errors import ConflictError, NotFoundError, ValidationError
from coursebook.infrastructure.persistence.gateway import (
    ENROLLMENTS_KEY,
    PersistenceError,
    PersistenceGateway,
)
from coursebook.models.enrollment import Enrollment
from coursebook.utils.datetime import utc_now
from coursebook.utils.ids import IdAllocator

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3


def coerce_course_id(value: Any) -> Optional[int]:
    """Turn a course selection into a positive int, or None when missing.

    Select widgets hand over their value as text, so numeric strings are
    accepted. Booleans are not ids.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    if isinstance(value, str):
        try:
            parsed = int(value.strip())
        except ValueError:
            return None
        return parsed if parsed > 0 else None
    return None


class EnrollmentStore:
    """Owner of the enrollment collection.

    Courses are referenced by id only and resolved through the CourseStore
    given at construction. The store registers itself as a reference check
    on that CourseStore, which then refuses to delete enrolled courses.

    Attributes:
        gateway: Persistence gateway holding the enrollment snapshot.
        courses: Course store used to resolve course ids.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        courses: CourseStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize enrollment store.

        Args:
            gateway: Persistence gateway for the enrollment snapshot.
            courses: Course store used to resolve course ids.
            clock: Source of creation timestamps.
        """
        self.gateway = gateway
        self.courses = courses
        self._clock = clock
        self._enrollments: list[Enrollment] = []
        self._ids = IdAllocator()
        courses.add_reference_check(ENROLLMENTS_KEY, self.references_course)

    def initialize(self) -> None:
        """Load the stored snapshot, replacing the in-memory collection.

        Raises:
            PersistenceError: If the snapshot cannot be read or parsed.
        """
        records = self.gateway.load(ENROLLMENTS_KEY)
        try:
            enrollments = [Enrollment.model_validate(record) for record in records]
        except RecordValidationError as e:
            raise PersistenceError("Stored enrollments are malformed", e) from e

        self._enrollments = enrollments
        self._ids.reset(enrollment.id for enrollment in enrollments)

        dangling = [e.id for e in enrollments if self.courses.get(e.course_id) is None]
        if dangling:
            logger.warning("Enrollments reference missing courses: %s", dangling)
        logger.debug("Loaded %d enrollments", len(enrollments))

    def create(self, course_id: Any, student_name: str, student_email: str) -> Enrollment:
        """Enroll a student in a course.

        Args:
            course_id: Course identifier.
            student_name: Student name, at least 3 characters after trimming.
            student_email: Student email, must contain "@".

        Returns:
            The new enrollment.

        Raises:
            ValidationError: If a field is missing or malformed.
            NotFoundError: If the course does not exist.
            ConflictError: If the email is already enrolled in the course.
            PersistenceError: If the snapshot cannot be saved.
        """
        course_id, student_name, student_email = self._validate(
            course_id, student_name, student_email
        )
        self._require_course(course_id)
        self._require_unique(course_id, student_email)

        enrollment = Enrollment(
            id=self._ids.peek(e.id for e in self._enrollments),
            course_id=course_id,
            student_name=student_name,
            student_email=student_email,
            created_at=self._clock(),
        )
        self._commit([*self._enrollments, enrollment])
        self._ids.record(enrollment.id)

        logger.info(
            "Enrolled student: enrollment=%s, course=%s",
            enrollment.id,
            course_id,
        )
        return enrollment

    def update(
        self,
        enrollment_id: int,
        course_id: Any,
        student_name: str,
        student_email: str,
    ) -> Enrollment:
        """Replace an enrollment's course and student fields.

        Args:
            enrollment_id: Enrollment identifier.
            course_id: New course identifier.
            student_name: New student name.
            student_email: New student email.

        Returns:
            The updated enrollment.

        Raises:
            ValidationError: If a field is missing or malformed.
            NotFoundError: If the enrollment or the course does not exist.
            ConflictError: If another enrollment in the course has the email.
            PersistenceError: If the snapshot cannot be saved.
        """
        course_id, student_name, student_email = self._validate(
            course_id, student_name, student_email
        )
        index = self._index_of(enrollment_id)
        self._require_course(course_id)
        self._require_unique(course_id, student_email, exclude_id=enrollment_id)

        updated = self._enrollments[index].model_copy(
            update={
                "course_id": course_id,
                "student_name": student_name,
                "student_email": student_email,
            }
        )
        enrollments = list(self._enrollments)
        enrollments[index] = updated
        self._commit(enrollments)

        logger.info("Updated enrollment: %s", enrollment_id)
        return updated

    def delete(self, enrollment_id: int) -> None:
        """Delete an enrollment.

        Raises:
            NotFoundError: If the enrollment does not exist.
            PersistenceError: If the snapshot cannot be saved.
        """
        self._index_of(enrollment_id)
        self._commit([e for e in self._enrollments if e.id != enrollment_id])
        logger.info("Deleted enrollment: %s", enrollment_id)

    def list(self) -> list[Enrollment]:
        """Return all enrollments in insertion order."""
        return list(self._enrollments)

    def get(self, enrollment_id: int) -> Optional[Enrollment]:
        """Return the enrollment with the given id, or None."""
        for enrollment in self._enrollments:
            if enrollment.id == enrollment_id:
                return enrollment
        return None

    def references_course(self, course_id: int) -> bool:
        """Check whether any enrollment points at the course."""
        return any(e.course_id == course_id for e in self._enrollments)

    def _validate(
        self,
        course_id: Any,
        student_name: Optional[str],
        student_email: Optional[str],
    ) -> tuple[int, str, str]:
        """Coerce and trim enrollment fields.

        Raises:
            ValidationError: On the first missing or malformed field.
        """
        resolved_id = coerce_course_id(course_id)
        student_name = (student_name or "").strip()
        student_email = (student_email or "").strip()

        if resolved_id is None:
            raise ValidationError("Please select a course.")
        if len(student_name) < MIN_NAME_LENGTH:
            raise ValidationError(
                f"Student name must be at least {MIN_NAME_LENGTH} characters."
            )
        if "@" not in student_email:
            raise ValidationError("Enter a valid email address.")
        return resolved_id, student_name, student_email

    def _require_course(self, course_id: int) -> None:
        if self.courses.get(course_id) is None:
            raise NotFoundError("Course not found!")

    def _require_unique(
        self,
        course_id: int,
        student_email: str,
        exclude_id: Optional[int] = None,
    ) -> None:
        # Emails compare exactly as stored, without case folding
        for enrollment in self._enrollments:
            if (
                enrollment.course_id == course_id
                and enrollment.student_email == student_email
                and enrollment.id != exclude_id
            ):
                raise ConflictError("This student email already enrolled in this course.")

    def _index_of(self, enrollment_id: int) -> int:
        for index, enrollment in enumerate(self._enrollments):
            if enrollment.id == enrollment_id:
                return index
        raise NotFoundError("Enrollment not found!")

    def _commit(self, enrollments: list[Enrollment]) -> None:
        self.gateway.save(ENROLLMENTS_KEY, [e.to_record() for e in enrollments])
        self._enrollments = enrollments
