# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course store for managing the course collection.

This module provides the CourseStore class for:
- Course CRUD operations with title/description validation
- Refusing to delete a course that enrollments still reference
- Loading and saving the course snapshot through a persistence gateway
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Optional

from pydantic import ValidationError as RecordValidationError

from coursebook.domains.errors import ConflictError, NotFoundError, ValidationError
from coursebook.infrastructure.persistence.gateway import (
    COURSES_KEY,
    PersistenceError,
    PersistenceGateway,
)
from coursebook.models.course import Course
from coursebook.utils.datetime import utc_now
from coursebook.utils.ids import IdAllocator

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 5

ReferenceCheck = Callable[[int], bool]


class CourseStore:
    """Owner of the course collection.

    Every check runs before the collection or storage is touched. A
    mutation saves the new snapshot first and only then replaces the
    in-memory list, so a failed save leaves the store unchanged.

    Attributes:
        gateway: Persistence gateway holding the course snapshot.
    """

    def __init__(
        self,
        gateway: PersistenceGateway,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize course store.

        Args:
            gateway: Persistence gateway for the course snapshot.
            clock: Source of creation timestamps.
        """
        self.gateway = gateway
        self._clock = clock
        self._courses: list[Course] = []
        self._ids = IdAllocator()
        self._reference_checks: dict[str, ReferenceCheck] = {}

    def initialize(self) -> None:
        """Load the stored snapshot, replacing the in-memory collection.

        Raises:
            PersistenceError: If the snapshot cannot be read or parsed.
        """
        records = self.gateway.load(COURSES_KEY)
        try:
            courses = [Course.model_validate(record) for record in records]
        except RecordValidationError as e:
            raise PersistenceError("Stored courses are malformed", e) from e

        self._courses = courses
        self._ids.reset(course.id for course in courses)
        logger.debug("Loaded %d courses", len(courses))

    def add_reference_check(self, name: str, check: ReferenceCheck) -> None:
        """Register a callable reporting whether a course id is still referenced.

        Registering again under the same name replaces the earlier check.

        Args:
            name: Name of the dependent collection.
            check: Returns True when something depends on the course id.
        """
        self._reference_checks[name] = check

    def create(self, title: str, description: str) -> Course:
        """Create a course.

        Args:
            title: Course title, at least 3 characters after trimming.
            description: Course description, at least 5 characters after trimming.

        Returns:
            The new course.

        Raises:
            ValidationError: If title or description is too short.
            PersistenceError: If the snapshot cannot be saved.
        """
        title, description = self._validate(title, description)

        course = Course(
            id=self._ids.peek(c.id for c in self._courses),
            title=title,
            description=description,
            created_at=self._clock(),
        )
        self._commit([*self._courses, course])
        self._ids.record(course.id)

        logger.info("Created course: %s (%s)", course.title, course.id)
        return course

    def update(self, course_id: int, title: str, description: str) -> Course:
        """Replace a course's title and description.

        Args:
            course_id: Course identifier.
            title: New title.
            description: New description.

        Returns:
            The updated course.

        Raises:
            ValidationError: If title or description is too short.
            NotFoundError: If the course does not exist.
            PersistenceError: If the snapshot cannot be saved.
        """
        title, description = self._validate(title, description)
        index = self._index_of(course_id)

        updated = self._courses[index].model_copy(
            update={"title": title, "description": description}
        )
        courses = list(self._courses)
        courses[index] = updated
        self._commit(courses)

        logger.info("Updated course: %s", course_id)
        return updated

    def delete(self, course_id: int) -> None:
        """Delete a course that no enrollment references.

        Args:
            course_id: Course identifier.

        Raises:
            NotFoundError: If the course does not exist.
            ConflictError: If enrollments still reference the course.
            PersistenceError: If the snapshot cannot be saved.
        """
        self._index_of(course_id)

        if any(check(course_id) for check in self._reference_checks.values()):
            raise ConflictError("Cannot delete course: enrollments exist.")

        self._commit([c for c in self._courses if c.id != course_id])
        logger.info("Deleted course: %s", course_id)

    def list(self) -> list[Course]:
        """Return all courses in insertion order."""
        return list(self._courses)

    def get(self, course_id: int) -> Optional[Course]:
        """Return the course with the given id, or None."""
        for course in self._courses:
            if course.id == course_id:
                return course
        return None

    def _validate(self, title: Optional[str], description: Optional[str]) -> tuple[str, str]:
        """Trim and check course fields.

        Returns:
            The trimmed (title, description).

        Raises:
            ValidationError: On the first field that is too short.
        """
        title = (title or "").strip()
        description = (description or "").strip()

        if len(title) < MIN_TITLE_LENGTH:
            raise ValidationError(
                f"Course title must be at least {MIN_TITLE_LENGTH} characters."
            )
        if len(description) < MIN_DESCRIPTION_LENGTH:
            raise ValidationError(
                f"Course description must be at least {MIN_DESCRIPTION_LENGTH} characters."
            )
        return title, description

    def _index_of(self, course_id: int) -> int:
        for index, course in enumerate(self._courses):
            if course.id == course_id:
                return index
        raise NotFoundError("Course not found!")

    def _commit(self, courses: list[Course]) -> None:
        self.gateway.save(COURSES_KEY, [course.to_record() for course in courses])
        self._courses = courses
