# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Command interface between a UI and the course/enrollment stores.

A UI builds command objects (or plain dicts parsed with parse_command) and
passes them to CommandDispatcher.execute. The dispatcher tracks which
record each form is editing, runs the store operation and answers with a
Result carrying a user-facing message, its category and the views that
must be re-rendered.

Commands:
- submit_course / submit_enrollment - Create, or update the record being edited
- edit_course / edit_enrollment - Load a record into its form
- delete_course / delete_enrollment - Remove a record
- reset_course_form / reset_enrollment_form - Leave editing mode

Example:
    dispatcher = CommandDispatcher(courses, enrollments)
    result = dispatcher.execute(SubmitCourse(title="Algebra", description="Linear equations"))
    if result.ok:
        rerender(result.refresh)
    toast(result.message, result.category)
"""

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from coursebook.domains.course.service import CourseStore
from coursebook.domains.enrollment.service import EnrollmentStore
from coursebook.domains.errors import ConflictError, NotFoundError, ValidationError
from coursebook.utils.logging import get_logger

logger = get_logger(__name__)


class Category(str, Enum):
    """Presentation category of a result message."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class View(str, Enum):
    """Views a UI renders from the stores."""

    COURSES = "courses"
    COURSE_OPTIONS = "course_options"
    ENROLLMENTS = "enrollments"


# Enrollment rows display course titles, so course changes refresh them too
COURSE_VIEWS = frozenset({View.COURSES, View.COURSE_OPTIONS, View.ENROLLMENTS})
ENROLLMENT_VIEWS = frozenset({View.ENROLLMENTS})


class SubmitCourse(BaseModel):
    """Save the course form."""

    action: Literal["submit_course"] = "submit_course"
    title: str = ""
    description: str = ""


class EditCourse(BaseModel):
    """Load a course into the course form."""

    action: Literal["edit_course"] = "edit_course"
    course_id: int


class DeleteCourse(BaseModel):
    """Delete a course."""

    action: Literal["delete_course"] = "delete_course"
    course_id: int


class ResetCourseForm(BaseModel):
    """Clear the course form."""

    action: Literal["reset_course_form"] = "reset_course_form"


class SubmitEnrollment(BaseModel):
    """Save the enrollment form.

    course_id is whatever the course selector holds; text values are
    accepted and resolved by the store.
    """

    action: Literal["submit_enrollment"] = "submit_enrollment"
    course_id: Optional[Union[int, str]] = None
    student_name: str = ""
    student_email: str = ""


class EditEnrollment(BaseModel):
    """Load an enrollment into the enrollment form."""

    action: Literal["edit_enrollment"] = "edit_enrollment"
    enrollment_id: int


class DeleteEnrollment(BaseModel):
    """Delete an enrollment."""

    action: Literal["delete_enrollment"] = "delete_enrollment"
    enrollment_id: int


class ResetEnrollmentForm(BaseModel):
    """Clear the enrollment form."""

    action: Literal["reset_enrollment_form"] = "reset_enrollment_form"


Command = Annotated[
    Union[
        SubmitCourse,
        EditCourse,
        DeleteCourse,
        ResetCourseForm,
        SubmitEnrollment,
        EditEnrollment,
        DeleteEnrollment,
        ResetEnrollmentForm,
    ],
    Field(discriminator="action"),
]

_command_adapter: TypeAdapter[Command] = TypeAdapter(Command)


def parse_command(data: Mapping[str, Any]) -> Command:
    """Build a command from a plain mapping keyed by ``action``.

    Raises:
        pydantic.ValidationError: If the action is unknown or fields are invalid.
    """
    return _command_adapter.validate_python(data)


class Result(BaseModel):
    """Outcome of a command.

    Attributes:
        ok: Whether the command succeeded.
        category: success, error or info.
        message: User-facing message.
        record: The affected record in stored form, when there is one.
        refresh: Views the caller must re-render.
    """

    ok: bool
    category: Category
    message: str
    record: Optional[dict[str, Any]] = None
    refresh: frozenset[View] = frozenset()

    @classmethod
    def failure(cls, message: str) -> "Result":
        """Build an error result."""
        return cls(ok=False, category=Category.ERROR, message=message)


class CommandDispatcher:
    """Runs commands against the stores and tracks form editing state.

    At most one course and one enrollment are being edited at a time. The
    editing state belongs to the UI session and is never persisted.

    Attributes:
        courses: Course store.
        enrollments: Enrollment store.
        editing_course_id: Course loaded in the course form, if any.
        editing_enrollment_id: Enrollment loaded in the enrollment form, if any.
    """

    def __init__(self, courses: CourseStore, enrollments: EnrollmentStore) -> None:
        self.courses = courses
        self.enrollments = enrollments
        self.editing_course_id: Optional[int] = None
        self.editing_enrollment_id: Optional[int] = None
        self._handlers: dict[type, Callable[[Any], Result]] = {
            SubmitCourse: self._submit_course,
            EditCourse: self._edit_course,
            DeleteCourse: self._delete_course,
            ResetCourseForm: self._reset_course_form,
            SubmitEnrollment: self._submit_enrollment,
            EditEnrollment: self._edit_enrollment,
            DeleteEnrollment: self._delete_enrollment,
            ResetEnrollmentForm: self._reset_enrollment_form,
        }

    def execute(self, command: Union[Command, Mapping[str, Any]]) -> Result:
        """Run a command.

        Store errors become error results. Persistence failures propagate.

        Args:
            command: Command to run, or a mapping accepted by parse_command.

        Returns:
            The command result.

        Raises:
            pydantic.ValidationError: If a mapping is not a valid command.
            TypeError: If command is neither a command nor a mapping.
        """
        if isinstance(command, Mapping):
            command = parse_command(command)

        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")
        try:
            return handler(command)
        except (ValidationError, NotFoundError, ConflictError) as e:
            logger.warning("Command rejected", action=command.action, reason=e.message)
            return Result.failure(e.message)

    # ========== Courses ==========

    def _submit_course(self, command: SubmitCourse) -> Result:
        if self.editing_course_id is not None:
            course = self.courses.update(
                self.editing_course_id, command.title, command.description
            )
            message = "Course updated successfully"
        else:
            course = self.courses.create(command.title, command.description)
            message = "Course created successfully"

        self.editing_course_id = None
        logger.info("Course saved", course_id=course.id)
        return Result(
            ok=True,
            category=Category.SUCCESS,
            message=message,
            record=course.to_record(),
            refresh=COURSE_VIEWS,
        )

    def _edit_course(self, command: EditCourse) -> Result:
        course = self.courses.get(command.course_id)
        if course is None:
            raise NotFoundError("Course not found!")

        self.editing_course_id = course.id
        return Result(
            ok=True,
            category=Category.INFO,
            message=f"Editing course ID {course.id}",
            record=course.to_record(),
        )

    def _delete_course(self, command: DeleteCourse) -> Result:
        self.courses.delete(command.course_id)
        if self.editing_course_id == command.course_id:
            self.editing_course_id = None
        return Result(
            ok=True,
            category=Category.SUCCESS,
            message="Course deleted",
            refresh=COURSE_VIEWS,
        )

    def _reset_course_form(self, command: ResetCourseForm) -> Result:
        self.editing_course_id = None
        return Result(ok=True, category=Category.INFO, message="Course form cleared")

    # ========== Enrollments ==========

    def _submit_enrollment(self, command: SubmitEnrollment) -> Result:
        if self.editing_enrollment_id is not None:
            enrollment = self.enrollments.update(
                self.editing_enrollment_id,
                command.course_id,
                command.student_name,
                command.student_email,
            )
            message = "Enrollment updated"
        else:
            enrollment = self.enrollments.create(
                command.course_id,
                command.student_name,
                command.student_email,
            )
            message = "Student enrolled successfully"

        self.editing_enrollment_id = None
        logger.info("Enrollment saved", enrollment_id=enrollment.id)
        return Result(
            ok=True,
            category=Category.SUCCESS,
            message=message,
            record=enrollment.to_record(),
            refresh=ENROLLMENT_VIEWS,
        )

    def _edit_enrollment(self, command: EditEnrollment) -> Result:
        enrollment = self.enrollments.get(command.enrollment_id)
        if enrollment is None:
            raise NotFoundError("Enrollment not found!")

        self.editing_enrollment_id = enrollment.id
        return Result(
            ok=True,
            category=Category.INFO,
            message=f"Editing enrollment ID {enrollment.id}",
            record=enrollment.to_record(),
        )

    def _delete_enrollment(self, command: DeleteEnrollment) -> Result:
        self.enrollments.delete(command.enrollment_id)
        if self.editing_enrollment_id == command.enrollment_id:
            self.editing_enrollment_id = None
        return Result(
            ok=True,
            category=Category.SUCCESS,
            message="Enrollment deleted",
            refresh=ENROLLMENT_VIEWS,
        )

    def _reset_enrollment_form(self, command: ResetEnrollmentForm) -> Result:
        self.editing_enrollment_id = None
        return Result(ok=True, category=Category.INFO, message="Enrollment form cleared")
