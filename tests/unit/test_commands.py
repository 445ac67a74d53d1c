# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the command dispatcher."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from coursebook.api.commands import (
    Category,
    CommandDispatcher,
    DeleteCourse,
    DeleteEnrollment,
    EditCourse,
    EditEnrollment,
    ResetCourseForm,
    ResetEnrollmentForm,
    SubmitCourse,
    SubmitEnrollment,
    View,
    parse_command,
)
from coursebook.infrastructure.persistence import PersistenceError


@pytest.fixture
def dispatcher(course_store, enrollment_store):
    """Create a dispatcher over the shared stores."""
    return CommandDispatcher(course_store, enrollment_store)


class TestParseCommand:
    """Tests for building commands from plain mappings."""

    def test_parse_by_action(self):
        """Test that the action field selects the command type."""
        command = parse_command({"action": "submit_enrollment", "course_id": "2", "student_name": "Alice"})

        assert isinstance(command, SubmitEnrollment)
        assert command.course_id == "2"
        assert command.student_email == ""

    def test_unknown_action(self):
        """Test that an unknown action is rejected."""
        with pytest.raises(PydanticValidationError):
            parse_command({"action": "drop_tables"})


class TestCourseCommands:
    """Tests for course commands."""

    def test_submit_creates_course(self, dispatcher, course_store):
        """Test that submitting a fresh form creates a course."""
        result = dispatcher.execute(SubmitCourse(title="Algebra", description="Linear equations"))

        assert result.ok is True
        assert result.category == Category.SUCCESS
        assert result.message == "Course created successfully"
        assert result.record["id"] == 1
        assert result.refresh == {View.COURSES, View.COURSE_OPTIONS, View.ENROLLMENTS}
        assert len(course_store.list()) == 1

    def test_submit_invalid_course(self, dispatcher, course_store):
        """Test that validation errors become error results."""
        result = dispatcher.execute(SubmitCourse(title="ab", description="Linear equations"))

        assert result.ok is False
        assert result.category == Category.ERROR
        assert result.message == "Course title must be at least 3 characters."
        assert result.refresh == frozenset()
        assert course_store.list() == []

    def test_edit_then_submit_updates(self, dispatcher, course_store, sample_course):
        """Test that submitting while editing updates the edited course."""
        edit = dispatcher.execute(EditCourse(course_id=sample_course.id))

        assert edit.category == Category.INFO
        assert edit.message == f"Editing course ID {sample_course.id}"
        assert edit.record["title"] == sample_course.title
        assert dispatcher.editing_course_id == sample_course.id

        result = dispatcher.execute(SubmitCourse(title="Algebra II", description="Quadratics"))

        assert result.message == "Course updated successfully"
        assert dispatcher.editing_course_id is None
        assert [c.title for c in course_store.list()] == ["Algebra II"]

    def test_failed_update_keeps_editing(self, dispatcher, sample_course):
        """Test that a rejected update leaves the form in editing mode."""
        dispatcher.execute(EditCourse(course_id=sample_course.id))

        result = dispatcher.execute(SubmitCourse(title="x", description="Quadratics"))

        assert result.ok is False
        assert dispatcher.editing_course_id == sample_course.id

    def test_edit_missing_course(self, dispatcher):
        """Test that editing an unknown course is an error result."""
        result = dispatcher.execute(EditCourse(course_id=9))

        assert result.ok is False
        assert result.message == "Course not found!"
        assert dispatcher.editing_course_id is None

    def test_reset_leaves_editing_mode(self, dispatcher, course_store, sample_course):
        """Test that resetting the form makes the next submit a create."""
        dispatcher.execute(EditCourse(course_id=sample_course.id))
        dispatcher.execute(ResetCourseForm())

        result = dispatcher.execute(SubmitCourse(title="Geometry", description="Shapes and angles"))

        assert result.message == "Course created successfully"
        assert len(course_store.list()) == 2

    def test_delete_course(self, dispatcher, course_store, sample_course):
        """Test that delete removes the course and asks for a refresh."""
        dispatcher.execute(EditCourse(course_id=sample_course.id))

        result = dispatcher.execute(DeleteCourse(course_id=sample_course.id))

        assert result.ok is True
        assert result.message == "Course deleted"
        assert View.COURSE_OPTIONS in result.refresh
        assert dispatcher.editing_course_id is None
        assert course_store.list() == []

    def test_delete_enrolled_course(self, dispatcher, sample_course, enrollment_store):
        """Test that deleting an enrolled course is an error result."""
        enrollment_store.create(sample_course.id, "Alice", "a@b.com")

        result = dispatcher.execute(DeleteCourse(course_id=sample_course.id))

        assert result.ok is False
        assert result.message == "Cannot delete course: enrollments exist."


class TestEnrollmentCommands:
    """Tests for enrollment commands."""

    def test_submit_creates_enrollment(self, dispatcher, sample_course):
        """Test that submitting a fresh form enrolls the student."""
        result = dispatcher.execute(
            SubmitEnrollment(course_id=str(sample_course.id), student_name="Alice", student_email="a@b.com")
        )

        assert result.ok is True
        assert result.message == "Student enrolled successfully"
        assert result.record["courseId"] == sample_course.id
        assert result.refresh == {View.ENROLLMENTS}

    def test_submit_without_course(self, dispatcher):
        """Test that an empty course selection is an error result."""
        result = dispatcher.execute(SubmitEnrollment(course_id="", student_name="Alice", student_email="a@b.com"))

        assert result.ok is False
        assert result.message == "Please select a course."

    def test_submit_duplicate(self, dispatcher, sample_course):
        """Test that a duplicate enrollment is an error result."""
        command = SubmitEnrollment(course_id=sample_course.id, student_name="Alice", student_email="a@b.com")
        dispatcher.execute(command)

        result = dispatcher.execute(command)

        assert result.ok is False
        assert result.message == "This student email already enrolled in this course."

    def test_edit_then_submit_updates(self, dispatcher, sample_course, enrollment_store):
        """Test that submitting while editing updates the enrollment."""
        enrollment = enrollment_store.create(sample_course.id, "Alice", "a@b.com")

        edit = dispatcher.execute(EditEnrollment(enrollment_id=enrollment.id))
        result = dispatcher.execute(
            SubmitEnrollment(course_id=sample_course.id, student_name="Alice Smith", student_email="a@b.com")
        )

        assert edit.message == f"Editing enrollment ID {enrollment.id}"
        assert result.message == "Enrollment updated"
        assert dispatcher.editing_enrollment_id is None
        assert enrollment_store.get(enrollment.id).student_name == "Alice Smith"

    def test_edit_missing_enrollment(self, dispatcher):
        """Test that editing an unknown enrollment is an error result."""
        result = dispatcher.execute(EditEnrollment(enrollment_id=3))

        assert result.ok is False
        assert result.message == "Enrollment not found!"

    def test_reset_enrollment_form(self, dispatcher, sample_course, enrollment_store):
        """Test that reset clears the edited enrollment."""
        enrollment = enrollment_store.create(sample_course.id, "Alice", "a@b.com")
        dispatcher.execute(EditEnrollment(enrollment_id=enrollment.id))

        result = dispatcher.execute(ResetEnrollmentForm())

        assert result.category == Category.INFO
        assert dispatcher.editing_enrollment_id is None

    def test_delete_enrollment(self, dispatcher, sample_course, enrollment_store):
        """Test that delete removes the enrollment."""
        enrollment = enrollment_store.create(sample_course.id, "Alice", "a@b.com")

        result = dispatcher.execute(DeleteEnrollment(enrollment_id=enrollment.id))

        assert result.message == "Enrollment deleted"
        assert enrollment_store.list() == []

    def test_delete_missing_enrollment(self, dispatcher):
        """Test that deleting an unknown enrollment is an error result."""
        result = dispatcher.execute(DeleteEnrollment(enrollment_id=8))

        assert result.ok is False
        assert result.message == "Enrollment not found!"


class TestExecuteInput:
    """Tests for what execute accepts."""

    def test_mapping_is_parsed(self, dispatcher, course_store):
        """Test that a plain dict runs as the command its action names."""
        result = dispatcher.execute(
            {"action": "submit_course", "title": "Algebra", "description": "Linear equations"}
        )

        assert result.ok is True
        assert [c.title for c in course_store.list()] == ["Algebra"]

    def test_mapping_with_unknown_action(self, dispatcher):
        """Test that an invalid mapping raises a pydantic error."""
        with pytest.raises(PydanticValidationError):
            dispatcher.execute({"action": "archive_course"})

    def test_unsupported_object(self, dispatcher):
        """Test that a non-command raises TypeError naming its type."""
        with pytest.raises(TypeError, match="Unsupported command: object"):
            dispatcher.execute(object())


class TestPersistenceFailures:
    """Tests that storage failures are not turned into results."""

    def test_persistence_error_propagates(self, dispatcher, gateway, monkeypatch):
        """Test that a failed save raises instead of returning a result."""

        def broken_save(key, records):
            raise PersistenceError("disk full")

        monkeypatch.setattr(gateway, "save", broken_save)

        with pytest.raises(PersistenceError):
            dispatcher.execute(SubmitCourse(title="Algebra", description="Linear equations"))
