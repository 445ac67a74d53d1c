# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment record model."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from coursebook.utils.datetime import ensure_utc, format_iso, parse_iso


class Enrollment(BaseModel):
    """A record linking one student (name and email) to one course.

    The course is referenced by id only; EnrollmentStore keeps that id
    pointing at an existing course.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(gt=0)
    course_id: int = Field(
        validation_alias=AliasChoices("courseId", "course_id"),
        serialization_alias="courseId",
    )
    student_name: str = Field(
        validation_alias=AliasChoices("studentName", "student_name", "name"),
        serialization_alias="studentName",
    )
    student_email: str = Field(
        validation_alias=AliasChoices("studentEmail", "student_email", "email"),
        serialization_alias="studentEmail",
    )
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
    )

    @field_validator("created_at", mode="before")
    @classmethod
    def normalize_created_at(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_iso(value)
        if isinstance(value, datetime):
            return ensure_utc(value)
        return value

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return format_iso(value)

    def to_record(self) -> dict[str, Any]:
        """Serialize to the stored JSON shape."""
        return self.model_dump(mode="json", by_alias=True)
