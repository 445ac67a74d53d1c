# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course record model."""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator

from coursebook.utils.datetime import ensure_utc, format_iso, parse_iso


class Course(BaseModel):
    """An offered class/topic that students enroll in.

    Records are immutable; CourseStore.update swaps in a copy.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int = Field(gt=0)
    title: str
    description: str = Field(
        validation_alias=AliasChoices("description", "desc"),
        serialization_alias="description",
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
