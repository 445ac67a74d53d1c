# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Persistence gateway port and the in-memory implementation.

A gateway stores whole-collection snapshots under a key. Each save replaces
the previous snapshot in one step; readers never observe a partial write.

Example:
    gateway = InMemoryGateway()
    gateway.save("courses", [{"id": 1, "title": "Intro"}])
    records = gateway.load("courses")
"""

import json
import logging
from typing import Any, Optional, Protocol, runtime_checkable

from coursebook.domains.errors import CoursebookError

logger = logging.getLogger(__name__)

COURSES_KEY = "courses"
ENROLLMENTS_KEY = "enrollments"


class PersistenceError(CoursebookError):
    """Exception raised when a snapshot cannot be read or written.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying error, if any.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the persistence error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


@runtime_checkable
class PersistenceGateway(Protocol):
    """Key-value storage of whole-collection snapshots."""

    def load(self, key: str) -> list[dict[str, Any]]:
        """Return the records stored under key, or an empty list."""
        ...

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        """Replace the snapshot stored under key."""
        ...


def serialize_snapshot(key: str, records: list[dict[str, Any]]) -> str:
    """Encode a snapshot as a JSON array.

    Raises:
        PersistenceError: If a record is not JSON serializable.
    """
    try:
        return json.dumps(records, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Failed to serialize snapshot: {key}", e) from e


def deserialize_snapshot(key: str, raw: Optional[str]) -> list[dict[str, Any]]:
    """Decode a stored JSON array; missing or ``null`` snapshots are empty.

    Raises:
        PersistenceError: If the payload is not a JSON array of objects.
    """
    if raw is None:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise PersistenceError(f"Corrupt snapshot: {key}", e) from e
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise PersistenceError(f"Snapshot is not a list of records: {key}")
    return data


class InMemoryGateway:
    """Gateway keeping serialized snapshots in a dict.

    Snapshots are stored as JSON text, like browser localStorage, so a
    loaded snapshot never shares objects with the store that saved it.

    Attributes:
        data: Mapping of key to JSON text.
    """

    def __init__(self, data: Optional[dict[str, str]] = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def load(self, key: str) -> list[dict[str, Any]]:
        return deserialize_snapshot(key, self.data.get(key))

    def save(self, key: str, records: list[dict[str, Any]]) -> None:
        self.data[key] = serialize_snapshot(key, records)
        logger.debug("Saved %d records to memory key %s", len(records), key)
