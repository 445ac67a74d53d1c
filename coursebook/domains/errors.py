# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Errors raised by the course and enrollment stores.

Every error carries a human-readable message suitable for showing to the
user as-is. A store raises before touching its collection or storage, so
catching one of these never requires a rollback.
"""


class CoursebookError(Exception):
    """Base exception for Coursebook errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CoursebookError):
    """Raised when input is malformed (too short, missing, bad format)."""

    pass


class NotFoundError(CoursebookError):
    """Raised when a referenced course or enrollment id does not exist."""

    pass


class ConflictError(CoursebookError):
    """Raised when an operation would break referential integrity or uniqueness."""

    pass
