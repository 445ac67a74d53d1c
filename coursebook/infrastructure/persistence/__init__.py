# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Persistence gateways for course and enrollment snapshots.

Example:
    from coursebook.infrastructure.persistence import JsonFileGateway

    gateway = JsonFileGateway(".coursebook")
    gateway.save("courses", [course.to_record() for course in courses])
    records = gateway.load("courses")
"""

from coursebook.infrastructure.persistence.gateway import (
    COURSES_KEY,
    ENROLLMENTS_KEY,
    InMemoryGateway,
    PersistenceError,
    PersistenceGateway,
)
from coursebook.infrastructure.persistence.json_file import JsonFileGateway
from coursebook.infrastructure.persistence.redis_gateway import RedisGateway

__all__ = [
    "COURSES_KEY",
    "ENROLLMENTS_KEY",
    "PersistenceGateway",
    "PersistenceError",
    "InMemoryGateway",
    "JsonFileGateway",
    "RedisGateway",
]
