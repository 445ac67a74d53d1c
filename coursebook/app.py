# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application bootstrap.

Builds the stores on a persistence gateway, loads their snapshots and hands
back an explicit container. Nothing here is a process-wide singleton.

Example:
    from coursebook.app import create_gateway, initialize
    from coursebook.core.config import get_settings
    from coursebook.utils.logging import setup_logging

    settings = get_settings()
    setup_logging(settings)
    book = initialize(create_gateway(settings))
    book.dispatcher.execute(SubmitCourse(title="Algebra", description="Linear equations"))
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from coursebook.api.commands import CommandDispatcher
from coursebook.core.config.settings import Settings
from coursebook.domains.course.service import CourseStore
from coursebook.domains.enrollment.service import EnrollmentStore
from coursebook.infrastructure.persistence import (
    InMemoryGateway,
    JsonFileGateway,
    PersistenceGateway,
    RedisGateway,
)
from coursebook.utils.datetime import utc_now

logger = logging.getLogger(__name__)


@dataclass
class Coursebook:
    """Initialized stores and the dispatcher wired to them."""

    courses: CourseStore
    enrollments: EnrollmentStore
    dispatcher: CommandDispatcher = field(init=False)

    def __post_init__(self) -> None:
        self.dispatcher = CommandDispatcher(self.courses, self.enrollments)


def create_gateway(settings: Settings) -> PersistenceGateway:
    """Build the persistence gateway selected by the storage settings."""
    backend = settings.storage.backend
    if backend == "memory":
        return InMemoryGateway()
    if backend == "redis":
        return RedisGateway.from_settings(settings)
    return JsonFileGateway(settings.storage.directory)


def initialize(
    gateway: PersistenceGateway,
    clock: Callable[[], datetime] = utc_now,
) -> Coursebook:
    """Create both stores on the gateway and load their snapshots.

    Courses load first so enrollments can be checked against them.

    Raises:
        PersistenceError: If a stored snapshot cannot be read or parsed.
    """
    courses = CourseStore(gateway, clock=clock)
    enrollments = EnrollmentStore(gateway, courses, clock=clock)
    courses.initialize()
    enrollments.initialize()

    logger.info(
        "Coursebook initialized: %d courses, %d enrollments",
        len(courses.list()),
        len(enrollments.list()),
    )
    return Coursebook(courses=courses, enrollments=enrollments)
