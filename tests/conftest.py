# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across the unit tests:
- A fixed clock for deterministic timestamps
- In-memory persistence gateway
- Course and enrollment stores wired together
"""

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from coursebook.domains.course.service import CourseStore
from coursebook.domains.enrollment.service import EnrollmentStore
from coursebook.infrastructure.persistence import InMemoryGateway
from coursebook.models import Course


FIXED_NOW = datetime(2025, 3, 14, 9, 26, 53, tzinfo=timezone.utc)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def fixed_now() -> datetime:
    """Provide the instant returned by the test clock."""
    return FIXED_NOW


@pytest.fixture
def clock(fixed_now) -> Callable[[], datetime]:
    """Provide a clock that always returns the same instant."""
    return lambda: fixed_now


@pytest.fixture
def gateway() -> InMemoryGateway:
    """Provide an empty in-memory gateway."""
    return InMemoryGateway()


@pytest.fixture
def course_store(gateway, clock) -> CourseStore:
    """Create an initialized course store on the in-memory gateway."""
    store = CourseStore(gateway, clock=clock)
    store.initialize()
    return store


@pytest.fixture
def enrollment_store(gateway, course_store, clock) -> EnrollmentStore:
    """Create an initialized enrollment store wired to the course store."""
    store = EnrollmentStore(gateway, course_store, clock=clock)
    store.initialize()
    return store


@pytest.fixture
def sample_course(course_store) -> Course:
    """Create a sample course."""
    return course_store.create("Algebra I", "Linear equations and inequalities")
