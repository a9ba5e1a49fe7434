"""Shared pytest fixtures and configuration."""

from datetime import date

import pytest

from registrar.student_store import StudentRecord, StudentStore


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def store():
    """Create an in-memory StudentStore."""
    s = StudentStore(":memory:")
    yield s
    s.close()


def make_record(**overrides) -> StudentRecord:
    """Build a valid StudentRecord, overriding any field."""
    fields = {
        "first_name": "Anna",
        "last_name": "Smith",
        "birth_date": date(2001, 5, 17),
        "course": 2,
        "is_erasmus": False,
    }
    fields.update(overrides)
    return StudentRecord(**fields)


@pytest.fixture
def record_factory():
    """Factory for valid StudentRecord values."""
    return make_record


def valid_payload(**overrides) -> dict:
    """JSON body for a valid POST/PUT /students request."""
    body = {
        "first_name": "Anna",
        "last_name": "Smith",
        "birth_date": "2001-05-17",
        "course": 2,
        "is_erasmus": False,
    }
    body.update(overrides)
    return body


@pytest.fixture
def payload_factory():
    """Factory for valid request bodies."""
    return valid_payload
