"""Field validation for student records.

Every rule is checked independently so a caller gets all problems at once,
with at most one message per field.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any

from registrar.student_store.models import INTEGER_MAX, NAME_MAX_LENGTH, StudentRecord

MIN_BIRTH_DATE = date(1900, 1, 1)
MIN_COURSE = 1
MAX_COURSE = INTEGER_MAX

_NAME_PATTERN = re.compile(r"[A-Za-z\s]+")
_INTEGER_PATTERN = re.compile(r"[+-]?\d+")
_ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}(?:[T ].*)?", re.DOTALL)


class StudentValidationError(ValueError):
    """Raised when a student record breaks one or more field rules."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


def parse_birth_date(value: Any) -> date | None:
    """Parse an extended-format ISO-8601 date into a date.

    Only ``YYYY-MM-DD`` is accepted, optionally followed by a time part
    (``2001-05-17T10:30:00``), which is dropped. The compact (``20010517``)
    and week-date (``2001-W20-4``) forms that ``date.fromisoformat`` also
    understands are rejected.

    Returns:
        The calendar date, or None if the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not _ISO_DATE_PATTERN.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_course(value: Any) -> int | None:
    """Parse a course number given as an int or a string of digits.

    Decimals and booleans are not accepted.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_PATTERN.fullmatch(value.strip()):
        try:
            return int(value.strip())
        except ValueError:
            # Past the interpreter's int string conversion limit
            return None
    return None


def _name_error(label: str, value: Any) -> str | None:
    if isinstance(value, str) and len(value) > NAME_MAX_LENGTH:
        return f"{label} exceeds {NAME_MAX_LENGTH} characters."
    if not isinstance(value, str) or not _NAME_PATTERN.fullmatch(value):
        return f"{label} must contain only letters."
    return None


def _birth_date_error(value: Any, today: date) -> str | None:
    parsed = parse_birth_date(value)
    if parsed is None:
        return "Birth date must be a valid date."
    if parsed > today:
        return "Birth date cannot be in the future."
    if parsed < MIN_BIRTH_DATE:
        return f"Birth date cannot be before {MIN_BIRTH_DATE.isoformat()}."
    return None


def _course_error(value: Any) -> str | None:
    course = parse_course(value)
    if course is None or not MIN_COURSE <= course <= MAX_COURSE:
        return "Course must be a positive number."
    return None


def validate_student(
    first_name: Any,
    last_name: Any,
    birth_date: Any,
    course: Any,
    is_erasmus: Any = False,  # noqa: ARG001 - no rule applies
    today: date | None = None,
) -> list[str]:
    """Check a candidate student against the field rules.

    Args:
        first_name: At most 40 characters, letters and whitespace only.
        last_name: Same rules as first_name.
        birth_date: ISO date between 1900-01-01 and today, inclusive.
        course: Integer between 1 and MAX_COURSE, as an int or a numeric string.
        is_erasmus: Not checked.
        today: Reference date for the future check. Defaults to date.today().

    Returns:
        Human-readable error messages, empty when the record is valid.
    """
    if today is None:
        today = date.today()

    checks = [
        _name_error("First name", first_name),
        _name_error("Last name", last_name),
        _birth_date_error(birth_date, today),
        _course_error(course),
    ]
    return [error for error in checks if error is not None]


def clean_student(
    first_name: Any,
    last_name: Any,
    birth_date: Any,
    course: Any,
    is_erasmus: Any = False,
    today: date | None = None,
) -> StudentRecord:
    """Validate a candidate student and convert it to storage types.

    Raises:
        StudentValidationError: If any field rule fails.
    """
    errors = validate_student(first_name, last_name, birth_date, course, is_erasmus, today)
    if errors:
        raise StudentValidationError(errors)

    return StudentRecord(
        first_name=first_name,
        last_name=last_name,
        birth_date=parse_birth_date(birth_date),  # type: ignore[arg-type]
        course=parse_course(course),  # type: ignore[arg-type]
        is_erasmus=bool(is_erasmus),
    )
