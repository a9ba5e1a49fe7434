"""Pydantic models for REST API."""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# Student models


class StudentPayload(BaseModel):
    """Request body for creating or replacing a student.

    Only the shape is checked here. Field rules (lengths, date range, course
    number) are applied by registrar.validation so that all violations are
    reported together.
    """

    first_name: str
    last_name: str
    birth_date: str
    course: StrictInt | str
    is_erasmus: bool = False


class StudentResponse(BaseModel):
    """Response model for a student row."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    last_name: str
    birth_date: date
    course: int
    is_erasmus: bool


def student_to_response(student: Any) -> StudentResponse:
    """Convert a Student model to StudentResponse."""
    return StudentResponse.model_validate(student)


# Generic bodies


class MessageResponse(BaseModel):
    """Response model for actions that return no row."""

    message: str


class ErrorResponse(BaseModel):
    """Body returned for not-found and storage failures."""

    error: str


class ValidationErrorResponse(BaseModel):
    """Body returned when a request fails validation."""

    errors: list[str] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    students: int
