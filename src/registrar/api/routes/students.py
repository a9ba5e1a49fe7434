"""Student CRUD endpoints."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from registrar.api.dependencies import StudentStoreDep
from registrar.api.models import (
    ErrorResponse,
    MessageResponse,
    StudentPayload,
    StudentResponse,
    ValidationErrorResponse,
    student_to_response,
)
from registrar.student_store.models import INTEGER_MAX
from registrar.validation import clean_student

router = APIRouter(prefix="/students", tags=["students"])

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
INVALID = {status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse}}

StudentId = Annotated[int, Path(ge=1, le=INTEGER_MAX, description="Student id")]


@router.get("", response_model=list[StudentResponse])
def list_students(
    store: StudentStoreDep,
    search: str | None = Query(
        default=None, description="Case-insensitive match on first or last name"
    ),
) -> list[StudentResponse]:
    """List students ordered by id, optionally filtered by name."""
    students = store.list_students(search=search)
    return [student_to_response(s) for s in students]


@router.post(
    "",
    response_model=StudentResponse,
    status_code=status.HTTP_201_CREATED,
    responses=INVALID,
)
def create_student(student: StudentPayload, store: StudentStoreDep) -> StudentResponse:
    """Create a new student."""
    record = clean_student(
        student.first_name,
        student.last_name,
        student.birth_date,
        student.course,
        student.is_erasmus,
    )
    created = store.create_student(record)
    return student_to_response(created)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    responses={**INVALID, **NOT_FOUND},
)
def get_student(student_id: StudentId, store: StudentStoreDep) -> StudentResponse:
    """Get a student by ID."""
    return student_to_response(store.get_student(student_id))


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    responses={**INVALID, **NOT_FOUND},
)
def update_student(
    student_id: StudentId, student: StudentPayload, store: StudentStoreDep
) -> StudentResponse:
    """Replace all fields of a student."""
    record = clean_student(
        student.first_name,
        student.last_name,
        student.birth_date,
        student.course,
        student.is_erasmus,
    )
    updated = store.update_student(student_id, record)
    return student_to_response(updated)


@router.delete(
    "/{student_id}",
    response_model=MessageResponse,
    responses={**INVALID, **NOT_FOUND},
)
def delete_student(student_id: StudentId, store: StudentStoreDep) -> MessageResponse:
    """Delete a student."""
    store.delete_student(student_id)
    return MessageResponse(message="Student deleted successfully")
