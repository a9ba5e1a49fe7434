"""Student Store - Persistent storage for student records."""

from registrar.student_store.exceptions import (
    StudentNotFoundError,
    StudentStoreError,
)
from registrar.student_store.models import Student, StudentRecord
from registrar.student_store.store import StudentRepository, StudentStore

__all__ = [
    "Student",
    "StudentNotFoundError",
    "StudentRecord",
    "StudentRepository",
    "StudentStore",
    "StudentStoreError",
]
