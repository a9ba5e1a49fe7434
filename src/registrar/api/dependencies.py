"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from registrar.student_store import StudentRepository


def get_student_store(request: Request) -> StudentRepository:
    """Dependency that provides the store built at application startup."""
    store = getattr(request.app.state, "student_store", None)
    if store is None:
        raise RuntimeError("Student store not initialized. Is the app lifespan running?")
    return store


# Type alias for dependency injection
StudentStoreDep = Annotated[StudentRepository, Depends(get_student_store)]
