"""FastAPI application setup."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from registrar import __version__
from registrar.api.models import ErrorResponse, ValidationErrorResponse
from registrar.api.routes import health, students
from registrar.config import Settings
from registrar.logging import setup_logging
from registrar.student_store import StudentNotFoundError, StudentStore, StudentStoreError
from registrar.validation import StudentValidationError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from registrar.student_store import StudentRepository

logger = logging.getLogger(__name__)


def _describe_request_error(error: dict) -> str:
    """Render one pydantic error as "field: message"."""
    loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
    message = error.get("msg", "Invalid value")
    return f"{'.'.join(loc)}: {message}" if loc else message


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the student store unless one was injected into create_app, in which
    case the caller owns its lifecycle.
    """
    owns_store = app.state.student_store is None
    if owns_store:
        settings: Settings = app.state.settings
        logger.info("Opening student store at %s", settings.safe_database_url)
        app.state.student_store = StudentStore(settings.database_url)

    yield

    if owns_store:
        app.state.student_store.close()
        app.state.student_store = None


def create_app(
    settings: Settings | None = None,
    store: StudentRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Runtime settings. Read from the environment when omitted.
                  Logging is configured here when settings.log_dir is set.
        store: Storage to serve from. Built from settings.database_url at
               startup when omitted.
    """
    if settings is None:
        settings = Settings.from_env()
    if settings.log_dir is not None:
        setup_logging(settings.log_dir, level=settings.log_level)

    app = FastAPI(
        title="Registrar API",
        description="REST API for managing student records",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.student_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(StudentValidationError)
    async def student_validation_handler(
        request: Request, exc: StudentValidationError
    ) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(errors=exc.errors).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [_describe_request_error(e) for e in exc.errors()]
        logger.info("Malformed %s %s: %s", request.method, request.url.path, errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ValidationErrorResponse(errors=errors).model_dump(),
        )

    @app.exception_handler(StudentNotFoundError)
    async def student_not_found_handler(
        _request: Request, _exc: StudentNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(error="Student not found").model_dump(),
        )

    @app.exception_handler(StudentStoreError)
    async def student_store_error_handler(
        _request: Request, exc: StudentStoreError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(exc)).model_dump(),
        )

    # Include routers
    app.include_router(students.router)
    app.include_router(health.router)

    return app
