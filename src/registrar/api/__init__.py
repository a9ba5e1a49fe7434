"""REST API for Registrar."""

from registrar.api.app import create_app
from registrar.api.models import (
    StudentPayload,
    StudentResponse,
)

__all__ = [
    "StudentPayload",
    "StudentResponse",
    "create_app",
]
