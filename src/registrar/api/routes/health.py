"""Health check endpoint."""

from fastapi import APIRouter

from registrar.api.dependencies import StudentStoreDep
from registrar.api.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(store: StudentStoreDep) -> HealthResponse:
    """Report service status and the number of stored students."""
    return HealthResponse(status="ok", students=store.count_students())
