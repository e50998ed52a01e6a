"""Health check endpoint."""

from fastapi import APIRouter

from issuetracker.api.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    """Report that the service is up."""
    return HealthResponse(status="ok")
