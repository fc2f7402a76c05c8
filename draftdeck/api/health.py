"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel

from draftdeck.config import settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Service status and name."""

    status: str
    app: str


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Liveness probe. The deck engine has no external dependencies to check."""
    return HealthResponse(status="healthy", app=settings.app_name)
