"""Health check endpoint."""

from fastapi import APIRouter
from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str


router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="ok")
