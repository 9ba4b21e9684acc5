"""
Health check endpoint.
Public; reports whether the call center and user tables are reachable.
"""

from fastapi import APIRouter, Response

from app.schemas.health import HealthResponse
from app.deps.di_container import get_container

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def get_health(response: Response) -> HealthResponse:
    """Table reachability, version and uptime; 503 when degraded."""
    controller = get_container().health_controller()
    return await controller.get_health(response)
