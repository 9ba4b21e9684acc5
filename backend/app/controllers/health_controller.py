"""
Health controller.
"""

from fastapi import Response, status

from app.controllers.base_controller import BaseController
from app.schemas.health import HealthResponse
from app.services.health_service import HealthService


class HealthController(BaseController):
    """Controller for health check operations."""

    def __init__(self, health_service: HealthService = None):
        self.health_service = health_service or HealthService()

    async def get_health(self, response: Response) -> HealthResponse:
        """Answer 503 while any call center table is unreachable."""
        health = await self.health_service.get_health()
        if health.status != "ok":
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return health
