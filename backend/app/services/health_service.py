"""
Health service.
Reports whether the API can reach the call center and user tables.
"""

import time
from typing import Callable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.services.base_service import BaseService
from app.schemas.health import HealthResponse
from app.db.repositories.health_repository import HealthRepository

logger = get_logger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self, session_factory: Optional[Callable[[], AsyncSession]] = None):
        self.start_time = time.time()
        self._session_factory = session_factory

    def _get_session_factory(self) -> Callable[[], AsyncSession]:
        if self._session_factory is not None:
            return self._session_factory

        from app.db import session as db_session
        if db_session.async_session_maker is None:
            db_session.create_sessionmaker()
        return db_session.async_session_maker

    async def get_health(self) -> HealthResponse:
        """
        Check every table the API serves from.

        Returns:
            HealthResponse with one check per table; ``degraded`` when any fails
        """
        uptime_str = f"PT{int(time.time() - self.start_time)}S"  # ISO 8601 duration

        try:
            async with self._get_session_factory()() as session:
                reachable = await HealthRepository(session=session).check_tables()
            checks = {table: "ok" if ok else "unreachable" for table, ok in reachable.items()}
        except Exception as e:
            logger.warning("Database connection failed", extra={"error": str(e)})
            checks = {table: f"error: {e}" for table in HealthRepository.tables}

        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"
        if status != "ok":
            logger.warning("Health check degraded", extra={"checks": checks})

        return HealthResponse(
            status=status,
            version=settings.VERSION,
            uptime=uptime_str,
            checks=checks,
        )
