"""
Health repository.
Checks that the tables the call center API depends on answer queries.
"""

from typing import Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core.logging import get_logger
from app.models import CallCenter, User

logger = get_logger(__name__)


class HealthRepository:
    """Repository for health check operations."""

    tables = {
        CallCenter.__tablename__: CallCenter,
        User.__tablename__: User,
    }

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_tables(self) -> Dict[str, bool]:
        """
        Run a one-row read against each table.

        Returns:
            Mapping of table name to whether the read succeeded
        """
        reachable = {}
        for name, model in self.tables.items():
            try:
                await self.session.execute(select(model.id).limit(1))
                reachable[name] = True
            except SQLAlchemyError as e:
                logger.warning("Table check failed", extra={"table": name, "error": str(e)})
                await self.session.rollback()
                reachable[name] = False
        return reachable
