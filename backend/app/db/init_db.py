"""
Database bootstrapping.
Creates the schema straight from model metadata for local and SQLite setups.
"""

from app.db.base import Base
from app.db import session as db_session
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables registered on Base.
    In production, manage the schema with migrations instead.
    """
    # Register every model with Base.metadata
    import app.models  # noqa: F401

    if db_session.engine is None:
        db_session.create_engine()

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})
