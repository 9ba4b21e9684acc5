"""
Call center repository for database operations.
Soft-deleted rows are invisible to every lookup here.
"""

from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, func, and_

from app.db.repositories.base_repository import BaseRepository
from app.models.call_center import CallCenter
from app.models.association_tables import call_center_users


class CallCenterRepository(BaseRepository[CallCenter]):
    """Repository for call center operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(CallCenter, session)

    async def get_active(self, call_center_id: UUID) -> Optional[CallCenter]:
        """Get a call center that has not been deleted."""
        result = await self.session.execute(
            select(CallCenter).where(
                CallCenter.id == call_center_id,
                CallCenter.deleted_at.is_(None),
            )
        )
        return result.scalar_one_or_none()

    def _owned_by(self, user_id: UUID):
        return (
            select(CallCenter)
            .join(call_center_users, call_center_users.c.call_center_id == CallCenter.id)
            .where(
                call_center_users.c.user_id == user_id,
                CallCenter.deleted_at.is_(None),
            )
        )

    async def list_by_user(self, user_id: UUID, skip: int = 0, limit: int = 100) -> List[CallCenter]:
        """List call centers the user manages, ordered by name."""
        query = (
            self._owned_by(user_id)
            .order_by(CallCenter.name, CallCenter.id)
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_by_user(self, user_id: UUID) -> int:
        """Count call centers the user manages."""
        query = select(func.count()).select_from(self._owned_by(user_id).subquery())
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def is_managed_by(self, call_center_id: UUID, user_id: UUID) -> bool:
        """Check whether an ownership edge links the call center and the user."""
        result = await self.session.execute(
            select(call_center_users.c.call_center_id).where(
                and_(
                    call_center_users.c.call_center_id == call_center_id,
                    call_center_users.c.user_id == user_id,
                )
            )
        )
        return result.first() is not None

    async def add_owner(self, call_center_id: UUID, user_id: UUID) -> None:
        """Link a user to a call center."""
        await self.session.execute(
            insert(call_center_users).values(call_center_id=call_center_id, user_id=user_id)
        )
        await self.session.flush()

    async def soft_delete(self, call_center: CallCenter) -> CallCenter:
        """Stamp deleted_at; the row is kept."""
        call_center.deleted_at = datetime.now(timezone.utc)
        await self.session.flush()
        return call_center
