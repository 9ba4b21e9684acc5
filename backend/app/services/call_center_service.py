"""
Call center service with business logic.
"""

from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.logging import get_logger
from app.services.base_service import BaseService
from app.db.repositories.call_center_repository import CallCenterRepository
from app.models.call_center import CallCenter
from app.models.user import User
from app.schemas.call_center import (
    CallCenterCreate,
    CallCenterUpdate,
    CallCenterResource,
)

logger = get_logger(__name__)


class CallCenterService(BaseService):
    """Service for call center operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.call_center_repo = CallCenterRepository(session)

    async def find_call_center(self, call_center_id: str) -> Optional[CallCenter]:
        """
        Look up a live call center by its string ID.

        Malformed IDs and soft-deleted rows are reported the same way as
        missing rows: None.
        """
        try:
            parsed_id = UUID(str(call_center_id))
        except ValueError:
            return None
        return await self.call_center_repo.get_active(parsed_id)

    async def can_manage(self, call_center: CallCenter, user: User) -> bool:
        """Whether the user owns the call center."""
        return await self.call_center_repo.is_managed_by(call_center.id, user.id)

    async def list_manageable_call_centers(
        self,
        user: User,
        skip: int = 0,
        limit: int = 100,
    ) -> Tuple[List[CallCenterResource], int]:
        """List call centers the user manages."""
        call_centers = await self.call_center_repo.list_by_user(user.id, skip, limit)
        total = await self.call_center_repo.count_by_user(user.id)
        return [CallCenterResource.from_model(cc) for cc in call_centers], total

    async def create_call_center(self, call_center_data: CallCenterCreate, owner: User) -> CallCenterResource:
        """Create a call center and make the creator its owner."""
        call_center = await self.call_center_repo.create(**call_center_data.model_dump())
        await self.call_center_repo.add_owner(call_center.id, owner.id)
        await self.session.commit()
        await self.session.refresh(call_center)

        logger.info(
            "Call center created",
            extra={"call_center_id": str(call_center.id), "user_id": str(owner.id)},
        )
        return CallCenterResource.from_model(call_center)

    async def update_call_center(
        self,
        call_center: CallCenter,
        call_center_data: CallCenterUpdate,
    ) -> CallCenterResource:
        """Apply the attributes that were sent."""
        update_dict = call_center_data.model_dump(exclude_unset=True)
        updated = await self.call_center_repo.update(call_center.id, **update_dict)
        await self.session.commit()
        await self.session.refresh(updated)

        logger.info(
            "Call center updated",
            extra={"call_center_id": str(updated.id), "fields": sorted(update_dict)},
        )
        return CallCenterResource.from_model(updated)

    async def delete_call_center(self, call_center: CallCenter) -> None:
        """Soft-delete a call center."""
        await self.call_center_repo.soft_delete(call_center)
        await self.session.commit()

        logger.info(
            "Call center deleted",
            extra={"call_center_id": str(call_center.id), "deleted_at": call_center.deleted_at.isoformat()},
        )
