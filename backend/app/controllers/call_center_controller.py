"""
Call center controller.

Every operation runs its checks in the same order once the caller is
authenticated: existence (404), ownership (403), then the request
document (422). Request bodies arrive as raw bytes and are parsed here,
so a malformed body can never mask an authentication failure.
"""

from typing import Dict, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.controllers.base_controller import BaseController
from app.core.exceptions import ForbiddenError, NotFoundError, UnprocessableEntityError
from app.models.call_center import CallCenter
from app.models.user import User
from app.services.call_center_service import CallCenterService
from app.schemas.call_center import (
    CALL_CENTER_TYPE,
    CallCenterCreate,
    CallCenterUpdate,
    CallCenterRequest,
    CallCenterResource,
    CallCenterResponse,
    CallCenterListMeta,
    CallCenterListResponse,
)

SchemaType = TypeVar("SchemaType", bound=BaseModel)


class CallCenterController(BaseController):
    """Controller for call center operations."""

    def __init__(self, session: AsyncSession):
        self.call_center_service = CallCenterService(session)

    async def list_call_centers(self, user: User, skip: int = 0, limit: int = 100) -> CallCenterListResponse:
        """List call centers the user manages."""
        resources, total = await self.call_center_service.list_manageable_call_centers(
            user,
            skip=skip,
            limit=limit,
        )
        return CallCenterListResponse(data=resources, meta=CallCenterListMeta(total=total))

    async def get_call_center(self, user: User, call_center_id: str) -> CallCenterResponse:
        """Get a call center the user manages."""
        call_center = await self._find_manageable(user, call_center_id)
        return CallCenterResponse(data=CallCenterResource.from_model(call_center))

    async def create_call_center(self, user: User, body: bytes) -> CallCenterResponse:
        """Create a call center owned by the user."""
        attributes = self._attributes(self._document(body), CallCenterCreate)
        resource = await self.call_center_service.create_call_center(attributes, owner=user)
        return CallCenterResponse(data=resource)

    async def update_call_center(
        self,
        user: User,
        call_center_id: str,
        body: bytes,
    ) -> CallCenterResponse:
        """Update a call center the user manages."""
        call_center = await self._find_manageable(user, call_center_id)
        attributes = self._attributes(self._document(body), CallCenterUpdate)
        resource = await self.call_center_service.update_call_center(call_center, attributes)
        return CallCenterResponse(data=resource)

    async def delete_call_center(self, user: User, call_center_id: str) -> None:
        """Soft-delete a call center the user manages."""
        call_center = await self._find_manageable(user, call_center_id)
        await self.call_center_service.delete_call_center(call_center)

    async def _find_manageable(self, user: User, call_center_id: str) -> CallCenter:
        call_center = await self.call_center_service.find_call_center(call_center_id)
        if not call_center:
            raise NotFoundError("Call center not found")
        if not await self.call_center_service.can_manage(call_center, user):
            raise ForbiddenError("You are not allowed to manage this call center")
        return call_center

    @staticmethod
    def _document(body: bytes) -> Optional[CallCenterRequest]:
        """Parse a raw request body; an empty body is no document."""
        if not body or not body.strip():
            return None

        try:
            return CallCenterRequest.model_validate_json(body)
        except ValidationError as e:
            details: Dict[str, str] = {}
            for error in e.errors():
                # Empty loc means the body is not JSON at all: no pointer
                pointer = "/".join(str(part) for part in error["loc"])
                details.setdefault(pointer, error["msg"])
            raise UnprocessableEntityError("Malformed request document", details=details, pointer_prefix="/")

    @staticmethod
    def _attributes(document: Optional[CallCenterRequest], schema: Type[SchemaType]) -> SchemaType:
        """Check the resource type and validate the attributes against ``schema``."""
        if document is None or document.data is None:
            raise UnprocessableEntityError("Request document must contain data")

        if document.data.type != CALL_CENTER_TYPE:
            raise UnprocessableEntityError(f"Resource type must be '{CALL_CENTER_TYPE}'")

        try:
            return schema.model_validate(document.data.attributes)
        except ValidationError as e:
            details: Dict[str, str] = {}
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"]) or "base"
                details.setdefault(field, error["msg"])
            raise UnprocessableEntityError("Validation failed", details=details)
