"""
Call center API endpoints.

Request bodies are read inside the handlers, after authentication has run,
and are parsed by the controller.
"""

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v2.middleware import require_authentication
from app.db.session import get_db
from app.controllers.call_center_controller import CallCenterController
from app.models.user import User
from app.schemas.call_center import (
    CallCenterResponse,
    CallCenterListResponse,
)

router = APIRouter()


@router.get("", response_model=CallCenterListResponse)
async def list_call_centers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> CallCenterListResponse:
    """List call centers the caller manages."""
    controller = CallCenterController(db)
    return await controller.list_call_centers(current_user, skip=skip, limit=limit)


@router.get("/{call_center_id}", response_model=CallCenterResponse)
async def get_call_center(
    call_center_id: str,
    current_user: User = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> CallCenterResponse:
    """Get call center by ID."""
    controller = CallCenterController(db)
    return await controller.get_call_center(current_user, call_center_id)


@router.post("", response_model=CallCenterResponse, status_code=status.HTTP_201_CREATED)
async def create_call_center(
    request: Request,
    current_user: User = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> CallCenterResponse:
    """Create a call center owned by the caller."""
    controller = CallCenterController(db)
    return await controller.create_call_center(current_user, await request.body())


@router.patch("/{call_center_id}", response_model=CallCenterResponse)
async def update_call_center(
    call_center_id: str,
    request: Request,
    current_user: User = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> CallCenterResponse:
    """Update a call center."""
    controller = CallCenterController(db)
    return await controller.update_call_center(current_user, call_center_id, await request.body())


@router.delete("/{call_center_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_call_center(
    call_center_id: str,
    current_user: User = Depends(require_authentication),
    db: AsyncSession = Depends(get_db),
) -> Response:
    """Soft-delete a call center."""
    controller = CallCenterController(db)
    await controller.delete_call_center(current_user, call_center_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
