"""
API v2 router that aggregates all endpoint routers.
All routes require authentication except health.
"""

from fastapi import APIRouter, Depends
from app.api.v2.middleware import require_authentication

from app.api.v2.endpoints import (
    health,
    call_centers,
)

api_router = APIRouter()

# Public routes (no authentication required)
api_router.include_router(health.router, tags=["health"])

# Protected routes (authentication required for all endpoints)
# Authentication is enforced via dependency injection at the router level
api_router.include_router(
    call_centers.router,
    prefix="/call_centers",
    tags=["call-centers"],
    dependencies=[Depends(require_authentication)],
)
