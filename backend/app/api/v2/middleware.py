"""
API middleware for authentication and common concerns.
Centralized authentication enforcement for all protected routes.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UnauthorizedError
from app.db.session import get_db
from app.models.user import User
from app.services.user_service import UserService

# Missing credentials are reported by require_authentication as 401
security = HTTPBearer(auto_error=False)


async def require_authentication(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    """
    Centralized authentication dependency.
    This should be used as a dependency on all protected routes.

    Usage:
        @router.get("/endpoint")
        async def my_endpoint(
            current_user: User = Depends(require_authentication)
        ):
            ...

    Args:
        credentials: HTTP Bearer token credentials (injected by FastAPI)
        db: Database session

    Returns:
        Current authenticated User

    Raises:
        UnauthorizedError: If the token is missing or unknown
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Missing authentication token")

    user = await UserService(db).authenticate(credentials.credentials)
    if not user:
        raise UnauthorizedError("Invalid authentication token")

    return user
