"""
User service.
Creates users and issues the API tokens they authenticate with.
"""

import secrets
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.logging import get_logger
from app.services.base_service import BaseService
from app.db.repositories.user_repository import UserRepository
from app.models.user import User

logger = get_logger(__name__)


class UserService(BaseService):
    """Service for user operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def create_user(self, email: str) -> User:
        """Create a user without a token."""
        existing = await self.user_repo.get_by_email(email)
        if existing:
            raise ValueError(f"User already exists: {email}")

        user = await self.user_repo.create(email=email)
        await self.session.commit()
        logger.info("User created", extra={"user_id": str(user.id)})
        return user

    async def issue_token(self, user: User) -> str:
        """
        Return the user's API token, generating one on first use.

        Args:
            user: User to issue the token for

        Returns:
            The token to send as ``Authorization: Bearer <token>``
        """
        if user.token:
            return user.token

        user.token = secrets.token_hex(settings.API_TOKEN_BYTES)
        await self.session.flush()
        await self.session.commit()
        logger.info("API token issued", extra={"user_id": str(user.id)})
        return user.token

    async def authenticate(self, token: Optional[str]) -> Optional[User]:
        """Resolve a bearer token to its user."""
        if not token:
            return None
        return await self.user_repo.get_by_token(token)
