"""
Pytest configuration and fixtures.
Provides test app client, async DB session replacement and record factories.
"""

import os

# Settings are read at import time; configure them before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.db.repositories.call_center_repository import CallCenterRepository
from app.models import CallCenter, User
from app.models.association_tables import call_center_users
from app.services.user_service import UserService


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Create a test engine on a fresh in-memory database.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_maker(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def test_db_session(test_session_maker):
    """
    Create a test database session.
    The API under test shares this session, so records created here are
    visible to requests and vice versa.
    """
    async with test_session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(test_db_session):
    """
    Create a test HTTP client wired to the test database session.
    """
    async def override_get_db():
        yield test_db_session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def create_user(test_db_session):
    """Factory for users."""
    async def _create_user(email: str = None) -> User:
        return await UserService(test_db_session).create_user(
            email or f"user-{uuid4().hex[:12]}@example.com"
        )
    return _create_user


@pytest.fixture
def auth_headers(test_db_session):
    """Factory for Authorization headers carrying a user's API token."""
    async def _auth_headers(user: User) -> dict:
        token = await UserService(test_db_session).issue_token(user)
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def create_call_center(test_db_session):
    """Factory for call centers nobody manages."""
    async def _create_call_center(**attributes) -> CallCenter:
        attributes.setdefault("name", f"Call Center {uuid4().hex[:8]}")
        call_center = await CallCenterRepository(test_db_session).create(**attributes)
        await test_db_session.commit()
        return call_center
    return _create_call_center


@pytest.fixture
def create_manageable_call_center(test_db_session, create_call_center):
    """Factory for call centers owned by the given user."""
    async def _create_manageable_call_center(user: User, **attributes) -> CallCenter:
        call_center = await create_call_center(**attributes)
        await CallCenterRepository(test_db_session).add_owner(call_center.id, user.id)
        await test_db_session.commit()
        return call_center
    return _create_manageable_call_center


def assert_api_error(response, code: str) -> dict:
    """Assert the response is an error document carrying ``code``; return the first error."""
    statuses = {
        "unauthorized": 401,
        "forbidden": 403,
        "not_found": 404,
        "unprocessable_entity": 422,
        "too_many_requests": 429,
    }
    assert response.status_code == statuses[code]
    errors = response.json()["errors"]
    assert errors
    assert errors[0]["code"] == code
    assert errors[0]["status"] == str(statuses[code])
    return errors[0]


def attribute_errors(response) -> dict:
    """Map ``/data/attributes/<field>`` pointers of an error document to their details."""
    prefix = "/data/attributes/"
    return {
        error["source"]["pointer"][len(prefix):]: error["detail"]
        for error in response.json()["errors"]
        if error.get("source", {}).get("pointer", "").startswith(prefix)
    }


async def count_call_centers(session: AsyncSession) -> int:
    """Count call center rows, deleted ones included."""
    result = await session.execute(select(func.count()).select_from(CallCenter))
    return result.scalar() or 0


async def owner_ids(session: AsyncSession, call_center_id) -> list:
    """IDs of the users linked to a call center."""
    result = await session.execute(
        select(call_center_users.c.user_id).where(call_center_users.c.call_center_id == call_center_id)
    )
    return list(result.scalars().all())
