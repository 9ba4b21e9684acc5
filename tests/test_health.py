"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest
from dependency_injector import providers
from sqlalchemy import text

from app.core.config import settings
from app.deps.di_container import get_container
from app.services.health_service import HealthService


@pytest.fixture
def health_service(test_session_maker):
    """Point the container's health service at the test database."""
    container = get_container()
    service = HealthService(session_factory=test_session_maker)
    container.health_service.override(providers.Object(service))
    yield service
    container.health_service.reset_override()


@pytest.mark.asyncio
async def test_health_endpoint(test_client, health_service):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get("/api/v2/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["version"] == settings.VERSION
    assert data["uptime"].startswith("PT")
    assert data["checks"] == {"call_centers": "ok", "users": "ok"}


@pytest.mark.asyncio
async def test_root_health_endpoint_is_public(test_client, health_service):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_missing_table_degrades_health(test_client, test_engine, health_service):
    async with test_engine.begin() as conn:
        await conn.execute(text("DROP TABLE users"))

    response = await test_client.get("/api/v2/health")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "degraded"
    assert data["checks"] == {"call_centers": "ok", "users": "unreachable"}


@pytest.mark.asyncio
async def test_degraded_when_database_is_unreachable():
    def broken_session_factory():
        raise ConnectionError("database unreachable")

    service = HealthService(session_factory=broken_session_factory)

    health = await service.get_health()

    assert health.status == "degraded"
    assert set(health.checks) == {"call_centers", "users"}
    assert all(check.startswith("error") for check in health.checks.values())
