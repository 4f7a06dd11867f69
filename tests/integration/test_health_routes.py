"""Integration tests for health endpoints."""

from unittest.mock import patch

import pytest
from httpx import ASGITransport, AsyncClient

from jokes_app.main import app


@pytest.mark.asyncio
async def test_health_endpoint():
    """Test health check endpoint."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data


@pytest.mark.asyncio
async def test_readiness_with_database(db_session):
    """Readiness reports a reachable database."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/health/ready")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["checks"]["database"] == "ok"


@pytest.mark.asyncio
async def test_readiness_database_down():
    """Readiness returns 503 when the database check fails."""
    with patch("jokes_app.routers.health_router.check_connection", side_effect=RuntimeError("db gone")):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/health/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "unhealthy"
    assert data["checks"]["database"].startswith("failed: db gone")
