"""Tests for health check endpoints."""

from unittest.mock import AsyncMock

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from ryunix.db.database import get_session
from ryunix.main import app
from ryunix.services.registry import ServiceRegistry


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy without touching the store."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] is None


class TestReadyEndpoint:
    async def test_ready_reports_sync_state(self, client: AsyncClient) -> None:
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"
        assert data["sync_pending"] is False
        assert data["overlay_version"] == 0

    async def test_pending_edits_do_not_make_unready(
        self, client: AsyncClient, services: ServiceRegistry
    ) -> None:
        """Unwritten edits are reported but the service keeps serving."""
        services.overlay.set_price("Blue-Eyes", 5)

        response = await client.get("/ready")

        assert response.status_code == 200
        assert response.json()["sync_pending"] is True

    async def test_database_down_is_unready(self, client: AsyncClient) -> None:
        async def broken_session():
            session = AsyncMock()
            session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("down"))
            yield session

        app.dependency_overrides[get_session] = broken_session

        response = await client.get("/ready")

        assert response.status_code == 503
        assert response.json()["database"] == "disconnected"
