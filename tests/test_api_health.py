"""Tests for health check endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from riftdeck.db import upsert_card
from riftdeck.db.database import get_session
from riftdeck.main import app


@pytest.fixture
async def client(session_factory):
    """Provide an async test client with overridden database session."""

    async def override_get_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestHealthEndpoint:
    async def test_health_returns_healthy(self, client: AsyncClient) -> None:
        """Liveness probe returns healthy."""
        response = await client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] is None


class TestReadyEndpoint:
    async def test_ready_with_empty_catalog(self, client: AsyncClient) -> None:
        """An empty catalog is still ready."""
        response = await client.get("/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ready"
        assert data["database"] == "connected"
        assert data["catalog_cards"] == 0

    async def test_ready_reports_catalog_size(
        self, client: AsyncClient, session_factory, cards
    ) -> None:
        async with session_factory() as session:
            for card_id in ("legend-1", "unit-01", "bf-arena"):
                await upsert_card(session, cards[card_id])
            await session.commit()

        response = await client.get("/ready")

        assert response.json()["catalog_cards"] == 3

    async def test_ready_returns_503_on_db_failure(self) -> None:
        """Readiness probe returns 503 when DB is unavailable."""

        async def override_get_session_broken():
            mock_session = AsyncMock()
            mock_session.scalar.side_effect = OperationalError(
                "SELECT count(*) FROM cards", {}, Exception("connection refused")
            )
            yield mock_session

        app.dependency_overrides[get_session] = override_get_session_broken

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ready")

        app.dependency_overrides.clear()

        assert response.status_code == 503
        data = response.json()
        assert data["status"] == "not ready"
        assert data["database"] == "disconnected"
