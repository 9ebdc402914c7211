"""Unit tests for health endpoint behavior."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from httpx import ASGITransport, AsyncClient

from taxengine import __version__
from taxengine.main import app


@pytest_asyncio.fixture
async def api_client() -> AsyncGenerator[AsyncClient, None]:
    """Create API client against the ASGI app."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.mark.asyncio
async def test_health_endpoint_returns_ok(api_client: AsyncClient) -> None:
    """Return ok with version and supported years."""
    response = await api_client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "version": __version__,
        "supported_years": [2025],
    }


@pytest.mark.asyncio
async def test_request_id_is_echoed(api_client: AsyncClient) -> None:
    """A caller-supplied X-Request-ID comes back on the response."""
    response = await api_client.get("/api/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"


@pytest.mark.asyncio
async def test_request_id_is_generated(api_client: AsyncClient) -> None:
    response = await api_client.get("/api/health")
    assert response.headers["X-Request-ID"]


def test_lifespan_runs(client: TestClient) -> None:
    """Startup and shutdown complete with no Sentry DSN configured."""
    with client as running:
        response = running.get("/api/health")
    assert response.status_code == 200
