"""Tests for the health check endpoint."""

import pytest
from httpx import ASGITransport, AsyncClient

from unheard.main import app


@pytest.mark.asyncio
async def test_health_check_returns_200():
    """Health endpoint should return 200 with status, version, environment and effect counters."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "environment" in data
    assert set(data["secondary_effects"]) == {"pending", "succeeded", "failed"}


@pytest.mark.asyncio
async def test_catalog_lists_closed_vocabularies():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/api/v1/catalog")

    assert response.status_code == 200
    data = response.json()
    assert len(data["tags"]) == 10
    assert [r["type"] for r in data["reactions"]] == ["❤️", "👍", "😂", "😢", "🔥"]
    assert {"name": "Other", "icon": "📝"} in data["topics"]
