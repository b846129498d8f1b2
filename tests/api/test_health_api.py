"""Tests for health endpoints."""

from httpx import AsyncClient


async def test_root_health(async_client: AsyncClient):
    response = await async_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_api_health(async_client: AsyncClient):
    response = await async_client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["uptime_seconds"] >= 0


async def test_root_info(async_client: AsyncClient):
    data = (await async_client.get("/")).json()
    assert "name" in data
    assert data["docs"] == "/docs"
