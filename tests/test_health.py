"""Tests for health endpoints."""

from httpx import AsyncClient

from pta.models.school import School


async def test_liveness(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_database_health(client: AsyncClient, school: School):
    response = await client.get("/api/v1/health/db")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "success"
    assert data["summary"]["total_tables"] == 7
    assert data["summary"]["missing_tables"] == []

    counts = {t["table"]: t["count"] for t in data["tables"]}
    assert counts["schools"] == 1
    assert counts["payments"] == 0
