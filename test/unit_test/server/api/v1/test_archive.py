"""API tests for the monthly archive endpoints."""

import pytest
from httpx import AsyncClient

from trackprofit.server.core.config import settings

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/archive"


class TestCloseMonth:
    async def test_close_month(self, client: AsyncClient):
        await client.put(
            "/api/v1/marketing",
            json={"date": "2024-02-10", "spend_usd": 5, "leads": 1, "deliveries": 0, "margin_per_order": 0},
        )

        response = await client.post(f"{BASE}/close-month", json={"month_label": "2024-02"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["archived_tables"] == 5
        assert data["total_tables"] == 5
        assert data["rows_moved"]["marketing_performance"] == 1
        assert data["errors"] == []

    async def test_without_body_closes_previous_month(self, client: AsyncClient):
        response = await client.post(f"{BASE}/close-month")

        assert response.status_code == 200
        assert len(response.json()["month_label"]) == 7

    async def test_invalid_label(self, client: AsyncClient):
        response = await client.post(f"{BASE}/close-month", json={"month_label": "2024-13"})

        assert response.status_code == 422

    async def test_runs(self, client: AsyncClient):
        await client.post(f"{BASE}/close-month", json={"month_label": "2024-01"})
        await client.post(f"{BASE}/close-month", json={"month_label": "2024-02"})

        response = await client.get(f"{BASE}/runs")

        assert [run["data"]["month_label"] for run in response.json()] == ["2024-02", "2024-01"]


class TestServiceToken:
    async def test_token_required_when_configured(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "service_token", "s3cret")

        denied = await client.post(f"{BASE}/close-month", json={"month_label": "2024-02"})
        wrong = await client.post(
            f"{BASE}/close-month", json={"month_label": "2024-02"}, headers={"X-Service-Token": "nope"}
        )
        allowed = await client.post(
            f"{BASE}/close-month", json={"month_label": "2024-02"}, headers={"X-Service-Token": "s3cret"}
        )

        assert denied.status_code == 403
        assert wrong.status_code == 403
        assert allowed.status_code == 200

    async def test_runs_are_guarded_too(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "service_token", "s3cret")

        response = await client.get(f"{BASE}/runs")

        assert response.status_code == 403
