"""API tests for the marketing performance endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

BASE = "/api/v1/marketing"


def _day(date: str, spend: float = 20, leads: int = 10, deliveries: int = 4, margin: float = 50) -> dict:
    return {"date": date, "spend_usd": spend, "leads": leads, "deliveries": deliveries, "margin_per_order": margin}


class TestMarketingEndpoints:
    async def test_upsert_and_list(self, client: AsyncClient):
        first = await client.put(BASE, json=_day("2024-03-01"))
        replaced = await client.put(BASE, json=_day("2024-03-01", spend=30))
        await client.put(BASE, json=_day("2024-04-01"))

        assert first.status_code == 200
        assert replaced.json()["id"] == first.json()["id"]
        assert replaced.json()["spend_usd"] == 30
        assert replaced.json()["user_id"] == "user-1"

        response = await client.get(BASE, params={"month": "2024-03"})

        assert response.status_code == 200
        assert [row["date"] for row in response.json()] == ["2024-03-01"]

    async def test_rows_are_per_user(self, client: AsyncClient):
        await client.put(BASE, json=_day("2024-03-01"))

        response = await client.get(BASE, params={"month": "2024-03"}, headers={"X-User-Id": "user-2"})

        assert response.json() == []

    async def test_requires_user(self, client: AsyncClient):
        response = await client.get(BASE, params={"month": "2024-03"}, headers={"X-User-Id": ""})

        assert response.status_code == 401

    async def test_month_is_validated(self, client: AsyncClient):
        response = await client.get(BASE, params={"month": "2024-3"})

        assert response.status_code == 422

    async def test_out_of_range_values(self, client: AsyncClient):
        response = await client.put(BASE, json=_day("2024-03-01", spend=-5))

        assert response.status_code == 422

    async def test_results(self, client: AsyncClient):
        await client.put(BASE, json=_day("2024-03-01", spend=20, leads=10, deliveries=4, margin=50))

        response = await client.get(f"{BASE}/results", params={"month": "2024-03"})

        assert response.status_code == 200
        data = response.json()
        assert data["exchange_rate"] == 10.0
        row = data["rows"][0]
        assert row["results"]["cpl"] == pytest.approx(2.0)
        assert row["results"]["cpl_status"] == "bad"
        assert row["results"]["delivery_rate_status"] == "good"
        assert row["results"]["gross_profit_mad"] == pytest.approx(200.0)
        assert data["resume"]["total_leads"] == 10

    async def test_delete(self, client: AsyncClient):
        await client.put(BASE, json=_day("2024-03-01"))

        deleted = await client.delete(f"{BASE}/2024-03-01")
        missing = await client.delete(f"{BASE}/2024-03-01")

        assert deleted.json() == {"deleted": 1}
        assert missing.status_code == 404

    async def test_archive_listing(self, client: AsyncClient):
        await client.put(BASE, json=_day("2024-02-10"))
        await client.post("/api/v1/archive/close-month", json={"month_label": "2024-02"})

        current = await client.get(BASE, params={"month": "2024-02"})
        archived = await client.get(BASE, params={"month": "2024-02", "archive": True})

        assert current.json() == []
        assert [row["date"] for row in archived.json()] == ["2024-02-10"]
