"""API tests for the per-country result endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1/countries"


def _payload(**overrides) -> dict:
    payload = {
        "country_code": "CI",
        "country_name": "Côte d'Ivoire",
        "revenue_mad": 3000,
        "spend_mad": 1200,
        "period_start": "2024-03-01",
        "period_end": "2024-03-31",
    }
    payload.update(overrides)
    return payload


class TestCountryEndpoints:
    async def test_upsert_derives_profit_and_roi(self, client: AsyncClient):
        response = await client.put(API, json=_payload())

        assert response.status_code == 200
        data = response.json()
        assert data["profit_mad"] == pytest.approx(1800)
        assert data["roi_percent"] == pytest.approx(150)
        assert data["user_id"] == "user-1"

    async def test_roi_is_zero_without_spend(self, client: AsyncClient):
        response = await client.put(API, json=_payload(spend_mad=0))

        assert response.json()["roi_percent"] == 0

    async def test_upsert_replaces_period(self, client: AsyncClient):
        first = (await client.put(API, json=_payload())).json()
        second = (await client.put(API, json=_payload(revenue_mad=600))).json()

        listed = (await client.get(API)).json()

        assert second["id"] == first["id"]
        assert len(listed) == 1
        assert listed[0]["roi_percent"] == pytest.approx(-50)

    async def test_list_by_month_and_country(self, client: AsyncClient):
        await client.put(API, json=_payload())
        await client.put(API, json=_payload(country_code="SN", country_name="Sénégal"))
        await client.put(API, json=_payload(period_start="2024-04-01", period_end="2024-04-30"))

        march = (await client.get(API, params={"month": "2024-03"})).json()
        senegal = (await client.get(API, params={"country": ["SN"]})).json()

        assert {row["country_code"] for row in march} == {"CI", "SN"}
        assert [row["country_code"] for row in senegal] == ["SN"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"country_code": "ci"},
            {"country_code": "CIV"},
            {"revenue_mad": -1},
            {"country_name": "<b>CI</b>"},
            {"period_end": "2024-02-28"},
        ],
    )
    async def test_rejects_invalid_payloads(self, client: AsyncClient, overrides: dict):
        response = await client.put(API, json=_payload(**overrides))

        assert response.status_code == 422

    async def test_delete(self, client: AsyncClient):
        row = (await client.put(API, json=_payload())).json()

        deleted = await client.delete(f"{API}/{row['id']}")
        again = await client.delete(f"{API}/{row['id']}")

        assert deleted.json() == {"deleted": 1}
        assert again.status_code == 404

    async def test_rows_of_other_users_are_hidden(self, client: AsyncClient):
        row = (await client.put(API, json=_payload())).json()

        listed = await client.get(API, headers={"X-User-Id": "user-2"})
        deleted = await client.delete(f"{API}/{row['id']}", headers={"X-User-Id": "user-2"})

        assert listed.json() == []
        assert deleted.status_code == 404
