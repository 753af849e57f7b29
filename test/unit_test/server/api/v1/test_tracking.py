"""API tests for financial, profit, sales, ad spending and bonus endpoints."""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

API = "/api/v1"


class TestFinancialEndpoints:
    async def test_mad_amount_is_computed(self, client: AsyncClient):
        response = await client.put(
            f"{API}/financial", json={"date": "2024-03-01", "exchange_rate": 10.5, "amount_received_usd": 100}
        )

        assert response.status_code == 200
        assert response.json()["amount_received_mad"] == pytest.approx(1050.0)

    async def test_summary(self, client: AsyncClient):
        await client.put(f"{API}/financial", json={"date": "2024-03-01", "exchange_rate": 10, "amount_received_usd": 100})
        await client.put(f"{API}/financial", json={"date": "2024-03-02", "exchange_rate": 11, "amount_received_usd": 100})

        response = await client.get(f"{API}/financial/summary", params={"month": "2024-03"})

        data = response.json()
        assert data["total_received_usd"] == 200
        assert data["average_exchange_rate"] == pytest.approx(10.5)
        assert data["days"] == 2

    async def test_rate_bounds(self, client: AsyncClient):
        response = await client.put(
            f"{API}/financial", json={"date": "2024-03-01", "exchange_rate": 0, "amount_received_usd": 100}
        )

        assert response.status_code == 422


class TestProfitEndpoints:
    def _payload(self, **overrides) -> dict:
        data = {"date": "2024-03-02", "cpd_category": 15, "product_name": "Sérum", "quantity": 3, "commission_total": 300}
        data.update(overrides)
        return data

    async def test_create_list_and_totals(self, client: AsyncClient):
        created = await client.post(f"{API}/profits", json=self._payload())
        await client.post(f"{API}/profits", json=self._payload(quantity=1, commission_total=90, source_type="décalée"))

        assert created.status_code == 201
        assert created.json()["source_type"] == "normale"

        rows = await client.get(f"{API}/profits", params={"month": "2024-03"})
        assert len(rows.json()) == 2

        totals = (await client.get(f"{API}/profits/totals", params={"month": "2024-03"})).json()
        assert totals["total_commissions"] == 390
        assert totals["delayed_quantity"] == 1

    async def test_rejects_markup_in_product_name(self, client: AsyncClient):
        response = await client.post(f"{API}/profits", json=self._payload(product_name="<script>"))

        assert response.status_code == 422

    async def test_update(self, client: AsyncClient):
        entry_id = (await client.post(f"{API}/profits", json=self._payload())).json()["id"]

        response = await client.patch(f"{API}/profits/{entry_id}", json={"quantity": 5, "source_type": "décalée"})

        assert response.status_code == 200
        assert response.json()["quantity"] == 5
        assert response.json()["source_type"] == "décalée"
        assert response.json()["product_name"] == "Sérum"

    async def test_update_rejects_nulls(self, client: AsyncClient):
        entry_id = (await client.post(f"{API}/profits", json=self._payload())).json()["id"]

        response = await client.patch(f"{API}/profits/{entry_id}", json={"product_name": None, "quantity": None})

        assert response.status_code == 422
        rows = (await client.get(f"{API}/profits", params={"month": "2024-03"})).json()
        assert rows[0]["product_name"] == "Sérum"
        assert rows[0]["quantity"] == 3

    async def test_other_users_rows_are_hidden(self, client: AsyncClient):
        entry_id = (await client.post(f"{API}/profits", json=self._payload())).json()["id"]

        patched = await client.patch(f"{API}/profits/{entry_id}", json={"quantity": 5}, headers={"X-User-Id": "user-2"})
        deleted = await client.delete(f"{API}/profits/{entry_id}", headers={"X-User-Id": "user-2"})

        assert patched.status_code == 404
        assert deleted.status_code == 404

    async def test_delete(self, client: AsyncClient):
        entry_id = (await client.post(f"{API}/profits", json=self._payload())).json()["id"]

        response = await client.delete(f"{API}/profits/{entry_id}")

        assert response.json() == {"deleted": 1}
        assert (await client.get(f"{API}/profits", params={"month": "2024-03"})).json() == []


class TestSalesEndpoints:
    async def test_create_and_list_newest_first(self, client: AsyncClient):
        await client.post(f"{API}/sales", json={"date": "2024-03-01", "customer": "Amina", "price": 249})
        await client.post(f"{API}/sales", json={"date": "2024-03-05", "customer": "Youssef", "price": 199})

        response = await client.get(f"{API}/sales", params={"month": "2024-03"})

        assert [row["customer"] for row in response.json()] == ["Youssef", "Amina"]


class TestAdSpendingEndpoints:
    async def test_bulk_create_and_summary(self, client: AsyncClient):
        rows = [
            {"date": "2024-03-01", "account_name": "Store", "campaign_name": "A", "amount_spent": 30,
             "impressions": 3000, "link_clicks": 60, "leads": 6},
            {"date": "2024-03-02", "account_name": "Store", "campaign_name": "A", "amount_spent": 20,
             "impressions": 2000, "link_clicks": 40, "leads": 4},
        ]

        created = await client.post(f"{API}/ad-spending", json=rows)
        summary = await client.get(f"{API}/ad-spending/summary", params={"month": "2024-03"})

        assert created.status_code == 201
        assert len(created.json()) == 2
        data = summary.json()
        assert data["total_spent"] == 50
        assert data["avg_ctr"] == pytest.approx(2.0)
        assert data["campaigns"] == 1


class TestBonusEndpoints:
    async def test_set_and_get(self, client: AsyncClient):
        missing = await client.get(f"{API}/bonus", params={"year": 2024, "month": 3})
        await client.put(f"{API}/bonus", json={"year": 2024, "month": 3, "amount_dh": 500})
        replaced = await client.put(f"{API}/bonus", json={"year": 2024, "month": 3, "amount_dh": 750})
        found = await client.get(f"{API}/bonus", params={"year": 2024, "month": 3})

        assert missing.json() is None
        assert replaced.json()["amount_dh"] == 750
        assert found.json()["amount_dh"] == 750


class TestMonthlyKPIEndpoint:
    async def test_monthly_kpis(self, client: AsyncClient):
        await client.put(
            f"{API}/marketing",
            json={"date": "2024-03-01", "spend_usd": 10, "leads": 5, "deliveries": 2, "margin_per_order": 50},
        )
        await client.post(
            f"{API}/profits",
            json={"date": "2024-03-01", "cpd_category": 15, "product_name": "Sérum", "quantity": 2,
                  "commission_total": 300},
        )
        await client.put(f"{API}/bonus", json={"year": 2024, "month": 3, "amount_dh": 100})

        response = await client.get(f"{API}/kpis/monthly", params={"month": "2024-03"})

        data = response.json()
        assert data["total_spend"] == 100
        assert data["total_revenue"] == 300
        assert data["total_bonus"] == 100
        assert data["net_profit"] == 300
        assert data["roi_percent"] == 300
