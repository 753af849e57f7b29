"""API tests for insights, anomaly detection, alerts and chat."""

import pytest
from httpx import AsyncClient

from trackprofit.core.errors import NarrativeGenerationError
from trackprofit.server.core.config import settings

pytestmark = pytest.mark.asyncio

API = "/api/v1"
NARRATIVE = "- Scaler le produit A\n- Réduire le CPL"


async def _bad_day(client: AsyncClient, day: str = "2024-03-10") -> None:
    await client.put(
        f"{API}/marketing",
        json={"date": day, "spend_usd": 50, "leads": 2, "deliveries": 0, "margin_per_order": 50},
    )


class TestInsightsEndpoint:
    async def test_generate_then_cached(self, client: AsyncClient, narrative_model):
        first = await client.post(f"{API}/insights/generate", json={"month": 3, "year": 2024})
        second = await client.post(f"{API}/insights/generate", json={"month": 3, "year": 2024})

        assert first.status_code == 200
        assert first.json()["insights"] == NARRATIVE
        assert first.json()["cached"] is False
        assert first.json()["period"] == "2024-03"
        assert second.json()["cached"] is True
        narrative_model.generate.assert_awaited_once()

    async def test_model_failure_is_502(self, client: AsyncClient, narrative_model):
        narrative_model.generate.side_effect = NarrativeGenerationError("OPENAI_API_KEY is not configured")

        response = await client.post(f"{API}/insights/generate", json={"month": 3, "year": 2024})

        assert response.status_code == 502
        assert response.json()["detail"] == "Narrative generation failed"

    async def test_month_bounds(self, client: AsyncClient):
        response = await client.post(f"{API}/insights/generate", json={"month": 13, "year": 2024})

        assert response.status_code == 422


class TestAnomalyAndAlerts:
    async def test_detect_then_read_alerts(self, client: AsyncClient):
        await _bad_day(client)

        run = await client.post(f"{API}/insights/detect-anomalies", json={"date": "2024-03-10"})

        assert run.status_code == 200
        assert run.json()["users_checked"] == 1
        assert run.json()["alerts_created"] == 1

        alerts = (await client.get(f"{API}/alerts")).json()
        assert len(alerts) == 1
        assert alerts[0]["title"] == "Anomalies détectées - 2024-03-10"
        assert alerts[0]["is_read"] is False

        read = await client.patch(f"{API}/alerts/{alerts[0]['id']}/read")
        assert read.json()["is_read"] is True
        assert (await client.get(f"{API}/alerts", params={"unread_only": True})).json() == []

    async def test_alerts_are_private(self, client: AsyncClient):
        await _bad_day(client)
        await client.post(f"{API}/insights/detect-anomalies", json={"date": "2024-03-10"})
        alert_id = (await client.get(f"{API}/alerts")).json()[0]["id"]

        other = await client.get(f"{API}/alerts", headers={"X-User-Id": "user-2"})
        mark = await client.patch(f"{API}/alerts/{alert_id}/read", headers={"X-User-Id": "user-2"})

        assert other.json() == []
        assert mark.status_code == 404

    async def test_detection_guarded_by_service_token(self, client: AsyncClient, monkeypatch):
        monkeypatch.setattr(settings, "service_token", "s3cret")

        response = await client.post(f"{API}/insights/detect-anomalies", json={"date": "2024-03-10"})

        assert response.status_code == 403


class TestChatEndpoint:
    async def test_chat_and_history(self, client: AsyncClient):
        response = await client.post(
            f"{API}/chat",
            json={"message": "Comment améliorer mon CPL ?", "session_id": "s-1", "context": {"page": "Marketing"}},
        )

        assert response.status_code == 200
        assert response.json() == {"reply": NARRATIVE, "session_id": "s-1"}

        history = (await client.get(f"{API}/chat/s-1/messages")).json()
        assert [m["role"] for m in history] == ["user", "assistant"]

    async def test_blank_message(self, client: AsyncClient):
        response = await client.post(f"{API}/chat", json={"message": "   ", "session_id": "s-1"})

        assert response.status_code == 400

    async def test_message_too_long(self, client: AsyncClient):
        response = await client.post(f"{API}/chat", json={"message": "x" * 2001, "session_id": "s-1"})

        assert response.status_code == 422
