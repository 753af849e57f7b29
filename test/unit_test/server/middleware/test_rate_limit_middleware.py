"""Unit tests for the API rate limit middleware."""

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from trackprofit.core.database import create_sessionmaker
from trackprofit.core.database.repositories import SecurityEventRepository
from trackprofit.security import RateLimitConfig, RateLimiter, pending_event_count
from trackprofit.server.middleware import RateLimitMiddleware

pytestmark = pytest.mark.asyncio


@pytest.fixture
def app(test_engine) -> FastAPI:
    app = FastAPI()
    app.add_middleware(
        RateLimitMiddleware,
        limiter=RateLimiter(),
        config=RateLimitConfig(window_seconds=60, max_requests=2, block_seconds=120),
        session_factory=create_sessionmaker(test_engine),
    )

    @app.get("/api/v1/ping")
    async def ping():
        return {"pong": True}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


async def _client(app: FastAPI) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost")


class TestRateLimitMiddleware:
    async def test_allows_within_limit(self, app: FastAPI):
        async with await _client(app) as client:
            first = await client.get("/api/v1/ping", headers={"X-User-Id": "user-1"})
            second = await client.get("/api/v1/ping", headers={"X-User-Id": "user-1"})

        assert first.status_code == 200
        assert first.headers["X-RateLimit-Remaining"] == "1"
        assert second.headers["X-RateLimit-Remaining"] == "0"

    async def test_rejects_over_limit(self, app: FastAPI):
        async with await _client(app) as client:
            for _ in range(2):
                await client.get("/api/v1/ping", headers={"X-User-Id": "user-1"})
            response = await client.get("/api/v1/ping", headers={"X-User-Id": "user-1"})

        assert response.status_code == 429
        assert response.json()["detail"] == "Too many requests"
        retry_after = int(response.headers["Retry-After"])
        assert 1 <= retry_after <= 120
        assert response.json()["retry_after"] == retry_after

    async def test_users_are_limited_separately(self, app: FastAPI):
        async with await _client(app) as client:
            for _ in range(3):
                await client.get("/api/v1/ping", headers={"X-User-Id": "user-1"})
            response = await client.get("/api/v1/ping", headers={"X-User-Id": "user-2"})

        assert response.status_code == 200

    async def test_anonymous_clients_limited_by_address(self, app: FastAPI):
        async with await _client(app) as client:
            statuses = [(await client.get("/api/v1/ping")).status_code for _ in range(3)]

        assert statuses == [200, 200, 429]

    async def test_health_is_exempt(self, app: FastAPI):
        async with await _client(app) as client:
            statuses = [(await client.get("/health")).status_code for _ in range(5)]

        assert statuses == [200] * 5

    async def test_block_is_stored_in_audit_trail(self, app: FastAPI, test_engine):
        async with await _client(app) as client:
            for _ in range(3):
                await client.get("/api/v1/ping", headers={"X-User-Id": "user-1"})

        async with create_sessionmaker(test_engine)() as session:
            events = await SecurityEventRepository(session).latest()

        assert [e.event_type for e in events] == ["RATE_LIMIT_EXCEEDED"]
        assert events[0].additional_data["identifier"] == "user:user-1"
        assert pending_event_count() == 0
