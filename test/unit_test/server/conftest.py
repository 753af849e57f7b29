from typing import AsyncGenerator

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

TEST_USER_ID = "user-1"


@pytest_asyncio.fixture(name="client")
async def client_fixture(session: AsyncSession, narrative_model) -> AsyncGenerator[AsyncClient, None]:
    """Create an async HTTP client with the database session and narrative model overridden."""
    from trackprofit.core.database import get_session
    from trackprofit.server.main import app
    from trackprofit.server.services.deps import get_narrative_model

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_narrative_model] = lambda: narrative_model

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://localhost",
        headers={"X-User-Id": TEST_USER_ID},
    ) as client:
        yield client

    app.dependency_overrides.clear()
