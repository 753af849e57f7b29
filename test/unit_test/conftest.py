from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from trackprofit.core.database import create_all, create_sessionmaker
from trackprofit.llm import NarrativeModel
from trackprofit.security import drain_pending_events

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh in-memory database with every table for one test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async_session_maker = create_sessionmaker(test_engine)

    async with async_session_maker() as session:
        yield session


@pytest.fixture
def narrative_model() -> AsyncMock:
    """A narrative model that never calls a real language model."""
    model = AsyncMock(spec=NarrativeModel)
    model.generate.return_value = "- Scaler le produit A\n- Réduire le CPL"
    return model


@pytest.fixture(autouse=True)
def _empty_security_event_queue():
    """Security events queued by one test must not be stored by another."""
    drain_pending_events()
    yield
    drain_pending_events()
