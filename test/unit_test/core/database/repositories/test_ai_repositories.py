"""Unit tests for the insights cache, alert, chat history and system log repositories."""

import datetime as dt

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.core.database.entities import AIAlert, InsightsCache, MessageRole
from trackprofit.core.database.repositories import (
    AIAlertRepository,
    ChatHistoryRepository,
    InsightsCacheRepository,
    SystemLogRepository,
)

pytestmark = pytest.mark.asyncio

NOW = dt.datetime(2024, 4, 1, 12, 0, tzinfo=dt.timezone.utc)


class TestInsightsCacheRepository:
    async def test_get_fresh(self, session: AsyncSession):
        repository = InsightsCacheRepository(session)
        await repository.create(
            InsightsCache(user_id="user-1", content="old", period="2024-03", expires_at=NOW - dt.timedelta(hours=1))
        )
        await repository.create(
            InsightsCache(user_id="user-1", content="fresh", period="2024-03", expires_at=NOW + dt.timedelta(hours=1))
        )

        entry = await repository.get_fresh("user-1", "monthly", period="2024-03", now=NOW)

        assert entry.content == "fresh"

    async def test_get_fresh_filters_period_and_user(self, session: AsyncSession):
        repository = InsightsCacheRepository(session)
        await repository.create(
            InsightsCache(user_id="user-1", content="march", period="2024-03", expires_at=NOW + dt.timedelta(hours=1))
        )

        assert await repository.get_fresh("user-1", "monthly", period="2024-02", now=NOW) is None
        assert await repository.get_fresh("user-2", "monthly", period="2024-03", now=NOW) is None
        assert (await repository.get_fresh("user-1", "monthly", now=NOW)).content == "march"


class TestAIAlertRepository:
    async def test_list_and_mark_read(self, session: AsyncSession):
        repository = AIAlertRepository(session)
        first = await repository.create(AIAlert(user_id="user-1", title="a", content="a"))
        await repository.create(AIAlert(user_id="user-1", title="b", content="b"))
        await repository.create(AIAlert(user_id="user-2", title="c", content="c"))

        assert [a.title for a in await repository.list_for_user("user-1")] == ["b", "a"]

        assert await repository.mark_read("user-2", first.id) is None
        marked = await repository.mark_read("user-1", first.id)
        assert marked.is_read is True
        assert [a.title for a in await repository.list_for_user("user-1", unread_only=True)] == ["b"]

    async def test_limit(self, session: AsyncSession):
        repository = AIAlertRepository(session)
        for i in range(3):
            await repository.create(AIAlert(user_id="user-1", title=str(i), content="x"))

        assert len(await repository.list_for_user("user-1", limit=2)) == 2


class TestChatHistoryRepository:
    async def test_recent_is_chronological(self, session: AsyncSession):
        repository = ChatHistoryRepository(session)
        for i in range(4):
            await repository.append("user-1", "s-1", MessageRole.USER, f"m{i}")

        messages = await repository.recent("user-1", "s-1", limit=3)

        assert [m.content for m in messages] == ["m1", "m2", "m3"]

    async def test_append_keeps_context(self, session: AsyncSession):
        message = await ChatHistoryRepository(session).append(
            "user-1", "s-1", MessageRole.ASSISTANT, "ok", {"page": "Dashboard"}
        )

        assert message.role == "assistant"
        assert message.context_data == {"page": "Dashboard"}


class TestSystemLogRepository:
    async def test_write_and_latest(self, session: AsyncSession):
        repository = SystemLogRepository(session)
        await repository.write("monthly_archive", "first", {"n": 1})
        await repository.write("other", "ignored")
        await repository.write("monthly_archive", "second", {"n": 2})

        entries = await repository.latest("monthly_archive")

        assert [e.message for e in entries] == ["second", "first"]
        assert entries[0].data == {"n": 2}
