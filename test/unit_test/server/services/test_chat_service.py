"""Unit tests for the assistant chat service."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.core.database.repositories import ChatHistoryRepository
from trackprofit.core.errors import NarrativeGenerationError
from trackprofit.core.models.io import ChatContext
from trackprofit.server.services.chat_service import ChatService

pytestmark = pytest.mark.asyncio


class TestChatService:
    """Test answering and persisting chat messages."""

    async def test_reply_and_history(self, session: AsyncSession, narrative_model):
        context = ChatContext(page="Marketing", filters={"mois": "2024-03"})

        response = await ChatService(session, narrative_model).chat("user-1", "s-1", "Mon ROI ?", context)

        assert response.reply == "- Scaler le produit A\n- Réduire le CPL"
        assert response.session_id == "s-1"
        messages = await ChatHistoryRepository(session).recent("user-1", "s-1")
        assert [(m.role, m.content) for m in messages] == [
            ("user", "Mon ROI ?"),
            ("assistant", "- Scaler le produit A\n- Réduire le CPL"),
        ]
        assert messages[0].context_data == {"page": "Marketing", "filters": {"mois": "2024-03"}}

    async def test_system_prompt_uses_context(self, session: AsyncSession, narrative_model):
        await ChatService(session, narrative_model).chat("user-1", "s-1", "Salut", ChatContext(page="Produits"))

        system_prompt = narrative_model.generate.call_args[0][0]
        assert "Contexte utilisateur: Produits" in system_prompt

    async def test_replays_recent_turns(self, session: AsyncSession, narrative_model):
        service = ChatService(session, narrative_model)
        for i in range(4):
            await service.chat("user-1", "s-1", f"question {i}", ChatContext())

        history = narrative_model.generate.call_args[1]["history"]

        assert len(history) == 6
        assert history[0] == ("user", "question 0")
        assert history[-1][0] == "assistant"

    async def test_sessions_are_separate(self, session: AsyncSession, narrative_model):
        service = ChatService(session, narrative_model)
        await service.chat("user-1", "s-1", "premier", ChatContext())
        await service.chat("user-1", "s-2", "second", ChatContext())

        assert narrative_model.generate.call_args[1]["history"] == []

    async def test_message_is_sanitized(self, session: AsyncSession, narrative_model):
        await ChatService(session, narrative_model).chat("user-1", "s-1", "<b>ROI</b>", ChatContext())

        assert narrative_model.generate.call_args[0][1] == "&lt;b&gt;ROI&lt;/b&gt;"

    async def test_blank_message_rejected(self, session: AsyncSession, narrative_model):
        with pytest.raises(ValueError):
            await ChatService(session, narrative_model).chat("user-1", "s-1", "   ", ChatContext())

        narrative_model.generate.assert_not_awaited()

    async def test_nothing_stored_when_model_fails(self, session: AsyncSession, narrative_model):
        narrative_model.generate.side_effect = NarrativeGenerationError("down")

        with pytest.raises(NarrativeGenerationError):
            await ChatService(session, narrative_model).chat("user-1", "s-1", "Mon ROI ?", ChatContext())

        assert await ChatHistoryRepository(session).recent("user-1", "s-1") == []
