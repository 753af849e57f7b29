"""
Chat Service.

Answers questions of the dashboard assistant and keeps the conversation in
``ai_chat_history``.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.core.database.entities import MessageRole
from trackprofit.core.database.repositories import ChatHistoryRepository
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import ChatContext, ChatResponse
from trackprofit.llm import NarrativeModel
from trackprofit.llm.prompts import chat_system_prompt
from trackprofit.security import sanitize_input

logger = get_logger(__name__)

HISTORY_LENGTH = 6
CHAT_TEMPERATURE = 0.7
CHAT_MAX_TOKENS = 500


class ChatService:
    """Conversational assistant over the user's marketing data."""

    def __init__(self, session: AsyncSession, narrative_model: NarrativeModel) -> None:
        self.narrative_model = narrative_model
        self.history = ChatHistoryRepository(session)

    async def chat(self, user_id: str, session_id: str, message: str, context: ChatContext) -> ChatResponse:
        """
        Answer a message within a chat session.

        The last six messages of the session are replayed to the model. Both the
        question and the answer are stored once the model has replied.

        Raises:
            ValueError: If the message is empty once sanitized
            NarrativeGenerationError: If the language model call fails
        """
        clean_message = sanitize_input(message)
        if not clean_message:
            raise ValueError("Message is empty")

        logger.debug(f"AI chat for user {user_id}, session {session_id}")
        previous = await self.history.recent(user_id, session_id, limit=HISTORY_LENGTH)

        reply = await self.narrative_model.generate(
            chat_system_prompt(context.page, context.filters),
            clean_message,
            history=[(msg.role, msg.content) for msg in previous],
            temperature=CHAT_TEMPERATURE,
            max_tokens=CHAT_MAX_TOKENS,
            purpose="chat",
            user_id=user_id,
        )

        context_data = context.model_dump()
        await self.history.append(user_id, session_id, MessageRole.USER, clean_message, context_data)
        await self.history.append(user_id, session_id, MessageRole.ASSISTANT, reply, context_data)
        return ChatResponse(reply=reply, session_id=session_id)
