"""Repository for assistant chat history."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.chat_history import AIChatMessage, MessageRole
from .base import AsyncBaseRepository


class ChatHistoryRepository(AsyncBaseRepository[AIChatMessage]):
    """Data access for ``ai_chat_history``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AIChatMessage)

    async def recent(self, user_id: str, session_id: str, limit: int = 6) -> List[AIChatMessage]:
        """The last ``limit`` messages of a session in chronological order."""
        stmt = (
            select(AIChatMessage)
            .where(AIChatMessage.user_id == user_id)
            .where(AIChatMessage.session_id == session_id)
            .order_by(AIChatMessage.created_at.desc(), AIChatMessage.id.desc())  # type: ignore[union-attr]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def append(
        self,
        user_id: str,
        session_id: str,
        role: MessageRole,
        content: str,
        context_data: Optional[Dict[str, Any]] = None,
    ) -> AIChatMessage:
        """Store one message of a session."""
        message = AIChatMessage(
            user_id=user_id,
            session_id=session_id,
            role=role.value,
            content=content,
            context_data=context_data,
        )
        return await self.create(message)
