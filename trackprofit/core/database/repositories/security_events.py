"""Repository for the security event audit trail."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.security_events import SecurityEvent
from .base import AsyncBaseRepository


class SecurityEventRepository(AsyncBaseRepository[SecurityEvent]):
    """Data access for ``security_events``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SecurityEvent)

    async def record(self, events: Iterable[Dict[str, Any]]) -> List[SecurityEvent]:
        """Store events as produced by ``log_security_event``."""
        return await self.create_many([SecurityEvent(**event) for event in events])

    async def latest(
        self, limit: int = 100, event_type: Optional[str] = None, user_id: Optional[str] = None
    ) -> List[SecurityEvent]:
        """Most recent events, newest first."""
        stmt = select(SecurityEvent)
        if event_type is not None:
            stmt = stmt.where(SecurityEvent.event_type == event_type)
        if user_id is not None:
            stmt = stmt.where(SecurityEvent.user_id == user_id)
        stmt = stmt.order_by(SecurityEvent.created_at.desc(), SecurityEvent.id.desc()).limit(limit)  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
