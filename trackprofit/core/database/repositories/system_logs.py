"""Repository for the append-only system log."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.system_logs import SystemLog
from .base import AsyncBaseRepository


class SystemLogRepository(AsyncBaseRepository[SystemLog]):
    """Data access for ``system_logs``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SystemLog)

    async def write(
        self, type: str, message: str, data: Optional[Dict[str, Any]] = None, user_id: Optional[str] = None
    ) -> SystemLog:
        """Append a log entry."""
        return await self.create(SystemLog(type=type, message=message, data=data, user_id=user_id))

    async def latest(self, type: str, limit: int = 20) -> List[SystemLog]:
        """Most recent entries of one type, newest first."""
        stmt = (
            select(SystemLog)
            .where(SystemLog.type == type)
            .order_by(SystemLog.created_at.desc(), SystemLog.id.desc())  # type: ignore[union-attr]
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
