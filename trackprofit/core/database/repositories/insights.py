"""
Repositories for cached insights and AI alerts.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import as_utc, utc_now
from ..entities.insights import AIAlert, InsightsCache
from .base import AsyncBaseRepository


class InsightsCacheRepository(AsyncBaseRepository[InsightsCache]):
    """Data access for ``insights_cache``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, InsightsCache)

    async def get_fresh(
        self, user_id: str, insights_type: str, period: Optional[str] = None, now: Optional[dt.datetime] = None
    ) -> Optional[InsightsCache]:
        """Newest cached insight of a type that has not expired yet."""
        now = as_utc(now) if now else utc_now()
        stmt = (
            select(InsightsCache)
            .where(InsightsCache.user_id == user_id)
            .where(InsightsCache.insights_type == insights_type)
            .where(InsightsCache.expires_at >= now)  # type: ignore[operator]
        )
        if period is not None:
            stmt = stmt.where(InsightsCache.period == period)
        stmt = stmt.order_by(InsightsCache.created_at.desc(), InsightsCache.id.desc()).limit(1)  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return result.scalars().first()


class AIAlertRepository(AsyncBaseRepository[AIAlert]):
    """Data access for ``alerts_ai``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AIAlert)

    async def list_for_user(self, user_id: str, unread_only: bool = False, limit: int = 50) -> List[AIAlert]:
        """Alerts of a user, newest first."""
        stmt = select(AIAlert).where(AIAlert.user_id == user_id)
        if unread_only:
            stmt = stmt.where(AIAlert.is_read == False)  # noqa: E712
        stmt = stmt.order_by(AIAlert.created_at.desc(), AIAlert.id.desc()).limit(limit)  # type: ignore[union-attr]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def mark_read(self, user_id: str, alert_id: int) -> Optional[AIAlert]:
        """Flag an alert of ``user_id`` as read. Returns None when it does not exist."""
        alert = await self.get_by_id(alert_id)
        if alert is None or alert.user_id != user_id:
            return None
        alert.is_read = True
        alert.updated_at = utc_now()
        return await self.update(alert)
