"""
Repository for per-user, per-day tracking tables.

Marketing, financial, profit, sales and ad spending rows (and their archive
copies) share the same access patterns: list a user's rows for a month, find
the row of a day, upsert the row of a day, delete.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ...months import month_bounds
from ..base import TrackedRowBase, utc_now
from .base import AsyncBaseRepository, EntityType


class TrackedRowRepository(AsyncBaseRepository[EntityType]):
    """Data access for any table built on ``TrackedRowBase``."""

    def __init__(self, session: AsyncSession, model: Type[EntityType]) -> None:
        if not issubclass(model, TrackedRowBase):
            raise TypeError(f"{model.__name__} is not a tracked row entity")
        super().__init__(session, model)

    async def list_for_month(self, user_id: str, month_label: str, descending: bool = False) -> List[EntityType]:
        """Rows of one user whose date falls inside the labelled month, ordered by date."""
        start, end = month_bounds(month_label)
        return await self.list_between(user_id, start, end, descending=descending)

    async def list_between(
        self, user_id: str, start: dt.date, end: dt.date, descending: bool = False
    ) -> List[EntityType]:
        """Rows of one user with ``start <= date <= end``."""
        order = self.model.date.desc() if descending else self.model.date.asc()  # type: ignore[attr-defined]
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)  # type: ignore[attr-defined]
            .where(self.model.date >= start)  # type: ignore[attr-defined]
            .where(self.model.date <= end)  # type: ignore[attr-defined]
            .order_by(order, self.model.id.asc())  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_for_date(self, user_id: str, day: dt.date) -> Optional[EntityType]:
        """The first row of a user on a given day."""
        stmt = (
            select(self.model)
            .where(self.model.user_id == user_id)  # type: ignore[attr-defined]
            .where(self.model.date == day)  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_owned(self, user_id: str, entity_id: int) -> Optional[EntityType]:
        """Get a row by id only when it belongs to ``user_id``."""
        entity = await self.get_by_id(entity_id)
        if entity is None or entity.user_id != user_id:  # type: ignore[attr-defined]
            return None
        return entity

    async def upsert_for_date(self, user_id: str, day: dt.date, values: Dict[str, Any]) -> EntityType:
        """Insert the row of a day or update it in place when it already exists."""
        existing = await self.get_for_date(user_id, day)
        if existing is None:
            entity = self.model(user_id=user_id, date=day, **values)
            return await self.create(entity)

        for key, value in values.items():
            setattr(existing, key, value)
        existing.updated_at = utc_now()  # type: ignore[attr-defined]
        return await self.update(existing)

    async def delete_for_date(self, user_id: str, day: dt.date) -> int:
        """Delete every row of a user on a given day. Returns the number of rows removed."""
        stmt = sa_delete(self.model).where(
            self.model.user_id == user_id,  # type: ignore[attr-defined]
            self.model.date == day,  # type: ignore[attr-defined]
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def users_with_rows_on(self, day: dt.date) -> List[str]:
        """Distinct user ids having at least one row on ``day``."""
        stmt = select(self.model.user_id).where(self.model.date == day).distinct()  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return sorted(result.scalars().all())
