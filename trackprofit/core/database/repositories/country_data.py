"""Repository for per-country results."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..base import utc_now
from ..entities.country_data import CountryData
from .base import AsyncBaseRepository


class CountryDataRepository(AsyncBaseRepository[CountryData]):
    """Data access for ``country_data``."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, CountryData)

    async def list_for_user(
        self,
        user_id: str,
        country_codes: Optional[Sequence[str]] = None,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> List[CountryData]:
        """
        Country rows of a user, best ROI first.

        Args:
            user_id: The user
            country_codes: Only these countries (optional)
            start: Keep rows whose period ends on or after this day (optional)
            end: Keep rows whose period starts on or before this day (optional)
        """
        stmt = select(CountryData).where(CountryData.user_id == user_id)
        if country_codes:
            stmt = stmt.where(CountryData.country_code.in_(list(country_codes)))  # type: ignore[attr-defined]
        if start is not None:
            stmt = stmt.where(CountryData.period_end >= start)
        if end is not None:
            stmt = stmt.where(CountryData.period_start <= end)
        stmt = stmt.order_by(CountryData.roi_percent.desc(), CountryData.id.asc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def upsert(self, user_id: str, values: Dict[str, Any]) -> CountryData:
        """Insert or replace the row of a country for the period starting at ``values["period_start"]``."""
        stmt = (
            select(CountryData)
            .where(CountryData.user_id == user_id)
            .where(CountryData.country_code == values["country_code"])
            .where(CountryData.period_start == values["period_start"])
        )
        existing = (await self.session.execute(stmt)).scalars().first()
        if existing is None:
            return await self.create(CountryData(user_id=user_id, **values))

        for key, value in values.items():
            setattr(existing, key, value)
        existing.updated_at = utc_now()
        return await self.update(existing)

    async def get_owned(self, user_id: str, entity_id: int) -> Optional[CountryData]:
        entity = await self.get_by_id(entity_id)
        if entity is None or entity.user_id != user_id:
            return None
        return entity
