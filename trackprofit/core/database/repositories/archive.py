"""
Archive repository.

Moves a month of rows from a current table into its archive counterpart.
The copy and the delete of one table happen in a single transaction, so a
table is either fully moved for the month or left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from sqlalchemy import delete as sa_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from trackprofit.core.logging_config import get_logger
from ...errors import ArchiveError
from ...months import month_bounds
from ..entities import (
    AdSpendingData,
    ArchiveAdSpendingData,
    ArchiveFinancialTracking,
    ArchiveMarketingPerformance,
    ArchiveProfitTracking,
    ArchiveSalesData,
    FinancialTracking,
    MarketingPerformance,
    ProfitTracking,
    SalesData,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class ArchivePair:
    """A current table and the archive table its closed months move to."""

    src: Type[SQLModel]
    dest: Type[SQLModel]

    @property
    def src_table(self) -> str:
        return self.src.__tablename__  # type: ignore[attr-defined]

    @property
    def dest_table(self) -> str:
        return self.dest.__tablename__  # type: ignore[attr-defined]


# Order in which the monthly close-out archives tables
ARCHIVE_PAIRS: List[ArchivePair] = [
    ArchivePair(ProfitTracking, ArchiveProfitTracking),
    ArchivePair(MarketingPerformance, ArchiveMarketingPerformance),
    ArchivePair(SalesData, ArchiveSalesData),
    ArchivePair(FinancialTracking, ArchiveFinancialTracking),
    ArchivePair(AdSpendingData, ArchiveAdSpendingData),
]

ARCHIVE_TABLES: Dict[str, ArchivePair] = {pair.src_table: pair for pair in ARCHIVE_PAIRS}


def archive_model_for(model: Type[SQLModel]) -> Type[SQLModel]:
    """Return the archive entity of a current tracking entity."""
    pair = ARCHIVE_TABLES.get(model.__tablename__)  # type: ignore[attr-defined]
    if pair is None:
        raise KeyError(f"{model.__name__} has no archive table")
    return pair.dest


class ArchiveRepository:
    """Data access for moving rows between current and archive tables."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def move_to_archive(
        self,
        src_table: str,
        dest_table: str,
        month_label: str,
        user_id: Optional[str] = None,
    ) -> int:
        """Move one month of rows from ``src_table`` to ``dest_table``.

        Args:
            src_table: Name of the current table
            dest_table: Name of its archive table
            month_label: Month to move (``YYYY-MM``)
            user_id: Restrict the move to one user's rows (optional)

        Returns:
            Number of rows moved

        Raises:
            ArchiveError: If the pair is unknown or the database rejects the move
        """
        pair = ARCHIVE_TABLES.get(src_table)
        if pair is None or pair.dest_table != dest_table:
            raise ArchiveError(src_table, f"no archive mapping to '{dest_table}'")

        start, end = month_bounds(month_label)
        src = pair.src

        conditions = [src.date >= start, src.date <= end]  # type: ignore[attr-defined]
        if user_id is not None:
            conditions.append(src.user_id == user_id)  # type: ignore[attr-defined]

        try:
            result = await self.session.execute(select(src).where(*conditions))
            rows = list(result.scalars().all())

            for row in rows:
                values = row.model_dump(exclude={"id"})
                self.session.add(pair.dest(**values, month_label=month_label))

            await self.session.execute(sa_delete(src).where(*conditions))
            await self.session.commit()
        except Exception as e:
            await self.session.rollback()
            raise ArchiveError(src_table, str(e)) from e

        logger.debug(f"Moved {len(rows)} rows from {src_table} to {dest_table} for {month_label}")
        return len(rows)
