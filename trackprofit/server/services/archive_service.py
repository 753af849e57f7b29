"""
Monthly Archive Service.

Closes a month by moving every tracking table's rows of that month into the
matching archive table. Tables are processed one by one in a fixed order; a
failing table is reported and the run goes on with the next one.
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.core.database.repositories import ARCHIVE_PAIRS, ArchiveRepository, SystemLogRepository
from trackprofit.core.errors import ArchiveError
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import CloseMonthResponse
from trackprofit.core.monitoring import log_archive_run
from trackprofit.core.months import month_bounds, previous_month_label

logger = get_logger(__name__)

MONTHLY_ARCHIVE_LOG_TYPE = "monthly_archive"


async def close_month(
    session: AsyncSession,
    month_label: Optional[str] = None,
    user_id: Optional[str] = None,
    today: Optional[dt.date] = None,
) -> CloseMonthResponse:
    """
    Archive one month of tracking data.

    Args:
        session: Database session
        month_label: Month to close (``YYYY-MM``), the month before ``today`` by default
        user_id: Only archive this user's rows (optional)
        today: Reference day for the default month (optional)

    Returns:
        CloseMonthResponse with the number of tables archived and the per table errors

    Raises:
        InvalidMonthLabel: If ``month_label`` is malformed
    """
    label = month_label or previous_month_label(today)
    month_bounds(label)

    logger.info(f"Starting monthly archive for {label}")

    repository = ArchiveRepository(session)
    rows_moved: Dict[str, int] = {}
    errors: List[str] = []

    for pair in ARCHIVE_PAIRS:
        try:
            moved = await repository.move_to_archive(pair.src_table, pair.dest_table, label, user_id=user_id)
            rows_moved[pair.src_table] = moved
            logger.info(f"Archived {moved} rows from {pair.src_table} to {pair.dest_table}")
        except ArchiveError as e:
            logger.error(f"Failed to archive {pair.src_table}: {e.message}")
            errors.append(str(e))

    archived_tables = len(rows_moved)
    total_tables = len(ARCHIVE_PAIRS)

    try:
        await SystemLogRepository(session).write(
            type=MONTHLY_ARCHIVE_LOG_TYPE,
            message=f"Monthly archive completed for {label}. Success: {archived_tables}/{total_tables}",
            data={
                "month_label": label,
                "success_count": archived_tables,
                "total_tables": total_tables,
                "errors": errors,
            },
            user_id=user_id,
        )
    except Exception as e:
        await session.rollback()
        logger.warning(f"Could not write the archive system log for {label}: {e}")

    log_archive_run(label, archived_tables, total_tables, errors)
    logger.info(f"Monthly archive for {label} finished: {archived_tables}/{total_tables} tables")

    return CloseMonthResponse(
        success=True,
        month_label=label,
        archived_tables=archived_tables,
        total_tables=total_tables,
        rows_moved=rows_moved,
        errors=errors,
    )
