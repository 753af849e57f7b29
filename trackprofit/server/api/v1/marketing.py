"""
Marketing performance endpoints.

One row per user and day; writing a day replaces its figures. Reads are by
month and can target the archive of a closed month.
"""

from __future__ import annotations

import datetime as dt
from typing import List

from fastapi import APIRouter, status

from trackprofit.core.database.entities import MarketingPerformance
from trackprofit.core.database.repositories import TrackedRowRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import (
    DeleteResponse,
    MarketingPerformanceRead,
    MarketingPerformanceWrite,
    MarketingResultsResponse,
)

from ...services.deps import ArchiveQuery, CSRFDep, CurrentUserDep, MonthQuery, SessionDep
from ...services.kpi_service import KPIService

logger = get_logger(__name__)

router = APIRouter(tags=["marketing"])


@router.get(
    "",
    response_model=List[MarketingPerformanceRead],
    summary="List Marketing Performance",
    description="List the caller's daily marketing figures of a month, oldest day first.",
)
async def list_marketing(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> List[MarketingPerformanceRead]:
    rows = await KPIService(session).rows_for_month(MarketingPerformance, user_id, month, archive)
    return [MarketingPerformanceRead.model_validate(row) for row in rows]


@router.put(
    "",
    response_model=MarketingPerformanceRead,
    dependencies=[CSRFDep],
    summary="Record Marketing Performance",
    description="Create or replace the marketing figures of a day.",
    responses={422: {"description": "Values out of range"}},
)
async def upsert_marketing(
    payload: MarketingPerformanceWrite, user_id: CurrentUserDep, session: SessionDep
) -> MarketingPerformanceRead:
    """
    Record a day of marketing.

    - **spend_usd**: Ad spend in USD (0-100000).
    - **leads** / **deliveries**: Whole numbers (0-10000).
    - **margin_per_order**: Margin per delivered order in MAD (0-10000).
    """
    repository = TrackedRowRepository(session, MarketingPerformance)
    row = await repository.upsert_for_date(user_id, payload.date, payload.model_dump(exclude={"date"}))
    logger.debug(f"Recorded marketing performance of {user_id} for {payload.date}")
    return MarketingPerformanceRead.model_validate(row)


@router.delete(
    "/{day}",
    response_model=DeleteResponse,
    dependencies=[CSRFDep],
    summary="Delete Marketing Performance",
    responses={404: {"description": "No figures recorded for that day"}},
)
async def delete_marketing(day: dt.date, user_id: CurrentUserDep, session: SessionDep) -> DeleteResponse:
    deleted = await TrackedRowRepository(session, MarketingPerformance).delete_for_date(user_id, day)
    if not deleted:
        raise RecordNotFound("marketing_performance", day.isoformat())
    return DeleteResponse(deleted=deleted)


@router.get(
    "/results",
    response_model=MarketingResultsResponse,
    status_code=status.HTTP_200_OK,
    summary="Marketing Results",
    description=(
        "KPIs of every day of a month (CPL, CPD, delivery rate, profits with good/bad status) "
        "and the month's resume, at the month's average exchange rate."
    ),
)
async def marketing_results(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> MarketingResultsResponse:
    return await KPIService(session).marketing_results(user_id, month, archive)
