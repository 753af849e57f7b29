"""
Financial tracking endpoints.

Money received per day. The MAD amount is always recomputed from the USD
amount and the day's exchange rate.
"""

from __future__ import annotations

import datetime as dt
from typing import List

from fastapi import APIRouter

from trackprofit.core.database.entities import FinancialTracking
from trackprofit.core.database.repositories import TrackedRowRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.models.io import (
    DeleteResponse,
    FinancialSummary,
    FinancialTrackingRead,
    FinancialTrackingWrite,
)

from ...services.deps import ArchiveQuery, CSRFDep, CurrentUserDep, MonthQuery, SessionDep
from ...services.kpi_service import KPIService

router = APIRouter(tags=["financial"])


@router.get(
    "",
    response_model=List[FinancialTrackingRead],
    summary="List Financial Tracking",
    description="List the caller's received amounts of a month.",
)
async def list_financial(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> List[FinancialTrackingRead]:
    rows = await KPIService(session).rows_for_month(FinancialTracking, user_id, month, archive)
    return [FinancialTrackingRead.model_validate(row) for row in rows]


@router.put(
    "",
    response_model=FinancialTrackingRead,
    dependencies=[CSRFDep],
    summary="Record Financial Tracking",
    description="Create or replace the amount received on a day; amount_received_mad = usd x rate.",
)
async def upsert_financial(
    payload: FinancialTrackingWrite, user_id: CurrentUserDep, session: SessionDep
) -> FinancialTrackingRead:
    values = payload.model_dump(exclude={"date"})
    values["amount_received_mad"] = payload.amount_received_usd * payload.exchange_rate
    row = await TrackedRowRepository(session, FinancialTracking).upsert_for_date(user_id, payload.date, values)
    return FinancialTrackingRead.model_validate(row)


@router.delete("/{day}", response_model=DeleteResponse, dependencies=[CSRFDep], summary="Delete Financial Tracking")
async def delete_financial(day: dt.date, user_id: CurrentUserDep, session: SessionDep) -> DeleteResponse:
    deleted = await TrackedRowRepository(session, FinancialTracking).delete_for_date(user_id, day)
    if not deleted:
        raise RecordNotFound("financial_tracking", day.isoformat())
    return DeleteResponse(deleted=deleted)


@router.get(
    "/summary",
    response_model=FinancialSummary,
    summary="Financial Summary",
    description="Totals received in a month and the month's weighted MAD/USD rate.",
)
async def financial_summary(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> FinancialSummary:
    return await KPIService(session).financial_summary(user_id, month, archive)
