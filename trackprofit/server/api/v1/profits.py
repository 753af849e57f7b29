"""
Profit tracking endpoints.

Delivered units and commissions per product; several rows may exist per day.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from trackprofit.analytics.kpi import ProfitTotals
from trackprofit.core.database.base import utc_now
from trackprofit.core.database.entities import ProfitTracking
from trackprofit.core.database.repositories import TrackedRowRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.models.io import (
    DeleteResponse,
    ProfitTrackingCreate,
    ProfitTrackingRead,
    ProfitTrackingUpdate,
)

from ...services.deps import ArchiveQuery, CSRFDep, CurrentUserDep, MonthQuery, SessionDep
from ...services.kpi_service import KPIService

router = APIRouter(tags=["profits"])


@router.get(
    "",
    response_model=List[ProfitTrackingRead],
    summary="List Profit Tracking",
    description="List the caller's profit rows of a month.",
)
async def list_profits(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> List[ProfitTrackingRead]:
    rows = await KPIService(session).rows_for_month(ProfitTracking, user_id, month, archive)
    return [ProfitTrackingRead.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=ProfitTrackingRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[CSRFDep],
    summary="Record Profit",
    responses={422: {"description": "Values out of range or product name with forbidden characters"}},
)
async def create_profit(payload: ProfitTrackingCreate, user_id: CurrentUserDep, session: SessionDep) -> ProfitTrackingRead:
    """
    Record delivered units of a product.

    - **cpd_category**: CPD category of the product (0-1000).
    - **product_name**: 1-100 characters, no markup or quotes.
    - **quantity**: Units delivered (1-1000).
    - **source_type**: `normale` or `décalée` (delayed delivery).
    """
    values = payload.model_dump()
    values["source_type"] = payload.source_type.value
    row = await TrackedRowRepository(session, ProfitTracking).create(ProfitTracking(user_id=user_id, **values))
    return ProfitTrackingRead.model_validate(row)


@router.get(
    "/totals",
    response_model=ProfitTotals,
    summary="Profit Totals",
    description="Commissions and quantities of a month, split between normal and delayed deliveries.",
)
async def profit_totals(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> ProfitTotals:
    return await KPIService(session).profit_totals(user_id, month, archive)


@router.patch(
    "/{entry_id}",
    response_model=ProfitTrackingRead,
    dependencies=[CSRFDep],
    summary="Update Profit",
    responses={404: {"description": "Row not found"}},
)
async def update_profit(
    entry_id: int, payload: ProfitTrackingUpdate, user_id: CurrentUserDep, session: SessionDep
) -> ProfitTrackingRead:
    repository = TrackedRowRepository(session, ProfitTracking)
    row = await repository.get_owned(user_id, entry_id)
    if row is None:
        raise RecordNotFound("profit_tracking", entry_id)

    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(row, key, value.value if key == "source_type" and value is not None else value)
    row.updated_at = utc_now()
    return ProfitTrackingRead.model_validate(await repository.update(row))


@router.delete("/{entry_id}", response_model=DeleteResponse, dependencies=[CSRFDep], summary="Delete Profit")
async def delete_profit(entry_id: int, user_id: CurrentUserDep, session: SessionDep) -> DeleteResponse:
    repository = TrackedRowRepository(session, ProfitTracking)
    if await repository.get_owned(user_id, entry_id) is None:
        raise RecordNotFound("profit_tracking", entry_id)
    await repository.delete(entry_id)
    return DeleteResponse(deleted=1)
