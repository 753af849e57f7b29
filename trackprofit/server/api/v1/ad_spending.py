"""
Ad spending endpoints.

Rows of the Meta Ads campaign export and their monthly summary.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from trackprofit.analytics.kpi import AdSpendingSummary
from trackprofit.core.database.entities import AdSpendingData
from trackprofit.core.database.repositories import TrackedRowRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.models.io import AdSpendingCreate, AdSpendingRead, DeleteResponse

from ...services.deps import ArchiveQuery, CSRFDep, CurrentUserDep, MonthQuery, SessionDep
from ...services.kpi_service import KPIService

router = APIRouter(tags=["ad-spending"])


@router.get("", response_model=List[AdSpendingRead], summary="List Ad Spending")
async def list_ad_spending(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> List[AdSpendingRead]:
    rows = await KPIService(session).rows_for_month(AdSpendingData, user_id, month, archive)
    return [AdSpendingRead.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=List[AdSpendingRead],
    status_code=status.HTTP_201_CREATED,
    dependencies=[CSRFDep],
    summary="Import Ad Spending",
    description="Store the rows of a Meta Ads export in one transaction.",
)
async def import_ad_spending(
    payload: List[AdSpendingCreate], user_id: CurrentUserDep, session: SessionDep
) -> List[AdSpendingRead]:
    entities = [AdSpendingData(user_id=user_id, **item.model_dump()) for item in payload]
    rows = await TrackedRowRepository(session, AdSpendingData).create_many(entities)
    return [AdSpendingRead.model_validate(row) for row in rows]


@router.get(
    "/summary",
    response_model=AdSpendingSummary,
    summary="Ad Spending Summary",
    description="Totals, CPC, CPM, CTR and landing page rate of a month of campaigns.",
)
async def ad_spending_summary(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> AdSpendingSummary:
    return await KPIService(session).ad_spending_summary(user_id, month, archive)


@router.delete("/{entry_id}", response_model=DeleteResponse, dependencies=[CSRFDep], summary="Delete Ad Spending")
async def delete_ad_spending(entry_id: int, user_id: CurrentUserDep, session: SessionDep) -> DeleteResponse:
    repository = TrackedRowRepository(session, AdSpendingData)
    if await repository.get_owned(user_id, entry_id) is None:
        raise RecordNotFound("ad_spending_data", entry_id)
    await repository.delete(entry_id)
    return DeleteResponse(deleted=1)
