"""
Sales order endpoints.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, status

from trackprofit.core.database.entities import SalesData
from trackprofit.core.database.repositories import TrackedRowRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.models.io import DeleteResponse, SalesDataCreate, SalesDataRead

from ...services.deps import ArchiveQuery, CSRFDep, CurrentUserDep, MonthQuery, SessionDep
from ...services.kpi_service import KPIService

router = APIRouter(tags=["sales"])


@router.get(
    "",
    response_model=List[SalesDataRead],
    summary="List Sales",
    description="List the caller's orders of a month, newest day first.",
)
async def list_sales(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> List[SalesDataRead]:
    repository = KPIService(session).repository(SalesData, archive)
    rows = await repository.list_for_month(user_id, month, descending=True)
    return [SalesDataRead.model_validate(row) for row in rows]


@router.post(
    "",
    response_model=SalesDataRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[CSRFDep],
    summary="Record Sale",
)
async def create_sale(payload: SalesDataCreate, user_id: CurrentUserDep, session: SessionDep) -> SalesDataRead:
    row = await TrackedRowRepository(session, SalesData).create(SalesData(user_id=user_id, **payload.model_dump()))
    return SalesDataRead.model_validate(row)


@router.delete("/{entry_id}", response_model=DeleteResponse, dependencies=[CSRFDep], summary="Delete Sale")
async def delete_sale(entry_id: int, user_id: CurrentUserDep, session: SessionDep) -> DeleteResponse:
    repository = TrackedRowRepository(session, SalesData)
    if await repository.get_owned(user_id, entry_id) is None:
        raise RecordNotFound("sales_data", entry_id)
    await repository.delete(entry_id)
    return DeleteResponse(deleted=1)
