"""
Per-country result endpoints.

One row per country and period start; the monthly insights quote the rows of
the month.
"""

from __future__ import annotations

from typing import Annotated, List, Optional

from fastapi import APIRouter, Query

from trackprofit.analytics.kpi import country_profit
from trackprofit.core.database.repositories import CountryDataRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.models.io import CountryDataRead, CountryDataWrite, DeleteResponse
from trackprofit.core.models.io.common import MONTH_LABEL_PATTERN
from trackprofit.core.months import month_bounds

from ...services.deps import CSRFDep, CurrentUserDep, SessionDep

router = APIRouter(tags=["countries"])


@router.get(
    "",
    response_model=List[CountryDataRead],
    summary="List Country Results",
    description="The caller's country rows, best ROI first. With a month, only rows whose period overlaps it.",
)
async def list_countries(
    user_id: CurrentUserDep,
    session: SessionDep,
    country: Annotated[Optional[List[str]], Query(description="Country codes to keep")] = None,
    month: Annotated[Optional[str], Query(pattern=MONTH_LABEL_PATTERN, description="Month to read (YYYY-MM)")] = None,
) -> List[CountryDataRead]:
    start, end = month_bounds(month) if month else (None, None)
    rows = await CountryDataRepository(session).list_for_user(user_id, country_codes=country, start=start, end=end)
    return [CountryDataRead.model_validate(row) for row in rows]


@router.put(
    "",
    response_model=CountryDataRead,
    dependencies=[CSRFDep],
    summary="Upsert Country Results",
    responses={422: {"description": "Invalid country code, negative amounts or inverted period"}},
)
async def upsert_country(payload: CountryDataWrite, user_id: CurrentUserDep, session: SessionDep) -> CountryDataRead:
    """
    Insert or replace the results of a country for the period starting at **period_start**.

    **profit_mad** and **roi_percent** are computed from revenue and spend.
    """
    values = payload.model_dump()
    values["profit_mad"], values["roi_percent"] = country_profit(payload.revenue_mad, payload.spend_mad)
    row = await CountryDataRepository(session).upsert(user_id, values)
    return CountryDataRead.model_validate(row)


@router.delete("/{entry_id}", response_model=DeleteResponse, dependencies=[CSRFDep], summary="Delete Country Results")
async def delete_country(entry_id: int, user_id: CurrentUserDep, session: SessionDep) -> DeleteResponse:
    repository = CountryDataRepository(session)
    if await repository.get_owned(user_id, entry_id) is None:
        raise RecordNotFound("country_data", entry_id)
    await repository.delete(entry_id)
    return DeleteResponse(deleted=1)
