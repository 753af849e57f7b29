"""
KPI endpoints.
"""

from fastapi import APIRouter

from trackprofit.analytics.kpi import MonthlyKPIs

from ...services.deps import ArchiveQuery, CurrentUserDep, MonthQuery, SessionDep
from ...services.kpi_service import KPIService

router = APIRouter(tags=["kpis"])


@router.get(
    "/monthly",
    response_model=MonthlyKPIs,
    summary="Monthly KPIs",
    description=(
        "Revenue, spend, bonus, net profit and ROI of a month in MAD. Spend is converted "
        "at the month's weighted exchange rate."
    ),
)
async def monthly_kpis(
    user_id: CurrentUserDep, session: SessionDep, month: MonthQuery, archive: ArchiveQuery = False
) -> MonthlyKPIs:
    return await KPIService(session).monthly_kpis(user_id, month, archive)
