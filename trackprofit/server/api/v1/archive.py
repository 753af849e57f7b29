"""
Monthly archive endpoints.

Meant to be called by an external scheduler at the start of each month. When a
service token is configured the caller must present it in ``X-Service-Token``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Query

from trackprofit.core.database.repositories import SystemLogRepository
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import CloseMonthRequest, CloseMonthResponse

from ...services.archive_service import MONTHLY_ARCHIVE_LOG_TYPE, close_month
from ...services.deps import ServiceTokenDep, SessionDep

logger = get_logger(__name__)

router = APIRouter(tags=["archive"], dependencies=[ServiceTokenDep])


@router.post(
    "/close-month",
    response_model=CloseMonthResponse,
    summary="Close Month",
    description=(
        "Move a month of profit, marketing, sales, financial and ad spending rows to their archive tables. "
        "Tables are archived independently; failures are listed in `errors`."
    ),
    responses={400: {"description": "Invalid month label"}, 403: {"description": "Invalid service token"}},
)
async def close_month_endpoint(
    session: SessionDep, payload: Optional[CloseMonthRequest] = Body(default=None)
) -> CloseMonthResponse:
    """
    Close a month.

    - **month_label**: `YYYY-MM`, defaults to the previous calendar month.
    - **user_id**: Restrict the archive to one user (optional).
    """
    payload = payload or CloseMonthRequest()
    return await close_month(session, month_label=payload.month_label, user_id=payload.user_id)


@router.get(
    "/runs",
    summary="Archive Runs",
    description="Most recent monthly archive log entries, newest first.",
)
async def archive_runs(session: SessionDep, limit: int = Query(default=12, ge=1, le=100)) -> List[Dict[str, Any]]:
    entries = await SystemLogRepository(session).latest(MONTHLY_ARCHIVE_LOG_TYPE, limit=limit)
    return [
        {"id": entry.id, "message": entry.message, "data": entry.data, "created_at": entry.created_at}
        for entry in entries
    ]
