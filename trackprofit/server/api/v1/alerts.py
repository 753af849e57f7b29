"""
AI alert endpoints.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query

from trackprofit.core.database.repositories import AIAlertRepository
from trackprofit.core.errors import RecordNotFound
from trackprofit.core.models.io import AIAlertRead

from ...services.deps import CSRFDep, CurrentUserDep, SessionDep

router = APIRouter(tags=["alerts"])


@router.get("", response_model=List[AIAlertRead], summary="List Alerts", description="The caller's alerts, newest first.")
async def list_alerts(
    user_id: CurrentUserDep,
    session: SessionDep,
    unread_only: bool = Query(default=False),
    limit: int = Query(default=50, ge=1, le=200),
) -> List[AIAlertRead]:
    alerts = await AIAlertRepository(session).list_for_user(user_id, unread_only=unread_only, limit=limit)
    return [AIAlertRead.model_validate(alert) for alert in alerts]


@router.patch(
    "/{alert_id}/read",
    response_model=AIAlertRead,
    dependencies=[CSRFDep],
    summary="Mark Alert Read",
    responses={404: {"description": "Alert not found"}},
)
async def mark_alert_read(alert_id: int, user_id: CurrentUserDep, session: SessionDep) -> AIAlertRead:
    alert = await AIAlertRepository(session).mark_read(user_id, alert_id)
    if alert is None:
        raise RecordNotFound("alert", alert_id)
    return AIAlertRead.model_validate(alert)
