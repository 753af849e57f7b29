"""
AI insight endpoints.

Monthly narrative insights for the caller, and the daily anomaly detection job
(guarded by the service token like the monthly archive).
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body

from trackprofit.core.models.io import AnomalyRunRequest, AnomalyRunResponse, InsightsRequest, InsightsResponse

from ...services.anomaly_service import AnomalyService
from ...services.deps import CSRFDep, CurrentUserDep, NarrativeModelDep, ServiceTokenDep, SessionDep
from ...services.insights_service import InsightsService

router = APIRouter(tags=["insights"])


@router.post(
    "/generate",
    response_model=InsightsResponse,
    dependencies=[CSRFDep],
    summary="Generate Monthly Insights",
    description=(
        "Narrative analysis of a month (products to scale, campaigns to optimise, anomalies). "
        "Served from the cache for 24 hours after generation."
    ),
    responses={502: {"description": "The language model call failed"}},
)
async def generate_insights(
    payload: InsightsRequest, user_id: CurrentUserDep, session: SessionDep, narrative_model: NarrativeModelDep
) -> InsightsResponse:
    return await InsightsService(session, narrative_model).generate_insights(user_id, payload.month, payload.year)


@router.post(
    "/detect-anomalies",
    response_model=AnomalyRunResponse,
    dependencies=[ServiceTokenDep],
    summary="Detect Anomalies",
    description=(
        "Analyse a day (yesterday by default) for every user with marketing data and store "
        "an AI alert for each user whose CPL, CPD, ROI or delivery rate crossed its threshold."
    ),
)
async def detect_anomalies(
    session: SessionDep, narrative_model: NarrativeModelDep, payload: Optional[AnomalyRunRequest] = Body(default=None)
) -> AnomalyRunResponse:
    payload = payload or AnomalyRunRequest()
    return await AnomalyService(session, narrative_model).detect_anomalies(payload.date)
