"""
Anomaly Detection Service.

Daily job: for every user with marketing rows on the analysed day, compute the
day's metrics, and when thresholds are crossed ask the language model for
corrective actions and store an alert.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.analytics import kpi
from trackprofit.core.database.entities import AIAlert, MarketingPerformance
from trackprofit.core.database.repositories import AIAlertRepository, TrackedRowRepository
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import AnomalyRunResponse
from trackprofit.core.months import month_label
from trackprofit.llm import NarrativeModel
from trackprofit.llm.prompts import ANOMALY_SYSTEM_PROMPT, anomaly_user_prompt

from .kpi_service import KPIService

logger = get_logger(__name__)

ANOMALY_ALERT = "anomaly"
ANOMALY_TEMPERATURE = 0.5
ANOMALY_MAX_TOKENS = 200


class AnomalyService:
    """Detects daily KPI anomalies and records AI alerts."""

    def __init__(self, session: AsyncSession, narrative_model: NarrativeModel) -> None:
        self.session = session
        self.narrative_model = narrative_model
        self.marketing = TrackedRowRepository(session, MarketingPerformance)
        self.alerts = AIAlertRepository(session)

    async def detect_for_user(self, user_id: str, day: dt.date) -> Optional[AIAlert]:
        """Analyse one user's day. Returns the stored alert, or None when nothing is abnormal."""
        rows = await self.marketing.list_between(user_id, day, day)
        if not rows:
            return None

        rate = await KPIService(self.session).exchange_rate_for_month(user_id, month_label(day))
        metrics = kpi.summarize_daily(rows, rate)
        anomalies = kpi.detect_anomalies(metrics)
        if not anomalies:
            return None

        suggestion = await self.narrative_model.generate(
            ANOMALY_SYSTEM_PROMPT,
            anomaly_user_prompt(anomalies, metrics.total_spend, metrics.total_revenue),
            temperature=ANOMALY_TEMPERATURE,
            max_tokens=ANOMALY_MAX_TOKENS,
            purpose="anomaly",
            user_id=user_id,
        )

        alert = await self.alerts.create(
            AIAlert(
                user_id=user_id,
                type=ANOMALY_ALERT,
                title=f"Anomalies détectées - {day.isoformat()}",
                content=suggestion,
                severity=kpi.anomaly_severity(metrics),
                data={
                    "date": day.isoformat(),
                    "metrics": metrics.model_dump(),
                    "anomalies": anomalies,
                },
            )
        )
        logger.info(f"Created anomaly alert for user {user_id}")
        return alert

    async def detect_anomalies(self, day: Optional[dt.date] = None) -> AnomalyRunResponse:
        """
        Run detection for every user active on ``day`` (yesterday by default).

        A failure for one user is logged and recorded; the other users are still analysed.
        """
        day = day or dt.date.today() - dt.timedelta(days=1)
        user_ids = await self.marketing.users_with_rows_on(day)
        logger.info(f"Running anomaly detection for {day.isoformat()} over {len(user_ids)} users")

        alerts_created = 0
        errors = []
        for user_id in user_ids:
            try:
                if await self.detect_for_user(user_id, day) is not None:
                    alerts_created += 1
            except Exception as e:
                await self.session.rollback()
                logger.error(f"Anomaly detection failed for user {user_id}: {e}")
                errors.append(f"{user_id}: {e}")

        return AnomalyRunResponse(
            date=day, users_checked=len(user_ids), alerts_created=alerts_created, errors=errors
        )
