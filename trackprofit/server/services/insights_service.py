"""
Insights Service.

Monthly narrative insights: served from ``insights_cache`` while fresh,
otherwise generated from the month's figures and cached.
"""

from __future__ import annotations

import datetime as dt
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from trackprofit.analytics import kpi
from trackprofit.core.database.base import as_utc, utc_now
from trackprofit.core.database.entities import InsightsCache, MarketingPerformance, ProfitTracking
from trackprofit.core.database.repositories import CountryDataRepository, InsightsCacheRepository
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import InsightsResponse
from trackprofit.core.months import month_bounds
from trackprofit.llm import NarrativeModel
from trackprofit.llm.prompts import INSIGHTS_SYSTEM_PROMPT, insights_user_prompt

from ..core.config import settings
from .kpi_service import KPIService

logger = get_logger(__name__)

MONTHLY_INSIGHTS = "monthly"
INSIGHTS_TEMPERATURE = 0.6
INSIGHTS_MAX_TOKENS = 1000
TOP_PRODUCTS = 5


def insight_metrics(marketing_rows, profit_rows, exchange_rate: float) -> Dict[str, float]:
    """Month figures shown to the model: totals rounded to units, ratios to one decimal."""
    total_spend = sum((row.spend_usd or 0) * exchange_rate for row in marketing_rows)
    total_leads = sum(row.leads or 0 for row in marketing_rows)
    total_deliveries = sum(row.deliveries or 0 for row in marketing_rows)
    total_revenue = sum(row.commission_total or 0 for row in profit_rows)

    roi = (total_revenue - total_spend) / total_spend * 100 if total_spend > 0 else 0.0
    delivery_rate = total_deliveries / total_leads * 100 if total_leads > 0 else 0.0
    cpl = total_spend / total_leads if total_leads > 0 else 0.0
    cpd = total_spend / total_deliveries if total_deliveries > 0 else 0.0

    return {
        "total_spend": round(total_spend),
        "total_revenue": round(total_revenue),
        "roi": round(roi, 1),
        "delivery_rate": round(delivery_rate, 1),
        "cpl": round(cpl, 1),
        "cpd": round(cpd, 1),
        "total_leads": total_leads,
        "total_deliveries": total_deliveries,
    }


class InsightsService:
    """Generates and caches monthly narrative insights."""

    def __init__(self, session: AsyncSession, narrative_model: NarrativeModel) -> None:
        self.session = session
        self.narrative_model = narrative_model
        self.cache = InsightsCacheRepository(session)

    async def generate_insights(
        self, user_id: str, month: int, year: int, now: Optional[dt.datetime] = None
    ) -> InsightsResponse:
        """
        Monthly insights of a user.

        Args:
            user_id: The user
            month: Month number (1-12)
            year: Four digit year
            now: Reference time for cache expiry (optional)

        Returns:
            InsightsResponse, with ``cached`` telling whether the model was called

        Raises:
            NarrativeGenerationError: If the language model call fails
        """
        now = as_utc(now) if now else utc_now()
        period = f"{year:04d}-{month:02d}"

        cached = await self.cache.get_fresh(user_id, MONTHLY_INSIGHTS, period=period, now=now)
        if cached is not None:
            logger.debug(f"Returning cached insights for {user_id} {period}")
            return InsightsResponse(
                insights=cached.content,
                period=period,
                cached=True,
                generated_at=cached.generated_at,
                expires_at=cached.expires_at,
            )

        logger.info(f"Generating insights for user {user_id}, period {period}")
        kpis = KPIService(self.session)
        rate = await kpis.exchange_rate_for_month(user_id, period)
        marketing_rows = await kpis.rows_for_month(MarketingPerformance, user_id, period)
        profit_rows = await kpis.rows_for_month(ProfitTracking, user_id, period)

        metrics = insight_metrics(marketing_rows, profit_rows, rate)
        products = kpi.top_products(profit_rows, limit=TOP_PRODUCTS)
        start, end = month_bounds(period)
        countries = await CountryDataRepository(self.session).list_for_user(user_id, start=start, end=end)

        content = await self.narrative_model.generate(
            INSIGHTS_SYSTEM_PROMPT,
            insights_user_prompt(month, year, metrics, products, countries),
            temperature=INSIGHTS_TEMPERATURE,
            max_tokens=INSIGHTS_MAX_TOKENS,
            purpose="insights",
            user_id=user_id,
        )

        entry = await self.cache.create(
            InsightsCache(
                user_id=user_id,
                content=content,
                insights_type=MONTHLY_INSIGHTS,
                period=period,
                generated_at=now,
                expires_at=now + dt.timedelta(hours=settings.kpi.insights_cache_ttl_hours),
            )
        )
        return InsightsResponse(
            insights=entry.content,
            period=period,
            cached=False,
            generated_at=entry.generated_at,
            expires_at=entry.expires_at,
        )
