"""
KPI Service.

Loads a user's month of tracking rows (current or archived) and runs the KPI
calculations over them.
"""

from __future__ import annotations

from typing import List, Type

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from trackprofit.analytics import kpi
from trackprofit.core.database.entities import (
    AdSpendingData,
    FinancialTracking,
    MarketingPerformance,
    MonthlyBonus,
    ProfitTracking,
)
from trackprofit.core.database.repositories import TrackedRowRepository, archive_model_for
from trackprofit.core.logging_config import get_logger
from trackprofit.core.models.io import (
    FinancialSummary,
    MarketingPerformanceRead,
    MarketingResultRow,
    MarketingResultsResponse,
)
from trackprofit.core.months import parse_month_label

from ..core.config import settings

logger = get_logger(__name__)


class KPIService:
    """Month level KPIs of one user."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def repository(self, model: Type, archive: bool = False) -> TrackedRowRepository:
        """Repository over ``model`` or, with ``archive``, over its archive table."""
        return TrackedRowRepository(self.session, archive_model_for(model) if archive else model)

    async def rows_for_month(self, model: Type, user_id: str, month_label: str, archive: bool = False) -> List:
        return await self.repository(model, archive).list_for_month(user_id, month_label)

    async def exchange_rate_for_month(self, user_id: str, month_label: str, archive: bool = False) -> float:
        """Weighted rate of the month's received amounts, or the configured default."""
        rows = await self.rows_for_month(FinancialTracking, user_id, month_label, archive)
        return kpi.average_exchange_rate(rows, settings.kpi.default_exchange_rate)

    async def marketing_results(self, user_id: str, month_label: str, archive: bool = False) -> MarketingResultsResponse:
        rate = await self.exchange_rate_for_month(user_id, month_label, archive)
        rows = await self.rows_for_month(MarketingPerformance, user_id, month_label, archive)

        result_rows = [
            MarketingResultRow(
                row=MarketingPerformanceRead.model_validate(row),
                results=kpi.calculate_results(
                    spend_mad=row.spend_usd * rate,
                    leads=row.leads,
                    deliveries=row.deliveries,
                    margin_per_order_mad=row.margin_per_order,
                    exchange_rate=rate,
                ),
            )
            for row in rows
        ]
        return MarketingResultsResponse(
            month_label=month_label,
            exchange_rate=rate,
            rows=result_rows,
            resume=kpi.calculate_monthly_resume(rows, rate),
        )

    async def financial_summary(self, user_id: str, month_label: str, archive: bool = False) -> FinancialSummary:
        rows = await self.rows_for_month(FinancialTracking, user_id, month_label, archive)
        return FinancialSummary(
            month_label=month_label,
            total_received_usd=sum(row.amount_received_usd for row in rows),
            total_received_mad=sum(row.amount_received_mad for row in rows),
            average_exchange_rate=kpi.average_exchange_rate(rows, settings.kpi.default_exchange_rate),
            days=len(rows),
        )

    async def profit_totals(self, user_id: str, month_label: str, archive: bool = False) -> kpi.ProfitTotals:
        rows = await self.rows_for_month(ProfitTracking, user_id, month_label, archive)
        return kpi.calculate_profit_totals(rows)

    async def ad_spending_summary(self, user_id: str, month_label: str, archive: bool = False) -> kpi.AdSpendingSummary:
        rows = await self.rows_for_month(AdSpendingData, user_id, month_label, archive)
        return kpi.summarize_ad_spending(rows)

    async def bonus_rows(self, user_id: str, month_label: str) -> List[MonthlyBonus]:
        year, month = parse_month_label(month_label)
        stmt = (
            select(MonthlyBonus)
            .where(MonthlyBonus.user_id == user_id)
            .where(MonthlyBonus.year == year)
            .where(MonthlyBonus.month == month)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def monthly_kpis(self, user_id: str, month_label: str, archive: bool = False) -> kpi.MonthlyKPIs:
        """Headline KPIs: spend from marketing rows, revenue from profit rows, plus the month's bonus."""
        rate = await self.exchange_rate_for_month(user_id, month_label, archive)
        marketing_rows = await self.rows_for_month(MarketingPerformance, user_id, month_label, archive)
        profit_rows = await self.rows_for_month(ProfitTracking, user_id, month_label, archive)
        bonus_rows = await self.bonus_rows(user_id, month_label)

        logger.debug(
            f"Monthly KPIs for {user_id} {month_label}: {len(marketing_rows)} marketing rows, "
            f"{len(profit_rows)} profit rows, rate={rate:.3f}"
        )
        return kpi.calculate_monthly_kpis(month_label, marketing_rows, profit_rows, bonus_rows, rate)
