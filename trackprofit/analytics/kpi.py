"""
Marketing KPI calculations.

Pure arithmetic over tracking rows. Rows may be entity instances or plain
mappings; only the named fields are read. Every ratio falls back to 0 when its
denominator is 0.

Currencies: ad spend is in USD, margins, commissions and bonuses are in MAD.
"""

from __future__ import annotations

from collections import defaultdict
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field


class PerformanceStatus(str, Enum):
    GOOD = "good"
    BAD = "bad"


class PerformanceThresholds:
    """Limits separating good from bad performance (USD and percent)."""

    CPL_GOOD = 1.5
    CPD_GOOD = 15.0
    DELIVERY_RATE_GOOD = 8.0


class AnomalyThresholds:
    """Limits used by the daily anomaly detection (MAD and percent)."""

    CPL_MAX = 25.0
    ROI_MIN = 10.0
    DELIVERY_RATE_MIN = 8.0
    CPD_MAX = 200.0
    CPL_CRITICAL = 30.0


NORMAL_SOURCE = "normale"
DELAYED_SOURCE = "décalée"


class MarketingResults(BaseModel):
    """KPIs of a single day of marketing."""

    cpl: float = Field(description="Cost per lead in USD")
    cpd: float = Field(description="Cost per delivery in USD")
    delivery_rate: float = Field(description="Deliveries per lead in percent")
    gross_profit: float = Field(description="Gross profit in USD")
    net_profit: float = Field(description="Net profit in USD")

    cpl_mad: float
    cpd_mad: float
    gross_profit_mad: float
    net_profit_mad: float

    cpl_status: PerformanceStatus
    cpd_status: PerformanceStatus
    delivery_rate_status: PerformanceStatus
    net_profit_status: PerformanceStatus


class MonthlyResume(BaseModel):
    """Totals and averages of a month of marketing rows."""

    total_spend: float = 0.0
    total_spend_mad: float = 0.0
    total_leads: int = 0
    total_deliveries: int = 0
    total_gross_profit: float = 0.0
    total_gross_profit_mad: float = 0.0
    total_net_profit: float = 0.0
    total_net_profit_mad: float = 0.0

    avg_cpl: float = 0.0
    avg_cpl_mad: float = 0.0
    avg_cpd: float = 0.0
    avg_cpd_mad: float = 0.0
    avg_delivery_rate: float = 0.0

    avg_cpl_status: PerformanceStatus = PerformanceStatus.BAD
    avg_cpd_status: PerformanceStatus = PerformanceStatus.BAD
    avg_delivery_rate_status: PerformanceStatus = PerformanceStatus.BAD
    total_net_profit_status: PerformanceStatus = PerformanceStatus.BAD


class MonthlyKPIs(BaseModel):
    """Headline figures of a month, all amounts in MAD."""

    period: str
    total_revenue: float
    total_spend: float
    total_leads: int
    total_deliveries: int
    total_bonus: float
    avg_cpl_mad: float
    avg_cpd_mad: float
    roi_percent: float
    net_profit: float


class ProfitTotals(BaseModel):
    """Commissions (MAD) and delivered quantities, split by source type."""

    total_commissions: float = 0.0
    total_quantity: int = 0
    normal_commissions: float = 0.0
    normal_quantity: int = 0
    delayed_commissions: float = 0.0
    delayed_quantity: int = 0


class DailyMetrics(BaseModel):
    """Spend and revenue of a set of marketing rows, with the derived ratios (MAD)."""

    total_spend: float
    total_revenue: float
    total_leads: int
    total_deliveries: int
    roi: float
    delivery_rate: float
    cpl: float
    cpd: float


class AdSpendingSummary(BaseModel):
    """Totals and averages of Meta Ads rows (USD)."""

    total_spent: float = 0.0
    total_impressions: int = 0
    total_clicks: int = 0
    total_leads: int = 0
    avg_cpc: float = 0.0
    avg_cpm: float = 0.0
    avg_ctr: float = 0.0
    avg_lp_rate: float = 0.0
    campaigns: int = 0


class ProductPerformance(BaseModel):
    name: str
    revenue: float
    quantity: int


def _field(row: Any, name: str, default: Any = 0) -> Any:
    if isinstance(row, Mapping):
        value = row.get(name, default)
    else:
        value = getattr(row, name, default)
    return default if value is None else value


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _status(good: bool) -> PerformanceStatus:
    return PerformanceStatus.GOOD if good else PerformanceStatus.BAD


def calculate_results(
    spend_mad: Optional[float],
    leads: Optional[int],
    deliveries: Optional[int],
    margin_per_order_mad: Optional[float],
    exchange_rate: float,
) -> MarketingResults:
    """Derive the KPIs of a day of marketing.

    Args:
        spend_mad: Ad spend in MAD (None counts as 0)
        leads: Leads generated (None counts as 0)
        deliveries: Orders delivered (None counts as 0)
        margin_per_order_mad: Margin per delivered order in MAD (None counts as 0)
        exchange_rate: MAD per USD

    Returns:
        MarketingResults in USD and MAD with a status per indicator
    """
    spend = (spend_mad or 0.0) / exchange_rate
    leads_num = leads or 0
    deliveries_num = deliveries or 0
    margin = margin_per_order_mad or 0.0

    cpl = _ratio(spend, leads_num)
    cpd = _ratio(spend, deliveries_num)
    delivery_rate = _ratio(deliveries_num, leads_num) * 100

    gross_profit_mad = deliveries_num * margin
    gross_profit = gross_profit_mad / exchange_rate
    net_profit = gross_profit - spend

    return MarketingResults(
        cpl=cpl,
        cpd=cpd,
        delivery_rate=delivery_rate,
        gross_profit=gross_profit,
        net_profit=net_profit,
        cpl_mad=cpl * exchange_rate,
        cpd_mad=cpd * exchange_rate,
        gross_profit_mad=gross_profit_mad,
        net_profit_mad=net_profit * exchange_rate,
        cpl_status=_status(cpl < PerformanceThresholds.CPL_GOOD),
        cpd_status=_status(cpd < PerformanceThresholds.CPD_GOOD),
        delivery_rate_status=_status(delivery_rate > PerformanceThresholds.DELIVERY_RATE_GOOD),
        net_profit_status=_status(net_profit > 0),
    )


def calculate_monthly_resume(rows: Sequence[Any], exchange_rate: float) -> MonthlyResume:
    """Summarize a month of marketing rows (``spend_usd``, ``leads``, ``deliveries``, ``margin_per_order``)."""
    if not rows:
        return MonthlyResume()

    total_spend = sum(_field(r, "spend_usd") for r in rows)
    total_spend_mad = total_spend * exchange_rate
    total_leads = sum(_field(r, "leads") for r in rows)
    total_deliveries = sum(_field(r, "deliveries") for r in rows)

    total_gross_profit_mad = sum(_field(r, "deliveries") * _field(r, "margin_per_order") for r in rows)
    total_gross_profit = total_gross_profit_mad / exchange_rate

    total_net_profit_mad = total_gross_profit_mad - total_spend_mad
    total_net_profit = total_net_profit_mad / exchange_rate

    avg_cpl = _ratio(total_spend, total_leads)
    avg_cpd = _ratio(total_spend, total_deliveries)
    avg_delivery_rate = _ratio(total_deliveries, total_leads) * 100

    return MonthlyResume(
        total_spend=total_spend,
        total_spend_mad=total_spend_mad,
        total_leads=total_leads,
        total_deliveries=total_deliveries,
        total_gross_profit=total_gross_profit,
        total_gross_profit_mad=total_gross_profit_mad,
        total_net_profit=total_net_profit,
        total_net_profit_mad=total_net_profit_mad,
        avg_cpl=avg_cpl,
        avg_cpl_mad=avg_cpl * exchange_rate,
        avg_cpd=avg_cpd,
        avg_cpd_mad=avg_cpd * exchange_rate,
        avg_delivery_rate=avg_delivery_rate,
        avg_cpl_status=_status(avg_cpl < PerformanceThresholds.CPL_GOOD),
        avg_cpd_status=_status(avg_cpd < PerformanceThresholds.CPD_GOOD),
        avg_delivery_rate_status=_status(avg_delivery_rate > PerformanceThresholds.DELIVERY_RATE_GOOD),
        total_net_profit_status=_status(total_net_profit > 0),
    )


def calculate_monthly_kpis(
    period: str,
    marketing_rows: Sequence[Any],
    profit_rows: Sequence[Any],
    bonus_rows: Sequence[Any],
    exchange_rate: float,
) -> MonthlyKPIs:
    """Headline KPIs of a month.

    Spend comes from marketing rows converted to MAD, revenue and deliveries from
    profit rows, bonuses are added to revenue before computing net profit and ROI.
    """
    total_spend = sum(_field(r, "spend_usd") * exchange_rate for r in marketing_rows)
    total_leads = sum(_field(r, "leads") for r in marketing_rows)
    total_revenue = sum(_field(r, "commission_total") for r in profit_rows)
    total_deliveries = sum(_field(r, "quantity") for r in profit_rows)
    total_bonus = sum(_field(r, "amount_dh") for r in bonus_rows)

    net_profit = total_revenue + total_bonus - total_spend

    return MonthlyKPIs(
        period=period,
        total_revenue=total_revenue,
        total_spend=total_spend,
        total_leads=total_leads,
        total_deliveries=total_deliveries,
        total_bonus=total_bonus,
        avg_cpl_mad=_ratio(total_spend, total_leads),
        avg_cpd_mad=_ratio(total_spend, total_deliveries),
        roi_percent=_ratio(net_profit, total_spend) * 100,
        net_profit=net_profit,
    )


def calculate_profit_totals(profit_rows: Iterable[Any]) -> ProfitTotals:
    """Sum commissions and quantities; rows without a source type count as normal deliveries."""
    totals = ProfitTotals()
    for row in profit_rows:
        commission = _field(row, "commission_total")
        quantity = _field(row, "quantity")
        totals.total_commissions += commission
        totals.total_quantity += quantity
        if _field(row, "source_type", NORMAL_SOURCE) == DELAYED_SOURCE:
            totals.delayed_commissions += commission
            totals.delayed_quantity += quantity
        else:
            totals.normal_commissions += commission
            totals.normal_quantity += quantity
    return totals


def average_exchange_rate(financial_rows: Iterable[Any], default: float) -> float:
    """Weighted MAD/USD rate of the received amounts, or ``default`` when nothing was received."""
    received = [r for r in financial_rows if _field(r, "amount_received_usd") > 0]
    total_usd = sum(_field(r, "amount_received_usd") for r in received)
    total_mad = sum(_field(r, "amount_received_mad") for r in received)
    return total_mad / total_usd if total_usd > 0 else default


def summarize_daily(marketing_rows: Sequence[Any], exchange_rate: float) -> DailyMetrics:
    """Spend (MAD), revenue (margin x deliveries) and ratios of a set of marketing rows."""
    total_spend = sum(_field(r, "spend_usd") * exchange_rate for r in marketing_rows)
    total_leads = sum(_field(r, "leads") for r in marketing_rows)
    total_deliveries = sum(_field(r, "deliveries") for r in marketing_rows)
    total_revenue = sum(_field(r, "margin_per_order") * _field(r, "deliveries") for r in marketing_rows)

    return DailyMetrics(
        total_spend=total_spend,
        total_revenue=total_revenue,
        total_leads=total_leads,
        total_deliveries=total_deliveries,
        roi=_ratio(total_revenue - total_spend, total_spend) * 100,
        delivery_rate=_ratio(total_deliveries, total_leads) * 100,
        cpl=_ratio(total_spend, total_leads),
        cpd=_ratio(total_spend, total_deliveries),
    )


def detect_anomalies(metrics: DailyMetrics) -> List[str]:
    """Human-readable descriptions of the thresholds a day crossed."""
    anomalies = []
    if metrics.cpl > AnomalyThresholds.CPL_MAX:
        anomalies.append(f"CPL élevé: {metrics.cpl:.1f} MAD")
    if metrics.roi < AnomalyThresholds.ROI_MIN:
        anomalies.append(f"ROI faible: {metrics.roi:.1f}%")
    if metrics.delivery_rate < AnomalyThresholds.DELIVERY_RATE_MIN:
        anomalies.append(f"Taux livraison bas: {metrics.delivery_rate:.1f}%")
    if metrics.cpd > AnomalyThresholds.CPD_MAX:
        anomalies.append(f"CPD élevé: {metrics.cpd:.1f} MAD")
    return anomalies


def anomaly_severity(metrics: DailyMetrics) -> str:
    """``high`` when the day lost money or leads were critically expensive, else ``medium``."""
    if metrics.roi < 0 or metrics.cpl > AnomalyThresholds.CPL_CRITICAL:
        return "high"
    return "medium"


def summarize_ad_spending(rows: Sequence[Any]) -> AdSpendingSummary:
    """Totals, CPC, CPM (per 1000 impressions), CTR and landing-page rate of ad rows."""
    total_spent = sum(_field(r, "amount_spent") for r in rows)
    total_impressions = sum(_field(r, "impressions") for r in rows)
    total_clicks = sum(_field(r, "link_clicks") for r in rows)
    total_leads = sum(_field(r, "leads") for r in rows)

    return AdSpendingSummary(
        total_spent=total_spent,
        total_impressions=total_impressions,
        total_clicks=total_clicks,
        total_leads=total_leads,
        avg_cpc=_ratio(total_spent, total_clicks),
        avg_cpm=_ratio(total_spent, total_impressions) * 1000,
        avg_ctr=_ratio(total_clicks, total_impressions) * 100,
        avg_lp_rate=_ratio(total_leads, total_clicks) * 100,
        campaigns=len({_field(r, "campaign_name", "") for r in rows}),
    )


def top_products(profit_rows: Iterable[Any], limit: int = 5) -> List[ProductPerformance]:
    """Products ranked by commission revenue, highest first."""
    revenue: defaultdict[str, float] = defaultdict(float)
    quantity: defaultdict[str, int] = defaultdict(int)
    for row in profit_rows:
        name = _field(row, "product_name", "")
        revenue[name] += _field(row, "commission_total")
        quantity[name] += _field(row, "quantity")

    ranked = sorted(revenue, key=lambda name: revenue[name], reverse=True)
    return [ProductPerformance(name=name, revenue=revenue[name], quantity=quantity[name]) for name in ranked[:limit]]


def country_profit(revenue_mad: float, spend_mad: float) -> Tuple[float, float]:
    """Profit in MAD and ROI in percent of a country; ROI is 0 without spend."""
    profit = revenue_mad - spend_mad
    return profit, _ratio(profit, spend_mad) * 100
