"""
Marketing performance I/O models.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ....analytics.kpi import MarketingResults, MonthlyResume
from .common import TrackedRowRead, TrackingDate


class MarketingPerformanceWrite(BaseModel):
    """Schema for recording a day of marketing; the row for (user, date) is replaced."""

    date: TrackingDate = Field(description="Day the figures belong to")
    spend_usd: float = Field(ge=0, le=100_000, description="Ad spend in USD")
    leads: int = Field(ge=0, le=10_000)
    deliveries: int = Field(ge=0, le=10_000)
    margin_per_order: float = Field(ge=0, le=10_000, description="Margin per delivered order in MAD")


class MarketingPerformanceRead(TrackedRowRead):
    spend_usd: float
    leads: int
    deliveries: int
    margin_per_order: float


class MarketingResultRow(BaseModel):
    """A marketing row with the KPIs derived from it."""

    row: MarketingPerformanceRead
    results: MarketingResults


class MarketingResultsResponse(BaseModel):
    month_label: str
    exchange_rate: float
    rows: List[MarketingResultRow]
    resume: MonthlyResume
