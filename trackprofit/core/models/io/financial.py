"""
Financial tracking I/O models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import TrackedRowRead, TrackingDate


class FinancialTrackingWrite(BaseModel):
    """Schema for recording money received on a day; the MAD amount is computed server side."""

    date: TrackingDate
    exchange_rate: float = Field(ge=0.1, le=100, description="MAD per USD")
    amount_received_usd: float = Field(ge=0, le=1_000_000)


class FinancialTrackingRead(TrackedRowRead):
    exchange_rate: float
    amount_received_usd: float
    amount_received_mad: float


class FinancialSummary(BaseModel):
    """Money received over a month."""

    month_label: str
    total_received_usd: float
    total_received_mad: float
    average_exchange_rate: float = Field(description="Weighted MAD/USD rate, or the default rate")
    days: int = Field(description="Number of days with a financial row")
