"""
Marketing performance entity models.

One row per user and day: ad spend in USD, leads generated, deliveries
completed and the margin earned per delivered order (MAD).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import TrackedRowBase


class MarketingPerformanceBase(TrackedRowBase):
    """Daily marketing figures."""

    spend_usd: float = Field(default=0.0)
    leads: int = Field(default=0)
    deliveries: int = Field(default=0)
    margin_per_order: float = Field(default=0.0, description="Margin per delivered order in MAD")


class MarketingPerformance(MarketingPerformanceBase, table=True):
    """Current-month marketing figures.

    Table: marketing_performance
    """

    __tablename__ = "marketing_performance"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_marketing_performance_user_date"),)

    def __repr__(self) -> str:
        return f"MarketingPerformance(user_id={self.user_id}, date={self.date}, spend_usd={self.spend_usd})"


class ArchiveMarketingPerformance(MarketingPerformanceBase, table=True):
    """Marketing figures of closed months.

    Table: archive_marketing_performance
    """

    __tablename__ = "archive_marketing_performance"

    month_label: str = Field(max_length=7, index=True)
