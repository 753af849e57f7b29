"""
Financial tracking entity models.

Records the USD amount received on a day together with the exchange rate
used to convert it to MAD.
"""

from __future__ import annotations

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import TrackedRowBase


class FinancialTrackingBase(TrackedRowBase):
    """Daily received amounts."""

    exchange_rate: float = Field()
    amount_received_usd: float = Field(default=0.0)
    amount_received_mad: float = Field(default=0.0)


class FinancialTracking(FinancialTrackingBase, table=True):
    """Table: financial_tracking"""

    __tablename__ = "financial_tracking"
    __table_args__ = (UniqueConstraint("user_id", "date", name="uq_financial_tracking_user_date"),)


class ArchiveFinancialTracking(FinancialTrackingBase, table=True):
    """Table: archive_financial_tracking"""

    __tablename__ = "archive_financial_tracking"

    month_label: str = Field(max_length=7, index=True)
