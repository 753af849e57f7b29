"""
Profit tracking entity models.

Each row is a batch of delivered units of one product on one day, with the
commission earned (MAD) and the CPD category the product belongs to.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from sqlmodel import Field

from ..base import TrackedRowBase


class SourceType(str, Enum):
    """Whether deliveries were booked on their day or caught up later."""

    NORMAL = "normale"
    DELAYED = "décalée"


# Values of ``cpd_category`` used across the product catalogue
CPD_CATEGORIES = [110, 130, 140, 150, 200, 250, 300, 350, 400, 450, 500]


class ProfitTrackingBase(TrackedRowBase):
    """Delivered units and commission for one product."""

    cpd_category: float = Field()
    product_name: str = Field(max_length=100, index=True)
    quantity: int = Field()
    commission_total: float = Field(default=0.0, description="Commission earned in MAD")
    product_id: Optional[str] = Field(default=None, max_length=64)
    source_type: str = Field(default=SourceType.NORMAL.value, max_length=16)


class ProfitTracking(ProfitTrackingBase, table=True):
    """Table: profit_tracking"""

    __tablename__ = "profit_tracking"


class ArchiveProfitTracking(ProfitTrackingBase, table=True):
    """Table: archive_profit_tracking"""

    __tablename__ = "archive_profit_tracking"

    month_label: str = Field(max_length=7, index=True)
