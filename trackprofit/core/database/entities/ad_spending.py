"""
Ad spending entity models.

Rows of the Meta Ads campaign export, one per campaign and reporting day.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlmodel import Field

from ..base import TrackedRowBase


class AdSpendingDataBase(TrackedRowBase):
    """One campaign's delivery and cost figures for a day."""

    account_name: str = Field(max_length=255)
    campaign_name: str = Field(max_length=255, index=True)
    ad_set_delivery: Optional[str] = Field(default=None, max_length=64)
    currency: Optional[str] = Field(default="USD", max_length=8)
    amount_spent: Optional[float] = Field(default=None)
    impressions: Optional[int] = Field(default=None)
    reach: Optional[int] = Field(default=None)
    frequency: Optional[float] = Field(default=None)
    link_clicks: Optional[int] = Field(default=None)
    landing_page_views: Optional[int] = Field(default=None)
    leads: Optional[int] = Field(default=None)
    cpc: Optional[float] = Field(default=None)
    cpm: Optional[float] = Field(default=None)
    cost_per_lead: Optional[float] = Field(default=None)
    cost_per_landing_page_view: Optional[float] = Field(default=None)
    hook_rate: Optional[float] = Field(default=None)
    hold_rate: Optional[float] = Field(default=None)
    lp_rate: Optional[float] = Field(default=None)
    report_start: Optional[dt.date] = Field(default=None)
    report_end: Optional[dt.date] = Field(default=None)


class AdSpendingData(AdSpendingDataBase, table=True):
    """Table: ad_spending_data"""

    __tablename__ = "ad_spending_data"


class ArchiveAdSpendingData(AdSpendingDataBase, table=True):
    """Table: archive_ad_spending_data"""

    __tablename__ = "archive_ad_spending_data"

    month_label: str = Field(max_length=7, index=True)
