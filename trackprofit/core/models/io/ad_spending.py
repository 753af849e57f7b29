"""
Ad spending I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, Field

from .common import TrackedRowRead, TrackingDate


class AdSpendingFields(BaseModel):
    account_name: str = Field(min_length=1, max_length=255)
    campaign_name: str = Field(min_length=1, max_length=255)
    ad_set_delivery: Optional[str] = Field(default=None, max_length=64)
    currency: Optional[str] = Field(default="USD", max_length=8)
    amount_spent: Optional[float] = Field(default=None, ge=0)
    impressions: Optional[int] = Field(default=None, ge=0)
    reach: Optional[int] = Field(default=None, ge=0)
    frequency: Optional[float] = Field(default=None, ge=0)
    link_clicks: Optional[int] = Field(default=None, ge=0)
    landing_page_views: Optional[int] = Field(default=None, ge=0)
    leads: Optional[int] = Field(default=None, ge=0)
    cpc: Optional[float] = Field(default=None, ge=0)
    cpm: Optional[float] = Field(default=None, ge=0)
    cost_per_lead: Optional[float] = Field(default=None, ge=0)
    cost_per_landing_page_view: Optional[float] = Field(default=None, ge=0)
    hook_rate: Optional[float] = None
    hold_rate: Optional[float] = None
    lp_rate: Optional[float] = None
    report_start: Optional[dt.date] = None
    report_end: Optional[dt.date] = None


class AdSpendingCreate(AdSpendingFields):
    """Schema for recording one campaign row of a Meta Ads export."""

    date: TrackingDate


class AdSpendingRead(AdSpendingFields, TrackedRowRead):
    pass
