"""
Per-country result I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import CleanText


class CountryDataWrite(BaseModel):
    """Schema for the results of a country over a period; profit and ROI are derived."""

    country_code: str = Field(pattern=r"^[A-Z]{2}$", description="ISO 3166-1 alpha-2 code")
    country_name: CleanText = Field(min_length=1, max_length=100)
    city: Optional[CleanText] = Field(default=None, max_length=100)
    revenue_mad: float = Field(default=0.0, ge=0)
    spend_mad: float = Field(default=0.0, ge=0)
    delivery_rate: Optional[float] = Field(default=None, ge=0, le=100)
    cpl_mad: Optional[float] = Field(default=None, ge=0)
    cpd_mad: Optional[float] = Field(default=None, ge=0)
    period_start: dt.date
    period_end: dt.date

    @model_validator(mode="after")
    def _check_period(self) -> "CountryDataWrite":
        if self.period_end < self.period_start:
            raise ValueError("period_end must not be before period_start")
        return self


class CountryDataRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    country_code: str
    country_name: str
    city: Optional[str] = None
    revenue_mad: float
    spend_mad: float
    profit_mad: float
    roi_percent: float
    delivery_rate: Optional[float] = None
    cpl_mad: Optional[float] = None
    cpd_mad: Optional[float] = None
    period_start: dt.date
    period_end: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime
