"""
Country performance entity model.

Marketing results of a user aggregated per destination country over a period;
the monthly insights quote them next to the global figures.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class CountryData(Base, table=True):
    """Table: country_data"""

    __tablename__ = "country_data"
    __table_args__ = (
        UniqueConstraint("user_id", "country_code", "period_start", name="uq_country_data_user_country_period"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=64, index=True)
    country_code: str = Field(max_length=2, index=True)
    country_name: str = Field(max_length=100)
    city: Optional[str] = Field(default=None, max_length=100)
    revenue_mad: float = Field(default=0.0)
    spend_mad: float = Field(default=0.0)
    profit_mad: float = Field(default=0.0)
    roi_percent: float = Field(default=0.0)
    delivery_rate: Optional[float] = Field(default=None)
    cpl_mad: Optional[float] = Field(default=None)
    cpd_mad: Optional[float] = Field(default=None)
    period_start: dt.date = Field(index=True)
    period_end: dt.date = Field(index=True)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: dt.datetime = Field(
        default_factory=utc_now, sa_type=UTCDateTime, sa_column_kwargs={"onupdate": utc_now}
    )
