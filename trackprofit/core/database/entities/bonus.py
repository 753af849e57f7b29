"""
Monthly bonus entity model.

A bonus (MAD) granted for a whole month, added to revenue in the monthly KPIs.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class MonthlyBonus(Base, table=True):
    """Table: monthly_bonus"""

    __tablename__ = "monthly_bonus"
    __table_args__ = (UniqueConstraint("user_id", "year", "month", name="uq_monthly_bonus_user_month"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=64, index=True)
    year: int = Field()
    month: int = Field()
    amount_dh: float = Field(default=0.0)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    updated_at: dt.datetime = Field(
        default_factory=utc_now, sa_type=UTCDateTime, sa_column_kwargs={"onupdate": utc_now}
    )
