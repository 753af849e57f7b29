"""
Monthly bonus I/O models.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field


class MonthlyBonusWrite(BaseModel):
    """Schema for setting the bonus of a month; replaces any existing amount."""

    year: int = Field(ge=2020, le=2100)
    month: int = Field(ge=1, le=12)
    amount_dh: float = Field(ge=0, le=1_000_000, description="Bonus in MAD")


class MonthlyBonusRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    year: int
    month: int
    amount_dh: float
    created_at: dt.datetime
    updated_at: dt.datetime
