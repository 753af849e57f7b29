"""
Shared I/O building blocks.

Validation helpers and the read schema fields every tracking row has in common.
"""

from __future__ import annotations

import datetime as dt
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from ....security.sanitizers import sanitize_input

MIN_TRACKING_DATE = dt.date(2020, 1, 1)
MONTH_LABEL_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def max_tracking_date(today: Optional[dt.date] = None) -> dt.date:
    """Last accepted tracking date: December 31 of next year."""
    today = today or dt.date.today()
    return dt.date(today.year + 1, 12, 31)


def check_tracking_date(value: dt.date) -> dt.date:
    if value < MIN_TRACKING_DATE or value > max_tracking_date():
        raise ValueError(f"date must be between {MIN_TRACKING_DATE.isoformat()} and {max_tracking_date().isoformat()}")
    return value


def check_clean_text(value: str) -> str:
    """Reject text that sanitization would alter (markup, quotes, control characters)."""
    if sanitize_input(value) != value:
        raise ValueError("contains invalid characters")
    return value


TrackingDate = Annotated[dt.date, AfterValidator(check_tracking_date)]
CleanText = Annotated[str, AfterValidator(check_clean_text)]


class TrackedRowRead(BaseModel):
    """Columns present on every tracking row, current or archived."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class DeleteResponse(BaseModel):
    deleted: int = Field(description="Number of rows removed")
