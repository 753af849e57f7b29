"""
AI insight entity models.

``insights_cache`` keeps generated monthly narratives until they expire;
``alerts_ai`` stores anomaly alerts with the language model's suggestions.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class InsightsCache(Base, table=True):
    """Table: insights_cache"""

    __tablename__ = "insights_cache"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=64, index=True)
    content: str = Field()
    insights_type: str = Field(default="monthly", max_length=32)
    period: Optional[str] = Field(default=None, max_length=7, description="Month label the insight covers")
    generated_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime)
    expires_at: Optional[dt.datetime] = Field(default=None, sa_type=UTCDateTime, index=True)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)


class AIAlert(Base, table=True):
    """Table: alerts_ai"""

    __tablename__ = "alerts_ai"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=64, index=True)
    type: str = Field(default="anomaly", max_length=32)
    title: str = Field(max_length=255)
    content: str = Field()
    severity: str = Field(default="medium", max_length=16)
    is_read: bool = Field(default=False)
    data: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)
    updated_at: dt.datetime = Field(
        default_factory=utc_now, sa_type=UTCDateTime, sa_column_kwargs={"onupdate": utc_now}
    )
