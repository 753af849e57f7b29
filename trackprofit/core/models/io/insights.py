"""
AI insight and alert I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InsightsRequest(BaseModel):
    month: int = Field(ge=1, le=12)
    year: int = Field(ge=2020, le=2100)


class InsightsResponse(BaseModel):
    """A monthly narrative, freshly generated or served from the cache."""

    insights: str
    period: str
    cached: bool
    generated_at: dt.datetime
    expires_at: Optional[dt.datetime] = None


class AnomalyRunRequest(BaseModel):
    date: Optional[dt.date] = Field(default=None, description="Day to analyse, yesterday by default")


class AnomalyRunResponse(BaseModel):
    date: dt.date
    users_checked: int
    alerts_created: int
    errors: List[str] = Field(default_factory=list)


class AIAlertRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    type: str
    title: str
    content: str
    severity: str
    is_read: bool
    data: Optional[Dict[str, Any]] = None
    created_at: dt.datetime
