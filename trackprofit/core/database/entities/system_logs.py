"""
System log entity model.

Append-only record of background jobs such as the monthly archive.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class SystemLog(Base, table=True):
    """Table: system_logs"""

    __tablename__ = "system_logs"

    id: Optional[int] = Field(default=None, primary_key=True)
    type: str = Field(max_length=64, index=True)
    message: str = Field()
    data: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    user_id: Optional[str] = Field(default=None, max_length=64)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)
