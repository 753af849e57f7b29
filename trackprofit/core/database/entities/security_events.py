"""
Security event entity model.

Audit trail of rate limit blocks, rejected CSRF tokens and other security
relevant events.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class SecurityEvent(Base, table=True):
    """Table: security_events"""

    __tablename__ = "security_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    event_type: str = Field(max_length=64, index=True)
    severity: str = Field(max_length=16)
    description: str = Field()
    user_id: Optional[str] = Field(default=None, max_length=64, index=True)
    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)
    additional_data: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)
