"""
Security endpoint I/O models.
"""

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class CSRFTokenResponse(BaseModel):
    token: str
    expires_in: int = Field(description="Seconds before the token expires")
    header: str = Field(description="Header the token must be sent in")


class SecurityEventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_type: str
    severity: str
    description: str
    user_id: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None
    created_at: dt.datetime
