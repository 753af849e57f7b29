"""
Assistant chat I/O models.
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatContext(BaseModel):
    """What the user is looking at when asking a question."""

    page: Optional[str] = Field(default=None, description="Dashboard page the question comes from")
    filters: Dict[str, Any] = Field(default_factory=dict, description="Filters applied on that page")


class ChatRequest(BaseModel):
    message: str = Field(min_length=1, max_length=2000)
    session_id: str = Field(min_length=1, max_length=128)
    context: ChatContext = Field(default_factory=ChatContext)


class ChatResponse(BaseModel):
    reply: str
    session_id: str


class ChatMessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    session_id: str
    role: str
    content: str
    created_at: dt.datetime
