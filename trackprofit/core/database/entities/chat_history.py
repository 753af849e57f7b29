"""
AI chat history entity model.

Messages exchanged with the dashboard assistant, grouped by client-side session id.
"""

from __future__ import annotations

import datetime as dt
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, UTCDateTime, utc_now


class MessageRole(str, Enum):
    """Role of message sender in conversation."""

    USER = "user"
    ASSISTANT = "assistant"


class AIChatMessage(Base, table=True):
    """Table: ai_chat_history"""

    __tablename__ = "ai_chat_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(max_length=64, index=True)
    session_id: str = Field(max_length=128, index=True)
    role: str = Field(max_length=16)
    content: str = Field()
    context_data: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    created_at: dt.datetime = Field(default_factory=utc_now, sa_type=UTCDateTime, index=True)

    def __repr__(self) -> str:
        return f"AIChatMessage(id={self.id}, session_id={self.session_id}, role={self.role})"
