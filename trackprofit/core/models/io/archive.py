"""
Monthly archive I/O models.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from .common import MONTH_LABEL_PATTERN


class CloseMonthRequest(BaseModel):
    month_label: Optional[str] = Field(
        default=None, pattern=MONTH_LABEL_PATTERN, description="Month to archive (YYYY-MM), previous month by default"
    )
    user_id: Optional[str] = Field(default=None, description="Only archive this user's rows")


class CloseMonthResponse(BaseModel):
    """Outcome of a monthly archive run."""

    success: bool = True
    month_label: str
    archived_tables: int = Field(description="Tables archived without error")
    total_tables: int
    rows_moved: dict[str, int] = Field(default_factory=dict, description="Rows moved per source table")
    errors: List[str] = Field(default_factory=list, description="'<table>: <message>' for every failed table")
