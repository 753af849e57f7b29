"""
Profit tracking I/O models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from ...database.entities.profits import SourceType
from .common import CleanText, TrackedRowRead, TrackingDate


class ProfitTrackingCreate(BaseModel):
    """Schema for recording delivered units of a product."""

    date: TrackingDate
    cpd_category: float = Field(ge=0, le=1000, description="CPD category of the product")
    product_name: CleanText = Field(min_length=1, max_length=100)
    quantity: int = Field(ge=1, le=1000)
    commission_total: float = Field(default=0.0, ge=0, description="Commission earned in MAD")
    product_id: Optional[str] = Field(default=None, max_length=64)
    source_type: SourceType = Field(default=SourceType.NORMAL)


class ProfitTrackingUpdate(BaseModel):
    """Schema for updating a profit row; omitted fields are left unchanged."""

    date: Optional[TrackingDate] = None
    cpd_category: Optional[float] = Field(default=None, ge=0, le=1000)
    product_name: Optional[CleanText] = Field(default=None, min_length=1, max_length=100)
    quantity: Optional[int] = Field(default=None, ge=1, le=1000)
    commission_total: Optional[float] = Field(default=None, ge=0)
    product_id: Optional[str] = Field(default=None, max_length=64)
    source_type: Optional[SourceType] = None

    @model_validator(mode="after")
    def _reject_null_required_columns(self) -> "ProfitTrackingUpdate":
        # only product_id may be cleared; the other columns are NOT NULL
        nulled = sorted(
            name for name in self.model_fields_set if name != "product_id" and getattr(self, name) is None
        )
        if nulled:
            raise ValueError(f"Fields cannot be null: {', '.join(nulled)}")
        return self


class ProfitTrackingRead(TrackedRowRead):
    cpd_category: float
    product_name: str
    quantity: int
    commission_total: float
    product_id: Optional[str] = None
    source_type: str
