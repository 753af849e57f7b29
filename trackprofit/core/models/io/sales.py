"""
Sales order I/O models.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from .common import TrackedRowRead, TrackingDate


class SalesDataFields(BaseModel):
    external_order_id: str = Field(default="", max_length=128)
    customer: str = Field(default="", max_length=255)
    customer_shipping: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=64)
    city: str = Field(default="", max_length=128)
    address: str = ""
    products: str = ""
    price: float = Field(default=0.0, ge=0)
    deposit: float = Field(default=0.0, ge=0)
    payment_method: str = Field(default="", max_length=64)
    sales_channel: str = Field(default="", max_length=64)
    confirmation_status: str = Field(default="", max_length=64)
    confirmation_note: str = ""
    delivery_status: str = Field(default="", max_length=64)
    delivery_note: str = ""
    delivery_agent: str = Field(default="", max_length=128)
    tracking_number: str = Field(default="", max_length=128)
    notes: str = ""


class SalesDataCreate(SalesDataFields):
    """Schema for recording an order."""

    date: TrackingDate


class SalesDataRead(SalesDataFields, TrackedRowRead):
    pass
