"""
Sales order entity models.

Orders imported from the COD call-centre export, one row per order.
"""

from __future__ import annotations

from sqlmodel import Field

from ..base import TrackedRowBase


class SalesDataBase(TrackedRowBase):
    """A single COD order."""

    external_order_id: str = Field(default="", max_length=128)
    customer: str = Field(default="", max_length=255)
    customer_shipping: str = Field(default="", max_length=255)
    phone: str = Field(default="", max_length=64)
    city: str = Field(default="", max_length=128)
    address: str = Field(default="")
    products: str = Field(default="")
    price: float = Field(default=0.0)
    deposit: float = Field(default=0.0)
    payment_method: str = Field(default="", max_length=64)
    sales_channel: str = Field(default="", max_length=64)
    confirmation_status: str = Field(default="", max_length=64)
    confirmation_note: str = Field(default="")
    delivery_status: str = Field(default="", max_length=64)
    delivery_note: str = Field(default="")
    delivery_agent: str = Field(default="", max_length=128)
    tracking_number: str = Field(default="", max_length=128)
    notes: str = Field(default="")


class SalesData(SalesDataBase, table=True):
    """Table: sales_data"""

    __tablename__ = "sales_data"


class ArchiveSalesData(SalesDataBase, table=True):
    """Table: archive_sales_data"""

    __tablename__ = "archive_sales_data"

    month_label: str = Field(max_length=7, index=True)
