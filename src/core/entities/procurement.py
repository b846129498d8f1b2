"""
Procurement entities: suppliers and purchase orders.

A purchase order tracks, per item, how much has been received through raw
material entries; its status is derived from those quantities.
"""

import datetime as dt
from enum import Enum

from pydantic import BaseModel, Field

from src.core.entities.product import new_id


class PurchaseOrderStatus(str, Enum):
    """Purchase order lifecycle states."""

    OPEN = "open"
    PARTIALLY_RECEIVED = "partially_received"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class Supplier(BaseModel):
    """A vendor that raw materials are bought from."""

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class PurchaseOrderItem(BaseModel):
    """Ordered and received quantity of one product on a purchase order."""

    product_id: str
    ordered_quantity: float = Field(..., gt=0)
    received_quantity: float = Field(default=0.0, ge=0)

    @property
    def is_fully_received(self) -> bool:
        return self.received_quantity >= self.ordered_quantity

    @property
    def remaining_quantity(self) -> float:
        return max(0.0, self.ordered_quantity - self.received_quantity)


class PurchaseOrder(BaseModel):
    """An order placed with a supplier."""

    id: str = Field(default_factory=new_id)
    order_reference: str | None = None
    supplier_id: str
    order_date: dt.date = Field(default_factory=dt.date.today)
    expected_delivery_date: dt.date | None = None
    items: list[PurchaseOrderItem] = Field(default_factory=list)
    status: PurchaseOrderStatus = PurchaseOrderStatus.OPEN
    notes: str | None = None
