"""
Stock ledger entities.

Raw material entries, production logs and shipment logs are the only
records whose creation, update or deletion moves product stock.
"""

import datetime as dt

from pydantic import BaseModel, Field

from src.core.entities.product import new_id


class RawMaterialEntry(BaseModel):
    """Inbound stock: material received into the warehouse."""

    id: str = Field(default_factory=new_id)
    product_id: str
    quantity: float = Field(..., gt=0)
    date: dt.date = Field(default_factory=dt.date.today)
    supplier_id: str | None = None
    purchase_order_id: str | None = None
    notes: str | None = None


class ProductionLog(BaseModel):
    """A manufacturing run that consumes BOM components and yields output."""

    id: str = Field(default_factory=new_id)
    product_id: str  # output product
    bom_id: str
    quantity: float = Field(..., gt=0)
    date: dt.date = Field(default_factory=dt.date.today)
    notes: str | None = None


class ShipmentLog(BaseModel):
    """Outbound stock: finished goods shipped to a customer."""

    id: str = Field(default_factory=new_id)
    product_id: str
    quantity: float = Field(..., gt=0)
    date: dt.date = Field(default_factory=dt.date.today)
    customer_order_id: str | None = None
    notes: str | None = None


class StockCount(BaseModel):
    """A physically counted quantity for one product."""

    product_id: str
    quantity: float


class StockChange(BaseModel):
    """Before/after stock of one product touched by a ledger operation."""

    product_id: str
    before: float
    after: float

    @property
    def delta(self) -> float:
        return self.after - self.before
