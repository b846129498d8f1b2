"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

import datetime as dt

from pydantic import BaseModel, Field

from src.core.entities import ProductType

# --- Products ---


class CreateProductRequest(BaseModel):
    """Request to create a product."""

    product_code: str = Field(..., min_length=1, description="Unique product code (case-insensitive)")
    name: str = Field(..., min_length=1, description="Product name")
    type: ProductType = Field(..., description="Product type")
    unit: str = Field(default="pcs", description="Unit of measure")
    initial_stock: float = Field(default=0.0, ge=0, description="Opening stock")
    description: str | None = Field(default=None, description="Free-text description")


class UpdateProductRequest(BaseModel):
    """Request to update a product. Stock cannot be changed here."""

    product_code: str = Field(..., min_length=1, description="Unique product code")
    name: str = Field(..., min_length=1, description="Product name")
    type: ProductType = Field(..., description="Product type")
    unit: str = Field(default="pcs", description="Unit of measure")
    description: str | None = Field(default=None, description="Free-text description")


# --- BOMs ---


class BomComponentRequest(BaseModel):
    """One BOM component line."""

    product_id: str = Field(..., description="Component product ID")
    quantity: float = Field(..., gt=0, description="Quantity per produced unit")


class BomRequest(BaseModel):
    """Request to create or replace a BOM."""

    product_id: str = Field(..., description="Product this recipe produces")
    components: list[BomComponentRequest] = Field(..., description="Component lines")


# --- Stock ledger ---


class RawMaterialEntryRequest(BaseModel):
    """Request to record (or replace) a raw material receipt."""

    product_id: str = Field(..., description="Received product ID")
    quantity: float = Field(..., gt=0, description="Quantity received")
    date: dt.date | None = Field(default=None, description="Receipt date (defaults to today)")
    supplier_id: str | None = Field(default=None, description="Supplier ID")
    purchase_order_id: str | None = Field(default=None, description="Purchase order this receipt fills")
    notes: str | None = Field(default=None, description="Additional notes")


class ProductionLogRequest(BaseModel):
    """Request to record (or replace) a production run."""

    product_id: str = Field(..., description="Output product ID")
    bom_id: str = Field(..., description="BOM used for the run")
    quantity: float = Field(..., gt=0, description="Units produced")
    date: dt.date | None = Field(default=None, description="Production date (defaults to today)")
    notes: str | None = Field(default=None, description="Additional notes")


class ShipmentLogRequest(BaseModel):
    """Request to record (or replace) a shipment."""

    product_id: str = Field(..., description="Shipped product ID")
    quantity: float = Field(..., gt=0, description="Units shipped")
    date: dt.date | None = Field(default=None, description="Shipment date (defaults to today)")
    customer_order_id: str | None = Field(default=None, description="Customer order being fulfilled")
    notes: str | None = Field(default=None, description="Additional notes")


class StockCountLineRequest(BaseModel):
    """Counted quantity for one product."""

    product_id: str = Field(..., description="Counted product ID")
    quantity: float = Field(..., ge=0, description="Counted quantity")


class StockCountRequest(BaseModel):
    """Request to overwrite stock with physically counted quantities."""

    lines: list[StockCountLineRequest] = Field(..., min_length=1, description="Counted lines")


# --- Customer orders ---


class OrderItemRequest(BaseModel):
    product_id: str = Field(..., description="Ordered product ID")
    quantity: float = Field(..., gt=0, description="Ordered quantity")


class CustomerOrderRequest(BaseModel):
    """Request to create or replace a customer order."""

    customer_name: str = Field(..., min_length=1, description="Customer name")
    order_date: dt.date | None = Field(default=None, description="Order date (defaults to today)")
    items: list[OrderItemRequest] = Field(default_factory=list, description="Ordered lines")
    notes: str | None = Field(default=None, description="Additional notes")


# --- Procurement ---


class SupplierRequest(BaseModel):
    """Request to create or replace a supplier."""

    name: str = Field(..., min_length=1, description="Supplier name (unique)")
    contact_person: str | None = Field(default=None, description="Contact person")
    email: str | None = Field(default=None, description="Email address")
    phone: str | None = Field(default=None, description="Phone number")
    address: str | None = Field(default=None, description="Postal address")
    notes: str | None = Field(default=None, description="Additional notes")


class PurchaseOrderItemRequest(BaseModel):
    product_id: str = Field(..., description="Ordered product ID")
    ordered_quantity: float = Field(..., gt=0, description="Ordered quantity")
    received_quantity: float = Field(default=0.0, ge=0, description="Already received quantity")


class PurchaseOrderRequest(BaseModel):
    """Request to create or replace a purchase order."""

    supplier_id: str = Field(..., description="Supplier ID")
    order_reference: str | None = Field(default=None, description="Unique order reference")
    order_date: dt.date | None = Field(default=None, description="Order date (defaults to today)")
    expected_delivery_date: dt.date | None = Field(default=None, description="Expected delivery date")
    items: list[PurchaseOrderItemRequest] = Field(default_factory=list, description="Ordered lines")
    cancelled: bool = Field(default=False, description="Mark the order as cancelled")
    notes: str | None = Field(default=None, description="Additional notes")
