"""Response DTOs for API endpoints.

Pydantic v2 models for API response serialization.
These are the ONLY contracts between use cases and API layer.
"""

import datetime as dt
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from src.core.entities import ProductType, PurchaseOrderStatus


class _FromEntity(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# --- Products ---


class ProductResponse(_FromEntity):
    """Product response DTO."""

    id: str
    product_code: str
    name: str
    type: ProductType
    unit: str
    stock: float
    description: str | None = None


class ProductListResponse(BaseModel):
    items: list[ProductResponse]
    total: int


# --- BOMs ---


class BomComponentResponse(_FromEntity):
    product_id: str
    quantity: float


class BomResponse(_FromEntity):
    """BOM response DTO."""

    id: str
    product_id: str
    name: str
    components: list[BomComponentResponse]


class BomListResponse(BaseModel):
    items: list[BomResponse]
    total: int


# --- Stock ledger ---


class StockChangeResponse(_FromEntity):
    """Stock of one product before and after an operation."""

    product_id: str
    before: float
    after: float


class RawMaterialEntryResponse(_FromEntity):
    id: str
    product_id: str
    quantity: float
    date: dt.date
    supplier_id: str | None = None
    purchase_order_id: str | None = None
    notes: str | None = None


class RawMaterialEntryResultResponse(BaseModel):
    """Response for a raw material entry command."""

    entry: RawMaterialEntryResponse
    stock_changes: list[StockChangeResponse]


class ProductionLogResponse(_FromEntity):
    id: str
    product_id: str
    bom_id: str
    quantity: float
    date: dt.date
    notes: str | None = None


class ProductionLogResultResponse(BaseModel):
    """Response for a production log command."""

    log: ProductionLogResponse
    stock_changes: list[StockChangeResponse]


class ShipmentLogResponse(_FromEntity):
    id: str
    product_id: str
    quantity: float
    date: dt.date
    customer_order_id: str | None = None
    notes: str | None = None


class ShipmentLogResultResponse(BaseModel):
    """Response for a shipment log command."""

    log: ShipmentLogResponse
    stock_changes: list[StockChangeResponse]


class StockCountResponse(BaseModel):
    """Response for a stock count."""

    stock_changes: list[StockChangeResponse]
    changed: int


class StockLevelResponse(BaseModel):
    product_id: str
    product_code: str
    name: str
    type: str
    unit: str
    stock: float


class StockLevelsResponse(BaseModel):
    items: list[StockLevelResponse]
    total: int


class LedgerBalanceResponse(BaseModel):
    """Stock compared with the net movement recorded in the ledger."""

    product_id: str
    product_code: str
    stock: float
    ledger_net: float = Field(..., description="Entries + outputs - consumption - shipments")
    implied_opening: float = Field(..., description="Stock not explained by the ledger")


class LedgerCheckResponse(BaseModel):
    items: list[LedgerBalanceResponse]
    negative_stock: list[str] = Field(default_factory=list, description="Product codes below zero")


# --- Customer orders ---


class OrderItemResponse(_FromEntity):
    product_id: str
    quantity: float


class CustomerOrderResponse(_FromEntity):
    id: str
    customer_name: str
    order_date: dt.date
    items: list[OrderItemResponse]
    notes: str | None = None


# --- Procurement ---


class SupplierResponse(_FromEntity):
    id: str
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class PurchaseOrderItemResponse(_FromEntity):
    product_id: str
    ordered_quantity: float
    received_quantity: float


class PurchaseOrderResponse(_FromEntity):
    id: str
    order_reference: str | None = None
    supplier_id: str
    order_date: dt.date
    expected_delivery_date: dt.date | None = None
    items: list[PurchaseOrderItemResponse]
    status: PurchaseOrderStatus
    notes: str | None = None


# --- Excel ---


class ImportRowErrorResponse(BaseModel):
    sheet: str
    row: int
    message: str


class ImportReportResponse(BaseModel):
    """Outcome of a workbook import."""

    imported: dict[str, int] = Field(default_factory=dict, description="Rows applied per sheet")
    errors: list[ImportRowErrorResponse] = Field(default_factory=list)
    total_imported: int = 0


# --- Health / errors ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: str | None = None
    schema_version: str | None = None
    products: int | None = None


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. PRODUCT_NOT_FOUND)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=datetime.now)
