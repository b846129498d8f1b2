"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from src.application.dto.requests import (
    BomComponentRequest,
    BomRequest,
    CreateProductRequest,
    CustomerOrderRequest,
    OrderItemRequest,
    ProductionLogRequest,
    PurchaseOrderItemRequest,
    PurchaseOrderRequest,
    RawMaterialEntryRequest,
    ShipmentLogRequest,
    StockCountLineRequest,
    StockCountRequest,
    SupplierRequest,
    UpdateProductRequest,
)
from src.application.dto.responses import (
    BomListResponse,
    BomResponse,
    CustomerOrderResponse,
    ErrorResponse,
    HealthResponse,
    ImportReportResponse,
    LedgerCheckResponse,
    ProductionLogResultResponse,
    ProductListResponse,
    ProductResponse,
    PurchaseOrderResponse,
    RawMaterialEntryResultResponse,
    ShipmentLogResultResponse,
    StockChangeResponse,
    StockCountResponse,
    StockLevelsResponse,
    SupplierResponse,
)

__all__ = [
    # Requests
    "CreateProductRequest",
    "UpdateProductRequest",
    "BomRequest",
    "BomComponentRequest",
    "RawMaterialEntryRequest",
    "ProductionLogRequest",
    "ShipmentLogRequest",
    "StockCountRequest",
    "StockCountLineRequest",
    "CustomerOrderRequest",
    "OrderItemRequest",
    "SupplierRequest",
    "PurchaseOrderRequest",
    "PurchaseOrderItemRequest",
    # Responses
    "ProductResponse",
    "ProductListResponse",
    "BomResponse",
    "BomListResponse",
    "StockChangeResponse",
    "RawMaterialEntryResultResponse",
    "ProductionLogResultResponse",
    "ShipmentLogResultResponse",
    "StockCountResponse",
    "StockLevelsResponse",
    "LedgerCheckResponse",
    "CustomerOrderResponse",
    "SupplierResponse",
    "PurchaseOrderResponse",
    "ImportReportResponse",
    "HealthResponse",
    "ErrorResponse",
]
