"""
Application layer - Use cases, DTOs, and the inventory workspace.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that run engine commands on the workspace
3. Providing the workspace factory for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.dto.requests import (
    BomRequest,
    CreateProductRequest,
    CustomerOrderRequest,
    ProductionLogRequest,
    PurchaseOrderRequest,
    RawMaterialEntryRequest,
    ShipmentLogRequest,
    StockCountRequest,
    SupplierRequest,
    UpdateProductRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    HealthResponse,
    ImportReportResponse,
    ProductResponse,
    StockChangeResponse,
)
from src.application.services import (
    InventoryWorkspace,
    get_workspace,
    reset_services,
)
from src.application.use_cases import (
    ApplyStockCountUseCase,
    BomsUseCase,
    CustomerOrdersUseCase,
    ExportInventoryUseCase,
    ImportWorkbookUseCase,
    ProductionLogsUseCase,
    ProductsUseCase,
    PurchaseOrdersUseCase,
    RawMaterialEntriesUseCase,
    ShipmentLogsUseCase,
    StockQueriesUseCase,
    SuppliersUseCase,
)

__all__ = [
    # Request DTOs
    "CreateProductRequest",
    "UpdateProductRequest",
    "BomRequest",
    "RawMaterialEntryRequest",
    "ProductionLogRequest",
    "ShipmentLogRequest",
    "StockCountRequest",
    "CustomerOrderRequest",
    "SupplierRequest",
    "PurchaseOrderRequest",
    # Response DTOs
    "ProductResponse",
    "StockChangeResponse",
    "ImportReportResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "ProductsUseCase",
    "BomsUseCase",
    "RawMaterialEntriesUseCase",
    "ProductionLogsUseCase",
    "ShipmentLogsUseCase",
    "ApplyStockCountUseCase",
    "StockQueriesUseCase",
    "CustomerOrdersUseCase",
    "SuppliersUseCase",
    "PurchaseOrdersUseCase",
    "ImportWorkbookUseCase",
    "ExportInventoryUseCase",
    # Workspace
    "InventoryWorkspace",
    "get_workspace",
    "reset_services",
]
