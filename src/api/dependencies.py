"""
Dependency injection container for FastAPI.

Provides use case instances to route handlers. Tests replace these through
``app.dependency_overrides``.
"""

from functools import lru_cache

from src.application.services import InventoryWorkspace, get_workspace
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
from src.config import Settings, get_settings


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


async def get_inventory_workspace() -> InventoryWorkspace:
    """Get the loaded inventory workspace."""
    return await get_workspace()


# Master data
def get_products_use_case() -> ProductsUseCase:
    return ProductsUseCase()


def get_boms_use_case() -> BomsUseCase:
    return BomsUseCase()


def get_suppliers_use_case() -> SuppliersUseCase:
    return SuppliersUseCase()


def get_purchase_orders_use_case() -> PurchaseOrdersUseCase:
    return PurchaseOrdersUseCase()


def get_customer_orders_use_case() -> CustomerOrdersUseCase:
    return CustomerOrdersUseCase()


# Stock ledger
def get_raw_material_entries_use_case() -> RawMaterialEntriesUseCase:
    return RawMaterialEntriesUseCase()


def get_production_logs_use_case() -> ProductionLogsUseCase:
    return ProductionLogsUseCase()


def get_shipment_logs_use_case() -> ShipmentLogsUseCase:
    return ShipmentLogsUseCase()


def get_stock_count_use_case() -> ApplyStockCountUseCase:
    return ApplyStockCountUseCase()


def get_stock_queries_use_case() -> StockQueriesUseCase:
    return StockQueriesUseCase()


# Excel
def get_import_workbook_use_case() -> ImportWorkbookUseCase:
    """Get workbook import use case."""
    return ImportWorkbookUseCase()


def get_export_inventory_use_case() -> ExportInventoryUseCase:
    """Get stock export use case."""
    return ExportInventoryUseCase()
