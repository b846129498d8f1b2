"""Application use cases."""

from src.application.use_cases.boms import BomsUseCase
from src.application.use_cases.customer_orders import CustomerOrdersUseCase
from src.application.use_cases.export_inventory import (
    XLSX_MEDIA_TYPE,
    ExportInventoryUseCase,
    WorkbookFile,
)
from src.application.use_cases.import_workbook import (
    ImportReport,
    ImportRowError,
    ImportWorkbookUseCase,
)
from src.application.use_cases.procurement import PurchaseOrdersUseCase, SuppliersUseCase
from src.application.use_cases.production import ProductionLogsUseCase
from src.application.use_cases.products import ProductsUseCase
from src.application.use_cases.raw_materials import RawMaterialEntriesUseCase
from src.application.use_cases.shipments import ShipmentLogsUseCase
from src.application.use_cases.stock import (
    ApplyStockCountUseCase,
    LedgerBalance,
    StockQueriesUseCase,
)

__all__ = [
    "ProductsUseCase",
    "BomsUseCase",
    "RawMaterialEntriesUseCase",
    "ProductionLogsUseCase",
    "ShipmentLogsUseCase",
    "ApplyStockCountUseCase",
    "StockQueriesUseCase",
    "LedgerBalance",
    "CustomerOrdersUseCase",
    "SuppliersUseCase",
    "PurchaseOrdersUseCase",
    "ImportWorkbookUseCase",
    "ImportReport",
    "ImportRowError",
    "ExportInventoryUseCase",
    "WorkbookFile",
    "XLSX_MEDIA_TYPE",
]
