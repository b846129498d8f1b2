"""Fixtures for API tests: every use case runs against the test workspace."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import dependencies as deps
from src.api.main import app
from src.application import use_cases

_OVERRIDES = {
    deps.get_products_use_case: use_cases.ProductsUseCase,
    deps.get_boms_use_case: use_cases.BomsUseCase,
    deps.get_suppliers_use_case: use_cases.SuppliersUseCase,
    deps.get_purchase_orders_use_case: use_cases.PurchaseOrdersUseCase,
    deps.get_customer_orders_use_case: use_cases.CustomerOrdersUseCase,
    deps.get_raw_material_entries_use_case: use_cases.RawMaterialEntriesUseCase,
    deps.get_production_logs_use_case: use_cases.ProductionLogsUseCase,
    deps.get_shipment_logs_use_case: use_cases.ShipmentLogsUseCase,
    deps.get_stock_count_use_case: use_cases.ApplyStockCountUseCase,
    deps.get_stock_queries_use_case: use_cases.StockQueriesUseCase,
    deps.get_import_workbook_use_case: use_cases.ImportWorkbookUseCase,
    deps.get_export_inventory_use_case: use_cases.ExportInventoryUseCase,
}


@pytest.fixture
async def api_client(workspace) -> AsyncGenerator[AsyncClient, None]:
    for dependency, use_case_cls in _OVERRIDES.items():
        app.dependency_overrides[dependency] = lambda cls=use_case_cls: cls(workspace=workspace)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in _OVERRIDES:
        app.dependency_overrides.pop(dependency, None)
