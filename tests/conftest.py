"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from io import BytesIO
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook

from src.application.services import InventoryWorkspace
from src.core.entities import BOM, BomComponent, Product, ProductType
from src.core.services import EntityStore


@pytest.fixture
def entity_store() -> EntityStore:
    """Empty in-memory store."""
    return EntityStore()


@pytest.fixture
def steel() -> Product:
    return Product(product_code="RAW-001", name="Steel sheet", type=ProductType.RAW_MATERIAL, unit="kg", stock=100.0)


@pytest.fixture
def bolt() -> Product:
    return Product(product_code="RAW-002", name="Bolt", type=ProductType.RAW_MATERIAL, stock=50.0)


@pytest.fixture
def frame() -> Product:
    return Product(product_code="SEMI-001", name="Frame", type=ProductType.SEMI_FINISHED)


@pytest.fixture
def cabinet() -> Product:
    return Product(product_code="FIN-001", name="Cabinet", type=ProductType.FINISHED)


@pytest.fixture
def stocked_store(entity_store, steel, bolt, frame, cabinet) -> EntityStore:
    """Store with two raw materials, a semi-finished and a finished product."""
    for product in (steel, bolt, frame, cabinet):
        entity_store.add_product(product)
    entity_store.drain_changes()
    return entity_store


@pytest.fixture
def cabinet_bom(stocked_store, steel, bolt, cabinet) -> BOM:
    """Cabinet = 2 kg steel + 4 bolts."""
    bom = BOM(
        product_id=cabinet.id,
        name="FIN-001 - Cabinet Recipe",
        components=[
            BomComponent(product_id=steel.id, quantity=2),
            BomComponent(product_id=bolt.id, quantity=4),
        ],
    )
    stocked_store.add_bom(bom)
    stocked_store.drain_changes()
    return bom


@pytest.fixture
def mock_persistence() -> AsyncMock:
    """Durable store stand-in; every write succeeds."""
    return AsyncMock()


@pytest.fixture
def workspace(stocked_store, mock_persistence) -> InventoryWorkspace:
    return InventoryWorkspace(
        entity_store=stocked_store,
        persistence=mock_persistence,
        ship_finished_only=True,
    )


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Async client against the app without running its lifespan."""
    from src.api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_workbook():
    """Build .xlsx bytes from ``{sheet title: [header row, data rows...]}``."""

    def _make(sheets: dict[str, list[list]]) -> bytes:
        wb = Workbook()
        wb.remove(wb.active)
        for title, rows in sheets.items():
            ws = wb.create_sheet(title)
            for row in rows:
                ws.append(row)
        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    return _make
