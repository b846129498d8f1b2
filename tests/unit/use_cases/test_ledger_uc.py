"""Tests for the stock-moving use cases and stock queries."""

import datetime as dt

import pytest

from src.application.dto.requests import (
    ProductionLogRequest,
    RawMaterialEntryRequest,
    ShipmentLogRequest,
    StockCountLineRequest,
    StockCountRequest,
)
from src.application.use_cases import (
    ApplyStockCountUseCase,
    ProductionLogsUseCase,
    RawMaterialEntriesUseCase,
    ShipmentLogsUseCase,
    StockQueriesUseCase,
)
from src.core.entities import ProductType
from src.core.exceptions import (
    InsufficientStockError,
    InvalidProductTypeError,
    ProductNotFoundError,
)


class TestRawMaterialEntriesUseCase:
    @pytest.fixture
    def use_case(self, workspace):
        return RawMaterialEntriesUseCase(workspace=workspace)

    async def test_create_returns_stock_change(self, use_case, steel):
        result = await use_case.create(RawMaterialEntryRequest(product_id=steel.id, quantity=10))
        response = use_case.to_response(result)
        assert response.entry.date == dt.date.today()
        assert response.stock_changes[0].before == 100
        assert response.stock_changes[0].after == 110

    async def test_update_keeps_date_when_omitted(self, use_case, steel):
        created = await use_case.create(
            RawMaterialEntryRequest(product_id=steel.id, quantity=10, date=dt.date(2024, 3, 1))
        )
        updated = await use_case.update(created.record.id, RawMaterialEntryRequest(product_id=steel.id, quantity=5))
        assert updated.record.date == dt.date(2024, 3, 1)
        assert updated.change_for(steel.id).after == 105

    async def test_list_newest_first_with_range(self, use_case, steel, bolt):
        for day, product in ((1, steel), (3, bolt), (2, steel)):
            await use_case.create(
                RawMaterialEntryRequest(product_id=product.id, quantity=1, date=dt.date(2024, 1, day))
            )
        dates = [e.date.day for e in await use_case.list_entries()]
        assert dates == [3, 2, 1]
        steel_only = await use_case.list_entries(product_id=steel.id, date_from=dt.date(2024, 1, 2))
        assert [e.date.day for e in steel_only] == [2]

    async def test_delete(self, use_case, workspace, steel):
        created = await use_case.create(RawMaterialEntryRequest(product_id=steel.id, quantity=10))
        await use_case.delete(created.record.id)
        assert workspace.entity_store.require_product(steel.id).stock == 100


class TestProductionLogsUseCase:
    async def test_create_and_reverse(self, workspace, cabinet_bom, cabinet, steel, bolt):
        use_case = ProductionLogsUseCase(workspace=workspace)
        result = await use_case.create(ProductionLogRequest(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=2))
        response = use_case.to_response(result)
        assert response.log.quantity == 2
        assert {c.product_id for c in response.stock_changes} == {steel.id, bolt.id, cabinet.id}

        await use_case.delete(result.record.id)
        assert workspace.entity_store.require_product(cabinet.id).stock == 0

    async def test_insufficient_components(self, workspace, mock_persistence, cabinet_bom, cabinet):
        use_case = ProductionLogsUseCase(workspace=workspace)
        with pytest.raises(InsufficientStockError):
            await use_case.create(ProductionLogRequest(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=100))
        mock_persistence.apply_changes.assert_not_called()
        assert await use_case.list_logs() == []


class TestShipmentLogsUseCase:
    async def test_ship_finished_goods(self, workspace, cabinet):
        workspace.entity_store.commit_stock({cabinet.id: 5})
        use_case = ShipmentLogsUseCase(workspace=workspace)
        result = await use_case.create(ShipmentLogRequest(product_id=cabinet.id, quantity=5))
        assert use_case.to_response(result).stock_changes[0].after == 0

    async def test_raw_material_cannot_ship(self, workspace, steel):
        use_case = ShipmentLogsUseCase(workspace=workspace)
        with pytest.raises(InvalidProductTypeError):
            await use_case.create(ShipmentLogRequest(product_id=steel.id, quantity=1))


class TestStockUseCases:
    async def test_count_response_counts_changed_lines(self, workspace, steel, bolt):
        use_case = ApplyStockCountUseCase(workspace=workspace)
        changes = await use_case.execute(
            StockCountRequest(
                lines=[
                    StockCountLineRequest(product_id=steel.id, quantity=100),
                    StockCountLineRequest(product_id=bolt.id, quantity=45),
                ]
            )
        )
        response = use_case.to_response(changes)
        assert response.changed == 1
        assert len(response.stock_changes) == 2

    async def test_count_is_all_or_nothing(self, workspace, mock_persistence, steel):
        use_case = ApplyStockCountUseCase(workspace=workspace)
        with pytest.raises(ProductNotFoundError):
            await use_case.execute(
                StockCountRequest(
                    lines=[
                        StockCountLineRequest(product_id=steel.id, quantity=1),
                        StockCountLineRequest(product_id="ghost", quantity=1),
                    ]
                )
            )
        assert workspace.entity_store.require_product(steel.id).stock == 100
        mock_persistence.apply_changes.assert_not_called()

    async def test_levels_below(self, workspace):
        use_case = StockQueriesUseCase(workspace=workspace)
        low = await use_case.levels(below=60)
        assert [p.product_code for p in low] == ["RAW-002", "SEMI-001", "FIN-001"]
        raw = await use_case.levels(product_type=ProductType.RAW_MATERIAL, below=60)
        assert [p.product_code for p in raw] == ["RAW-002"]

    async def test_ledger_check_reports_opening_stock(self, workspace, steel):
        await RawMaterialEntriesUseCase(workspace=workspace).create(
            RawMaterialEntryRequest(product_id=steel.id, quantity=20)
        )
        use_case = StockQueriesUseCase(workspace=workspace)
        response = use_case.to_ledger_check_response(await use_case.ledger_check())
        row = next(i for i in response.items if i.product_id == steel.id)
        assert row.stock == 120
        assert row.ledger_net == 20
        assert row.implied_opening == 100
        assert response.negative_stock == []
