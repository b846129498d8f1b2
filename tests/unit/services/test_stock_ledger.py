"""Tests for StockLedgerService: every stock-moving command."""

import pytest

from src.core.entities import (
    BOM,
    BomComponent,
    CustomerOrder,
    Product,
    ProductionLog,
    ProductType,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    RawMaterialEntry,
    ShipmentLog,
    StockCount,
    Supplier,
)
from src.core.exceptions import (
    BomNotFoundError,
    CustomerOrderNotFoundError,
    ImmutableFieldError,
    InsufficientStockError,
    InvalidProductTypeError,
    ProductNotFoundError,
    PurchaseOrderNotFoundError,
    ValidationError,
)
from src.core.services import StockLedgerService, derive_stock_from_ledger, ledger_net_movements


@pytest.fixture
def ledger(stocked_store) -> StockLedgerService:
    return StockLedgerService(stocked_store)


def _stock(store, product) -> float:
    return store.require_product(product.id).stock


class TestRawMaterialEntries:
    def test_add_increases_stock(self, ledger, stocked_store, steel):
        result = ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=25))
        assert _stock(stocked_store, steel) == 125
        assert result.change_for(steel.id).before == 100
        assert result.change_for(steel.id).after == 125
        assert stocked_store.get_raw_material_entry(result.record.id) is not None

    def test_add_unknown_product(self, ledger, stocked_store):
        with pytest.raises(ProductNotFoundError):
            ledger.add_raw_material_entry(RawMaterialEntry(product_id="ghost", quantity=1))
        assert stocked_store.raw_material_entries == []

    def test_add_unknown_purchase_order(self, ledger, stocked_store, steel):
        with pytest.raises(PurchaseOrderNotFoundError):
            ledger.add_raw_material_entry(
                RawMaterialEntry(product_id=steel.id, quantity=1, purchase_order_id="ghost")
            )
        assert _stock(stocked_store, steel) == 100

    def test_update_applies_difference(self, ledger, stocked_store, steel):
        entry = ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=30)).record
        ledger.update_raw_material_entry(entry.model_copy(update={"quantity": 10}))
        assert _stock(stocked_store, steel) == 110

    def test_update_may_go_negative(self, ledger, stocked_store, steel):
        entry = ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=30)).record
        stocked_store.commit_stock({steel.id: 5})
        ledger.update_raw_material_entry(entry.model_copy(update={"quantity": 1}))
        assert _stock(stocked_store, steel) == -24

    def test_update_cannot_change_product(self, ledger, stocked_store, steel, bolt):
        entry = ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=30)).record
        with pytest.raises(ImmutableFieldError):
            ledger.update_raw_material_entry(entry.model_copy(update={"product_id": bolt.id}))
        assert _stock(stocked_store, bolt) == 50

    def test_delete_reverses(self, ledger, stocked_store, steel):
        entry = ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=30)).record
        ledger.delete_raw_material_entry(entry.id)
        assert _stock(stocked_store, steel) == 100
        assert stocked_store.raw_material_entries == []

    def test_delete_may_go_negative(self, ledger, stocked_store, steel):
        entry = ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=30)).record
        stocked_store.commit_stock({steel.id: 10})
        ledger.delete_raw_material_entry(entry.id)
        assert _stock(stocked_store, steel) == -20


class TestProductionLogs:
    def test_consumes_components_and_yields_output(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        result = ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=10))
        assert _stock(stocked_store, steel) == 80
        assert _stock(stocked_store, bolt) == 10
        assert _stock(stocked_store, cabinet) == 10
        assert len(result.stock_changes) == 3

    def test_short_component_moves_nothing(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=13))
        # steel needs 26 of 100, bolts need 52 of 50
        assert exc_info.value.product == "RAW-002 - Bolt"
        assert exc_info.value.requested == 52
        assert exc_info.value.available == 50
        assert _stock(stocked_store, steel) == 100
        assert _stock(stocked_store, cabinet) == 0
        assert stocked_store.production_logs == []
        assert not stocked_store.has_pending_changes

    def test_first_short_component_reported(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        stocked_store.commit_stock({steel.id: 0, bolt.id: 0})
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=1))
        assert exc_info.value.product == "RAW-001 - Steel sheet"

    def test_unknown_bom(self, ledger, cabinet):
        with pytest.raises(BomNotFoundError):
            ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id="ghost", quantity=1))

    def test_missing_component_reported_by_id(self, ledger, stocked_store, cabinet):
        bom = stocked_store.add_bom(
            BOM(product_id=cabinet.id, components=[BomComponent(product_id="gone", quantity=1)])
        )
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=bom.id, quantity=1))
        assert exc_info.value.product == "ID: gone"
        assert exc_info.value.available == 0

    def test_update_reverses_then_reapplies(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=10)
        ).record
        # Bolts left: 10. Going to 12 needs 48 bolts, which the reversal makes available.
        ledger.update_production_log(log.model_copy(update={"quantity": 12}))
        assert _stock(stocked_store, steel) == 76
        assert _stock(stocked_store, bolt) == 2
        assert _stock(stocked_store, cabinet) == 12

    def test_failed_update_leaves_old_run(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=10)
        ).record
        with pytest.raises(InsufficientStockError):
            ledger.update_production_log(log.model_copy(update={"quantity": 20}))
        assert _stock(stocked_store, bolt) == 10
        assert _stock(stocked_store, cabinet) == 10
        assert stocked_store.require_production_log(log.id).quantity == 10

    def test_delete_reverses(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5)
        ).record
        ledger.delete_production_log(log.id)
        assert _stock(stocked_store, steel) == 100
        assert _stock(stocked_store, bolt) == 50
        assert _stock(stocked_store, cabinet) == 0

    def test_delete_uses_current_bom(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5)
        ).record
        stocked_store.update_bom(
            cabinet_bom.model_copy(update={"components": [BomComponent(product_id=steel.id, quantity=1)]})
        )
        ledger.delete_production_log(log.id)
        assert _stock(stocked_store, steel) == 95
        assert _stock(stocked_store, bolt) == 30

    def test_delete_may_go_negative(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5)
        ).record
        stocked_store.commit_stock({cabinet.id: 2})
        ledger.delete_production_log(log.id)
        assert _stock(stocked_store, cabinet) == -3
        assert _stock(stocked_store, steel) == 100
        assert _stock(stocked_store, bolt) == 50

    def test_update_switches_bom(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        steel_only = stocked_store.add_bom(
            BOM(product_id=cabinet.id, components=[BomComponent(product_id=steel.id, quantity=5)])
        )
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5)
        ).record
        ledger.update_production_log(log.model_copy(update={"bom_id": steel_only.id, "quantity": 3}))
        assert _stock(stocked_store, steel) == 85
        assert _stock(stocked_store, bolt) == 50
        assert _stock(stocked_store, cabinet) == 3
        assert stocked_store.require_production_log(log.id).bom_id == steel_only.id

    def test_update_to_infeasible_bom_changes_nothing(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        heavy = stocked_store.add_bom(
            BOM(product_id=cabinet.id, components=[BomComponent(product_id=steel.id, quantity=40)])
        )
        log = ledger.add_production_log(
            ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5)
        ).record
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.update_production_log(log.model_copy(update={"bom_id": heavy.id, "quantity": 3}))
        assert exc_info.value.requested == 120
        assert exc_info.value.available == 100
        assert _stock(stocked_store, steel) == 90
        assert _stock(stocked_store, bolt) == 30
        assert _stock(stocked_store, cabinet) == 5
        assert stocked_store.require_production_log(log.id).bom_id == cabinet_bom.id

    def test_fractional_recipe_may_use_all_stock(self, ledger, stocked_store, steel, cabinet):
        bom = stocked_store.add_bom(
            BOM(product_id=cabinet.id, components=[BomComponent(product_id=steel.id, quantity=0.1)])
        )
        stocked_store.commit_stock({steel.id: 0.3})
        ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=bom.id, quantity=3))
        assert _stock(stocked_store, steel) == 0
        assert _stock(stocked_store, cabinet) == 3


class TestShipmentLogs:
    @pytest.fixture
    def stocked_cabinets(self, stocked_store, cabinet):
        stocked_store.commit_stock({cabinet.id: 10})
        return cabinet

    def test_ship_reduces_stock(self, ledger, stocked_store, stocked_cabinets):
        ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=4))
        assert _stock(stocked_store, stocked_cabinets) == 6

    def test_ship_exactly_all(self, ledger, stocked_store, stocked_cabinets):
        ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=10))
        assert _stock(stocked_store, stocked_cabinets) == 0

    def test_ship_more_than_on_hand(self, ledger, stocked_store, stocked_cabinets):
        with pytest.raises(InsufficientStockError):
            ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=11))
        assert _stock(stocked_store, stocked_cabinets) == 10
        assert stocked_store.shipment_logs == []

    def test_only_finished_goods_ship(self, ledger, steel):
        with pytest.raises(InvalidProductTypeError):
            ledger.add_shipment_log(ShipmentLog(product_id=steel.id, quantity=1))

    def test_any_type_ships_when_allowed(self, stocked_store, steel):
        ledger = StockLedgerService(stocked_store, ship_finished_only=False)
        ledger.add_shipment_log(ShipmentLog(product_id=steel.id, quantity=1))
        assert _stock(stocked_store, steel) == 99

    def test_unknown_customer_order(self, ledger, stocked_cabinets):
        with pytest.raises(CustomerOrderNotFoundError):
            ledger.add_shipment_log(
                ShipmentLog(product_id=stocked_cabinets.id, quantity=1, customer_order_id="ghost")
            )

    def test_linked_customer_order(self, ledger, stocked_store, stocked_cabinets):
        order = stocked_store.add_customer_order(CustomerOrder(customer_name="ACME"))
        result = ledger.add_shipment_log(
            ShipmentLog(product_id=stocked_cabinets.id, quantity=1, customer_order_id=order.id)
        )
        assert result.record.customer_order_id == order.id

    def test_update_increase_checks_floor(self, ledger, stocked_store, stocked_cabinets):
        log = ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=4)).record
        with pytest.raises(InsufficientStockError):
            ledger.update_shipment_log(log.model_copy(update={"quantity": 11}))
        ledger.update_shipment_log(log.model_copy(update={"quantity": 10}))
        assert _stock(stocked_store, stocked_cabinets) == 0

    def test_update_decrease_returns_stock(self, ledger, stocked_store, stocked_cabinets):
        log = ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=4)).record
        ledger.update_shipment_log(log.model_copy(update={"quantity": 1}))
        assert _stock(stocked_store, stocked_cabinets) == 9

    def test_update_cannot_change_product(self, ledger, stocked_store, stocked_cabinets):
        other = stocked_store.add_product(Product(product_code="FIN-002", name="Desk", type=ProductType.FINISHED))
        log = ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=1)).record
        with pytest.raises(ImmutableFieldError):
            ledger.update_shipment_log(log.model_copy(update={"product_id": other.id}))

    def test_delete_restores(self, ledger, stocked_store, stocked_cabinets):
        log = ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=4)).record
        ledger.delete_shipment_log(log.id)
        assert _stock(stocked_store, stocked_cabinets) == 10

    def test_update_reports_new_quantity_against_releasable_stock(self, ledger, stocked_store, stocked_cabinets):
        log = ledger.add_shipment_log(ShipmentLog(product_id=stocked_cabinets.id, quantity=4)).record
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.update_shipment_log(log.model_copy(update={"quantity": 11}))
        assert exc_info.value.requested == 11
        assert exc_info.value.available == 10
        assert _stock(stocked_store, stocked_cabinets) == 6


class TestStockCount:
    def test_overwrites_listed_products_only(self, ledger, stocked_store, steel, bolt):
        changes = ledger.apply_stock_count([StockCount(product_id=steel.id, quantity=42)])
        assert _stock(stocked_store, steel) == 42
        assert _stock(stocked_store, bolt) == 50
        assert [(c.before, c.after) for c in changes] == [(100, 42)]

    def test_later_line_wins(self, ledger, stocked_store, steel):
        ledger.apply_stock_count(
            [StockCount(product_id=steel.id, quantity=1), StockCount(product_id=steel.id, quantity=2)]
        )
        assert _stock(stocked_store, steel) == 2

    def test_unknown_product_applies_nothing(self, ledger, stocked_store, steel):
        with pytest.raises(ProductNotFoundError):
            ledger.apply_stock_count(
                [StockCount(product_id=steel.id, quantity=1), StockCount(product_id="ghost", quantity=2)]
            )
        assert _stock(stocked_store, steel) == 100

    def test_negative_count_rejected(self, ledger, stocked_store, steel):
        with pytest.raises(ValidationError):
            ledger.apply_stock_count([StockCount(product_id=steel.id, quantity=-1)])
        assert _stock(stocked_store, steel) == 100


class TestPurchaseOrderReceipts:
    @pytest.fixture
    def order(self, stocked_store, steel) -> PurchaseOrder:
        supplier = stocked_store.add_supplier(Supplier(name="ABC Supply"))
        return stocked_store.add_purchase_order(
            PurchaseOrder(
                supplier_id=supplier.id,
                items=[PurchaseOrderItem(product_id=steel.id, ordered_quantity=100)],
            )
        )

    def _received(self, store, order) -> float:
        return store.require_purchase_order(order.id).items[0].received_quantity

    def test_partial_receipt(self, ledger, stocked_store, steel, order):
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=40, purchase_order_id=order.id))
        assert self._received(stocked_store, order) == 40
        assert stocked_store.require_purchase_order(order.id).status == PurchaseOrderStatus.PARTIALLY_RECEIVED

    def test_over_receipt_clamped_and_closed(self, ledger, stocked_store, steel, order):
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=150, purchase_order_id=order.id))
        assert self._received(stocked_store, order) == 100
        assert stocked_store.require_purchase_order(order.id).status == PurchaseOrderStatus.CLOSED
        assert _stock(stocked_store, steel) == 250

    def test_delete_reverts_receipt(self, ledger, stocked_store, steel, order):
        entry = ledger.add_raw_material_entry(
            RawMaterialEntry(product_id=steel.id, quantity=40, purchase_order_id=order.id)
        ).record
        ledger.delete_raw_material_entry(entry.id)
        assert self._received(stocked_store, order) == 0
        assert stocked_store.require_purchase_order(order.id).status == PurchaseOrderStatus.OPEN

    def test_update_moves_receipt_by_difference(self, ledger, stocked_store, steel, order):
        entry = ledger.add_raw_material_entry(
            RawMaterialEntry(product_id=steel.id, quantity=40, purchase_order_id=order.id)
        ).record
        ledger.update_raw_material_entry(entry.model_copy(update={"quantity": 60}))
        assert self._received(stocked_store, order) == 60

    def test_update_detaches_order(self, ledger, stocked_store, steel, order):
        entry = ledger.add_raw_material_entry(
            RawMaterialEntry(product_id=steel.id, quantity=40, purchase_order_id=order.id)
        ).record
        ledger.update_raw_material_entry(entry.model_copy(update={"purchase_order_id": None}))
        assert self._received(stocked_store, order) == 0


class TestLedgerNet:
    def test_net_movements(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        stocked_store.commit_stock({steel.id: 0, bolt.id: 0})
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=20))
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=bolt.id, quantity=40))
        ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5))
        ledger.add_shipment_log(ShipmentLog(product_id=cabinet.id, quantity=2))

        net = ledger_net_movements(stocked_store)
        assert net[steel.id] == 10
        assert net[bolt.id] == 20
        assert net[cabinet.id] == 3

    def test_stock_matches_ledger_from_zero(self, ledger, stocked_store, cabinet_bom, steel, bolt, cabinet):
        stocked_store.commit_stock({steel.id: 0, bolt.id: 0})
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=20))
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=bolt.id, quantity=40))
        ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=5))

        assert derive_stock_from_ledger(stocked_store) == stocked_store.stock_levels()
