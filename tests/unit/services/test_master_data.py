"""Tests for MasterDataService and the integrity guard."""

import pytest

from src.core.entities import (
    BOM,
    BomComponent,
    CustomerOrder,
    OrderItem,
    Product,
    ProductionLog,
    ProductType,
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    RawMaterialEntry,
    ShipmentLog,
    Supplier,
)
from src.core.exceptions import (
    DuplicateError,
    ProductNotFoundError,
    ReferentialIntegrityError,
    SupplierNotFoundError,
    ValidationError,
)
from src.core.services import MasterDataService, StockLedgerService


@pytest.fixture
def master_data(stocked_store) -> MasterDataService:
    return MasterDataService(stocked_store)


@pytest.fixture
def ledger(stocked_store) -> StockLedgerService:
    return StockLedgerService(stocked_store)


class TestProducts:
    def test_create_with_initial_stock(self, master_data, stocked_store):
        product = master_data.create_product(
            Product(product_code="AUX-001", name="Glue", type=ProductType.AUXILIARY, stock=3)
        )
        assert stocked_store.require_product(product.id).stock == 3

    def test_negative_initial_stock_rejected(self, master_data):
        with pytest.raises(ValidationError):
            master_data.create_product(Product(product_code="X", name="X", type="finished", stock=-1))

    def test_duplicate_code(self, master_data):
        with pytest.raises(DuplicateError):
            master_data.create_product(Product(product_code="raw-001", name="Again", type="raw_material"))

    def test_update_never_touches_stock(self, master_data, stocked_store, steel):
        master_data.update_product(steel.model_copy(update={"name": "Steel plate", "stock": 0}))
        stored = stocked_store.require_product(steel.id)
        assert stored.name == "Steel plate"
        assert stored.stock == 100

    def test_rename_refreshes_bom_name(self, master_data, stocked_store, cabinet_bom, cabinet):
        master_data.update_product(cabinet.model_copy(update={"name": "Tall cabinet"}))
        assert stocked_store.require_bom(cabinet_bom.id).name == "FIN-001 - Tall cabinet Recipe"

    def test_delete_unreferenced(self, master_data, stocked_store, frame):
        master_data.delete_product(frame.id)
        assert stocked_store.get_product(frame.id) is None

    def test_delete_missing(self, master_data):
        with pytest.raises(ProductNotFoundError):
            master_data.delete_product("ghost")


class TestProductDeleteGuard:
    def test_bom_output_blocks(self, master_data, cabinet_bom, cabinet):
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_product(cabinet.id)

    def test_bom_component_blocks(self, master_data, cabinet_bom, bolt):
        with pytest.raises(ReferentialIntegrityError) as exc_info:
            master_data.delete_product(bolt.id)
        assert cabinet_bom.id in exc_info.value.referenced_by

    def test_raw_material_entry_blocks(self, master_data, ledger, stocked_store):
        glue = master_data.create_product(Product(product_code="AUX-1", name="Glue", type="auxiliary"))
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=glue.id, quantity=1))
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_product(glue.id)
        assert stocked_store.get_product(glue.id) is not None

    def test_shipment_blocks(self, master_data, ledger, stocked_store):
        desk = master_data.create_product(Product(product_code="FIN-9", name="Desk", type="finished", stock=2))
        ledger.add_shipment_log(ShipmentLog(product_id=desk.id, quantity=1))
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_product(desk.id)

    def test_customer_order_item_blocks(self, master_data, stocked_store, frame):
        stocked_store.add_customer_order(
            CustomerOrder(customer_name="ACME", items=[OrderItem(product_id=frame.id, quantity=1)])
        )
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_product(frame.id)


class TestBoms:
    def test_create_names_after_product(self, master_data, frame, steel):
        bom = master_data.create_bom(
            BOM(product_id=frame.id, name="ignored", components=[BomComponent(product_id=steel.id, quantity=3)])
        )
        assert bom.name == "SEMI-001 - Frame Recipe"

    def test_needs_components(self, master_data, frame):
        with pytest.raises(ValidationError):
            master_data.create_bom(BOM(product_id=frame.id, components=[]))

    def test_self_reference_rejected(self, master_data, frame):
        with pytest.raises(ValidationError):
            master_data.create_bom(
                BOM(product_id=frame.id, components=[BomComponent(product_id=frame.id, quantity=1)])
            )

    def test_duplicate_component_rejected(self, master_data, frame, steel):
        with pytest.raises(ValidationError):
            master_data.create_bom(
                BOM(
                    product_id=frame.id,
                    components=[
                        BomComponent(product_id=steel.id, quantity=1),
                        BomComponent(product_id=steel.id, quantity=2),
                    ],
                )
            )

    def test_unknown_component(self, master_data, frame):
        with pytest.raises(ProductNotFoundError):
            master_data.create_bom(
                BOM(product_id=frame.id, components=[BomComponent(product_id="ghost", quantity=1)])
            )

    def test_delete_blocked_by_production_log(self, master_data, ledger, cabinet_bom, cabinet):
        ledger.add_production_log(ProductionLog(product_id=cabinet.id, bom_id=cabinet_bom.id, quantity=1))
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_bom(cabinet_bom.id)

    def test_delete_unused(self, master_data, stocked_store, cabinet_bom):
        master_data.delete_bom(cabinet_bom.id)
        assert stocked_store.boms == []


class TestSuppliers:
    def test_name_unique(self, master_data):
        master_data.create_supplier(Supplier(name="ABC Supply"))
        with pytest.raises(DuplicateError):
            master_data.create_supplier(Supplier(name="abc supply"))

    def test_delete_blocked_by_purchase_order(self, master_data, steel):
        supplier = master_data.create_supplier(Supplier(name="ABC Supply"))
        master_data.create_purchase_order(
            PurchaseOrder(supplier_id=supplier.id, items=[PurchaseOrderItem(product_id=steel.id, ordered_quantity=5)])
        )
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_supplier(supplier.id)


class TestPurchaseOrders:
    def test_unknown_supplier(self, master_data):
        with pytest.raises(SupplierNotFoundError):
            master_data.create_purchase_order(PurchaseOrder(supplier_id="ghost"))

    def test_reference_unique(self, master_data):
        supplier = master_data.create_supplier(Supplier(name="ABC Supply"))
        master_data.create_purchase_order(PurchaseOrder(supplier_id=supplier.id, order_reference="PO-1"))
        with pytest.raises(DuplicateError):
            master_data.create_purchase_order(PurchaseOrder(supplier_id=supplier.id, order_reference="po-1"))

    def test_status_derived_on_create(self, master_data, steel):
        supplier = master_data.create_supplier(Supplier(name="ABC Supply"))
        order = master_data.create_purchase_order(
            PurchaseOrder(
                supplier_id=supplier.id,
                items=[PurchaseOrderItem(product_id=steel.id, ordered_quantity=5, received_quantity=5)],
            )
        )
        assert order.status == PurchaseOrderStatus.CLOSED

    def test_received_above_ordered_rejected(self, master_data, steel):
        supplier = master_data.create_supplier(Supplier(name="ABC Supply"))
        with pytest.raises(ValidationError):
            master_data.create_purchase_order(
                PurchaseOrder(
                    supplier_id=supplier.id,
                    items=[PurchaseOrderItem(product_id=steel.id, ordered_quantity=5, received_quantity=6)],
                )
            )

    def test_delete_blocked_by_entry(self, master_data, ledger, steel):
        supplier = master_data.create_supplier(Supplier(name="ABC Supply"))
        order = master_data.create_purchase_order(
            PurchaseOrder(supplier_id=supplier.id, items=[PurchaseOrderItem(product_id=steel.id, ordered_quantity=5)])
        )
        ledger.add_raw_material_entry(RawMaterialEntry(product_id=steel.id, quantity=1, purchase_order_id=order.id))
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_purchase_order(order.id)


class TestCustomerOrders:
    def test_unknown_item_product(self, master_data):
        with pytest.raises(ProductNotFoundError):
            master_data.create_customer_order(
                CustomerOrder(customer_name="ACME", items=[OrderItem(product_id="ghost", quantity=1)])
            )

    def test_delete_blocked_by_shipment(self, master_data, ledger, stocked_store, cabinet):
        stocked_store.commit_stock({cabinet.id: 3})
        order = master_data.create_customer_order(CustomerOrder(customer_name="ACME"))
        ledger.add_shipment_log(ShipmentLog(product_id=cabinet.id, quantity=1, customer_order_id=order.id))
        with pytest.raises(ReferentialIntegrityError):
            master_data.delete_customer_order(order.id)
