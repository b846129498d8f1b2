"""
In-memory entity store.

Holds every collection the stock engine works on, in insertion order, and
records each primitive write into a pending change set that the
application layer drains and persists after the command completes.

The store enforces identity and the product-code uniqueness rule only.
Stock arithmetic and cross-entity rules live in the ledger, guard and
master-data services.
"""

from collections.abc import Mapping

from pydantic import BaseModel

from src.config import get_logger
from src.core.entities import (
    BOM,
    CustomerOrder,
    Product,
    ProductionLog,
    PurchaseOrder,
    RawMaterialEntry,
    ShipmentLog,
    StockChange,
    Supplier,
)
from src.core.exceptions import (
    BomNotFoundError,
    CustomerOrderNotFoundError,
    DuplicateError,
    NotFoundError,
    ProductionLogNotFoundError,
    ProductNotFoundError,
    PurchaseOrderNotFoundError,
    RawMaterialEntryNotFoundError,
    ShipmentLogNotFoundError,
    SupplierNotFoundError,
)
from src.core.interfaces.inventory_store import ChangeSet, EntityKind, InventorySnapshot

logger = get_logger(__name__)

_NOT_FOUND: dict[EntityKind, type[NotFoundError]] = {
    EntityKind.PRODUCTS: ProductNotFoundError,
    EntityKind.SUPPLIERS: SupplierNotFoundError,
    EntityKind.BOMS: BomNotFoundError,
    EntityKind.PURCHASE_ORDERS: PurchaseOrderNotFoundError,
    EntityKind.CUSTOMER_ORDERS: CustomerOrderNotFoundError,
    EntityKind.RAW_MATERIAL_ENTRIES: RawMaterialEntryNotFoundError,
    EntityKind.PRODUCTION_LOGS: ProductionLogNotFoundError,
    EntityKind.SHIPMENT_LOGS: ShipmentLogNotFoundError,
}


class EntityStore:
    """
    Insertion-ordered collections of all inventory entities.

    Entities are copied on write, so a model held by a caller never changes
    underneath it. Entities returned by getters must be treated as
    read-only; changes go through the ``update_*`` primitives.
    """

    def __init__(self):
        self._data: dict[EntityKind, dict[str, BaseModel]] = {kind: {} for kind in EntityKind}
        self._changes = ChangeSet()

    @classmethod
    def from_snapshot(cls, snapshot: InventorySnapshot) -> "EntityStore":
        """Rebuild a store from persisted rows without recording changes."""
        store = cls()
        for kind in EntityKind:
            for entity in snapshot.rows(kind):
                store._data[kind][entity.id] = entity.model_copy(deep=True)
        logger.info(
            "entity_store_loaded",
            **{kind.value: len(store._data[kind]) for kind in EntityKind},
        )
        return store

    def snapshot(self) -> InventorySnapshot:
        """Return a copy of every collection."""
        return InventorySnapshot(
            **{
                kind.value: [e.model_copy(deep=True) for e in self._data[kind].values()]
                for kind in EntityKind
            }
        )

    # Change tracking

    def drain_changes(self) -> ChangeSet:
        """Hand over the pending change set and start a new one."""
        changes, self._changes = self._changes, ChangeSet()
        return changes

    def discard_changes(self) -> None:
        self._changes = ChangeSet()

    def requeue_changes(self, changes: ChangeSet) -> None:
        """Put back a change set that could not be persisted, ahead of newer changes."""
        changes.merge(self._changes)
        self._changes = changes

    @property
    def has_pending_changes(self) -> bool:
        return not self._changes.is_empty

    # Generic primitives

    def _get(self, kind: EntityKind, entity_id: str) -> BaseModel | None:
        return self._data[kind].get(entity_id)

    def _require(self, kind: EntityKind, entity_id: str) -> BaseModel:
        entity = self._data[kind].get(entity_id)
        if entity is None:
            raise _NOT_FOUND[kind](entity_id)
        return entity

    def _insert(self, kind: EntityKind, entity: BaseModel) -> None:
        entity_id = entity.id
        if entity_id in self._data[kind]:
            raise DuplicateError(kind.value, "id", entity_id)
        self._put(kind, entity)

    def _replace(self, kind: EntityKind, entity: BaseModel) -> None:
        self._require(kind, entity.id)
        self._put(kind, entity)

    def _put(self, kind: EntityKind, entity: BaseModel) -> None:
        stored = entity.model_copy(deep=True)
        self._data[kind][stored.id] = stored
        self._changes.record_upsert(kind, stored)

    def _remove(self, kind: EntityKind, entity_id: str) -> BaseModel:
        entity = self._require(kind, entity_id)
        del self._data[kind][entity_id]
        self._changes.record_delete(kind, entity_id)
        return entity

    # Products

    def add_product(self, product: Product) -> Product:
        if self.get_product_by_code(product.product_code) is not None:
            raise DuplicateError("Product", "product_code", product.product_code)
        self._insert(EntityKind.PRODUCTS, product)
        return self.get_product(product.id)

    def update_product(self, product: Product) -> Product:
        existing = self.get_product_by_code(product.product_code)
        if existing is not None and existing.id != product.id:
            raise DuplicateError("Product", "product_code", product.product_code)
        self._replace(EntityKind.PRODUCTS, product)
        return self.get_product(product.id)

    def delete_product(self, product_id: str) -> Product:
        return self._remove(EntityKind.PRODUCTS, product_id)

    def get_product(self, product_id: str) -> Product | None:
        return self._get(EntityKind.PRODUCTS, product_id)

    def require_product(self, product_id: str) -> Product:
        return self._require(EntityKind.PRODUCTS, product_id)

    def get_product_by_code(self, product_code: str) -> Product | None:
        """Case-insensitive lookup by product code."""
        needle = product_code.strip().casefold()
        for product in self.products:
            if product.product_code.strip().casefold() == needle:
                return product
        return None

    @property
    def products(self) -> list[Product]:
        return list(self._data[EntityKind.PRODUCTS].values())

    def stock_levels(self) -> dict[str, float]:
        """Current stock keyed by product id."""
        return {p.id: p.stock for p in self.products}

    def commit_stock(self, levels: Mapping[str, float]) -> list[StockChange]:
        """
        Swap in new stock values for every listed product in one step.

        All ids are checked before any value is written.
        """
        for product_id in levels:
            self._require(EntityKind.PRODUCTS, product_id)

        changes: list[StockChange] = []
        for product_id, stock in levels.items():
            current: Product = self._data[EntityKind.PRODUCTS][product_id]
            changes.append(StockChange(product_id=product_id, before=current.stock, after=stock))
            if current.stock != stock:
                self._put(EntityKind.PRODUCTS, current.model_copy(update={"stock": stock}))
        return changes

    # Bills of materials

    def add_bom(self, bom: BOM) -> BOM:
        self._insert(EntityKind.BOMS, bom)
        return self.get_bom(bom.id)

    def update_bom(self, bom: BOM) -> BOM:
        self._replace(EntityKind.BOMS, bom)
        return self.get_bom(bom.id)

    def delete_bom(self, bom_id: str) -> BOM:
        return self._remove(EntityKind.BOMS, bom_id)

    def get_bom(self, bom_id: str) -> BOM | None:
        return self._get(EntityKind.BOMS, bom_id)

    def require_bom(self, bom_id: str) -> BOM:
        return self._require(EntityKind.BOMS, bom_id)

    @property
    def boms(self) -> list[BOM]:
        return list(self._data[EntityKind.BOMS].values())

    # Raw material entries

    def add_raw_material_entry(self, entry: RawMaterialEntry) -> RawMaterialEntry:
        self._insert(EntityKind.RAW_MATERIAL_ENTRIES, entry)
        return self.get_raw_material_entry(entry.id)

    def update_raw_material_entry(self, entry: RawMaterialEntry) -> RawMaterialEntry:
        self._replace(EntityKind.RAW_MATERIAL_ENTRIES, entry)
        return self.get_raw_material_entry(entry.id)

    def delete_raw_material_entry(self, entry_id: str) -> RawMaterialEntry:
        return self._remove(EntityKind.RAW_MATERIAL_ENTRIES, entry_id)

    def get_raw_material_entry(self, entry_id: str) -> RawMaterialEntry | None:
        return self._get(EntityKind.RAW_MATERIAL_ENTRIES, entry_id)

    def require_raw_material_entry(self, entry_id: str) -> RawMaterialEntry:
        return self._require(EntityKind.RAW_MATERIAL_ENTRIES, entry_id)

    @property
    def raw_material_entries(self) -> list[RawMaterialEntry]:
        return list(self._data[EntityKind.RAW_MATERIAL_ENTRIES].values())

    # Production logs

    def add_production_log(self, log: ProductionLog) -> ProductionLog:
        self._insert(EntityKind.PRODUCTION_LOGS, log)
        return self.get_production_log(log.id)

    def update_production_log(self, log: ProductionLog) -> ProductionLog:
        self._replace(EntityKind.PRODUCTION_LOGS, log)
        return self.get_production_log(log.id)

    def delete_production_log(self, log_id: str) -> ProductionLog:
        return self._remove(EntityKind.PRODUCTION_LOGS, log_id)

    def get_production_log(self, log_id: str) -> ProductionLog | None:
        return self._get(EntityKind.PRODUCTION_LOGS, log_id)

    def require_production_log(self, log_id: str) -> ProductionLog:
        return self._require(EntityKind.PRODUCTION_LOGS, log_id)

    @property
    def production_logs(self) -> list[ProductionLog]:
        return list(self._data[EntityKind.PRODUCTION_LOGS].values())

    # Shipment logs

    def add_shipment_log(self, log: ShipmentLog) -> ShipmentLog:
        self._insert(EntityKind.SHIPMENT_LOGS, log)
        return self.get_shipment_log(log.id)

    def update_shipment_log(self, log: ShipmentLog) -> ShipmentLog:
        self._replace(EntityKind.SHIPMENT_LOGS, log)
        return self.get_shipment_log(log.id)

    def delete_shipment_log(self, log_id: str) -> ShipmentLog:
        return self._remove(EntityKind.SHIPMENT_LOGS, log_id)

    def get_shipment_log(self, log_id: str) -> ShipmentLog | None:
        return self._get(EntityKind.SHIPMENT_LOGS, log_id)

    def require_shipment_log(self, log_id: str) -> ShipmentLog:
        return self._require(EntityKind.SHIPMENT_LOGS, log_id)

    @property
    def shipment_logs(self) -> list[ShipmentLog]:
        return list(self._data[EntityKind.SHIPMENT_LOGS].values())

    # Customer orders

    def add_customer_order(self, order: CustomerOrder) -> CustomerOrder:
        self._insert(EntityKind.CUSTOMER_ORDERS, order)
        return self.get_customer_order(order.id)

    def update_customer_order(self, order: CustomerOrder) -> CustomerOrder:
        self._replace(EntityKind.CUSTOMER_ORDERS, order)
        return self.get_customer_order(order.id)

    def delete_customer_order(self, order_id: str) -> CustomerOrder:
        return self._remove(EntityKind.CUSTOMER_ORDERS, order_id)

    def get_customer_order(self, order_id: str) -> CustomerOrder | None:
        return self._get(EntityKind.CUSTOMER_ORDERS, order_id)

    def require_customer_order(self, order_id: str) -> CustomerOrder:
        return self._require(EntityKind.CUSTOMER_ORDERS, order_id)

    @property
    def customer_orders(self) -> list[CustomerOrder]:
        return list(self._data[EntityKind.CUSTOMER_ORDERS].values())

    # Suppliers

    def add_supplier(self, supplier: Supplier) -> Supplier:
        self._insert(EntityKind.SUPPLIERS, supplier)
        return self.get_supplier(supplier.id)

    def update_supplier(self, supplier: Supplier) -> Supplier:
        self._replace(EntityKind.SUPPLIERS, supplier)
        return self.get_supplier(supplier.id)

    def delete_supplier(self, supplier_id: str) -> Supplier:
        return self._remove(EntityKind.SUPPLIERS, supplier_id)

    def get_supplier(self, supplier_id: str) -> Supplier | None:
        return self._get(EntityKind.SUPPLIERS, supplier_id)

    def require_supplier(self, supplier_id: str) -> Supplier:
        return self._require(EntityKind.SUPPLIERS, supplier_id)

    def get_supplier_by_name(self, name: str) -> Supplier | None:
        needle = name.strip().casefold()
        for supplier in self.suppliers:
            if supplier.name.strip().casefold() == needle:
                return supplier
        return None

    @property
    def suppliers(self) -> list[Supplier]:
        return list(self._data[EntityKind.SUPPLIERS].values())

    # Purchase orders

    def add_purchase_order(self, order: PurchaseOrder) -> PurchaseOrder:
        self._insert(EntityKind.PURCHASE_ORDERS, order)
        return self.get_purchase_order(order.id)

    def update_purchase_order(self, order: PurchaseOrder) -> PurchaseOrder:
        self._replace(EntityKind.PURCHASE_ORDERS, order)
        return self.get_purchase_order(order.id)

    def delete_purchase_order(self, order_id: str) -> PurchaseOrder:
        return self._remove(EntityKind.PURCHASE_ORDERS, order_id)

    def get_purchase_order(self, order_id: str) -> PurchaseOrder | None:
        return self._get(EntityKind.PURCHASE_ORDERS, order_id)

    def require_purchase_order(self, order_id: str) -> PurchaseOrder:
        return self._require(EntityKind.PURCHASE_ORDERS, order_id)

    def get_purchase_order_by_reference(self, reference: str) -> PurchaseOrder | None:
        needle = reference.strip().casefold()
        for order in self.purchase_orders:
            if order.order_reference and order.order_reference.strip().casefold() == needle:
                return order
        return None

    @property
    def purchase_orders(self) -> list[PurchaseOrder]:
        return list(self._data[EntityKind.PURCHASE_ORDERS].values())

    def count(self, kind: EntityKind) -> int:
        return len(self._data[kind])

