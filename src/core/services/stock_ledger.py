"""
Stock ledger operations.

The only writers of ``Product.stock``. Every operation follows the same
shape: look up and validate everything it needs, compute all new stock
values into a staged mapping, then commit the stock values and the ledger
row together. Any exception is raised before the first write, so a failed
call leaves the store exactly as it was.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from src.config import get_logger
from src.core.entities import (
    ProductionLog,
    ProductType,
    RawMaterialEntry,
    ShipmentLog,
    StockChange,
    StockCount,
)
from src.core.exceptions import (
    DuplicateError,
    ImmutableFieldError,
    InsufficientStockError,
    InvalidProductTypeError,
    ValidationError,
)
from src.core.services.bom_resolver import BomResolver, ResolvedBom
from src.core.services.entity_store import EntityStore
from src.core.services.procurement import PurchaseOrderTracker

logger = get_logger(__name__)

RecordT = TypeVar("RecordT")

# Decimal places kept for stock levels and feasibility comparisons
QUANTITY_PRECISION = 6


def round_quantity(value: float) -> float:
    return round(value, QUANTITY_PRECISION)


@dataclass
class LedgerResult(Generic[RecordT]):
    """Ledger record written (or removed) and the stock it moved."""

    record: RecordT
    stock_changes: list[StockChange] = field(default_factory=list)

    def change_for(self, product_id: str) -> StockChange | None:
        for change in self.stock_changes:
            if change.product_id == product_id:
                return change
        return None


class _StagedStock:
    """Working copy of stock levels; nothing touches the store until commit."""

    def __init__(self, store: EntityStore):
        self._store = store
        self.levels: dict[str, float] = {}

    def exists(self, product_id: str) -> bool:
        return self._store.get_product(product_id) is not None

    def get(self, product_id: str) -> float:
        if product_id in self.levels:
            return self.levels[product_id]
        return self._store.require_product(product_id).stock

    def add(self, product_id: str, delta: float) -> None:
        self.levels[product_id] = round_quantity(self.get(product_id) + delta)


class StockLedgerService:
    """
    Stock-moving commands for raw material entries, production logs,
    shipment logs and stock counts.

    BOM components are re-read at the time of each update or delete, so
    editing a BOM changes how older production logs are reversed.
    """

    def __init__(
        self,
        entity_store: EntityStore,
        bom_resolver: BomResolver | None = None,
        po_tracker: PurchaseOrderTracker | None = None,
        ship_finished_only: bool = True,
    ):
        self._store = entity_store
        self._boms = bom_resolver or BomResolver(entity_store)
        self._po_tracker = po_tracker or PurchaseOrderTracker(entity_store)
        self._ship_finished_only = ship_finished_only

    # Raw material entries

    def add_raw_material_entry(self, entry: RawMaterialEntry) -> LedgerResult[RawMaterialEntry]:
        """Receive material: ``stock += quantity``. Inbound, never gated."""
        store = self._store
        if store.get_raw_material_entry(entry.id) is not None:
            raise DuplicateError("Raw material entry", "id", entry.id)
        store.require_product(entry.product_id)
        self._check_procurement_refs(entry)

        staged = _StagedStock(store)
        staged.add(entry.product_id, entry.quantity)

        changes = store.commit_stock(staged.levels)
        record = store.add_raw_material_entry(entry)
        if record.purchase_order_id:
            self._po_tracker.record_receipt(record.purchase_order_id, record.product_id, record.quantity)

        logger.info(
            "raw_material_entry_created",
            entry_id=record.id,
            product_id=record.product_id,
            quantity=record.quantity,
        )
        return LedgerResult(record=record, stock_changes=changes)

    def update_raw_material_entry(self, entry: RawMaterialEntry) -> LedgerResult[RawMaterialEntry]:
        """
        Replace an entry: ``stock += new - old``.

        The product may not change. The result is not clamped at zero.
        """
        store = self._store
        old = store.require_raw_material_entry(entry.id)
        if old.product_id != entry.product_id:
            raise ImmutableFieldError("Raw material entry", "product_id", old.product_id, entry.product_id)
        store.require_product(entry.product_id)
        self._check_procurement_refs(entry)

        staged = _StagedStock(store)
        staged.add(entry.product_id, entry.quantity - old.quantity)

        changes = store.commit_stock(staged.levels)
        record = store.update_raw_material_entry(entry)

        if old.purchase_order_id and old.purchase_order_id != record.purchase_order_id:
            self._po_tracker.record_receipt(old.purchase_order_id, old.product_id, -old.quantity)
        if record.purchase_order_id:
            delta = record.quantity
            if old.purchase_order_id == record.purchase_order_id:
                delta = record.quantity - old.quantity
            self._po_tracker.record_receipt(record.purchase_order_id, record.product_id, delta)

        logger.info(
            "raw_material_entry_updated",
            entry_id=record.id,
            old_quantity=old.quantity,
            new_quantity=record.quantity,
        )
        return LedgerResult(record=record, stock_changes=changes)

    def delete_raw_material_entry(self, entry_id: str) -> LedgerResult[RawMaterialEntry]:
        """Remove an entry: ``stock -= quantity``, which may go negative."""
        store = self._store
        entry = store.require_raw_material_entry(entry_id)

        staged = _StagedStock(store)
        if staged.exists(entry.product_id):
            staged.add(entry.product_id, -entry.quantity)
        else:
            logger.warning("raw_material_entry_product_missing", entry_id=entry_id, product_id=entry.product_id)

        changes = store.commit_stock(staged.levels)
        store.delete_raw_material_entry(entry_id)
        if entry.purchase_order_id:
            self._po_tracker.record_receipt(entry.purchase_order_id, entry.product_id, -entry.quantity)

        logger.info("raw_material_entry_deleted", entry_id=entry_id, quantity=entry.quantity)
        return LedgerResult(record=entry, stock_changes=changes)

    # Production logs

    def add_production_log(self, log: ProductionLog) -> LedgerResult[ProductionLog]:
        """
        Record a production run.

        Every component is checked against current stock before anything
        moves; the first short component (in BOM order) is reported.
        """
        store = self._store
        if store.get_production_log(log.id) is not None:
            raise DuplicateError("Production log", "id", log.id)
        bom = self._boms.resolve(log.bom_id)
        store.require_product(log.product_id)

        staged = _StagedStock(store)
        self._apply_run(staged, bom, log)

        changes = store.commit_stock(staged.levels)
        record = store.add_production_log(log)
        logger.info(
            "production_log_created",
            log_id=record.id,
            bom_id=record.bom_id,
            product_id=record.product_id,
            quantity=record.quantity,
            components=len(bom.components),
        )
        return LedgerResult(record=record, stock_changes=changes)

    def update_production_log(self, log: ProductionLog) -> LedgerResult[ProductionLog]:
        """
        Replace a production run.

        The old run is reversed on a working copy, the new run is checked
        and applied against that copy, and only then is the copy committed.
        BOM, output product and quantity may all change.
        """
        store = self._store
        old = store.require_production_log(log.id)
        old_bom = self._boms.resolve(old.bom_id)
        new_bom = self._boms.resolve(log.bom_id)
        store.require_product(log.product_id)

        staged = _StagedStock(store)
        self._reverse_run(staged, old_bom, old)
        self._apply_run(staged, new_bom, log)

        changes = store.commit_stock(staged.levels)
        record = store.update_production_log(log)
        logger.info(
            "production_log_updated",
            log_id=record.id,
            old_bom_id=old.bom_id,
            new_bom_id=record.bom_id,
            old_quantity=old.quantity,
            new_quantity=record.quantity,
        )
        return LedgerResult(record=record, stock_changes=changes)

    def delete_production_log(self, log_id: str) -> LedgerResult[ProductionLog]:
        """Reverse a production run unconditionally, whatever the resulting sign."""
        store = self._store
        log = store.require_production_log(log_id)
        bom = self._boms.resolve(log.bom_id)

        staged = _StagedStock(store)
        self._reverse_run(staged, bom, log)

        changes = store.commit_stock(staged.levels)
        store.delete_production_log(log_id)
        logger.info("production_log_deleted", log_id=log_id, bom_id=log.bom_id, quantity=log.quantity)
        return LedgerResult(record=log, stock_changes=changes)

    def _apply_run(self, staged: _StagedStock, bom: ResolvedBom, log: ProductionLog) -> None:
        for component in bom.components:
            required = round_quantity(component.quantity * log.quantity)
            if not staged.exists(component.product_id):
                raise InsufficientStockError(f"ID: {component.product_id}", required, 0.0)
            available = round_quantity(staged.get(component.product_id))
            if available < required:
                product = self._store.require_product(component.product_id)
                raise InsufficientStockError(product.display_name, required, available)
        for component in bom.components:
            staged.add(component.product_id, -component.quantity * log.quantity)
        staged.add(log.product_id, log.quantity)

    def _reverse_run(self, staged: _StagedStock, bom: ResolvedBom, log: ProductionLog) -> None:
        for component in bom.components:
            if staged.exists(component.product_id):
                staged.add(component.product_id, component.quantity * log.quantity)
            else:
                logger.warning(
                    "production_component_missing",
                    log_id=log.id,
                    product_id=component.product_id,
                )
        if staged.exists(log.product_id):
            staged.add(log.product_id, -log.quantity)
        else:
            logger.warning("production_output_missing", log_id=log.id, product_id=log.product_id)

    # Shipment logs

    def add_shipment_log(self, log: ShipmentLog) -> LedgerResult[ShipmentLog]:
        """Ship goods: ``stock -= quantity`` if enough is on hand."""
        store = self._store
        if store.get_shipment_log(log.id) is not None:
            raise DuplicateError("Shipment log", "id", log.id)
        product = store.require_product(log.product_id)
        if self._ship_finished_only and product.type != ProductType.FINISHED:
            raise InvalidProductTypeError(
                product.display_name, product.type.value, ProductType.FINISHED.value
            )
        if log.customer_order_id:
            store.require_customer_order(log.customer_order_id)
        if round_quantity(product.stock) < round_quantity(log.quantity):
            raise InsufficientStockError(product.display_name, log.quantity, product.stock)

        staged = _StagedStock(store)
        staged.add(product.id, -log.quantity)

        changes = store.commit_stock(staged.levels)
        record = store.add_shipment_log(log)
        logger.info(
            "shipment_log_created",
            log_id=record.id,
            product_id=record.product_id,
            quantity=record.quantity,
        )
        return LedgerResult(record=record, stock_changes=changes)

    def update_shipment_log(self, log: ShipmentLog) -> LedgerResult[ShipmentLog]:
        """Replace a shipment: ``stock -= new - old``, never below zero."""
        store = self._store
        old = store.require_shipment_log(log.id)
        if old.product_id != log.product_id:
            raise ImmutableFieldError("Shipment log", "product_id", old.product_id, log.product_id)
        product = store.require_product(log.product_id)
        if log.customer_order_id:
            store.require_customer_order(log.customer_order_id)

        new_stock = round_quantity(product.stock - (log.quantity - old.quantity))
        if new_stock < 0:
            raise InsufficientStockError(
                product.display_name, log.quantity, round_quantity(product.stock + old.quantity)
            )

        changes = store.commit_stock({product.id: new_stock})
        record = store.update_shipment_log(log)
        logger.info(
            "shipment_log_updated",
            log_id=record.id,
            old_quantity=old.quantity,
            new_quantity=record.quantity,
        )
        return LedgerResult(record=record, stock_changes=changes)

    def delete_shipment_log(self, log_id: str) -> LedgerResult[ShipmentLog]:
        """
        Remove a shipment and restore its quantity.

        If the product is gone the row is still removed and stock is left
        alone.
        """
        store = self._store
        log = store.require_shipment_log(log_id)

        staged = _StagedStock(store)
        if staged.exists(log.product_id):
            staged.add(log.product_id, log.quantity)
        else:
            logger.warning("shipment_product_missing", log_id=log_id, product_id=log.product_id)

        changes = store.commit_stock(staged.levels)
        store.delete_shipment_log(log_id)
        logger.info("shipment_log_deleted", log_id=log_id, quantity=log.quantity)
        return LedgerResult(record=log, stock_changes=changes)

    # Stock counts

    def apply_stock_count(self, counts: Iterable[StockCount]) -> list[StockChange]:
        """
        Overwrite stock with counted quantities.

        Products not listed keep their stock. When a product is counted
        twice the later line wins.
        """
        counts = list(counts)
        for line in counts:
            self._store.require_product(line.product_id)
            if line.quantity < 0:
                raise ValidationError("quantity", "counted quantity cannot be negative", line.quantity)

        levels = {line.product_id: line.quantity for line in counts}
        changes = self._store.commit_stock(levels)
        logger.info(
            "stock_count_applied",
            products=len(levels),
            changed=sum(1 for c in changes if c.before != c.after),
        )
        return changes

    def _check_procurement_refs(self, entry: RawMaterialEntry) -> None:
        if entry.supplier_id:
            self._store.require_supplier(entry.supplier_id)
        if entry.purchase_order_id:
            self._store.require_purchase_order(entry.purchase_order_id)


def ledger_net_movements(store: EntityStore) -> dict[str, float]:
    """
    Net stock movement per product implied by the ledger alone.

    Entries and outputs add, component consumption and shipments subtract.
    Production consumption uses the current BOMs; logs whose BOM is gone
    contribute only their output.
    """
    net: dict[str, float] = {p.id: 0.0 for p in store.products}

    def bump(product_id: str, delta: float) -> None:
        net[product_id] = round_quantity(net.get(product_id, 0.0) + delta)

    for entry in store.raw_material_entries:
        bump(entry.product_id, entry.quantity)
    for log in store.production_logs:
        bump(log.product_id, log.quantity)
        bom = store.get_bom(log.bom_id)
        if bom is None:
            continue
        for component in bom.components:
            bump(component.product_id, -component.quantity * log.quantity)
    for shipment in store.shipment_logs:
        bump(shipment.product_id, -shipment.quantity)
    return net


def derive_stock_from_ledger(
    store: EntityStore, initial_levels: dict[str, float] | None = None
) -> dict[str, float]:
    """Stock each product should hold given its initial stock and the ledger."""
    initial_levels = initial_levels or {}
    return {
        product_id: round_quantity(initial_levels.get(product_id, 0.0) + movement)
        for product_id, movement in ledger_net_movements(store).items()
    }
