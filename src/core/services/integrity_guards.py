"""
Referential integrity guards.

Each check runs before the matching delete primitive and raises
ReferentialIntegrityError when anything still points at the target.
"""

from src.core.exceptions import ReferentialIntegrityError
from src.core.services.entity_store import EntityStore


class IntegrityGuard:
    """Delete preconditions for referenced entities."""

    def __init__(self, entity_store: EntityStore):
        self._store = entity_store

    def check_product_delete(self, product_id: str) -> None:
        store = self._store
        for bom in store.boms:
            if bom.product_id == product_id or product_id in bom.component_ids():
                self._blocked("Product", product_id, "BOM", bom.id)
        for entry in store.raw_material_entries:
            if entry.product_id == product_id:
                self._blocked("Product", product_id, "raw material entry", entry.id)
        for log in store.production_logs:
            if log.product_id == product_id:
                self._blocked("Product", product_id, "production log", log.id)
        for order in store.customer_orders:
            if any(item.product_id == product_id for item in order.items):
                self._blocked("Product", product_id, "customer order", order.id)
        for shipment in store.shipment_logs:
            if shipment.product_id == product_id:
                self._blocked("Product", product_id, "shipment log", shipment.id)
        for po in store.purchase_orders:
            if any(item.product_id == product_id for item in po.items):
                self._blocked("Product", product_id, "purchase order", po.id)

    def check_bom_delete(self, bom_id: str) -> None:
        for log in self._store.production_logs:
            if log.bom_id == bom_id:
                self._blocked("BOM", bom_id, "production log", log.id)

    def check_supplier_delete(self, supplier_id: str) -> None:
        for po in self._store.purchase_orders:
            if po.supplier_id == supplier_id:
                self._blocked("Supplier", supplier_id, "purchase order", po.id)
        for entry in self._store.raw_material_entries:
            if entry.supplier_id == supplier_id:
                self._blocked("Supplier", supplier_id, "raw material entry", entry.id)

    def check_purchase_order_delete(self, order_id: str) -> None:
        for entry in self._store.raw_material_entries:
            if entry.purchase_order_id == order_id:
                self._blocked("Purchase order", order_id, "raw material entry", entry.id)

    def check_customer_order_delete(self, order_id: str) -> None:
        for shipment in self._store.shipment_logs:
            if shipment.customer_order_id == order_id:
                self._blocked("Customer order", order_id, "shipment log", shipment.id)

    @staticmethod
    def _blocked(entity: str, entity_id: str, ref_kind: str, ref_id: str) -> None:
        raise ReferentialIntegrityError(entity, entity_id, f"{ref_kind} {ref_id}")
