"""
Master data service.

CRUD for products, BOMs, suppliers, purchase orders and customer orders.
None of these commands move stock; the stock ledger owns that. Deletes are
preceded by the integrity guard.
"""

from src.config import get_logger
from src.core.entities import (
    BOM,
    CustomerOrder,
    Product,
    PurchaseOrder,
    Supplier,
)
from src.core.exceptions import DuplicateError, ValidationError
from src.core.services.entity_store import EntityStore
from src.core.services.integrity_guards import IntegrityGuard
from src.core.services.procurement import derive_status

logger = get_logger(__name__)


def bom_name_for(product: Product) -> str:
    return f"{product.product_code} - {product.name} Recipe"


class MasterDataService:
    """Non-stock commands over the entity store."""

    def __init__(self, entity_store: EntityStore, guard: IntegrityGuard | None = None):
        self._store = entity_store
        self._guard = guard or IntegrityGuard(entity_store)

    # Products

    def create_product(self, product: Product) -> Product:
        if product.stock < 0:
            raise ValidationError("stock", "initial stock cannot be negative", product.stock)
        created = self._store.add_product(product)
        logger.info(
            "product_created",
            product_id=created.id,
            product_code=created.product_code,
            type=created.type.value,
            stock=created.stock,
        )
        return created

    def update_product(self, product: Product) -> Product:
        """
        Update descriptive fields of a product.

        The stored stock is kept; only ledger operations change it. Names of
        BOMs producing this product are refreshed.
        """
        existing = self._store.require_product(product.id)
        updated = self._store.update_product(product.model_copy(update={"stock": existing.stock}))

        if (updated.product_code, updated.name) != (existing.product_code, existing.name):
            for bom in self._store.boms:
                if bom.product_id == updated.id:
                    self._store.update_bom(bom.model_copy(update={"name": bom_name_for(updated)}))

        logger.info("product_updated", product_id=updated.id)
        return updated

    def delete_product(self, product_id: str) -> Product:
        self._store.require_product(product_id)
        self._guard.check_product_delete(product_id)
        deleted = self._store.delete_product(product_id)
        logger.info("product_deleted", product_id=product_id, product_code=deleted.product_code)
        return deleted

    # Bills of materials

    def create_bom(self, bom: BOM) -> BOM:
        product = self._validate_bom(bom)
        created = self._store.add_bom(bom.model_copy(update={"name": bom_name_for(product)}))
        logger.info(
            "bom_created",
            bom_id=created.id,
            product_id=created.product_id,
            components=len(created.components),
        )
        return created

    def update_bom(self, bom: BOM) -> BOM:
        self._store.require_bom(bom.id)
        product = self._validate_bom(bom)
        updated = self._store.update_bom(bom.model_copy(update={"name": bom_name_for(product)}))
        logger.info("bom_updated", bom_id=updated.id, components=len(updated.components))
        return updated

    def delete_bom(self, bom_id: str) -> BOM:
        self._store.require_bom(bom_id)
        self._guard.check_bom_delete(bom_id)
        deleted = self._store.delete_bom(bom_id)
        logger.info("bom_deleted", bom_id=bom_id)
        return deleted

    def _validate_bom(self, bom: BOM) -> Product:
        product = self._store.require_product(bom.product_id)
        if not bom.components:
            raise ValidationError("components", "a BOM needs at least one component")
        seen: set[str] = set()
        for component in bom.components:
            if component.product_id == bom.product_id:
                raise ValidationError(
                    "components", "a BOM cannot use its own product as a component", component.product_id
                )
            if component.product_id in seen:
                raise ValidationError("components", "component listed more than once", component.product_id)
            seen.add(component.product_id)
            self._store.require_product(component.product_id)
        return product

    # Suppliers

    def create_supplier(self, supplier: Supplier) -> Supplier:
        if self._store.get_supplier_by_name(supplier.name) is not None:
            raise DuplicateError("Supplier", "name", supplier.name)
        created = self._store.add_supplier(supplier)
        logger.info("supplier_created", supplier_id=created.id, name=created.name)
        return created

    def update_supplier(self, supplier: Supplier) -> Supplier:
        self._store.require_supplier(supplier.id)
        existing = self._store.get_supplier_by_name(supplier.name)
        if existing is not None and existing.id != supplier.id:
            raise DuplicateError("Supplier", "name", supplier.name)
        updated = self._store.update_supplier(supplier)
        logger.info("supplier_updated", supplier_id=updated.id)
        return updated

    def delete_supplier(self, supplier_id: str) -> Supplier:
        self._store.require_supplier(supplier_id)
        self._guard.check_supplier_delete(supplier_id)
        deleted = self._store.delete_supplier(supplier_id)
        logger.info("supplier_deleted", supplier_id=supplier_id)
        return deleted

    # Purchase orders

    def create_purchase_order(self, order: PurchaseOrder) -> PurchaseOrder:
        self._validate_purchase_order(order)
        created = self._store.add_purchase_order(order.model_copy(update={"status": derive_status(order)}))
        logger.info(
            "purchase_order_created",
            order_id=created.id,
            supplier_id=created.supplier_id,
            items=len(created.items),
            status=created.status.value,
        )
        return created

    def update_purchase_order(self, order: PurchaseOrder) -> PurchaseOrder:
        self._store.require_purchase_order(order.id)
        self._validate_purchase_order(order)
        updated = self._store.update_purchase_order(order.model_copy(update={"status": derive_status(order)}))
        logger.info("purchase_order_updated", order_id=updated.id, status=updated.status.value)
        return updated

    def delete_purchase_order(self, order_id: str) -> PurchaseOrder:
        self._store.require_purchase_order(order_id)
        self._guard.check_purchase_order_delete(order_id)
        deleted = self._store.delete_purchase_order(order_id)
        logger.info("purchase_order_deleted", order_id=order_id)
        return deleted

    def _validate_purchase_order(self, order: PurchaseOrder) -> None:
        self._store.require_supplier(order.supplier_id)
        if order.order_reference:
            existing = self._store.get_purchase_order_by_reference(order.order_reference)
            if existing is not None and existing.id != order.id:
                raise DuplicateError("Purchase order", "order_reference", order.order_reference)
        for item in order.items:
            self._store.require_product(item.product_id)
            if item.received_quantity > item.ordered_quantity:
                raise ValidationError(
                    "received_quantity", "cannot exceed the ordered quantity", item.received_quantity
                )

    # Customer orders

    def create_customer_order(self, order: CustomerOrder) -> CustomerOrder:
        self._validate_customer_order(order)
        created = self._store.add_customer_order(order)
        logger.info("customer_order_created", order_id=created.id, items=len(created.items))
        return created

    def update_customer_order(self, order: CustomerOrder) -> CustomerOrder:
        self._store.require_customer_order(order.id)
        self._validate_customer_order(order)
        updated = self._store.update_customer_order(order)
        logger.info("customer_order_updated", order_id=updated.id)
        return updated

    def delete_customer_order(self, order_id: str) -> CustomerOrder:
        self._store.require_customer_order(order_id)
        self._guard.check_customer_order_delete(order_id)
        deleted = self._store.delete_customer_order(order_id)
        logger.info("customer_order_deleted", order_id=order_id)
        return deleted

    def _validate_customer_order(self, order: CustomerOrder) -> None:
        for item in order.items:
            self._store.require_product(item.product_id)
