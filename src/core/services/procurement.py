"""Purchase order receipt tracking."""

from src.config import get_logger
from src.core.entities import PurchaseOrder, PurchaseOrderStatus
from src.core.services.entity_store import EntityStore

logger = get_logger(__name__)


def derive_status(order: PurchaseOrder) -> PurchaseOrderStatus:
    """
    Status implied by the received quantities.

    Cancelled is terminal and never recomputed.
    """
    if order.status == PurchaseOrderStatus.CANCELLED:
        return PurchaseOrderStatus.CANCELLED
    if order.items and all(item.is_fully_received for item in order.items):
        return PurchaseOrderStatus.CLOSED
    if any(item.received_quantity > 0 for item in order.items):
        return PurchaseOrderStatus.PARTIALLY_RECEIVED
    return PurchaseOrderStatus.OPEN


class PurchaseOrderTracker:
    """Moves received quantities on purchase orders as raw material arrives."""

    def __init__(self, entity_store: EntityStore):
        self._store = entity_store

    def record_receipt(
        self, order_id: str, product_id: str, delta: float
    ) -> PurchaseOrder | None:
        """
        Add ``delta`` (negative to revert) to the first item for ``product_id``.

        The received quantity stays within ``[0, ordered_quantity]``. An
        unknown order or a product not on the order is ignored.
        """
        order = self._store.get_purchase_order(order_id)
        if order is None:
            logger.warning("purchase_order_receipt_skipped", order_id=order_id, reason="order_missing")
            return None

        updated = order.model_copy(deep=True)
        for item in updated.items:
            if item.product_id == product_id:
                received = item.received_quantity + delta
                item.received_quantity = min(max(received, 0.0), item.ordered_quantity)
                break
        else:
            logger.warning(
                "purchase_order_receipt_skipped",
                order_id=order_id,
                product_id=product_id,
                reason="item_missing",
            )
            return None

        updated.status = derive_status(updated)
        stored = self._store.update_purchase_order(updated)
        logger.info(
            "purchase_order_receipt_recorded",
            order_id=order_id,
            product_id=product_id,
            delta=delta,
            status=stored.status.value,
        )
        return stored
