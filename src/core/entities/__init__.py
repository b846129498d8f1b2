"""Core domain entities."""

from src.core.entities.bom import BOM, BomComponent
from src.core.entities.customer_order import CustomerOrder, OrderItem
from src.core.entities.ledger import (
    ProductionLog,
    RawMaterialEntry,
    ShipmentLog,
    StockChange,
    StockCount,
)
from src.core.entities.procurement import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    Supplier,
)
from src.core.entities.product import Product, ProductType, new_id

__all__ = [
    # Product entities
    "Product",
    "ProductType",
    "new_id",
    # Recipe entities
    "BOM",
    "BomComponent",
    # Ledger entities
    "RawMaterialEntry",
    "ProductionLog",
    "ShipmentLog",
    "StockCount",
    "StockChange",
    # Customer order entities
    "CustomerOrder",
    "OrderItem",
    # Procurement entities
    "Supplier",
    "PurchaseOrder",
    "PurchaseOrderItem",
    "PurchaseOrderStatus",
]
