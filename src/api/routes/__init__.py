"""API route modules."""

from src.api.routes.boms import router as boms_router
from src.api.routes.customer_orders import router as customer_orders_router
from src.api.routes.excel import router as excel_router
from src.api.routes.health import router as health_router
from src.api.routes.production import router as production_router
from src.api.routes.products import router as products_router
from src.api.routes.purchase_orders import router as purchase_orders_router
from src.api.routes.raw_materials import router as raw_materials_router
from src.api.routes.shipments import router as shipments_router
from src.api.routes.stock import router as stock_router
from src.api.routes.suppliers import router as suppliers_router

__all__ = [
    "health_router",
    "products_router",
    "boms_router",
    "raw_materials_router",
    "production_router",
    "shipments_router",
    "stock_router",
    "customer_orders_router",
    "suppliers_router",
    "purchase_orders_router",
    "excel_router",
]
