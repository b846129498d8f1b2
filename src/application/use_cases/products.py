"""Product use cases: catalogue maintenance without stock effects."""

from src.application.dto.requests import CreateProductRequest, UpdateProductRequest
from src.application.dto.responses import ProductListResponse, ProductResponse
from src.application.use_cases.base import WorkspaceUseCase
from src.config import get_logger
from src.core.entities import Product, ProductType

logger = get_logger(__name__)


class ProductsUseCase(WorkspaceUseCase):
    """Create, update, delete and look up products."""

    async def create(self, request: CreateProductRequest) -> Product:
        ws = await self._get_workspace()
        product = Product(
            product_code=request.product_code.strip(),
            name=request.name.strip(),
            type=request.type,
            unit=request.unit,
            stock=request.initial_stock,
            description=request.description,
        )
        return await ws.run(
            "create_product",
            lambda: ws.master_data.create_product(product),
            product_code=product.product_code,
        )

    async def update(self, product_id: str, request: UpdateProductRequest) -> Product:
        ws = await self._get_workspace()
        existing = ws.entity_store.require_product(product_id)
        product = existing.model_copy(
            update={
                "product_code": request.product_code.strip(),
                "name": request.name.strip(),
                "type": request.type,
                "unit": request.unit,
                "description": request.description,
            }
        )
        return await ws.run(
            "update_product",
            lambda: ws.master_data.update_product(product),
            product_id=product_id,
        )

    async def delete(self, product_id: str) -> Product:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_product",
            lambda: ws.master_data.delete_product(product_id),
            product_id=product_id,
        )

    async def get(self, product_id: str) -> Product:
        ws = await self._get_workspace()
        return ws.entity_store.require_product(product_id)

    async def list_products(
        self,
        product_type: ProductType | None = None,
        search: str | None = None,
    ) -> list[Product]:
        """Products in insertion order, optionally filtered by type or code/name text."""
        ws = await self._get_workspace()
        products = ws.entity_store.products
        if product_type is not None:
            products = [p for p in products if p.type == product_type]
        if search:
            needle = search.strip().casefold()
            products = [
                p
                for p in products
                if needle in p.product_code.casefold() or needle in p.name.casefold()
            ]
        return products

    def to_response(self, product: Product) -> ProductResponse:
        return ProductResponse.model_validate(product)

    def to_list_response(self, products: list[Product]) -> ProductListResponse:
        return ProductListResponse(
            items=[self.to_response(p) for p in products],
            total=len(products),
        )
