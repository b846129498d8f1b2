"""Product catalogue endpoints."""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_products_use_case
from src.application.dto.requests import CreateProductRequest, UpdateProductRequest
from src.application.dto.responses import ErrorResponse, ProductListResponse, ProductResponse
from src.application.use_cases.products import ProductsUseCase
from src.core.entities import ProductType

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=ProductListResponse)
async def list_products(
    type: ProductType | None = None,
    search: str | None = Query(default=None, description="Match against code or name"),
    use_case: ProductsUseCase = Depends(get_products_use_case),
) -> ProductListResponse:
    """List products, optionally filtered by type or text."""
    products = await use_case.list_products(product_type=type, search=search)
    return use_case.to_list_response(products)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_product(
    request: CreateProductRequest,
    use_case: ProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    """Create a product with its opening stock."""
    product = await use_case.create(request)
    return use_case.to_response(product)


@router.get("/{product_id}", response_model=ProductResponse, responses={404: {"model": ErrorResponse}})
async def get_product(
    product_id: str,
    use_case: ProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    product = await use_case.get(product_id)
    return use_case.to_response(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_product(
    product_id: str,
    request: UpdateProductRequest,
    use_case: ProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    """Update descriptive fields; stock is left unchanged."""
    product = await use_case.update(product_id, request)
    return use_case.to_response(product)


@router.delete(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_product(
    product_id: str,
    use_case: ProductsUseCase = Depends(get_products_use_case),
) -> ProductResponse:
    """Delete a product nothing references."""
    product = await use_case.delete(product_id)
    return use_case.to_response(product)
