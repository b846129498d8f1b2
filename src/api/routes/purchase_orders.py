"""Purchase order endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_purchase_orders_use_case
from src.application.dto.requests import PurchaseOrderRequest
from src.application.dto.responses import ErrorResponse, PurchaseOrderResponse
from src.application.use_cases.procurement import PurchaseOrdersUseCase
from src.core.entities import PurchaseOrderStatus

router = APIRouter(prefix="/api/purchase-orders", tags=["purchase-orders"])


@router.get("", response_model=list[PurchaseOrderResponse])
async def list_orders(
    supplier_id: str | None = None,
    status: PurchaseOrderStatus | None = None,
    use_case: PurchaseOrdersUseCase = Depends(get_purchase_orders_use_case),
) -> list[PurchaseOrderResponse]:
    orders = await use_case.list_orders(supplier_id=supplier_id, status=status)
    return [use_case.to_response(o) for o in orders]


@router.post(
    "",
    response_model=PurchaseOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def create_order(
    request: PurchaseOrderRequest,
    use_case: PurchaseOrdersUseCase = Depends(get_purchase_orders_use_case),
) -> PurchaseOrderResponse:
    """Create a purchase order; status follows the received quantities."""
    order = await use_case.create(request)
    return use_case.to_response(order)


@router.get("/{order_id}", response_model=PurchaseOrderResponse, responses={404: {"model": ErrorResponse}})
async def get_order(
    order_id: str,
    use_case: PurchaseOrdersUseCase = Depends(get_purchase_orders_use_case),
) -> PurchaseOrderResponse:
    order = await use_case.get(order_id)
    return use_case.to_response(order)


@router.put(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_order(
    order_id: str,
    request: PurchaseOrderRequest,
    use_case: PurchaseOrdersUseCase = Depends(get_purchase_orders_use_case),
) -> PurchaseOrderResponse:
    order = await use_case.update(order_id, request)
    return use_case.to_response(order)


@router.delete(
    "/{order_id}",
    response_model=PurchaseOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_order(
    order_id: str,
    use_case: PurchaseOrdersUseCase = Depends(get_purchase_orders_use_case),
) -> PurchaseOrderResponse:
    """Delete a purchase order no raw material entry refers to."""
    order = await use_case.delete(order_id)
    return use_case.to_response(order)
