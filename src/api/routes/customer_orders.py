"""Customer order endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_customer_orders_use_case
from src.application.dto.requests import CustomerOrderRequest
from src.application.dto.responses import CustomerOrderResponse, ErrorResponse
from src.application.use_cases.customer_orders import CustomerOrdersUseCase

router = APIRouter(prefix="/api/customer-orders", tags=["customer-orders"])


@router.get("", response_model=list[CustomerOrderResponse])
async def list_orders(
    use_case: CustomerOrdersUseCase = Depends(get_customer_orders_use_case),
) -> list[CustomerOrderResponse]:
    orders = await use_case.list_orders()
    return [use_case.to_response(o) for o in orders]


@router.post(
    "",
    response_model=CustomerOrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}},
)
async def create_order(
    request: CustomerOrderRequest,
    use_case: CustomerOrdersUseCase = Depends(get_customer_orders_use_case),
) -> CustomerOrderResponse:
    order = await use_case.create(request)
    return use_case.to_response(order)


@router.get("/{order_id}", response_model=CustomerOrderResponse, responses={404: {"model": ErrorResponse}})
async def get_order(
    order_id: str,
    use_case: CustomerOrdersUseCase = Depends(get_customer_orders_use_case),
) -> CustomerOrderResponse:
    order = await use_case.get(order_id)
    return use_case.to_response(order)


@router.put("/{order_id}", response_model=CustomerOrderResponse, responses={404: {"model": ErrorResponse}})
async def update_order(
    order_id: str,
    request: CustomerOrderRequest,
    use_case: CustomerOrdersUseCase = Depends(get_customer_orders_use_case),
) -> CustomerOrderResponse:
    order = await use_case.update(order_id, request)
    return use_case.to_response(order)


@router.delete(
    "/{order_id}",
    response_model=CustomerOrderResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_order(
    order_id: str,
    use_case: CustomerOrdersUseCase = Depends(get_customer_orders_use_case),
) -> CustomerOrderResponse:
    """Delete an order no shipment refers to."""
    order = await use_case.delete(order_id)
    return use_case.to_response(order)
