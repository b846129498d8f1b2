"""Shipment endpoints (stock out)."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_shipment_logs_use_case
from src.application.dto.requests import ShipmentLogRequest
from src.application.dto.responses import (
    ErrorResponse,
    ShipmentLogResponse,
    ShipmentLogResultResponse,
)
from src.application.use_cases.shipments import ShipmentLogsUseCase

router = APIRouter(prefix="/api/shipments", tags=["shipments"])


@router.get("", response_model=list[ShipmentLogResponse])
async def list_shipments(
    product_id: str | None = None,
    customer_order_id: str | None = None,
    use_case: ShipmentLogsUseCase = Depends(get_shipment_logs_use_case),
) -> list[ShipmentLogResponse]:
    logs = await use_case.list_logs(product_id=product_id, customer_order_id=customer_order_id)
    return [ShipmentLogResponse.model_validate(log) for log in logs]


@router.post(
    "",
    response_model=ShipmentLogResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_shipment(
    request: ShipmentLogRequest,
    use_case: ShipmentLogsUseCase = Depends(get_shipment_logs_use_case),
) -> ShipmentLogResultResponse:
    """Ship product out of stock; fails with 422 when stock is short."""
    result = await use_case.create(request)
    return use_case.to_response(result)


@router.get("/{log_id}", response_model=ShipmentLogResponse, responses={404: {"model": ErrorResponse}})
async def get_shipment(
    log_id: str,
    use_case: ShipmentLogsUseCase = Depends(get_shipment_logs_use_case),
) -> ShipmentLogResponse:
    log = await use_case.get(log_id)
    return ShipmentLogResponse.model_validate(log)


@router.put(
    "/{log_id}",
    response_model=ShipmentLogResultResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_shipment(
    log_id: str,
    request: ShipmentLogRequest,
    use_case: ShipmentLogsUseCase = Depends(get_shipment_logs_use_case),
) -> ShipmentLogResultResponse:
    """Change the shipped quantity; the product cannot be changed."""
    result = await use_case.update(log_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{log_id}",
    response_model=ShipmentLogResultResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_shipment(
    log_id: str,
    use_case: ShipmentLogsUseCase = Depends(get_shipment_logs_use_case),
) -> ShipmentLogResultResponse:
    """Cancel a shipment and return its quantity to stock."""
    result = await use_case.delete(log_id)
    return use_case.to_response(result)
