"""Production log endpoints."""

import datetime as dt

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_production_logs_use_case
from src.application.dto.requests import ProductionLogRequest
from src.application.dto.responses import (
    ErrorResponse,
    ProductionLogResponse,
    ProductionLogResultResponse,
)
from src.application.use_cases.production import ProductionLogsUseCase

router = APIRouter(prefix="/api/production-logs", tags=["production-logs"])


@router.get("", response_model=list[ProductionLogResponse])
async def list_logs(
    product_id: str | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    use_case: ProductionLogsUseCase = Depends(get_production_logs_use_case),
) -> list[ProductionLogResponse]:
    logs = await use_case.list_logs(product_id=product_id, date_from=date_from, date_to=date_to)
    return [ProductionLogResponse.model_validate(log) for log in logs]


@router.post(
    "",
    response_model=ProductionLogResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def create_log(
    request: ProductionLogRequest,
    use_case: ProductionLogsUseCase = Depends(get_production_logs_use_case),
) -> ProductionLogResultResponse:
    """
    Record a production run.

    Components are consumed per the BOM and the output product is added.
    Fails with 422 when any component is short.
    """
    result = await use_case.create(request)
    return use_case.to_response(result)


@router.get("/{log_id}", response_model=ProductionLogResponse, responses={404: {"model": ErrorResponse}})
async def get_log(
    log_id: str,
    use_case: ProductionLogsUseCase = Depends(get_production_logs_use_case),
) -> ProductionLogResponse:
    log = await use_case.get(log_id)
    return ProductionLogResponse.model_validate(log)


@router.put(
    "/{log_id}",
    response_model=ProductionLogResultResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def update_log(
    log_id: str,
    request: ProductionLogRequest,
    use_case: ProductionLogsUseCase = Depends(get_production_logs_use_case),
) -> ProductionLogResultResponse:
    """Reverse the stored run and apply the new one in a single step."""
    result = await use_case.update(log_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{log_id}",
    response_model=ProductionLogResultResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_log(
    log_id: str,
    use_case: ProductionLogsUseCase = Depends(get_production_logs_use_case),
) -> ProductionLogResultResponse:
    """Reverse a run: components return to stock and the output is removed."""
    result = await use_case.delete(log_id)
    return use_case.to_response(result)
