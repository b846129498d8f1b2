"""Raw material entry endpoints (stock in)."""

import datetime as dt

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_raw_material_entries_use_case
from src.application.dto.requests import RawMaterialEntryRequest
from src.application.dto.responses import (
    ErrorResponse,
    RawMaterialEntryResponse,
    RawMaterialEntryResultResponse,
)
from src.application.use_cases.raw_materials import RawMaterialEntriesUseCase

router = APIRouter(prefix="/api/raw-material-entries", tags=["raw-material-entries"])


@router.get("", response_model=list[RawMaterialEntryResponse])
async def list_entries(
    product_id: str | None = None,
    date_from: dt.date | None = None,
    date_to: dt.date | None = None,
    use_case: RawMaterialEntriesUseCase = Depends(get_raw_material_entries_use_case),
) -> list[RawMaterialEntryResponse]:
    """List entries, newest first."""
    entries = await use_case.list_entries(product_id=product_id, date_from=date_from, date_to=date_to)
    return [RawMaterialEntryResponse.model_validate(e) for e in entries]


@router.post(
    "",
    response_model=RawMaterialEntryResultResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_entry(
    request: RawMaterialEntryRequest,
    use_case: RawMaterialEntriesUseCase = Depends(get_raw_material_entries_use_case),
) -> RawMaterialEntryResultResponse:
    """Receive raw material: stock goes up and any linked purchase order is updated."""
    result = await use_case.create(request)
    return use_case.to_response(result)


@router.get(
    "/{entry_id}",
    response_model=RawMaterialEntryResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_entry(
    entry_id: str,
    use_case: RawMaterialEntriesUseCase = Depends(get_raw_material_entries_use_case),
) -> RawMaterialEntryResponse:
    entry = await use_case.get(entry_id)
    return RawMaterialEntryResponse.model_validate(entry)


@router.put(
    "/{entry_id}",
    response_model=RawMaterialEntryResultResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_entry(
    entry_id: str,
    request: RawMaterialEntryRequest,
    use_case: RawMaterialEntriesUseCase = Depends(get_raw_material_entries_use_case),
) -> RawMaterialEntryResultResponse:
    """Correct an entry; stock moves by the quantity difference."""
    result = await use_case.update(entry_id, request)
    return use_case.to_response(result)


@router.delete(
    "/{entry_id}",
    response_model=RawMaterialEntryResultResponse,
    responses={404: {"model": ErrorResponse}},
)
async def delete_entry(
    entry_id: str,
    use_case: RawMaterialEntriesUseCase = Depends(get_raw_material_entries_use_case),
) -> RawMaterialEntryResultResponse:
    """Remove an entry and take its quantity back out of stock."""
    result = await use_case.delete(entry_id)
    return use_case.to_response(result)
