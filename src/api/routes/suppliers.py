"""Supplier endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_suppliers_use_case
from src.application.dto.requests import SupplierRequest
from src.application.dto.responses import ErrorResponse, SupplierResponse
from src.application.use_cases.procurement import SuppliersUseCase

router = APIRouter(prefix="/api/suppliers", tags=["suppliers"])


@router.get("", response_model=list[SupplierResponse])
async def list_suppliers(
    use_case: SuppliersUseCase = Depends(get_suppliers_use_case),
) -> list[SupplierResponse]:
    suppliers = await use_case.list_suppliers()
    return [use_case.to_response(s) for s in suppliers]


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"model": ErrorResponse}},
)
async def create_supplier(
    request: SupplierRequest,
    use_case: SuppliersUseCase = Depends(get_suppliers_use_case),
) -> SupplierResponse:
    supplier = await use_case.create(request)
    return use_case.to_response(supplier)


@router.get("/{supplier_id}", response_model=SupplierResponse, responses={404: {"model": ErrorResponse}})
async def get_supplier(
    supplier_id: str,
    use_case: SuppliersUseCase = Depends(get_suppliers_use_case),
) -> SupplierResponse:
    supplier = await use_case.get(supplier_id)
    return use_case.to_response(supplier)


@router.put(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def update_supplier(
    supplier_id: str,
    request: SupplierRequest,
    use_case: SuppliersUseCase = Depends(get_suppliers_use_case),
) -> SupplierResponse:
    supplier = await use_case.update(supplier_id, request)
    return use_case.to_response(supplier)


@router.delete(
    "/{supplier_id}",
    response_model=SupplierResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_supplier(
    supplier_id: str,
    use_case: SuppliersUseCase = Depends(get_suppliers_use_case),
) -> SupplierResponse:
    """Delete a supplier with no purchase orders or raw material entries."""
    supplier = await use_case.delete(supplier_id)
    return use_case.to_response(supplier)
