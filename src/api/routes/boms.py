"""Bill of materials endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_boms_use_case
from src.application.dto.requests import BomRequest
from src.application.dto.responses import BomListResponse, BomResponse, ErrorResponse
from src.application.use_cases.boms import BomsUseCase

router = APIRouter(prefix="/api/boms", tags=["boms"])


@router.get("", response_model=BomListResponse)
async def list_boms(
    product_id: str | None = None,
    use_case: BomsUseCase = Depends(get_boms_use_case),
) -> BomListResponse:
    boms = await use_case.list_boms(product_id=product_id)
    return use_case.to_list_response(boms)


@router.post(
    "",
    response_model=BomResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def create_bom(
    request: BomRequest,
    use_case: BomsUseCase = Depends(get_boms_use_case),
) -> BomResponse:
    """Create a recipe; its name is derived from the main product."""
    bom = await use_case.create(request)
    return use_case.to_response(bom)


@router.get("/{bom_id}", response_model=BomResponse, responses={404: {"model": ErrorResponse}})
async def get_bom(
    bom_id: str,
    use_case: BomsUseCase = Depends(get_boms_use_case),
) -> BomResponse:
    bom = await use_case.get(bom_id)
    return use_case.to_response(bom)


@router.put(
    "/{bom_id}",
    response_model=BomResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_bom(
    bom_id: str,
    request: BomRequest,
    use_case: BomsUseCase = Depends(get_boms_use_case),
) -> BomResponse:
    """Replace a recipe's components. Past production logs are not recomputed."""
    bom = await use_case.update(bom_id, request)
    return use_case.to_response(bom)


@router.delete(
    "/{bom_id}",
    response_model=BomResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def delete_bom(
    bom_id: str,
    use_case: BomsUseCase = Depends(get_boms_use_case),
) -> BomResponse:
    """Delete a recipe no production log uses."""
    bom = await use_case.delete(bom_id)
    return use_case.to_response(bom)
