"""Stock count and stock level endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_stock_count_use_case, get_stock_queries_use_case
from src.application.dto.requests import StockCountRequest
from src.application.dto.responses import (
    ErrorResponse,
    LedgerCheckResponse,
    StockCountResponse,
    StockLevelsResponse,
)
from src.application.use_cases.stock import ApplyStockCountUseCase, StockQueriesUseCase
from src.core.entities import ProductType

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.post(
    "/counts",
    response_model=StockCountResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def apply_stock_count(
    request: StockCountRequest,
    use_case: ApplyStockCountUseCase = Depends(get_stock_count_use_case),
) -> StockCountResponse:
    """
    Apply a physical count.

    Every counted product's stock is set to the counted quantity. Either all
    lines apply or none do.
    """
    changes = await use_case.execute(request)
    return use_case.to_response(changes)


@router.get("/levels", response_model=StockLevelsResponse)
async def stock_levels(
    type: ProductType | None = None,
    below: float | None = None,
    use_case: StockQueriesUseCase = Depends(get_stock_queries_use_case),
) -> StockLevelsResponse:
    """Current stock per product; ``below`` lists only products under that level."""
    products = await use_case.levels(product_type=type, below=below)
    return use_case.to_levels_response(products)


@router.get("/ledger-check", response_model=LedgerCheckResponse)
async def ledger_check(
    use_case: StockQueriesUseCase = Depends(get_stock_queries_use_case),
) -> LedgerCheckResponse:
    """Compare each product's stock with the net of its ledger records."""
    balances = await use_case.ledger_check()
    return use_case.to_ledger_check_response(balances)
