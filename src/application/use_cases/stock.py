"""Stock count and stock level use cases."""

from dataclasses import dataclass

from src.application.dto.requests import StockCountRequest
from src.application.dto.responses import (
    LedgerBalanceResponse,
    LedgerCheckResponse,
    StockChangeResponse,
    StockCountResponse,
    StockLevelResponse,
    StockLevelsResponse,
)
from src.application.use_cases.base import WorkspaceUseCase
from src.core.entities import Product, ProductType, StockChange, StockCount
from src.core.services import ledger_net_movements


@dataclass
class LedgerBalance:
    """A product's stock next to what the ledger alone accounts for."""

    product: Product
    ledger_net: float

    @property
    def implied_opening(self) -> float:
        return self.product.stock - self.ledger_net


class ApplyStockCountUseCase(WorkspaceUseCase):
    """Overwrite stock with physically counted quantities."""

    async def execute(self, request: StockCountRequest) -> list[StockChange]:
        ws = await self._get_workspace()
        counts = [StockCount(product_id=line.product_id, quantity=line.quantity) for line in request.lines]
        return await ws.run(
            "apply_stock_count",
            lambda: ws.ledger.apply_stock_count(counts),
            lines=len(counts),
        )

    def to_response(self, changes: list[StockChange]) -> StockCountResponse:
        return StockCountResponse(
            stock_changes=[StockChangeResponse.model_validate(c) for c in changes],
            changed=sum(1 for c in changes if c.before != c.after),
        )


class StockQueriesUseCase(WorkspaceUseCase):
    """Read-only stock views."""

    async def levels(
        self,
        product_type: ProductType | None = None,
        below: float | None = None,
    ) -> list[Product]:
        """Products with their stock, optionally only those under ``below``."""
        ws = await self._get_workspace()
        products = ws.entity_store.products
        if product_type is not None:
            products = [p for p in products if p.type == product_type]
        if below is not None:
            products = [p for p in products if p.stock < below]
        return products

    async def ledger_check(self) -> list[LedgerBalance]:
        ws = await self._get_workspace()
        net = ledger_net_movements(ws.entity_store)
        return [
            LedgerBalance(product=p, ledger_net=net.get(p.id, 0.0))
            for p in ws.entity_store.products
        ]

    def to_levels_response(self, products: list[Product]) -> StockLevelsResponse:
        return StockLevelsResponse(
            items=[
                StockLevelResponse(
                    product_id=p.id,
                    product_code=p.product_code,
                    name=p.name,
                    type=p.type.value,
                    unit=p.unit,
                    stock=p.stock,
                )
                for p in products
            ],
            total=len(products),
        )

    def to_ledger_check_response(self, balances: list[LedgerBalance]) -> LedgerCheckResponse:
        return LedgerCheckResponse(
            items=[
                LedgerBalanceResponse(
                    product_id=b.product.id,
                    product_code=b.product.product_code,
                    stock=b.product.stock,
                    ledger_net=b.ledger_net,
                    implied_opening=b.implied_opening,
                )
                for b in balances
            ],
            negative_stock=[b.product.product_code for b in balances if b.product.stock < 0],
        )
