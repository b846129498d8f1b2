"""Production Log Use Cases: BOM-driven consumption and output."""

import datetime as dt

from src.application.dto.requests import ProductionLogRequest
from src.application.dto.responses import (
    ProductionLogResponse,
    ProductionLogResultResponse,
    StockChangeResponse,
)
from src.application.use_cases.base import WorkspaceUseCase
from src.config import get_logger
from src.core.entities import ProductionLog
from src.core.services import LedgerResult

logger = get_logger(__name__)


class ProductionLogsUseCase(WorkspaceUseCase):
    """Record, correct and reverse production runs."""

    async def create(self, request: ProductionLogRequest) -> LedgerResult[ProductionLog]:
        ws = await self._get_workspace()
        log = ProductionLog(
            product_id=request.product_id,
            bom_id=request.bom_id,
            quantity=request.quantity,
            date=request.date or dt.date.today(),
            notes=request.notes,
        )
        logger.info(
            "production_started",
            product_id=log.product_id,
            bom_id=log.bom_id,
            quantity=log.quantity,
        )
        return await ws.run(
            "add_production_log",
            lambda: ws.ledger.add_production_log(log),
            log_id=log.id,
        )

    async def update(self, log_id: str, request: ProductionLogRequest) -> LedgerResult[ProductionLog]:
        ws = await self._get_workspace()
        current = ws.entity_store.require_production_log(log_id)
        log = ProductionLog(
            id=log_id,
            product_id=request.product_id,
            bom_id=request.bom_id,
            quantity=request.quantity,
            date=request.date or current.date,
            notes=request.notes,
        )
        return await ws.run(
            "update_production_log",
            lambda: ws.ledger.update_production_log(log),
            log_id=log_id,
        )

    async def delete(self, log_id: str) -> LedgerResult[ProductionLog]:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_production_log",
            lambda: ws.ledger.delete_production_log(log_id),
            log_id=log_id,
        )

    async def get(self, log_id: str) -> ProductionLog:
        ws = await self._get_workspace()
        return ws.entity_store.require_production_log(log_id)

    async def list_logs(
        self,
        product_id: str | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[ProductionLog]:
        """Logs newest first, optionally filtered by output product and date range."""
        ws = await self._get_workspace()
        logs = [
            log
            for log in ws.entity_store.production_logs
            if (product_id is None or log.product_id == product_id)
            and (date_from is None or log.date >= date_from)
            and (date_to is None or log.date <= date_to)
        ]
        return sorted(logs, key=lambda log: log.date, reverse=True)

    def to_response(self, result: LedgerResult[ProductionLog]) -> ProductionLogResultResponse:
        return ProductionLogResultResponse(
            log=ProductionLogResponse.model_validate(result.record),
            stock_changes=[StockChangeResponse.model_validate(c) for c in result.stock_changes],
        )
