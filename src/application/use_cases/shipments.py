"""Shipment Log Use Cases: outbound stock with a zero floor."""

import datetime as dt

from src.application.dto.requests import ShipmentLogRequest
from src.application.dto.responses import (
    ShipmentLogResponse,
    ShipmentLogResultResponse,
    StockChangeResponse,
)
from src.application.use_cases.base import WorkspaceUseCase
from src.core.entities import ShipmentLog
from src.core.services import LedgerResult


class ShipmentLogsUseCase(WorkspaceUseCase):
    """Record, correct and cancel shipments."""

    async def create(self, request: ShipmentLogRequest) -> LedgerResult[ShipmentLog]:
        ws = await self._get_workspace()
        log = ShipmentLog(
            product_id=request.product_id,
            quantity=request.quantity,
            date=request.date or dt.date.today(),
            customer_order_id=request.customer_order_id,
            notes=request.notes,
        )
        return await ws.run(
            "add_shipment_log",
            lambda: ws.ledger.add_shipment_log(log),
            log_id=log.id,
        )

    async def update(self, log_id: str, request: ShipmentLogRequest) -> LedgerResult[ShipmentLog]:
        ws = await self._get_workspace()
        current = ws.entity_store.require_shipment_log(log_id)
        log = ShipmentLog(
            id=log_id,
            product_id=request.product_id,
            quantity=request.quantity,
            date=request.date or current.date,
            customer_order_id=request.customer_order_id,
            notes=request.notes,
        )
        return await ws.run(
            "update_shipment_log",
            lambda: ws.ledger.update_shipment_log(log),
            log_id=log_id,
        )

    async def delete(self, log_id: str) -> LedgerResult[ShipmentLog]:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_shipment_log",
            lambda: ws.ledger.delete_shipment_log(log_id),
            log_id=log_id,
        )

    async def get(self, log_id: str) -> ShipmentLog:
        ws = await self._get_workspace()
        return ws.entity_store.require_shipment_log(log_id)

    async def list_logs(
        self,
        product_id: str | None = None,
        customer_order_id: str | None = None,
    ) -> list[ShipmentLog]:
        ws = await self._get_workspace()
        logs = [
            log
            for log in ws.entity_store.shipment_logs
            if (product_id is None or log.product_id == product_id)
            and (customer_order_id is None or log.customer_order_id == customer_order_id)
        ]
        return sorted(logs, key=lambda log: log.date, reverse=True)

    def to_response(self, result: LedgerResult[ShipmentLog]) -> ShipmentLogResultResponse:
        return ShipmentLogResultResponse(
            log=ShipmentLogResponse.model_validate(result.record),
            stock_changes=[StockChangeResponse.model_validate(c) for c in result.stock_changes],
        )
