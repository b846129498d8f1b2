"""Raw Material Entry Use Cases: inbound stock."""

import datetime as dt

from src.application.dto.requests import RawMaterialEntryRequest
from src.application.dto.responses import (
    RawMaterialEntryResponse,
    RawMaterialEntryResultResponse,
    StockChangeResponse,
)
from src.application.use_cases.base import WorkspaceUseCase
from src.config import get_logger
from src.core.entities import RawMaterialEntry
from src.core.services import LedgerResult

logger = get_logger(__name__)


class RawMaterialEntriesUseCase(WorkspaceUseCase):
    """Record, correct and remove raw material receipts."""

    async def create(self, request: RawMaterialEntryRequest) -> LedgerResult[RawMaterialEntry]:
        ws = await self._get_workspace()
        entry = RawMaterialEntry(
            product_id=request.product_id,
            quantity=request.quantity,
            date=request.date or dt.date.today(),
            supplier_id=request.supplier_id,
            purchase_order_id=request.purchase_order_id,
            notes=request.notes,
        )
        logger.info("receive_raw_material_started", product_id=entry.product_id, quantity=entry.quantity)
        return await ws.run(
            "add_raw_material_entry",
            lambda: ws.ledger.add_raw_material_entry(entry),
            entry_id=entry.id,
        )

    async def update(
        self, entry_id: str, request: RawMaterialEntryRequest
    ) -> LedgerResult[RawMaterialEntry]:
        ws = await self._get_workspace()
        current = ws.entity_store.require_raw_material_entry(entry_id)
        entry = RawMaterialEntry(
            id=entry_id,
            product_id=request.product_id,
            quantity=request.quantity,
            date=request.date or current.date,
            supplier_id=request.supplier_id,
            purchase_order_id=request.purchase_order_id,
            notes=request.notes,
        )
        return await ws.run(
            "update_raw_material_entry",
            lambda: ws.ledger.update_raw_material_entry(entry),
            entry_id=entry_id,
        )

    async def delete(self, entry_id: str) -> LedgerResult[RawMaterialEntry]:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_raw_material_entry",
            lambda: ws.ledger.delete_raw_material_entry(entry_id),
            entry_id=entry_id,
        )

    async def get(self, entry_id: str) -> RawMaterialEntry:
        ws = await self._get_workspace()
        return ws.entity_store.require_raw_material_entry(entry_id)

    async def list_entries(
        self,
        product_id: str | None = None,
        date_from: dt.date | None = None,
        date_to: dt.date | None = None,
    ) -> list[RawMaterialEntry]:
        """Entries newest first, optionally filtered by product and date range."""
        ws = await self._get_workspace()
        entries = [
            e
            for e in ws.entity_store.raw_material_entries
            if (product_id is None or e.product_id == product_id)
            and (date_from is None or e.date >= date_from)
            and (date_to is None or e.date <= date_to)
        ]
        return sorted(entries, key=lambda e: e.date, reverse=True)

    def to_response(self, result: LedgerResult[RawMaterialEntry]) -> RawMaterialEntryResultResponse:
        """Convert result to API response."""
        return RawMaterialEntryResultResponse(
            entry=RawMaterialEntryResponse.model_validate(result.record),
            stock_changes=[StockChangeResponse.model_validate(c) for c in result.stock_changes],
        )
