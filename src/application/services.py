"""
Service factory functions for dependency injection.

This module wires the in-memory inventory engine to its durable store.
Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

import asyncio
from collections.abc import Callable
from typing import TypeVar

from src.config import get_logger, get_settings, operation_context
from src.core.exceptions import DatabaseError
from src.core.interfaces import IInventoryStore
from src.core.services import (
    BomResolver,
    EntityStore,
    IntegrityGuard,
    MasterDataService,
    PurchaseOrderTracker,
    StockLedgerService,
)

logger = get_logger(__name__)

T = TypeVar("T")


class InventoryWorkspace:
    """
    The live entity store plus the services that operate on it.

    ``run`` executes one synchronous engine command under a lock and then
    writes the resulting changes through to the durable store, so the
    persisted order always matches the in-memory order.
    """

    def __init__(
        self,
        entity_store: EntityStore | None = None,
        persistence: IInventoryStore | None = None,
        ship_finished_only: bool | None = None,
    ):
        if ship_finished_only is None:
            ship_finished_only = get_settings().inventory.ship_finished_only

        self.entity_store = entity_store or EntityStore()
        self.persistence = persistence
        self.bom_resolver = BomResolver(self.entity_store)
        self.guard = IntegrityGuard(self.entity_store)
        self.po_tracker = PurchaseOrderTracker(self.entity_store)
        self.ledger = StockLedgerService(
            self.entity_store,
            bom_resolver=self.bom_resolver,
            po_tracker=self.po_tracker,
            ship_finished_only=ship_finished_only,
        )
        self.master_data = MasterDataService(self.entity_store, guard=self.guard)
        self._lock = asyncio.Lock()

    @classmethod
    async def load(
        cls,
        persistence: IInventoryStore,
        ship_finished_only: bool | None = None,
    ) -> "InventoryWorkspace":
        """Build a workspace from everything the durable store holds."""
        snapshot = await persistence.load_snapshot()
        return cls(
            entity_store=EntityStore.from_snapshot(snapshot),
            persistence=persistence,
            ship_finished_only=ship_finished_only,
        )

    async def run(self, operation: str, command: Callable[[], T], **context) -> T:
        """
        Run ``command`` and persist what it changed.

        Raises:
            StokTakipError: Whatever the command raised; nothing changed.
            DatabaseError: The command succeeded in memory but could not be
                written. Its changes stay queued and go out with the next
                successful write.
        """
        async with self._lock:
            with operation_context(operation, **context):
                # Changes left over from an earlier failed write stay queued
                # whatever this command does.
                pending = self.entity_store.drain_changes()
                try:
                    result = command()
                except Exception:
                    self.entity_store.discard_changes()
                    self.entity_store.requeue_changes(pending)
                    raise
                self.entity_store.requeue_changes(pending)
                await self._flush()
                return result

    async def _flush(self) -> None:
        changes = self.entity_store.drain_changes()
        if self.persistence is None or changes.is_empty:
            return
        try:
            await self.persistence.apply_changes(changes)
        except DatabaseError:
            self.entity_store.requeue_changes(changes)
            logger.error("inventory_write_through_failed", pending=len(changes))
            raise


# Singleton workspace
_workspace: InventoryWorkspace | None = None
_workspace_lock = asyncio.Lock()


async def get_workspace(persistence: IInventoryStore | None = None) -> InventoryWorkspace:
    """
    Get or create the InventoryWorkspace.

    The first call loads the full snapshot from SQLite.

    Args:
        persistence: Optional store override (not cached)

    Returns:
        Loaded InventoryWorkspace
    """
    global _workspace

    if persistence is not None:
        return await InventoryWorkspace.load(persistence)

    async with _workspace_lock:
        if _workspace is None:
            # Lazy import infrastructure
            from src.infrastructure.storage.sqlite import get_inventory_store

            _workspace = await InventoryWorkspace.load(await get_inventory_store())
            logger.info(
                "inventory_workspace_ready",
                products=len(_workspace.entity_store.products),
            )
    return _workspace


def reset_services() -> None:
    """Reset singleton instances (for testing)."""
    global _workspace
    _workspace = None
