"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.inventory_store import (
    ChangeSet,
    EntityKind,
    IInventoryStore,
    InventorySnapshot,
)

__all__ = [
    # Storage interfaces
    "IInventoryStore",
    "InventorySnapshot",
    "ChangeSet",
    "EntityKind",
]
