"""
Abstract interface for inventory persistence.

The stock engine runs against an in-memory entity store; durable storage
only ever sees a full snapshot on load and a batch of changes after each
command.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel

from src.core.entities import (
    BOM,
    CustomerOrder,
    Product,
    ProductionLog,
    PurchaseOrder,
    RawMaterialEntry,
    ShipmentLog,
    Supplier,
)


class EntityKind(str, Enum):
    """
    Persisted entity collections.

    Declaration order is dependency order: a kind may only reference kinds
    declared before it.
    """

    PRODUCTS = "products"
    SUPPLIERS = "suppliers"
    BOMS = "boms"
    PURCHASE_ORDERS = "purchase_orders"
    CUSTOMER_ORDERS = "customer_orders"
    RAW_MATERIAL_ENTRIES = "raw_material_entries"
    PRODUCTION_LOGS = "production_logs"
    SHIPMENT_LOGS = "shipment_logs"


@dataclass
class InventorySnapshot:
    """Every persisted row, grouped by kind."""

    products: list[Product] = field(default_factory=list)
    suppliers: list[Supplier] = field(default_factory=list)
    boms: list[BOM] = field(default_factory=list)
    purchase_orders: list[PurchaseOrder] = field(default_factory=list)
    customer_orders: list[CustomerOrder] = field(default_factory=list)
    raw_material_entries: list[RawMaterialEntry] = field(default_factory=list)
    production_logs: list[ProductionLog] = field(default_factory=list)
    shipment_logs: list[ShipmentLog] = field(default_factory=list)

    def rows(self, kind: EntityKind) -> list[BaseModel]:
        return getattr(self, kind.value)


@dataclass
class ChangeSet:
    """
    Pending writes recorded by the entity store.

    An entity appears at most once: either in ``upserts`` with its latest
    state, or in ``deletions``.
    """

    upserts: dict[EntityKind, dict[str, BaseModel]] = field(default_factory=dict)
    deletions: dict[EntityKind, set[str]] = field(default_factory=dict)

    def record_upsert(self, kind: EntityKind, entity: BaseModel) -> None:
        entity_id = entity.id
        self.deletions.get(kind, set()).discard(entity_id)
        self.upserts.setdefault(kind, {})[entity_id] = entity

    def record_delete(self, kind: EntityKind, entity_id: str) -> None:
        self.upserts.get(kind, {}).pop(entity_id, None)
        self.deletions.setdefault(kind, set()).add(entity_id)

    def merge(self, later: "ChangeSet") -> None:
        """Fold ``later`` into this set; its writes win."""
        for kind, ids in later.deletions.items():
            for entity_id in ids:
                self.record_delete(kind, entity_id)
        for kind, entities in later.upserts.items():
            for entity in entities.values():
                self.record_upsert(kind, entity)

    def upserted(self, kind: EntityKind) -> list[BaseModel]:
        return list(self.upserts.get(kind, {}).values())

    def deleted(self, kind: EntityKind) -> list[str]:
        return sorted(self.deletions.get(kind, set()))

    @property
    def is_empty(self) -> bool:
        return not any(self.upserts.values()) and not any(self.deletions.values())

    def __len__(self) -> int:
        return sum(len(v) for v in self.upserts.values()) + sum(
            len(v) for v in self.deletions.values()
        )


class IInventoryStore(ABC):
    """Interface for durable inventory persistence."""

    @abstractmethod
    async def load_snapshot(self) -> InventorySnapshot:
        """Load every persisted entity."""
        pass

    @abstractmethod
    async def apply_changes(self, changes: ChangeSet) -> None:
        """
        Write a change set in a single transaction.

        Upserts are applied in dependency order and deletions in reverse
        dependency order, so referencing rows never outlive their targets.

        Raises:
            DatabaseError: If the transaction fails; nothing is written.
        """
        pass
