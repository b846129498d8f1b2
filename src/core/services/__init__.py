"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. All dependencies injected via constructor.
Everything here is synchronous and works on the in-memory entity store.
"""

from src.core.services.bom_resolver import BomResolver, ResolvedBom
from src.core.services.entity_store import EntityStore
from src.core.services.integrity_guards import IntegrityGuard
from src.core.services.master_data import MasterDataService, bom_name_for
from src.core.services.procurement import PurchaseOrderTracker, derive_status
from src.core.services.stock_ledger import (
    LedgerResult,
    StockLedgerService,
    derive_stock_from_ledger,
    ledger_net_movements,
)

__all__ = [
    # Entity Store
    "EntityStore",
    # BOM Resolver
    "BomResolver",
    "ResolvedBom",
    # Integrity Guards
    "IntegrityGuard",
    # Stock Ledger
    "StockLedgerService",
    "LedgerResult",
    "derive_stock_from_ledger",
    "ledger_net_movements",
    # Master data
    "MasterDataService",
    "bom_name_for",
    # Procurement
    "PurchaseOrderTracker",
    "derive_status",
]
