"""SQLite implementation of inventory storage."""

from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import aiosqlite
from pydantic import BaseModel

from src.config import get_logger
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
from src.core.interfaces.inventory_store import (
    ChangeSet,
    EntityKind,
    IInventoryStore,
    InventorySnapshot,
)
from src.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    get_connection,
    get_transaction,
)

logger = get_logger(__name__)

# Scalar columns per table, in insert order. "id" is always first.
_COLUMNS: dict[EntityKind, list[str]] = {
    EntityKind.PRODUCTS: ["id", "product_code", "name", "type", "unit", "stock", "description"],
    EntityKind.SUPPLIERS: ["id", "name", "contact_person", "email", "phone", "address", "notes"],
    EntityKind.BOMS: ["id", "product_id", "name"],
    EntityKind.PURCHASE_ORDERS: [
        "id",
        "order_reference",
        "supplier_id",
        "order_date",
        "expected_delivery_date",
        "status",
        "notes",
    ],
    EntityKind.CUSTOMER_ORDERS: ["id", "customer_name", "order_date", "notes"],
    EntityKind.RAW_MATERIAL_ENTRIES: [
        "id",
        "product_id",
        "quantity",
        "date",
        "supplier_id",
        "purchase_order_id",
        "notes",
    ],
    EntityKind.PRODUCTION_LOGS: ["id", "product_id", "bom_id", "quantity", "date", "notes"],
    EntityKind.SHIPMENT_LOGS: ["id", "product_id", "quantity", "date", "customer_order_id", "notes"],
}

# Line-item tables: kind -> (table, parent column, entity attribute, item columns)
_LINES: dict[EntityKind, tuple[str, str, str, list[str]]] = {
    EntityKind.BOMS: ("bom_components", "bom_id", "components", ["product_id", "quantity"]),
    EntityKind.PURCHASE_ORDERS: (
        "purchase_order_items",
        "purchase_order_id",
        "items",
        ["product_id", "ordered_quantity", "received_quantity"],
    ),
    EntityKind.CUSTOMER_ORDERS: (
        "customer_order_items",
        "customer_order_id",
        "items",
        ["product_id", "quantity"],
    ),
}

_MODELS: dict[EntityKind, type[BaseModel]] = {
    EntityKind.PRODUCTS: Product,
    EntityKind.SUPPLIERS: Supplier,
    EntityKind.BOMS: BOM,
    EntityKind.PURCHASE_ORDERS: PurchaseOrder,
    EntityKind.CUSTOMER_ORDERS: CustomerOrder,
    EntityKind.RAW_MATERIAL_ENTRIES: RawMaterialEntry,
    EntityKind.PRODUCTION_LOGS: ProductionLog,
    EntityKind.SHIPMENT_LOGS: ShipmentLog,
}


def _upsert_sql(table: str, columns: list[str]) -> str:
    placeholders = ", ".join("?" for _ in columns)
    updates = ", ".join(f"{c} = excluded.{c}" for c in columns[1:])
    return (
        f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders}) "
        f"ON CONFLICT(id) DO UPDATE SET {updates}"
    )


def _to_db(value: Any) -> Any:
    if hasattr(value, "isoformat"):
        return value.isoformat()
    if hasattr(value, "value"):
        return value.value
    return value


class SQLiteInventoryStore(IInventoryStore):
    """
    SQLite implementation of snapshot loading and change-set write-through.

    Uses the global connection pool unless one is passed in.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.acquire() as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        if self._pool is not None:
            async with self._pool.transaction() as conn:
                yield conn
        else:
            async with get_transaction() as conn:
                yield conn

    async def load_snapshot(self) -> InventorySnapshot:
        """Read every table in insertion order."""
        snapshot = InventorySnapshot()
        async with self._connection() as conn:
            for kind in EntityKind:
                rows = await self._fetch_rows(conn, kind)
                snapshot.rows(kind).extend(_MODELS[kind].model_validate(row) for row in rows)

        logger.info(
            "inventory_snapshot_loaded",
            products=len(snapshot.products),
            boms=len(snapshot.boms),
            ledger_rows=len(snapshot.raw_material_entries)
            + len(snapshot.production_logs)
            + len(snapshot.shipment_logs),
        )
        return snapshot

    async def _fetch_rows(self, conn: aiosqlite.Connection, kind: EntityKind) -> list[dict]:
        cursor = await conn.execute(
            f"SELECT {', '.join(_COLUMNS[kind])} FROM {kind.value} ORDER BY rowid"
        )
        rows = [dict(row) for row in await cursor.fetchall()]

        if kind in _LINES:
            table, parent_col, attr, item_cols = _LINES[kind]
            cursor = await conn.execute(
                f"SELECT {parent_col}, {', '.join(item_cols)} FROM {table} "
                f"ORDER BY {parent_col}, position"
            )
            lines: dict[str, list[dict]] = defaultdict(list)
            for line in await cursor.fetchall():
                line = dict(line)
                lines[line.pop(parent_col)].append(line)
            for row in rows:
                row[attr] = lines.get(row["id"], [])

        return rows

    async def apply_changes(self, changes: ChangeSet) -> None:
        """
        Persist a change set in one transaction.

        Deletions run first, children before parents; upserts follow,
        parents before children.
        """
        if changes.is_empty:
            return

        async with self._transaction() as conn:
            for kind in reversed(list(EntityKind)):
                for entity_id in changes.deleted(kind):
                    await conn.execute(f"DELETE FROM {kind.value} WHERE id = ?", (entity_id,))
            for kind in EntityKind:
                for entity in changes.upserted(kind):
                    await self._upsert(conn, kind, entity)

        logger.debug(
            "inventory_changes_applied",
            upserts={k.value: len(v) for k, v in changes.upserts.items() if v},
            deletions={k.value: len(v) for k, v in changes.deletions.items() if v},
        )

    async def _upsert(self, conn: aiosqlite.Connection, kind: EntityKind, entity: BaseModel) -> None:
        columns = _COLUMNS[kind]
        await conn.execute(
            _upsert_sql(kind.value, columns),
            tuple(_to_db(getattr(entity, c)) for c in columns),
        )

        if kind in _LINES:
            table, parent_col, attr, item_cols = _LINES[kind]
            await conn.execute(f"DELETE FROM {table} WHERE {parent_col} = ?", (entity.id,))
            await conn.executemany(
                f"INSERT INTO {table} ({parent_col}, position, {', '.join(item_cols)}) "
                f"VALUES (?, ?, {', '.join('?' for _ in item_cols)})",
                [
                    (entity.id, position, *(getattr(item, c) for c in item_cols))
                    for position, item in enumerate(getattr(entity, attr))
                ],
            )
