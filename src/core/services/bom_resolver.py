"""
BOM resolution.

Turns a BOM id into its component list and scales per-unit quantities by a
production quantity. Always reads the live BOM; nothing is cached.
"""

from dataclasses import dataclass

from src.core.entities import BomComponent
from src.core.services.entity_store import EntityStore


@dataclass
class ResolvedBom:
    """Output product and ordered component list of one BOM."""

    bom_id: str
    product_id: str
    components: list[BomComponent]


class BomResolver:
    """Read-only view over the BOMs held by the entity store."""

    def __init__(self, entity_store: EntityStore):
        self._store = entity_store

    def resolve(self, bom_id: str) -> ResolvedBom:
        """
        Look up a BOM.

        Raises:
            BomNotFoundError: If the BOM does not exist.
        """
        bom = self._store.require_bom(bom_id)
        return ResolvedBom(
            bom_id=bom.id,
            product_id=bom.product_id,
            components=list(bom.components),
        )

    def consumption(self, bom_id: str, quantity: float) -> list[tuple[str, float]]:
        """Required amount of each component for ``quantity`` output units, in BOM order."""
        resolved = self.resolve(bom_id)
        return [(c.product_id, c.quantity * quantity) for c in resolved.components]
