"""
Product domain entity.

A product is anything that carries stock: raw materials, semi-finished
parts, finished goods and auxiliary supplies.
"""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def new_id() -> str:
    """Generate a new entity id."""
    return uuid4().hex


class ProductType(str, Enum):
    """Kinds of stocked products."""

    RAW_MATERIAL = "raw_material"
    SEMI_FINISHED = "semi_finished"
    FINISHED = "finished"
    AUXILIARY = "auxiliary"

    @property
    def purchasable(self) -> bool:
        """Raw materials and auxiliary supplies are bought, not produced."""
        return self in (ProductType.RAW_MATERIAL, ProductType.AUXILIARY)


class Product(BaseModel):
    """
    A stocked product.

    ``stock`` is authoritative and only moves through the stock ledger once
    the product exists; the value given at creation is the initial stock.
    """

    id: str = Field(default_factory=new_id)
    product_code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: ProductType
    unit: str = "pcs"
    stock: float = 0.0
    description: str | None = None

    @property
    def display_name(self) -> str:
        """Code and name, the way errors and reports identify a product."""
        return f"{self.product_code} - {self.name}"
