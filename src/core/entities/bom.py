"""Bill of materials entities."""

from pydantic import BaseModel, Field

from src.core.entities.product import new_id


class BomComponent(BaseModel):
    """One input line of a recipe: quantity needed per produced unit."""

    product_id: str
    quantity: float = Field(..., gt=0)


class BOM(BaseModel):
    """
    Recipe mapping one output product to its component products.

    Several BOMs may target the same output product; callers always pick
    one explicitly.
    """

    id: str = Field(default_factory=new_id)
    product_id: str  # the product this recipe produces
    name: str = ""
    components: list[BomComponent] = Field(default_factory=list)

    def component_ids(self) -> list[str]:
        return [c.product_id for c in self.components]
