"""Customer order entities. Orders carry no stock effect of their own."""

import datetime as dt

from pydantic import BaseModel, Field

from src.core.entities.product import new_id


class OrderItem(BaseModel):
    """One ordered product line."""

    product_id: str
    quantity: float = Field(..., gt=0)


class CustomerOrder(BaseModel):
    """An order placed by a customer; shipments may link to it."""

    id: str = Field(default_factory=new_id)
    customer_name: str = Field(..., min_length=1)
    order_date: dt.date = Field(default_factory=dt.date.today)
    items: list[OrderItem] = Field(default_factory=list)
    notes: str | None = None
