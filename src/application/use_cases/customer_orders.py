"""Customer order use cases."""

import datetime as dt

from src.application.dto.requests import CustomerOrderRequest
from src.application.dto.responses import CustomerOrderResponse
from src.application.use_cases.base import WorkspaceUseCase
from src.core.entities import CustomerOrder, OrderItem


class CustomerOrdersUseCase(WorkspaceUseCase):
    async def create(self, request: CustomerOrderRequest) -> CustomerOrder:
        ws = await self._get_workspace()
        order = CustomerOrder(
            customer_name=request.customer_name,
            order_date=request.order_date or dt.date.today(),
            items=[OrderItem(product_id=i.product_id, quantity=i.quantity) for i in request.items],
            notes=request.notes,
        )
        return await ws.run(
            "create_customer_order",
            lambda: ws.master_data.create_customer_order(order),
            customer_name=order.customer_name,
        )

    async def update(self, order_id: str, request: CustomerOrderRequest) -> CustomerOrder:
        ws = await self._get_workspace()
        current = ws.entity_store.require_customer_order(order_id)
        order = CustomerOrder(
            id=order_id,
            customer_name=request.customer_name,
            order_date=request.order_date or current.order_date,
            items=[OrderItem(product_id=i.product_id, quantity=i.quantity) for i in request.items],
            notes=request.notes,
        )
        return await ws.run(
            "update_customer_order",
            lambda: ws.master_data.update_customer_order(order),
            order_id=order_id,
        )

    async def delete(self, order_id: str) -> CustomerOrder:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_customer_order",
            lambda: ws.master_data.delete_customer_order(order_id),
            order_id=order_id,
        )

    async def get(self, order_id: str) -> CustomerOrder:
        ws = await self._get_workspace()
        return ws.entity_store.require_customer_order(order_id)

    async def list_orders(self) -> list[CustomerOrder]:
        ws = await self._get_workspace()
        return sorted(ws.entity_store.customer_orders, key=lambda o: o.order_date, reverse=True)

    def to_response(self, order: CustomerOrder) -> CustomerOrderResponse:
        return CustomerOrderResponse.model_validate(order)
