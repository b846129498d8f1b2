"""
Procurement use cases: suppliers and purchase orders.

Purchase order status is always derived from the received quantities,
except for cancellation, which is an explicit request flag.
"""

import datetime as dt

from src.application.dto.requests import PurchaseOrderRequest, SupplierRequest
from src.application.dto.responses import PurchaseOrderResponse, SupplierResponse
from src.application.use_cases.base import WorkspaceUseCase
from src.core.entities import (
    PurchaseOrder,
    PurchaseOrderItem,
    PurchaseOrderStatus,
    Supplier,
)


class SuppliersUseCase(WorkspaceUseCase):
    async def create(self, request: SupplierRequest) -> Supplier:
        ws = await self._get_workspace()
        supplier = Supplier(**request.model_dump())
        return await ws.run(
            "create_supplier",
            lambda: ws.master_data.create_supplier(supplier),
            name=supplier.name,
        )

    async def update(self, supplier_id: str, request: SupplierRequest) -> Supplier:
        ws = await self._get_workspace()
        supplier = Supplier(id=supplier_id, **request.model_dump())
        return await ws.run(
            "update_supplier",
            lambda: ws.master_data.update_supplier(supplier),
            supplier_id=supplier_id,
        )

    async def delete(self, supplier_id: str) -> Supplier:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_supplier",
            lambda: ws.master_data.delete_supplier(supplier_id),
            supplier_id=supplier_id,
        )

    async def get(self, supplier_id: str) -> Supplier:
        ws = await self._get_workspace()
        return ws.entity_store.require_supplier(supplier_id)

    async def list_suppliers(self) -> list[Supplier]:
        ws = await self._get_workspace()
        return sorted(ws.entity_store.suppliers, key=lambda s: s.name.casefold())

    def to_response(self, supplier: Supplier) -> SupplierResponse:
        return SupplierResponse.model_validate(supplier)


class PurchaseOrdersUseCase(WorkspaceUseCase):
    def _build(
        self,
        request: PurchaseOrderRequest,
        order_id: str | None = None,
        current: PurchaseOrder | None = None,
    ) -> PurchaseOrder:
        fields = {
            "supplier_id": request.supplier_id,
            "order_reference": request.order_reference,
            "order_date": request.order_date or (current.order_date if current else dt.date.today()),
            "expected_delivery_date": request.expected_delivery_date,
            "items": [
                PurchaseOrderItem(
                    product_id=i.product_id,
                    ordered_quantity=i.ordered_quantity,
                    received_quantity=i.received_quantity,
                )
                for i in request.items
            ],
            "status": PurchaseOrderStatus.CANCELLED if request.cancelled else PurchaseOrderStatus.OPEN,
            "notes": request.notes,
        }
        if order_id is not None:
            fields["id"] = order_id
        return PurchaseOrder(**fields)

    async def create(self, request: PurchaseOrderRequest) -> PurchaseOrder:
        ws = await self._get_workspace()
        order = self._build(request)
        return await ws.run(
            "create_purchase_order",
            lambda: ws.master_data.create_purchase_order(order),
            supplier_id=order.supplier_id,
        )

    async def update(self, order_id: str, request: PurchaseOrderRequest) -> PurchaseOrder:
        ws = await self._get_workspace()
        current = ws.entity_store.require_purchase_order(order_id)
        order = self._build(request, order_id=order_id, current=current)
        return await ws.run(
            "update_purchase_order",
            lambda: ws.master_data.update_purchase_order(order),
            order_id=order_id,
        )

    async def delete(self, order_id: str) -> PurchaseOrder:
        ws = await self._get_workspace()
        return await ws.run(
            "delete_purchase_order",
            lambda: ws.master_data.delete_purchase_order(order_id),
            order_id=order_id,
        )

    async def get(self, order_id: str) -> PurchaseOrder:
        ws = await self._get_workspace()
        return ws.entity_store.require_purchase_order(order_id)

    async def list_orders(
        self,
        supplier_id: str | None = None,
        status: PurchaseOrderStatus | None = None,
    ) -> list[PurchaseOrder]:
        ws = await self._get_workspace()
        orders = [
            o
            for o in ws.entity_store.purchase_orders
            if (supplier_id is None or o.supplier_id == supplier_id)
            and (status is None or o.status == status)
        ]
        return sorted(orders, key=lambda o: o.order_date, reverse=True)

    def to_response(self, order: PurchaseOrder) -> PurchaseOrderResponse:
        return PurchaseOrderResponse.model_validate(order)
