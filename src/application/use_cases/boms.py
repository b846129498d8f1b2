"""BOM use cases."""

from src.application.dto.requests import BomRequest
from src.application.dto.responses import BomListResponse, BomResponse
from src.application.use_cases.base import WorkspaceUseCase
from src.core.entities import BOM, BomComponent


def _components(request: BomRequest) -> list[BomComponent]:
    return [BomComponent(product_id=c.product_id, quantity=c.quantity) for c in request.components]


class BomsUseCase(WorkspaceUseCase):
    """Create, replace, delete and list bills of materials."""

    async def create(self, request: BomRequest) -> BOM:
        ws = await self._get_workspace()
        bom = BOM(product_id=request.product_id, components=_components(request))
        return await ws.run(
            "create_bom",
            lambda: ws.master_data.create_bom(bom),
            product_id=request.product_id,
        )

    async def update(self, bom_id: str, request: BomRequest) -> BOM:
        ws = await self._get_workspace()
        bom = BOM(id=bom_id, product_id=request.product_id, components=_components(request))
        return await ws.run("update_bom", lambda: ws.master_data.update_bom(bom), bom_id=bom_id)

    async def delete(self, bom_id: str) -> BOM:
        ws = await self._get_workspace()
        return await ws.run("delete_bom", lambda: ws.master_data.delete_bom(bom_id), bom_id=bom_id)

    async def get(self, bom_id: str) -> BOM:
        ws = await self._get_workspace()
        return ws.entity_store.require_bom(bom_id)

    async def list_boms(self, product_id: str | None = None) -> list[BOM]:
        """All BOMs, or only those producing ``product_id``."""
        ws = await self._get_workspace()
        boms = ws.entity_store.boms
        if product_id is not None:
            boms = [b for b in boms if b.product_id == product_id]
        return boms

    def to_response(self, bom: BOM) -> BomResponse:
        return BomResponse.model_validate(bom)

    def to_list_response(self, boms: list[BOM]) -> BomListResponse:
        return BomListResponse(items=[self.to_response(b) for b in boms], total=len(boms))
