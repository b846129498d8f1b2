"""
Export Inventory Use Case.

Produces the stock report workbook and the blank import template.
"""

from dataclasses import dataclass
from datetime import date

from src.application.use_cases.base import WorkspaceUseCase
from src.config import get_logger
from src.core.entities import ProductType
from src.infrastructure.excel import WorkbookTemplateWriter

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class WorkbookFile:
    """Generated workbook ready for download."""

    content: bytes
    filename: str
    media_type: str = XLSX_MEDIA_TYPE

    @property
    def size(self) -> int:
        return len(self.content)


class ExportInventoryUseCase(WorkspaceUseCase):
    def __init__(self, workspace=None, writer: WorkbookTemplateWriter | None = None):
        super().__init__(workspace)
        self._writer = writer or WorkbookTemplateWriter()

    async def execute(self, product_type: ProductType | None = None) -> WorkbookFile:
        """Current stock of every product (or one type), sorted by product code."""
        ws = await self._get_workspace()
        products = ws.entity_store.products
        if product_type is not None:
            products = [p for p in products if p.type == product_type]
        products = sorted(products, key=lambda p: p.product_code.casefold())

        result = WorkbookFile(
            content=self._writer.stock_report(products),
            filename=f"stock_{date.today():%Y%m%d}.xlsx",
        )
        logger.info("inventory_exported", products=len(products), size=result.size)
        return result

    def template(self) -> WorkbookFile:
        return WorkbookFile(content=self._writer.template(), filename="stoktakip_import_template.xlsx")
