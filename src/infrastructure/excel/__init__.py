"""Excel workbook infrastructure (openpyxl)."""

from src.infrastructure.excel.reader import SheetRow, WorkbookReader
from src.infrastructure.excel.resolver import (
    BomDraft,
    RowResolver,
    parse_date,
    parse_product_type,
    parse_quantity,
    parse_text,
)
from src.infrastructure.excel.templates import (
    BOMS,
    INSTRUCTIONS_TITLE,
    PRODUCTION_LOGS,
    PRODUCTS,
    RAW_MATERIAL_ENTRIES,
    SHEETS,
    SHIPMENTS,
    STOCK_COUNT,
    STOCK_REPORT_HEADERS,
    SheetTemplate,
    WorkbookTemplateWriter,
)

__all__ = [
    # Reading
    "SheetRow",
    "WorkbookReader",
    # Resolution
    "BomDraft",
    "RowResolver",
    "parse_date",
    "parse_product_type",
    "parse_quantity",
    "parse_text",
    # Layouts
    "SheetTemplate",
    "SHEETS",
    "PRODUCTS",
    "BOMS",
    "RAW_MATERIAL_ENTRIES",
    "PRODUCTION_LOGS",
    "SHIPMENTS",
    "STOCK_COUNT",
    "INSTRUCTIONS_TITLE",
    "STOCK_REPORT_HEADERS",
    "WorkbookTemplateWriter",
]
