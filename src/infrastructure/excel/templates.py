"""
Workbook layouts and writer.

``SHEETS`` defines every importable sheet: its title, column headers and an
example row. Headers ending in ``*`` are required.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from src.core.entities import Product


@dataclass(frozen=True)
class SheetTemplate:
    title: str
    headers: tuple[str, ...]
    example: tuple = ()
    notes: tuple[str, ...] = field(default_factory=tuple)


PRODUCTS = SheetTemplate(
    title="Products",
    headers=("Product Code*", "Name*", "Type*", "Unit", "Initial Stock", "Description"),
    example=("RAW-001", "Steel sheet", "raw_material", "kg", 100, ""),
    notes=(
        "Type is one of raw_material, semi_finished, finished, auxiliary.",
        "Product codes are unique regardless of case.",
    ),
)

BOMS = SheetTemplate(
    title="BOMs",
    headers=("Main Product Code*", "Component Product Code*", "Component Quantity*"),
    example=("FIN-001", "RAW-001", 0.5),
    notes=(
        "One row per component; repeat the main product code for each component.",
        "The main product must be finished or semi-finished and cannot list itself.",
        "Components must be raw materials or semi-finished products.",
        "Products that already have a recipe are skipped.",
    ),
)

RAW_MATERIAL_ENTRIES = SheetTemplate(
    title="RawMaterialEntries",
    headers=("Product Code*", "Quantity*", "Date*", "Supplier", "Purchase Order Reference", "Notes"),
    example=("RAW-001", 150, "01.01.2024", "ABC Supply", "", "First batch"),
    notes=(
        "Only raw material and auxiliary products can be received.",
        "Dates use DD.MM.YYYY or an Excel date cell.",
        "Supplier and purchase order reference must match existing records when given.",
    ),
)

PRODUCTION_LOGS = SheetTemplate(
    title="ProductionLogs",
    headers=("Product Code*", "BOM Product Code*", "Quantity*", "Date*", "Notes"),
    example=("FIN-001", "FIN-001", 50, "02.01.2024", "Daily run"),
    notes=(
        "BOM Product Code is the main product code of a recipe for the produced product.",
        "Components are consumed from stock; the run fails if any is short.",
    ),
)

SHIPMENTS = SheetTemplate(
    title="Shipments",
    headers=("Product Code*", "Quantity*", "Date*", "Customer Order ID", "Notes"),
    example=("FIN-001", 10, "03.01.2024", "", "Truck 1"),
    notes=("Shipments cannot exceed the stock on hand.",),
)

STOCK_COUNT = SheetTemplate(
    title="StockCount",
    headers=("Product Code*", "Counted Quantity*"),
    example=("RAW-001", 140),
    notes=("Counted quantities replace current stock; all lines are applied together.",),
)

# Import order: referenced data first
SHEETS: tuple[SheetTemplate, ...] = (
    PRODUCTS,
    BOMS,
    RAW_MATERIAL_ENTRIES,
    PRODUCTION_LOGS,
    SHIPMENTS,
    STOCK_COUNT,
)

INSTRUCTIONS_TITLE = "Instructions"
STOCK_REPORT_HEADERS = ("Product Code", "Name", "Type", "Unit", "Stock")

_HEADER_FONT = Font(bold=True)
_REQUIRED_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")


class WorkbookTemplateWriter:
    """Build .xlsx files for download."""

    def template(self, sheets: Iterable[SheetTemplate] = SHEETS) -> bytes:
        """Empty import workbook: headers, one example row per sheet and an instructions sheet."""
        sheets = list(sheets)
        wb = Workbook()
        wb.remove(wb.active)

        for sheet in sheets:
            ws = wb.create_sheet(sheet.title)
            self._write_header(ws, sheet.headers)
            if sheet.example:
                ws.append(list(sheet.example))

        notes = wb.create_sheet(INSTRUCTIONS_TITLE)
        notes.append(["Fields marked with * are required. Blank rows are ignored."])
        for sheet in sheets:
            notes.append([])
            notes.append([sheet.title])
            notes["A" + str(notes.max_row)].font = _HEADER_FONT
            for line in sheet.notes:
                notes.append([f"- {line}"])
        notes.column_dimensions["A"].width = 90
        return self._save(wb)

    def stock_report(self, products: Iterable[Product]) -> bytes:
        """Current stock levels, one row per product."""
        wb = Workbook()
        ws = wb.active
        ws.title = "Stock"
        self._write_header(ws, STOCK_REPORT_HEADERS)
        for p in products:
            ws.append([p.product_code, p.name, p.type.value, p.unit, p.stock])
        ws.append([])
        ws.append([f"Generated {datetime.now():%d.%m.%Y %H:%M}"])
        return self._save(wb)

    def _write_header(self, ws, headers: Iterable[str]) -> None:
        headers = list(headers)
        ws.append(headers)
        for index, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=index)
            cell.font = _HEADER_FONT
            if header.endswith("*"):
                cell.fill = _REQUIRED_FILL
            ws.column_dimensions[get_column_letter(index)].width = max(len(header) + 2, 20)
        ws.freeze_panes = "A2"

    @staticmethod
    def _save(wb: Workbook) -> bytes:
        buffer = BytesIO()
        wb.save(buffer)
        return buffer.getvalue()
