"""
Import Workbook Use Case.

Applies an uploaded workbook through the normal engine operations.

Flow:
1. Read every sheet (openpyxl)
2. Process known sheets in dependency order: Products, BOMs,
   RawMaterialEntries, ProductionLogs, Shipments, StockCount
3. Each row is resolved and applied on its own; a failing row is reported
   and the rest continue
4. Stock count lines are applied together as one count
"""

from dataclasses import dataclass, field
from pathlib import Path

from src.application.dto.responses import ImportReportResponse, ImportRowErrorResponse
from src.application.use_cases.base import WorkspaceUseCase
from src.config import get_logger, get_settings
from src.core.exceptions import (
    FileTooLargeError,
    StokTakipError,
    StorageError,
    UnsupportedFileTypeError,
    ValidationError,
)
from src.infrastructure.excel import (
    BOMS,
    PRODUCTION_LOGS,
    PRODUCTS,
    RAW_MATERIAL_ENTRIES,
    SHIPMENTS,
    STOCK_COUNT,
    RowResolver,
    SheetRow,
    WorkbookReader,
)

logger = get_logger(__name__)


@dataclass
class ImportRowError:
    sheet: str
    row: int
    message: str


@dataclass
class ImportReport:
    """Outcome of one workbook import."""

    imported: dict[str, int] = field(default_factory=dict)
    errors: list[ImportRowError] = field(default_factory=list)

    @property
    def total_imported(self) -> int:
        return sum(self.imported.values())

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def add_error(self, sheet: str, row: SheetRow | int, error: StokTakipError | str) -> None:
        number = row.number if isinstance(row, SheetRow) else row
        message = error.message if isinstance(error, StokTakipError) else error
        self.errors.append(ImportRowError(sheet=sheet, row=number, message=message))

    def count(self, sheet: str, n: int = 1) -> None:
        self.imported[sheet] = self.imported.get(sheet, 0) + n


class ImportWorkbookUseCase(WorkspaceUseCase):
    """Bulk import from an Excel workbook."""

    def __init__(self, workspace=None, reader: WorkbookReader | None = None):
        super().__init__(workspace)
        self._reader = reader

    def validate_upload(self, filename: str, size: int) -> None:
        """
        Check an upload before reading it.

        Raises:
            UnsupportedFileTypeError: Extension not allowed
            FileTooLargeError: Larger than the configured upload limit
        """
        api = get_settings().api
        extension = Path(filename).suffix.lower()
        if extension not in api.allowed_extensions:
            raise UnsupportedFileTypeError(filename, extension, api.allowed_extensions)
        if size > api.max_upload_size:
            raise FileTooLargeError(filename, size, api.max_upload_size)

    async def execute(self, content: bytes, filename: str = "upload.xlsx") -> ImportReport:
        """
        Import a workbook.

        Raises:
            ValidationError: Unreadable workbook, no importable sheet, or
                more rows than the configured import limit. Nothing is applied.
            DatabaseError: A row was applied in memory but could not be saved.
        """
        self.validate_upload(filename, len(content))
        max_rows = get_settings().inventory.import_max_rows
        reader = self._reader or WorkbookReader(max_rows=max_rows)
        sheets = reader.read(content)

        known = [t.title for t in (PRODUCTS, BOMS, RAW_MATERIAL_ENTRIES, PRODUCTION_LOGS, SHIPMENTS, STOCK_COUNT)]
        present = [title for title in known if title in sheets]
        if not present:
            raise ValidationError("file", f"workbook has none of the sheets {', '.join(known)}", filename)

        total_rows = sum(len(sheets[title]) for title in present)
        if total_rows > max_rows:
            raise ValidationError("file", f"too many rows ({total_rows}, max {max_rows})", filename)

        ignored = [name for name in sheets if name not in known]
        logger.info(
            "workbook_import_started",
            filename=filename,
            sheets=present,
            ignored_sheets=ignored,
            rows=total_rows,
        )

        ws = await self._get_workspace()
        resolver = RowResolver(ws.entity_store)
        report = ImportReport()

        await self._import_rows(
            report, PRODUCTS.title, sheets.get(PRODUCTS.title, []),
            lambda row: ws.master_data.create_product(resolver.product(row)),
        )
        await self._import_boms(report, resolver, sheets.get(BOMS.title, []))
        await self._import_rows(
            report, RAW_MATERIAL_ENTRIES.title, sheets.get(RAW_MATERIAL_ENTRIES.title, []),
            lambda row: ws.ledger.add_raw_material_entry(resolver.raw_material_entry(row)),
        )
        await self._import_rows(
            report, PRODUCTION_LOGS.title, sheets.get(PRODUCTION_LOGS.title, []),
            lambda row: ws.ledger.add_production_log(resolver.production_log(row)),
        )
        await self._import_rows(
            report, SHIPMENTS.title, sheets.get(SHIPMENTS.title, []),
            lambda row: ws.ledger.add_shipment_log(resolver.shipment_log(row)),
        )
        await self._import_stock_count(report, resolver, sheets.get(STOCK_COUNT.title, []))

        logger.info(
            "workbook_import_complete",
            filename=filename,
            imported=report.imported,
            errors=len(report.errors),
        )
        return report

    async def _import_rows(self, report: ImportReport, sheet: str, rows: list[SheetRow], apply) -> None:
        ws = await self._get_workspace()
        for row in rows:
            try:
                await ws.run(f"import_{sheet}", lambda: apply(row), row=row.number)
            except StorageError:
                raise
            except StokTakipError as e:
                report.add_error(sheet, row, e)
                continue
            report.count(sheet)

    async def _import_boms(self, report: ImportReport, resolver: RowResolver, rows: list[SheetRow]) -> None:
        ws = await self._get_workspace()
        sheet = BOMS.title
        drafts, errors = resolver.group_bom_rows(rows)
        for row, error in errors:
            report.add_error(sheet, row, error)

        for draft in drafts:
            row_errors = []

            def create(draft=draft):
                bom, problems = resolver.bom(draft)
                row_errors.extend(problems)
                return ws.master_data.create_bom(bom) if bom is not None else None

            try:
                created = await ws.run(f"import_{sheet}", create, main_product_code=draft.main_code)
            except StorageError:
                raise
            except StokTakipError as e:
                report.add_error(sheet, draft.first_row, e)
                created = None
            for row, error in row_errors:
                report.add_error(sheet, row, error)
            if created is not None:
                report.count(sheet)

    async def _import_stock_count(self, report: ImportReport, resolver: RowResolver, rows: list[SheetRow]) -> None:
        if not rows:
            return
        ws = await self._get_workspace()
        sheet = STOCK_COUNT.title
        counts = []
        for row in rows:
            try:
                counts.append(resolver.stock_count(row))
            except StokTakipError as e:
                report.add_error(sheet, row, e)
        if not counts:
            return

        try:
            await ws.run(f"import_{sheet}", lambda: ws.ledger.apply_stock_count(counts), lines=len(counts))
        except StorageError:
            raise
        except StokTakipError as e:
            report.add_error(sheet, rows[0], e)
            return
        report.count(sheet, len(counts))

    def to_response(self, report: ImportReport) -> ImportReportResponse:
        return ImportReportResponse(
            imported=report.imported,
            errors=[ImportRowErrorResponse(sheet=e.sheet, row=e.row, message=e.message) for e in report.errors],
            total_imported=report.total_imported,
        )
