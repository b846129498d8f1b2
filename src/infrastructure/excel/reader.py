"""
Workbook reader.

Reads every sheet of an .xlsx workbook into header-keyed rows. The first
row of a sheet is its header; rows with no values are skipped. Each row
keeps its 1-based Excel row number so import errors can point at it.
"""

import zipfile
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from src.config import get_logger
from src.core.exceptions import ValidationError

logger = get_logger(__name__)


@dataclass
class SheetRow:
    """One data row of a sheet."""

    number: int
    values: dict[str, Any] = field(default_factory=dict)

    def get(self, header: str) -> Any:
        return self.values.get(header)


def _cell_value(value: Any) -> Any:
    """Normalize a cell value: strip strings, blank -> None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _header(value: Any, index: int) -> str:
    text = str(value).strip() if value is not None else ""
    return text or f"Column_{index + 1}"


class WorkbookReader:
    """Read .xlsx workbooks with openpyxl."""

    def __init__(self, max_rows: int | None = None):
        self.max_rows = max_rows

    def read(self, source: Path | str | bytes) -> dict[str, list[SheetRow]]:
        """
        Read all sheets.

        Args:
            source: File path or raw workbook bytes

        Returns:
            Sheet title -> data rows, in workbook order

        Raises:
            ValidationError: The content is not a readable workbook
        """
        stream = BytesIO(source) if isinstance(source, bytes) else source
        try:
            wb = load_workbook(stream, read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
            raise ValidationError("file", "not a readable Excel workbook", str(e)) from e

        try:
            sheets = {ws.title: self._read_sheet(ws) for ws in wb.worksheets}
        finally:
            wb.close()

        logger.debug(
            "workbook_read",
            sheets={name: len(rows) for name, rows in sheets.items()},
        )
        return sheets

    def _read_sheet(self, ws) -> list[SheetRow]:
        rows_iter = ws.iter_rows(values_only=True)
        header_row = next(rows_iter, None)
        if header_row is None:
            return []

        headers = [_header(v, i) for i, v in enumerate(header_row)]
        rows: list[SheetRow] = []
        for number, raw in enumerate(rows_iter, start=2):
            values = {
                headers[i]: _cell_value(v)
                for i, v in enumerate(raw[: len(headers)])
            }
            if not any(v is not None for v in values.values()):
                continue
            rows.append(SheetRow(number=number, values=values))
            if self.max_rows is not None and len(rows) > self.max_rows:
                # One past the limit is enough for the caller to reject the file
                break
        return rows
