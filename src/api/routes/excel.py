"""Excel import/export endpoints."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from src.api.dependencies import get_export_inventory_use_case, get_import_workbook_use_case
from src.application.dto.responses import ErrorResponse, ImportReportResponse
from src.application.use_cases.export_inventory import ExportInventoryUseCase, WorkbookFile
from src.application.use_cases.import_workbook import ImportWorkbookUseCase
from src.core.entities import ProductType

router = APIRouter(prefix="/api/excel", tags=["excel"])


def _download(workbook: WorkbookFile) -> Response:
    return Response(
        content=workbook.content,
        media_type=workbook.media_type,
        headers={"Content-Disposition": f'attachment; filename="{workbook.filename}"'},
    )


@router.get("/template")
async def download_template(
    use_case: ExportInventoryUseCase = Depends(get_export_inventory_use_case),
) -> Response:
    """Blank import workbook with one sheet per importable record type."""
    return _download(use_case.template())


@router.post(
    "/import",
    response_model=ImportReportResponse,
    responses={
        400: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
    },
)
async def import_workbook(
    file: UploadFile = File(...),
    use_case: ImportWorkbookUseCase = Depends(get_import_workbook_use_case),
) -> ImportReportResponse:
    """
    Import a workbook.

    Rows are applied one by one; rejected rows are listed in the report and
    do not stop the rest.
    """
    filename = file.filename or ""
    content = await file.read()
    if len(content) == 0:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty file")

    report = await use_case.execute(content, filename)
    return use_case.to_response(report)


@router.get("/export")
async def export_stock(
    type: ProductType | None = None,
    use_case: ExportInventoryUseCase = Depends(get_export_inventory_use_case),
) -> Response:
    """Current stock levels as a workbook."""
    return _download(await use_case.execute(product_type=type))
