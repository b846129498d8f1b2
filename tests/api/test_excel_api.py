"""API tests for Excel import/export endpoints."""

from io import BytesIO

from httpx import AsyncClient
from openpyxl import load_workbook

from src.application.use_cases import XLSX_MEDIA_TYPE
from src.infrastructure.excel import PRODUCTS, SHEETS, STOCK_COUNT


def _upload(content: bytes, filename: str = "stock.xlsx"):
    return {"file": (filename, content, XLSX_MEDIA_TYPE)}


class TestExcelAPI:
    async def test_template_download(self, api_client: AsyncClient):
        response = await api_client.get("/api/excel/template")
        assert response.status_code == 200
        assert response.headers["content-type"] == XLSX_MEDIA_TYPE
        assert "stoktakip_import_template.xlsx" in response.headers["content-disposition"]
        wb = load_workbook(BytesIO(response.content))
        assert wb.sheetnames[: len(SHEETS)] == [s.title for s in SHEETS]

    async def test_export(self, api_client: AsyncClient):
        response = await api_client.get("/api/excel/export", params={"type": "raw_material"})
        assert response.status_code == 200
        rows = list(load_workbook(BytesIO(response.content))["Stock"].iter_rows(values_only=True))
        assert [r[0] for r in rows[1:3]] == ["RAW-001", "RAW-002"]

    async def test_import_report(self, api_client: AsyncClient, make_workbook):
        content = make_workbook(
            {
                PRODUCTS.title: [
                    list(PRODUCTS.headers),
                    ["AUX-001", "Glue", "auxiliary", "l", 3],
                    ["BAD-001", "Broken", "gadget"],
                ],
                STOCK_COUNT.title: [list(STOCK_COUNT.headers), ["RAW-002", 7]],
            }
        )
        response = await api_client.post("/api/excel/import", files=_upload(content))

        assert response.status_code == 200
        report = response.json()
        assert report["imported"] == {"Products": 1, "StockCount": 1}
        assert report["total_imported"] == 2
        assert report["errors"][0]["sheet"] == "Products"
        assert report["errors"][0]["row"] == 3

        levels = (await api_client.get("/api/stock/levels")).json()["items"]
        assert {i["product_code"]: i["stock"] for i in levels}["RAW-002"] == 7

    async def test_empty_file(self, api_client: AsyncClient):
        response = await api_client.post("/api/excel/import", files=_upload(b""))
        assert response.status_code == 400
        assert response.json()["message"] == "Empty file"

    async def test_wrong_extension(self, api_client: AsyncClient):
        response = await api_client.post("/api/excel/import", files=_upload(b"a,b\n1,2", "stock.csv"))
        assert response.status_code == 415

    async def test_not_a_workbook(self, api_client: AsyncClient):
        response = await api_client.post("/api/excel/import", files=_upload(b"plain text"))
        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_missing_file_field(self, api_client: AsyncClient):
        response = await api_client.post("/api/excel/import")
        assert response.status_code == 422
