"""API tests for stock ledger and stock endpoints."""

from httpx import AsyncClient


class TestRawMaterialEntriesAPI:
    async def test_create_reports_stock_change(self, api_client: AsyncClient, steel):
        response = await api_client.post(
            "/api/raw-material-entries",
            json={"product_id": steel.id, "quantity": 25, "date": "2024-03-01"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["entry"]["date"] == "2024-03-01"
        assert data["stock_changes"] == [{"product_id": steel.id, "before": 100, "after": 125}]

    async def test_unknown_purchase_order(self, api_client: AsyncClient, steel):
        response = await api_client.post(
            "/api/raw-material-entries",
            json={"product_id": steel.id, "quantity": 1, "purchase_order_id": "ghost"},
        )
        assert response.status_code == 404
        assert response.json()["error_code"] == "PURCHASE_ORDER_NOT_FOUND"

    async def test_non_positive_quantity(self, api_client: AsyncClient, steel):
        response = await api_client.post("/api/raw-material-entries", json={"product_id": steel.id, "quantity": 0})
        assert response.status_code == 422

    async def test_delete_missing(self, api_client: AsyncClient):
        response = await api_client.delete("/api/raw-material-entries/nope")
        assert response.status_code == 404


class TestProductionAPI:
    async def test_produce_then_reverse(self, api_client: AsyncClient, cabinet_bom, cabinet, steel, bolt):
        response = await api_client.post(
            "/api/production-logs",
            json={"product_id": cabinet.id, "bom_id": cabinet_bom.id, "quantity": 5},
        )
        assert response.status_code == 201
        changes = {c["product_id"]: c["after"] for c in response.json()["stock_changes"]}
        assert changes == {steel.id: 90, bolt.id: 30, cabinet.id: 5}

        log_id = response.json()["log"]["id"]
        response = await api_client.delete(f"/api/production-logs/{log_id}")
        assert response.status_code == 200
        changes = {c["product_id"]: c["after"] for c in response.json()["stock_changes"]}
        assert changes == {steel.id: 100, bolt.id: 50, cabinet.id: 0}

    async def test_shortage_is_unprocessable(self, api_client: AsyncClient, cabinet_bom, cabinet):
        response = await api_client.post(
            "/api/production-logs",
            json={"product_id": cabinet.id, "bom_id": cabinet_bom.id, "quantity": 13},
        )
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "INSUFFICIENT_STOCK"
        assert "RAW-002" in body["message"]

        levels = (await api_client.get("/api/stock/levels")).json()
        assert {i["product_code"]: i["stock"] for i in levels["items"]}["RAW-001"] == 100


class TestShipmentsAPI:
    async def test_ship_more_than_stock(self, api_client: AsyncClient, workspace, cabinet):
        workspace.entity_store.commit_stock({cabinet.id: 2})
        response = await api_client.post("/api/shipments", json={"product_id": cabinet.id, "quantity": 3})
        assert response.status_code == 422

        response = await api_client.post("/api/shipments", json={"product_id": cabinet.id, "quantity": 2})
        assert response.status_code == 201
        assert response.json()["stock_changes"][0]["after"] == 0

    async def test_raw_material_cannot_ship(self, api_client: AsyncClient, steel):
        response = await api_client.post("/api/shipments", json={"product_id": steel.id, "quantity": 1})
        assert response.status_code == 400
        assert response.json()["error_code"] == "INVALID_PRODUCT_TYPE"


class TestStockAPI:
    async def test_stock_count(self, api_client: AsyncClient, steel, bolt):
        response = await api_client.post(
            "/api/stock/counts",
            json={"lines": [{"product_id": steel.id, "quantity": 95}, {"product_id": bolt.id, "quantity": 50}]},
        )
        assert response.status_code == 200
        assert response.json()["changed"] == 1

    async def test_stock_count_unknown_product(self, api_client: AsyncClient, steel):
        response = await api_client.post(
            "/api/stock/counts",
            json={"lines": [{"product_id": steel.id, "quantity": 1}, {"product_id": "ghost", "quantity": 1}]},
        )
        assert response.status_code == 404

    async def test_levels_below(self, api_client: AsyncClient):
        response = await api_client.get("/api/stock/levels", params={"type": "raw_material", "below": 75})
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["product_code"] == "RAW-002"

    async def test_ledger_check(self, api_client: AsyncClient):
        response = await api_client.get("/api/stock/ledger-check")
        assert response.status_code == 200
        data = response.json()
        assert len(data["items"]) == 4
        assert data["negative_stock"] == []
