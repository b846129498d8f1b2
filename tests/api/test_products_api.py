"""API tests for product, recipe and procurement endpoints."""

from httpx import AsyncClient


class TestProductsAPI:
    async def test_create_product(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/products",
            json={"product_code": "RAW-010", "name": "Aluminium", "type": "raw_material", "initial_stock": 12},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["stock"] == 12
        assert data["unit"] == "pcs"

    async def test_duplicate_code_conflicts(self, api_client: AsyncClient):
        response = await api_client.post(
            "/api/products",
            json={"product_code": "raw-001", "name": "Copy", "type": "raw_material"},
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "DUPLICATE"

    async def test_invalid_body(self, api_client: AsyncClient):
        response = await api_client.post("/api/products", json={"product_code": "X", "type": "gadget"})
        assert response.status_code == 422
        body = response.json()
        assert body["error_code"] == "VALIDATION_ERROR"
        assert "name" in body["detail"]

    async def test_get_missing(self, api_client: AsyncClient):
        response = await api_client.get("/api/products/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "PRODUCT_NOT_FOUND"
        assert response.json()["path"] == "/api/products/nope"

    async def test_list_filtered(self, api_client: AsyncClient):
        response = await api_client.get("/api/products", params={"type": "raw_material"})
        data = response.json()
        assert data["total"] == 2
        assert {p["product_code"] for p in data["items"]} == {"RAW-001", "RAW-002"}

        response = await api_client.get("/api/products", params={"search": "cabin"})
        assert [p["product_code"] for p in response.json()["items"]] == ["FIN-001"]

    async def test_update_keeps_stock(self, api_client: AsyncClient, steel):
        response = await api_client.put(
            f"/api/products/{steel.id}",
            json={"product_code": "RAW-001", "name": "Steel plate", "type": "raw_material", "unit": "kg"},
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Steel plate"
        assert response.json()["stock"] == 100

    async def test_delete_referenced_product(self, api_client: AsyncClient, cabinet_bom, steel):
        response = await api_client.delete(f"/api/products/{steel.id}")
        assert response.status_code == 409
        assert response.json()["error_code"] == "REFERENTIAL_INTEGRITY"

    async def test_delete_unreferenced_product(self, api_client: AsyncClient, frame):
        response = await api_client.delete(f"/api/products/{frame.id}")
        assert response.status_code == 200
        assert (await api_client.get(f"/api/products/{frame.id}")).status_code == 404


class TestBomsAPI:
    async def test_create_and_get(self, api_client: AsyncClient, cabinet, steel):
        response = await api_client.post(
            "/api/boms",
            json={"product_id": cabinet.id, "components": [{"product_id": steel.id, "quantity": 3}]},
        )
        assert response.status_code == 201
        bom = response.json()
        assert bom["name"] == "FIN-001 - Cabinet Recipe"

        response = await api_client.get(f"/api/boms/{bom['id']}")
        assert response.json()["components"] == [{"product_id": steel.id, "quantity": 3}]

    async def test_unknown_component(self, api_client: AsyncClient, cabinet):
        response = await api_client.post(
            "/api/boms",
            json={"product_id": cabinet.id, "components": [{"product_id": "ghost", "quantity": 1}]},
        )
        assert response.status_code == 404


class TestProcurementAPI:
    async def test_supplier_and_purchase_order(self, api_client: AsyncClient, steel):
        supplier = (await api_client.post("/api/suppliers", json={"name": "ABC Supply"})).json()
        assert (await api_client.post("/api/suppliers", json={"name": "abc supply"})).status_code == 409

        response = await api_client.post(
            "/api/purchase-orders",
            json={
                "supplier_id": supplier["id"],
                "order_reference": "PO-1",
                "items": [{"product_id": steel.id, "ordered_quantity": 10}],
            },
        )
        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "open"

        await api_client.post(
            "/api/raw-material-entries",
            json={"product_id": steel.id, "quantity": 4, "purchase_order_id": order["id"]},
        )
        order = (await api_client.get(f"/api/purchase-orders/{order['id']}")).json()
        assert order["status"] == "partially_received"
        assert order["items"][0]["received_quantity"] == 4

    async def test_customer_order(self, api_client: AsyncClient, cabinet):
        response = await api_client.post(
            "/api/customer-orders",
            json={"customer_name": "ACME", "items": [{"product_id": cabinet.id, "quantity": 2}]},
        )
        assert response.status_code == 201
        listed = (await api_client.get("/api/customer-orders")).json()
        assert [o["customer_name"] for o in listed] == ["ACME"]
