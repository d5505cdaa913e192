"""
Tests for the student flow over HTTP: catalog, cart and checkout.
"""

import pytest


def _delete(client, url, headers, body):
    return client.request("DELETE", url, headers=headers, json=body)


class TestCatalogEndpoints:
    def test_student_sees_available_menu(self, client, student_headers, kiosk_headers):
        client.post("/api/kiosco/inventory/6/availability", json={"is_available": False}, headers=kiosk_headers)

        response = client.get("/api/catalog/products", headers=student_headers)
        assert response.status_code == 200
        ids = {product["id"] for product in response.json()}
        assert "6" not in ids
        assert len(ids) == 7

    def test_product_detail_has_low_stock_flag(self, client, student_headers):
        data = client.get("/api/catalog/products/1", headers=student_headers).json()
        assert data["name"] == "Ensalada Mixta"
        assert data["is_low_stock"] is False

    def test_unknown_product(self, client, student_headers):
        assert client.get("/api/catalog/products/999", headers=student_headers).status_code == 404

    def test_pickup_times_per_cycle(self, client, student_headers, superior_headers):
        basic = client.get("/api/catalog/pickup-times", headers=student_headers).json()
        superior = client.get("/api/catalog/pickup-times", headers=superior_headers).json()

        assert basic["pickup_times"] == ["9:35", "11:55", "14:55"]
        assert superior["pickup_times"] == ["9:35", "11:55", "14:55", "17:15", "19:35"]

    def test_condiments(self, client, student_headers):
        condiments = client.get("/api/catalog/condiments", headers=student_headers).json()
        assert "sal" in condiments


class TestCartEndpoints:
    def test_empty_cart(self, client, student_headers):
        data = client.get("/api/cart", headers=student_headers).json()
        assert data == {"items": [], "total_amount": 0, "total_items": 0}

    def test_add_and_merge(self, client, student_headers):
        client.post("/api/cart/items", json={"product_id": "6", "quantity": 1}, headers=student_headers)
        response = client.post("/api/cart/items", json={"product_id": "6", "quantity": 2}, headers=student_headers)

        data = response.json()
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 3
        assert data["total_amount"] == 900

    def test_customized_lines(self, client, student_headers):
        custom = {"ingredients": ["lechuga", "tomate"], "condiments": ["sal"]}
        client.post(
            "/api/cart/items",
            json={"product_id": "1", "quantity": 1, "customizations": custom},
            headers=student_headers,
        )
        data = client.post("/api/cart/items", json={"product_id": "1"}, headers=student_headers).json()

        assert len(data["items"]) == 2
        assert data["total_items"] == 2

    def test_invalid_customization(self, client, student_headers):
        response = client.post(
            "/api/cart/items",
            json={"product_id": "6", "customizations": {"condiments": ["sal"]}},
            headers=student_headers,
        )
        assert response.status_code == 400

    def test_update_quantity(self, client, student_headers):
        client.post("/api/cart/items", json={"product_id": "6"}, headers=student_headers)
        data = client.put("/api/cart/items", json={"product_id": "6", "quantity": 4}, headers=student_headers).json()
        assert data["total_amount"] == 1200

    def test_update_to_zero_removes(self, client, student_headers):
        client.post("/api/cart/items", json={"product_id": "6"}, headers=student_headers)
        data = client.put("/api/cart/items", json={"product_id": "6", "quantity": 0}, headers=student_headers).json()
        assert data["items"] == []

    def test_update_missing_line(self, client, student_headers):
        response = client.put("/api/cart/items", json={"product_id": "6", "quantity": 2}, headers=student_headers)
        assert response.status_code == 404

    def test_remove_line(self, client, student_headers):
        client.post("/api/cart/items", json={"product_id": "6"}, headers=student_headers)
        response = _delete(client, "/api/cart/items", student_headers, {"product_id": "6"})
        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_remove_missing_line(self, client, student_headers):
        response = _delete(client, "/api/cart/items", student_headers, {"product_id": "6"})
        assert response.status_code == 404

    def test_remove_product_variants(self, client, student_headers):
        client.post(
            "/api/cart/items",
            json={"product_id": "1", "customizations": {"ingredients": ["lechuga"]}},
            headers=student_headers,
        )
        client.post("/api/cart/items", json={"product_id": "1"}, headers=student_headers)
        client.post("/api/cart/items", json={"product_id": "6"}, headers=student_headers)

        data = client.delete("/api/cart/products/1", headers=student_headers).json()
        assert [item["product"]["id"] for item in data["items"]] == ["6"]

    def test_clear(self, client, student_headers):
        client.post("/api/cart/items", json={"product_id": "6"}, headers=student_headers)
        assert client.delete("/api/cart", headers=student_headers).json()["total_items"] == 0

    def test_carts_are_per_user(self, client, student_headers, superior_headers):
        client.post("/api/cart/items", json={"product_id": "6"}, headers=student_headers)
        assert client.get("/api/cart", headers=superior_headers).json()["items"] == []

    def test_kiosk_has_no_cart(self, client, kiosk_headers):
        assert client.get("/api/cart", headers=kiosk_headers).status_code == 403


class TestCheckout:
    @pytest.fixture
    def filled_cart(self, client, student_headers):
        client.post("/api/cart/items", json={"product_id": "6", "quantity": 2}, headers=student_headers)
        client.post("/api/cart/items", json={"product_id": "3"}, headers=student_headers)

    def test_checkout(self, client, student_headers, filled_cart):
        response = client.post(
            "/api/orders",
            json={"scheduled_time": "11:55", "payment_method": "efectivo", "notes": "sin sal"},
            headers=student_headers,
        )
        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pendiente"
        assert order["total_amount"] == 300 * 2 + 650
        assert order["user_cycle"] == "ciclo_basico"

        assert client.get("/api/cart", headers=student_headers).json()["items"] == []

        stock = client.get("/api/catalog/products/6", headers=student_headers).json()["stock_quantity"]
        assert stock == 48

    def test_checkout_empty_cart(self, client, student_headers):
        response = client.post(
            "/api/orders", json={"scheduled_time": "11:55", "payment_method": "efectivo"}, headers=student_headers
        )
        assert response.status_code == 400

    def test_checkout_slot_not_offered(self, client, student_headers, filled_cart):
        response = client.post(
            "/api/orders", json={"scheduled_time": "19:35", "payment_method": "tarjeta"}, headers=student_headers
        )
        assert response.status_code == 400
        assert len(client.get("/api/cart", headers=student_headers).json()["items"]) == 2

    def test_checkout_unknown_payment_method(self, client, student_headers, filled_cart):
        response = client.post(
            "/api/orders", json={"scheduled_time": "11:55", "payment_method": "bitcoin"}, headers=student_headers
        )
        assert response.status_code == 422

    def test_order_history_and_detail(self, client, student_headers, superior_headers, filled_cart):
        order_id = client.post(
            "/api/orders", json={"scheduled_time": "9:35", "payment_method": "efectivo"}, headers=student_headers
        ).json()["id"]

        history = client.get("/api/orders", headers=student_headers).json()
        assert [order["id"] for order in history] == [order_id]
        assert client.get(f"/api/orders/{order_id}", headers=student_headers).status_code == 200

        assert client.get("/api/orders", headers=superior_headers).json() == []
        assert client.get(f"/api/orders/{order_id}", headers=superior_headers).status_code == 403

    def test_unknown_order(self, client, student_headers):
        assert client.get("/api/orders/ORD-000000", headers=student_headers).status_code == 404
