"""HTTP contract of /orders and /users/me/orders."""

import pytest

from conftest import SHIPPING


def _payload(*lines):
    return {
        "items": [{"variantId": v, "quantity": q} for v, q in lines],
        "shipping": dict(SHIPPING),
        "payment": {
            "method": "credit_card",
            "cardNumber": "4111111111111111",
            "expiryDate": "12/30",
            "cvv": "123",
        },
    }


class TestCreateOrder:
    def test_created(self, client, make_variant, user, auth_headers, stock_of):
        make_variant(variant_id=2, price="109.95", stock=20)

        response = client.post("/orders", json=_payload((2, 3)), headers=auth_headers(user))

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["total"] == 329.85
        assert body["paymentMethod"] == "credit_card"
        assert body["trackingNumber"] is None
        assert body["shippingAddress"]["line1"] == SHIPPING["line1"]
        item = body["items"][0]
        assert item["variantId"] == "2"
        assert item["unitPrice"] == 109.95
        assert item["lineTotal"] == 329.85
        assert item["product"]["title"] == "Fjallraven Backpack"
        assert "createdAt" in body and "updatedAt" in body
        assert stock_of(2) == 17

    def test_card_details_are_not_echoed(self, client, make_variant, user, auth_headers):
        variant = make_variant()
        body = client.post("/orders", json=_payload((variant.id, 1)), headers=auth_headers(user)).json()
        assert "4111111111111111" not in str(body)

    def test_empty_items(self, client, user, auth_headers):
        response = client.post("/orders", json=_payload(), headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_ORDER"
        assert response.json()["error"] == "Order must contain at least one item"

    def test_unknown_variant(self, client, user, auth_headers):
        response = client.post("/orders", json=_payload((999, 1)), headers=auth_headers(user))
        assert response.status_code == 404
        assert response.json()["message"] == "Variant 999 not found"

    def test_insufficient_stock(self, client, make_variant, user, auth_headers):
        variant = make_variant(stock=2)
        response = client.post("/orders", json=_payload((variant.id, 3)), headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["code"] == "INSUFFICIENT_STOCK"
        assert response.json()["message"] == f"Insufficient stock for variant {variant.id}"

    def test_missing_shipping_field(self, client, make_variant, user, auth_headers):
        variant = make_variant()
        payload = _payload((variant.id, 1))
        payload["shipping"] = {k: v for k, v in SHIPPING.items() if k != "city"}
        response = client.post("/orders", json=payload, headers=auth_headers(user))
        assert response.status_code == 400
        assert "shipping.city" in response.json()["error"]
        assert SHIPPING["city"] == "Istanbul"

    def test_guest_is_rejected(self, client, make_variant, guest_headers):
        variant = make_variant()
        response = client.post("/orders", json=_payload((variant.id, 1)), headers=guest_headers)
        assert response.status_code == 401

    def test_no_token(self, client, make_variant):
        variant = make_variant()
        assert client.post("/orders", json=_payload((variant.id, 1))).status_code == 401

    def test_notification_is_recorded(self, client, make_variant, user, auth_headers, notifications):
        variant = make_variant()
        order_id = client.post("/orders", json=_payload((variant.id, 1)), headers=auth_headers(user)).json()["id"]
        assert notifications.sent == [(user.id, int(order_id))]


class TestCreateOrderFromCart:
    def test_checkout_cart(self, client, db, make_variant, user, auth_headers):
        from storefront.data.models.address import AddressModel

        address = AddressModel(user_id=user.id, **SHIPPING)
        db.add(address)
        db.commit()

        variant = make_variant(price="20.00", stock=5)
        headers = auth_headers(user)
        client.post("/cart", json={"variantId": variant.id, "quantity": 2}, headers=headers)

        response = client.post(
            "/orders/from-cart",
            json={"addressId": address.id, "paymentMethod": "paypal"},
            headers=headers,
        )
        assert response.status_code == 201
        assert response.json()["total"] == 40.0
        assert client.get("/cart", headers=headers).json() == []

    def test_address_id_out_of_range(self, client, user, auth_headers):
        response = client.post("/orders/from-cart", json={"addressId": 2**64}, headers=auth_headers(user))
        assert response.status_code == 400
        assert "addressId" in response.json()["error"]

    def test_unknown_address(self, client, make_variant, user, auth_headers):
        variant = make_variant()
        headers = auth_headers(user)
        client.post("/cart", json={"variantId": variant.id, "quantity": 1}, headers=headers)

        response = client.post("/orders/from-cart", json={"addressId": 777}, headers=headers)
        assert response.status_code == 404
        assert response.json()["code"] == "ADDRESS_NOT_FOUND"


class TestGetOrder:
    def test_own_order(self, client, make_variant, user, auth_headers):
        variant = make_variant()
        headers = auth_headers(user)
        order_id = client.post("/orders", json=_payload((variant.id, 1)), headers=headers).json()["id"]

        response = client.get(f"/orders/{order_id}", headers=headers)
        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_other_users_order(self, client, make_variant, make_user, auth_headers):
        variant = make_variant()
        owner, other = make_user(), make_user()
        order_id = client.post("/orders", json=_payload((variant.id, 1)), headers=auth_headers(owner)).json()["id"]

        response = client.get(f"/orders/{order_id}", headers=auth_headers(other))
        assert response.status_code == 404
        assert response.json()["message"] == "Order not found"

    def test_invalid_order_id(self, client, user, auth_headers):
        response = client.get("/orders/abc", headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid order ID"

    @pytest.mark.parametrize("raw", ["3000000000", str(2**64), "\u00b2", "0", "-1"])
    def test_out_of_range_order_id(self, client, user, auth_headers, raw):
        response = client.get(f"/orders/{raw}", headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid order ID"


class TestMyOrders:
    def test_newest_first(self, client, make_variant, user, auth_headers):
        variant = make_variant(stock=20)
        headers = auth_headers(user)
        first = client.post("/orders", json=_payload((variant.id, 1)), headers=headers).json()["id"]
        second = client.post("/orders", json=_payload((variant.id, 2)), headers=headers).json()["id"]

        response = client.get("/users/me/orders", headers=headers)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()] == [second, first]

    def test_unauthenticated(self, client):
        assert client.get("/users/me/orders").status_code == 401
