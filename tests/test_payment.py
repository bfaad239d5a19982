import hashlib
import hmac
import json

import pytest

from storefront.errors import SignatureMismatch
from storefront.payment_service.gateway import sign_payment, verify_payment_signature
from tests.conftest import KEY_SECRET, signup

ORDER_ID = "order_IluGWxBm9U8zJ8"
PAYMENT_ID = "pay_IluGYnDiALAmGv"


def proof(order_id=ORDER_ID, payment_id=PAYMENT_ID, signature=None):
    return {
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": signature if signature is not None else sign_payment(order_id, payment_id, KEY_SECRET),
    }


CART = [
    {"productId": "P1", "title": "Mug", "price": 10.0, "imageUrl": "/uploads/P1.png", "quantity": 2},
    {"productId": "P2", "title": "Plate", "price": 5.5, "imageUrl": None, "quantity": 1},
]


def test_signature_is_deterministic():
    assert sign_payment(ORDER_ID, PAYMENT_ID, KEY_SECRET) == sign_payment(ORDER_ID, PAYMENT_ID, KEY_SECRET)


def test_signature_is_order_sensitive():
    assert sign_payment(ORDER_ID, PAYMENT_ID, KEY_SECRET) != sign_payment(PAYMENT_ID, ORDER_ID, KEY_SECRET)


def test_signature_is_hmac_sha256_over_order_and_payment_ids():
    expected = hmac.new(b"secret", b"order_1|pay_1", hashlib.sha256).hexdigest()
    assert sign_payment("order_1", "pay_1", "secret") == expected


def test_verify_accepts_correct_signature():
    verify_payment_signature(ORDER_ID, PAYMENT_ID, sign_payment(ORDER_ID, PAYMENT_ID, KEY_SECRET), KEY_SECRET)


def test_verify_rejects_any_single_character_mutation():
    good = sign_payment(ORDER_ID, PAYMENT_ID, KEY_SECRET)
    for i in range(len(good)):
        replacement = "0" if good[i] != "0" else "1"
        bad = good[:i] + replacement + good[i + 1:]
        with pytest.raises(SignatureMismatch):
            verify_payment_signature(ORDER_ID, PAYMENT_ID, bad, KEY_SECRET)


def test_verify_rejects_wrong_secret():
    with pytest.raises(SignatureMismatch):
        verify_payment_signature(ORDER_ID, PAYMENT_ID, sign_payment(ORDER_ID, PAYMENT_ID, "other"), KEY_SECRET)


def test_verify_rejects_non_ascii_signature():
    with pytest.raises(SignatureMismatch):
        verify_payment_signature(ORDER_ID, PAYMENT_ID, "подпись", KEY_SECRET)


def test_create_order(client, auth_headers, gateway):
    response = client.post("/create-order", json={"amount": 499.5}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "order_test_1"
    assert body["amount"] == 49950
    assert body["currency"] == "INR"
    assert gateway.calls[0]["receipt"].startswith("receipt_")


def test_create_order_rejects_non_positive_amount(client, auth_headers, gateway):
    assert client.post("/create-order", json={"amount": 0}, headers=auth_headers).status_code == 400
    assert client.post("/create-order", json={}, headers=auth_headers).status_code == 400
    assert gateway.calls == []


def test_create_order_rejects_non_finite_amount(client, auth_headers, gateway):
    headers = {**auth_headers, "Content-Type": "application/json"}
    for amount in ("Infinity", "NaN"):
        response = client.post("/create-order", content='{"amount": %s}' % amount, headers=headers)
        assert response.status_code == 400
        assert "error_msg" in response.json()
    assert gateway.calls == []


def test_create_order_requires_auth(client):
    assert client.post("/create-order", json={"amount": 10}).status_code == 401


def test_verify_payment(client, auth_headers):
    response = client.post("/verify-payment", json=proof(), headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Payment verified successfully"}


def test_verify_payment_accepts_camel_case_fields(client, auth_headers):
    body = {
        "gatewayOrderId": ORDER_ID,
        "gatewayPaymentId": PAYMENT_ID,
        "signature": sign_payment(ORDER_ID, PAYMENT_ID, KEY_SECRET),
    }
    assert client.post("/verify-payment", json=body, headers=auth_headers).status_code == 200


def test_verify_payment_invalid_signature(client, auth_headers):
    response = client.post("/verify-payment", json=proof(signature="deadbeef"), headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error_msg": "Invalid signature"}


def test_save_order_persists_and_clears_cart(client, auth_headers):
    client.post("/cart", json=CART[0], headers=auth_headers)
    client.post("/cart", json=CART[1], headers=auth_headers)

    response = client.post("/save-order", json={**proof(), "cartList": CART, "totalAmount": 25.5}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"status": "success"}

    assert client.get("/cart", headers=auth_headers).json() == {"items": []}

    orders = client.get("/orders", headers=auth_headers).json()
    assert len(orders) == 1
    order = orders[0]
    assert order["orderId"] == ORDER_ID
    assert order["paymentId"] == PAYMENT_ID
    assert order["status"] == "PAID"
    assert order["totalAmount"] == 25.5
    assert order["items"] == CART
    assert order["createdAt"]


def test_save_order_uses_submitted_snapshot(client, auth_headers):
    client.post("/cart", json=CART[0], headers=auth_headers)
    client.post("/save-order", json={**proof(), "cartList": CART[1:], "totalAmount": 5.5}, headers=auth_headers)
    order = client.get("/orders", headers=auth_headers).json()[0]
    assert [item["productId"] for item in order["items"]] == ["P2"]


def test_save_order_rejects_forged_signature(client, auth_headers):
    client.post("/cart", json=CART[0], headers=auth_headers)
    body = {**proof(signature="0" * 64), "cartList": CART, "totalAmount": 25.5}
    response = client.post("/save-order", json=body, headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"error_msg": "Invalid signature"}

    assert len(client.get("/cart", headers=auth_headers).json()["items"]) == 1
    assert client.get("/orders", headers=auth_headers).json() == []


def test_save_order_validates_body(client, auth_headers):
    response = client.post("/save-order", json={**proof(), "totalAmount": 1}, headers=auth_headers)
    assert response.status_code == 400


def test_orders_are_per_user(client, auth_headers):
    client.post("/save-order", json={**proof(), "cartList": CART, "totalAmount": 25.5}, headers=auth_headers)
    bob = {"Authorization": f"Bearer {signup(client, 'bob')}"}
    assert client.get("/orders", headers=bob).json() == []
    assert len(client.get("/orders", headers=auth_headers).json()) == 1


def test_orders_empty(client, auth_headers):
    assert client.get("/orders", headers=auth_headers).json() == []


def test_save_order_rejects_non_finite_total(client, auth_headers):
    client.post("/cart", json=CART[0], headers=auth_headers)
    body = json.dumps({**proof(), "cartList": CART, "totalAmount": 0}).replace('"totalAmount": 0', '"totalAmount": Infinity')
    response = client.post("/save-order", content=body, headers={**auth_headers, "Content-Type": "application/json"})
    assert response.status_code == 400
    assert client.get("/orders", headers=auth_headers).json() == []
    assert len(client.get("/cart", headers=auth_headers).json()["items"]) == 1
