import pytest

from fitzone.domain.store import order_service
from fitzone.security_utils import compute_hmac_sha256
from fitzone.services import razorpay_service

SECRET = "rzp_test_secret"
RZP_ORDER_ID = "order_rzp1"

ADDRESS = {
    "full_name": "Test Member",
    "phone": "9876543210",
    "email": "member@fitzone.in",
    "address": "12 MG Road",
    "city": "Bengaluru",
    "state": "Karnataka",
    "pincode": "560001",
}


@pytest.fixture
def product(client, admin_headers):
    response = client.post(
        "/api/products",
        json={
            "name": "Whey Protein 1kg",
            "description": "Chocolate whey isolate",
            "price": 300,
            "category": "supplements",
            "stock": 5,
            "brand": "FitZone",
            "flavors": ["Chocolate"],
        },
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_product_is_listed_and_found_by_slug(client, product):
    listed = client.get("/api/products").json()
    assert listed["pagination"]["total"] == 1
    assert product["slug"].startswith("whey-protein-1kg-")

    detail = client.get(f"/api/products/{product['slug']}")
    assert detail.status_code == 200
    assert detail.json()["data"]["reviews"] == []


def test_cart_stock_limits(client, product, member_headers):
    too_many = client.post(
        "/api/cart/add", json={"product_id": product["id"], "quantity": 6}, headers=member_headers
    )
    assert too_many.status_code == 400
    assert too_many.json()["message"] == "Insufficient stock"

    added = client.post("/api/cart/add", json={"product_id": product["id"], "quantity": 3}, headers=member_headers)
    assert added.json()["data"]["total_amount"] == 900

    over = client.post("/api/cart/add", json={"product_id": product["id"], "quantity": 3}, headers=member_headers)
    assert over.status_code == 400
    assert over.json()["message"] == "Cannot add more than available stock"

    count = client.get("/api/cart/count", headers=member_headers).json()["data"]["count"]
    assert count == 3


def test_cart_update_to_zero_removes_line(client, product, member_headers):
    cart = client.post("/api/cart/add", json={"product_id": product["id"]}, headers=member_headers).json()["data"]
    item_id = cart["items"][0]["id"]
    updated = client.put("/api/cart/update", json={"item_id": item_id, "quantity": 0}, headers=member_headers)
    assert updated.json()["data"]["items"] == []


def test_apply_promo_against_cart(client, product, member_headers):
    client.post("/api/cart/add", json={"product_id": product["id"], "quantity": 2}, headers=member_headers)

    response = client.post("/api/orders/apply-promo", json={"code": "FLAT100"}, headers=member_headers)
    assert response.status_code == 200
    pricing = response.json()["data"]["pricing"]
    # first order ships free
    assert pricing == {
        "subtotal": 600,
        "shipping": 0,
        "discount": 100,
        "total": 500,
        "is_first_order": True,
        "promo_code": "FLAT100",
    }


def test_apply_promo_empty_cart(client, member_headers):
    response = client.post("/api/orders/apply-promo", json={"code": "NEW10"}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Cart is empty"


def test_cod_order_lifecycle(client, product, member_headers, admin_headers):
    client.post("/api/cart/add", json={"product_id": product["id"], "quantity": 2}, headers=member_headers)

    placed = client.post(
        "/api/orders",
        json={"shipping_address": ADDRESS, "payment_method": "cod", "promo_code": "NEW10"},
        headers=member_headers,
    )
    assert placed.status_code == 201
    assert placed.json()["message"] == "Order placed successfully"
    order = placed.json()["data"]["order"]
    assert order["order_status"] == "confirmed"
    assert order["order_number"].startswith("FZ-")
    assert (order["items_total"], order["shipping_cost"], order["discount"], order["total_amount"]) == (
        600, 0, 60, 540,
    )
    assert "[First Order - Free Shipping]" in order["notes"]
    assert [h["status"] for h in order["status_history"]] == ["pending", "confirmed"]

    # stock left the shelf and the cart is empty
    assert client.get(f"/api/products/id/{product['id']}").json()["data"]["stock"] == 3
    assert client.get("/api/cart", headers=member_headers).json()["data"]["items"] == []

    shipped = client.put(
        f"/api/orders/{order['id']}/status",
        json={"status": "shipped", "tracking_number": "TRK123"},
        headers=admin_headers,
    )
    assert shipped.json()["data"]["tracking_number"] == "TRK123"

    cancel = client.put(f"/api/orders/{order['id']}/cancel", headers=member_headers)
    assert cancel.status_code == 400
    assert cancel.json()["message"] == "Order cannot be cancelled"


def test_cancel_cod_order_restores_stock(client, product, member_headers):
    client.post("/api/cart/add", json={"product_id": product["id"], "quantity": 2}, headers=member_headers)
    order = client.post(
        "/api/orders", json={"shipping_address": ADDRESS, "payment_method": "cod"}, headers=member_headers
    ).json()["data"]["order"]

    cancelled = client.put(
        f"/api/orders/{order['id']}/cancel", json={"reason": "Changed my mind"}, headers=member_headers
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["order_status"] == "cancelled"
    assert client.get(f"/api/products/id/{product['id']}").json()["data"]["stock"] == 5


def test_other_user_cannot_view_order(client, product, member_headers, make_member, auth_headers):
    client.post("/api/cart/add", json={"product_id": product["id"]}, headers=member_headers)
    order = client.post(
        "/api/orders", json={"shipping_address": ADDRESS, "payment_method": "cod"}, headers=member_headers
    ).json()["data"]["order"]

    other = auth_headers(make_member("nosy@fitzone.in"))
    response = client.get(f"/api/orders/{order['id']}", headers=other)
    assert response.status_code == 403


def test_review_once_per_user(client, product, member_headers):
    url = f"/api/products/{product['id']}/reviews"
    first = client.post(url, json={"rating": 4, "comment": "<b>Great</b> taste"}, headers=member_headers)
    assert first.status_code == 201
    assert first.json()["data"]["comment"] == "Great taste"

    second = client.post(url, json={"rating": 5, "comment": "Again"}, headers=member_headers)
    assert second.status_code == 400
    assert second.json()["message"] == "You have already reviewed this product"


@pytest.fixture
def gateway(monkeypatch):
    """Razorpay stand-in: online orders get a fixed gateway order id, payments verify with SECRET"""
    created = []

    async def fake_create_order(amount, receipt=None, notes=None):
        created.append({"amount": amount, "receipt": receipt})
        return {"id": RZP_ORDER_ID, "amount": int(amount * 100), "currency": "INR"}

    monkeypatch.setattr(order_service, "create_razorpay_order", fake_create_order)
    monkeypatch.setattr(razorpay_service, "RAZORPAY_KEY_SECRET", SECRET)
    return created


def payment_proof(order_id, payment_id="pay_store1"):
    return {
        "order_id": order_id,
        "razorpay_order_id": RZP_ORDER_ID,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": compute_hmac_sha256(f"{RZP_ORDER_ID}|{payment_id}", SECRET),
    }


def place_online_order(client, product, headers, quantity=2):
    client.post("/api/cart/add", json={"product_id": product["id"], "quantity": quantity}, headers=headers)
    return client.post(
        "/api/orders", json={"shipping_address": ADDRESS, "payment_method": "razorpay"}, headers=headers
    )


def stock_of(client, product):
    return client.get(f"/api/products/id/{product['id']}").json()["data"]["stock"]


def test_online_order_waits_for_payment(client, product, member_headers, gateway):
    placed = place_online_order(client, product, member_headers)
    assert placed.status_code == 201
    data = placed.json()["data"]
    assert data["order"]["order_status"] == "pending"
    assert data["order"]["payment_status"] == "pending"
    assert data["razorpay_order"] == {"id": RZP_ORDER_ID, "amount": 60000, "currency": "INR"}
    assert gateway[0]["receipt"] == f"order_{data['order']['order_number']}"

    # nothing leaves the shelf until the payment is verified
    assert stock_of(client, product) == 5
    assert len(client.get("/api/cart", headers=member_headers).json()["data"]["items"]) == 1


def test_verify_payment_confirms_order_once(client, product, member_headers, gateway):
    order = place_online_order(client, product, member_headers).json()["data"]["order"]

    verified = client.post("/api/orders/verify-payment", json=payment_proof(order["id"]), headers=member_headers)
    assert verified.status_code == 200
    assert verified.json()["message"] == "Payment verified successfully"
    confirmed = verified.json()["data"]["order"]
    assert (confirmed["order_status"], confirmed["payment_status"]) == ("confirmed", "paid")
    assert stock_of(client, product) == 3
    assert client.get("/api/cart", headers=member_headers).json()["data"]["items"] == []

    replay = client.post("/api/orders/verify-payment", json=payment_proof(order["id"]), headers=member_headers)
    assert replay.status_code == 200
    assert replay.json()["data"]["order"]["id"] == order["id"]
    assert len(replay.json()["data"]["order"]["status_history"]) == len(confirmed["status_history"])
    assert stock_of(client, product) == 3


def test_verify_payment_rejects_tampered_signature(client, product, member_headers, gateway):
    order = place_online_order(client, product, member_headers).json()["data"]["order"]
    proof = payment_proof(order["id"])
    proof["razorpay_signature"] = "0" * 64

    response = client.post("/api/orders/verify-payment", json=proof, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Payment verification failed"
    assert stock_of(client, product) == 5


def test_verify_payment_after_cancel_is_rejected(client, product, member_headers, gateway):
    order = place_online_order(client, product, member_headers).json()["data"]["order"]
    client.put(f"/api/orders/{order['id']}/cancel", headers=member_headers)

    response = client.post("/api/orders/verify-payment", json=payment_proof(order["id"]), headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Order has been cancelled"

    stored = client.get(f"/api/orders/{order['id']}", headers=member_headers).json()["data"]
    assert (stored["order_status"], stored["payment_status"]) == ("cancelled", "pending")
    assert stock_of(client, product) == 5


def test_verify_payment_when_stock_sold_out_meanwhile(
    client, product, member_headers, make_member, auth_headers, gateway
):
    order = place_online_order(client, product, member_headers, quantity=5).json()["data"]["order"]

    # someone else buys the whole shelf with cash on delivery before the payment lands
    rival = auth_headers(make_member("rival@fitzone.in"))
    client.post("/api/cart/add", json={"product_id": product["id"], "quantity": 5}, headers=rival)
    cod = client.post("/api/orders", json={"shipping_address": ADDRESS, "payment_method": "cod"}, headers=rival)
    assert cod.status_code == 201
    assert stock_of(client, product) == 0

    response = client.post("/api/orders/verify-payment", json=payment_proof(order["id"]), headers=member_headers)
    assert response.status_code == 409
    assert "contact support for a refund" in response.json()["message"]

    stored = client.get(f"/api/orders/{order['id']}", headers=member_headers).json()["data"]
    assert stored["order_status"] == "cancelled"
    assert stored["payment_status"] == "paid"
    assert stored["cancel_reason"].startswith("Out of stock at payment")
    assert stock_of(client, product) == 0
