import pytest

from fitzone.security_utils import compute_hmac_sha256
from fitzone.services import razorpay_service

SECRET = "rzp_test_secret"


@pytest.fixture
def razorpay_secret(monkeypatch):
    monkeypatch.setattr(razorpay_service, "RAZORPAY_KEY_SECRET", SECRET)


def signed(order_id="order_abc", payment_id="pay_xyz"):
    return {
        "razorpay_order_id": order_id,
        "razorpay_payment_id": payment_id,
        "razorpay_signature": compute_hmac_sha256(f"{order_id}|{payment_id}", SECRET),
        "plan_id": 2,
        "plan_name": "Premium",
        "billing_cycle": "monthly",
        "amount": 1999,
    }


def test_signature_check(razorpay_secret):
    payload = signed()
    assert razorpay_service.verify_razorpay_signature(
        payload["razorpay_order_id"], payload["razorpay_payment_id"], payload["razorpay_signature"]
    )
    assert not razorpay_service.verify_razorpay_signature("order_abc", "pay_other", payload["razorpay_signature"])


def test_signature_check_without_secret():
    assert not razorpay_service.verify_razorpay_signature("order_abc", "pay_xyz", "anything")


def test_key_is_public(client):
    response = client.get("/api/payments/key")
    assert response.status_code == 200
    assert "key" in response.json()


def test_create_order_without_gateway(client, member_headers):
    response = client.post(
        "/api/payments/create-order", json={"amount": 999, "plan_name": "Basic"}, headers=member_headers
    )
    assert response.status_code == 500
    assert response.json()["message"] == "Failed to create payment order"


def test_verify_rejects_bad_signature(client, member_headers, razorpay_secret):
    payload = signed()
    payload["razorpay_signature"] = "0" * 64
    response = client.post("/api/payments/verify", json=payload, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid payment signature"


def test_verify_activates_subscription_once(client, member_headers, razorpay_secret):
    first = client.post("/api/payments/verify", json=signed(), headers=member_headers)
    assert first.status_code == 200
    body = first.json()["data"]
    assert body["payment"]["status"] == "completed"
    assert body["subscription"]["plan_name"] == "Premium"

    again = client.post("/api/payments/verify", json=signed(), headers=member_headers)
    assert again.json()["data"]["payment"]["id"] == body["payment"]["id"]

    check = client.get(
        "/api/payments/check-subscription",
        params={"plan_name": "Premium", "amount": 1999},
        headers=member_headers,
    ).json()["data"]
    assert check["can_purchase"] is False
    assert check["reason"] == "same_plan"

    downgrade = client.get(
        "/api/payments/check-subscription",
        params={"plan_name": "Basic", "amount": 999},
        headers=member_headers,
    ).json()["data"]
    assert downgrade["reason"] == "downgrade"


def test_payments_list_is_admin_only(client, member_headers, admin_headers):
    assert client.get("/api/payments", headers=member_headers).status_code == 403
    assert client.get("/api/payments", headers=admin_headers).json()["count"] == 0


def test_payments_list_shows_payer(client, member_headers, admin_headers, razorpay_secret):
    client.post("/api/payments/verify", json=signed(), headers=member_headers)

    response = client.get("/api/payments", headers=admin_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    payment = body["data"][0]
    assert payment["payment_id"] == "pay_xyz"
    assert payment["user"]["email"] == "member@fitzone.in"
    assert payment["user"]["full_name"] == "Test Member"
