from datetime import datetime, timedelta

import pytest

from fitzone.models import QRToken


@pytest.fixture
def active_member(db, member):
    member.subscription_status = "active"
    member.subscription_plan_name = "Basic"
    member.subscription_due_date = datetime.utcnow() + timedelta(days=20)
    db.commit()
    return member


@pytest.fixture
def qr_token(client, admin_headers):
    response = client.post("/api/attendance/generate-qr", headers=admin_headers)
    assert response.status_code == 201
    return response.json()["data"]


def test_generate_qr(qr_token):
    assert len(qr_token["token"]) == 64
    assert qr_token["qr_code"].startswith("data:image/png;base64,")
    assert 0 < qr_token["expires_in"] <= 15


def test_current_qr_reuses_live_token(client, admin_headers, qr_token):
    current = client.get("/api/attendance/current-qr", headers=admin_headers).json()["data"]
    assert current["token"] == qr_token["token"]


def test_members_cannot_generate_qr(client, member_headers):
    assert client.post("/api/attendance/generate-qr", headers=member_headers).status_code == 403


def test_mark_then_checkout(client, active_member, member_headers, qr_token):
    marked = client.post("/api/attendance/mark", json={"qr_token": qr_token["token"]}, headers=member_headers)
    assert marked.status_code == 201
    assert marked.json()["message"] == "Attendance marked successfully!"

    again = client.post("/api/attendance/mark", json={"qr_token": qr_token["token"]}, headers=member_headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Attendance already marked for today"

    out = client.post("/api/attendance/checkout", headers=member_headers)
    assert out.status_code == 200
    assert out.json()["data"]["duration"] == 0

    twice = client.post("/api/attendance/checkout", headers=member_headers)
    assert twice.json()["message"] == "No check-in found for today or already checked out"

    mine = client.get("/api/attendance/my-attendance", headers=member_headers).json()["data"]
    assert mine["stats"]["total_visits"] == 1
    assert mine["today_status"]["status"] == "checked-out"


def test_mark_requires_token(client, active_member, member_headers):
    response = client.post("/api/attendance/mark", json={}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "QR token is required"

    unknown = client.post("/api/attendance/mark", json={"qr_token": "nope"}, headers=member_headers)
    assert unknown.json()["message"] == "Invalid QR code"


def test_expired_token(client, db, active_member, member_headers, qr_token):
    row = db.query(QRToken).filter(QRToken.token == qr_token["token"]).one()
    row.expires_at = datetime.utcnow() - timedelta(seconds=1)
    db.commit()

    response = client.post("/api/attendance/mark", json={"qr_token": qr_token["token"]}, headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "QR code has expired. Please scan the new one."


def test_inactive_membership(client, member_headers, qr_token):
    response = client.post("/api/attendance/mark", json={"qr_token": qr_token["token"]}, headers=member_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Your membership is not active. Please renew your subscription."


def test_lapsed_membership(client, db, active_member, member_headers, qr_token):
    active_member.subscription_due_date = datetime.utcnow() - timedelta(days=1)
    db.commit()
    response = client.post("/api/attendance/mark", json={"qr_token": qr_token["token"]}, headers=member_headers)
    assert response.status_code == 403
    assert response.json()["message"] == "Your membership has expired. Please renew your subscription."


def test_admin_views(client, active_member, member_headers, admin_headers, qr_token, make_member, auth_headers):
    client.post("/api/attendance/mark", json={"qr_token": qr_token["token"]}, headers=member_headers)

    today = client.get("/api/attendance/today", headers=admin_headers).json()
    assert today["count"] == 1
    assert today["data"][0]["user"]["email"] == active_member.email

    listed = client.get(
        "/api/attendance", params={"user_id": active_member.id}, headers=admin_headers
    ).json()
    assert listed["pagination"]["total"] == 1

    member_view = client.get(f"/api/attendance/member/{active_member.id}", headers=admin_headers).json()["data"]
    assert member_view["user"]["subscription"]["status"] == "active"
    assert member_view["stats"]["total_visits"] == 1

    stranger = auth_headers(make_member("stranger@fitzone.in"))
    blocked = client.get(f"/api/attendance/member/{active_member.id}", headers=stranger)
    assert blocked.status_code == 403

    assert client.get("/api/attendance/member/9999", headers=admin_headers).status_code == 404
