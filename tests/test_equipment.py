import pytest


@pytest.fixture
def treadmill(client, admin_headers):
    response = client.post(
        "/api/equipment",
        json={"name": "Treadmill", "category": "cardio", "quantity": 4, "location": "Floor 1"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


def test_list_and_filter(client, admin_headers, treadmill):
    client.post(
        "/api/equipment",
        json={"name": "Squat Rack", "category": "strength", "status": "maintenance"},
        headers=admin_headers,
    )

    everything = client.get("/api/equipment").json()
    assert everything["count"] == 2
    assert [e["name"] for e in everything["data"]] == ["Treadmill", "Squat Rack"]

    in_repair = client.get("/api/equipment", params={"status": "maintenance"}).json()["data"]
    assert [e["name"] for e in in_repair] == ["Squat Rack"]


def test_partial_update(client, admin_headers, treadmill):
    response = client.put(
        f"/api/equipment/{treadmill['id']}", json={"status": "out_of_order"}, headers=admin_headers
    )
    updated = response.json()["data"]
    assert updated["status"] == "out_of_order"
    assert updated["quantity"] == 4


def test_invalid_status(client, admin_headers):
    response = client.post(
        "/api/equipment", json={"name": "Bike", "category": "cardio", "status": "broken"}, headers=admin_headers
    )
    assert response.status_code == 400


def test_members_cannot_manage(client, member_headers, treadmill):
    assert client.delete(f"/api/equipment/{treadmill['id']}", headers=member_headers).status_code == 403


def test_delete(client, admin_headers, treadmill):
    deleted = client.delete(f"/api/equipment/{treadmill['id']}", headers=admin_headers)
    assert deleted.json()["message"] == "Equipment removed"
    missing = client.get(f"/api/equipment/{treadmill['id']}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Equipment not found"
