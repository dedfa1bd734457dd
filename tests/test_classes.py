CLASS_PAYLOAD = {
    "name": "Power HIIT",
    "description": "High intensity intervals",
    "type": "HIIT",
    "capacity": 1,
    "schedules": [{"day": "Tuesday", "start_time": "18:00", "end_time": "19:00"}],
}


def test_admin_creates_class_with_slug(client, admin_headers):
    response = client.post("/api/classes", json=CLASS_PAYLOAD, headers=admin_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["slug"] == "power-hiit"
    assert data["available_spots"] == 1

    again = client.post("/api/classes", json=CLASS_PAYLOAD, headers=admin_headers)
    assert again.json()["data"]["slug"] == "power-hiit-1"


def test_member_cannot_create_class(client, member_headers):
    response = client.post("/api/classes", json=CLASS_PAYLOAD, headers=member_headers)
    assert response.status_code == 403


def test_bad_schedule_time_rejected(client, admin_headers):
    payload = {**CLASS_PAYLOAD, "schedules": [{"day": "Tuesday", "start_time": "25:00", "end_time": "19:00"}]}
    response = client.post("/api/classes", json=payload, headers=admin_headers)
    assert response.status_code == 400


def test_list_and_get_class(client, gym_class):
    listed = client.get("/api/classes").json()
    assert listed["count"] == 1
    assert listed["data"][0]["name"] == "Morning Yoga"

    assert client.get(f"/api/classes/{gym_class.id}").status_code == 200
    missing = client.get("/api/classes/999")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Class not found"


def test_enroll_and_unenroll(client, gym_class, member_headers):
    url = f"/api/classes/{gym_class.id}"
    first = client.post(f"{url}/enroll", headers=member_headers)
    assert first.status_code == 200
    assert first.json()["data"]["available_spots"] == 1

    twice = client.post(f"{url}/enroll", headers=member_headers)
    assert twice.status_code == 400
    assert twice.json()["message"] == "Already enrolled in this class"

    left = client.post(f"{url}/unenroll", headers=member_headers)
    assert left.json()["data"]["available_spots"] == 2


def test_enroll_full_class(client, gym_class, member_headers, make_member, auth_headers):
    for email in ("a@fitzone.in", "b@fitzone.in"):
        client.post(f"/api/classes/{gym_class.id}/enroll", headers=auth_headers(make_member(email)))

    response = client.post(f"/api/classes/{gym_class.id}/enroll", headers=member_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Class is full"


def test_member_cannot_enroll_someone_else(client, gym_class, member_headers, make_member):
    other = make_member("other@fitzone.in")
    response = client.post(
        f"/api/classes/{gym_class.id}/enroll", json={"user_id": other.id}, headers=member_headers
    )
    assert response.status_code == 403
