def member_profile_id(client, member, headers):
    return client.get(f"/api/members/user/{member.id}", headers=headers).json()["data"]["id"]


def test_member_sees_own_profile(client, member, member_headers):
    profile = client.get(f"/api/members/user/{member.id}", headers=member_headers).json()["data"]
    assert profile["user"]["email"] == member.email
    assert profile["membership_status"] == "active"


def test_member_cannot_list_or_view_others(client, member_headers, make_member, auth_headers):
    assert client.get("/api/members", headers=member_headers).status_code == 403

    other = make_member("other@fitzone.in")
    response = client.get(f"/api/members/user/{other.id}", headers=auth_headers(other))
    other_profile = response.json()["data"]["id"]
    blocked = client.get(f"/api/members/{other_profile}", headers=member_headers)
    assert blocked.status_code == 403


def test_member_self_update_ignores_staff_fields(client, member, member_headers):
    profile_id = member_profile_id(client, member, member_headers)
    updated = client.put(
        f"/api/members/{profile_id}",
        json={"gender": "female", "membership_status": "suspended", "notes": "vip"},
        headers=member_headers,
    ).json()["data"]
    assert updated["gender"] == "female"
    assert updated["membership_status"] == "active"
    assert updated["notes"] in (None, "")


def test_admin_assigns_unknown_trainer(client, member, member_headers, admin_headers):
    profile_id = member_profile_id(client, member, member_headers)
    response = client.put(f"/api/members/{profile_id}", json={"assigned_trainer_id": 77}, headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Trainer not found"


def test_trainer_defaults_and_promotion(client, member, member_headers, admin_headers):
    created = client.post(
        "/api/trainers", json={"name": " Vikram ", "user_id": member.id}, headers=admin_headers
    )
    assert created.status_code == 201
    trainer = created.json()["data"]
    assert trainer["name"] == "Vikram"
    assert (trainer["experience"], trainer["hourly_rate"], trainer["rating"]) == (1, 50, 4.5)

    # the linked account now passes staff checks
    assert client.get("/api/members", headers=member_headers).status_code == 200

    client.delete(f"/api/trainers/{trainer['id']}", headers=admin_headers)
    assert client.get("/api/trainers").json()["count"] == 0


def test_trainer_name_required(client, admin_headers):
    response = client.post("/api/trainers", json={"name": "  "}, headers=admin_headers)
    assert response.status_code == 400
    assert response.json()["message"] == "Please provide trainer name"


def test_plans_sorted_by_price(client, admin_headers):
    client.post("/api/subscriptions", json={"name": "Premium", "price": 1999}, headers=admin_headers)
    client.post("/api/subscriptions", json={"name": "Basic", "price": 999}, headers=admin_headers)
    hidden = client.post(
        "/api/subscriptions", json={"name": "Legacy", "price": 499, "is_active": False}, headers=admin_headers
    ).json()["data"]

    plans = client.get("/api/subscriptions").json()["data"]
    assert [p["name"] for p in plans] == ["Basic", "Premium"]

    client.delete(f"/api/subscriptions/{hidden['id']}", headers=admin_headers)
    missing = client.get(f"/api/subscriptions/{hidden['id']}")
    assert missing.status_code == 404
    assert missing.json()["message"] == "Subscription not found"

