def test_register_creates_member_with_token(client):
    response = client.post(
        "/api/auth/register",
        json={"full_name": "Asha Rao", "email": "Asha@FitZone.in", "password": "secret123"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["email"] == "asha@fitzone.in"
    assert body["data"]["role"] == "member"
    assert body["data"]["token"]


def test_register_duplicate_email(client, member):
    response = client.post(
        "/api/auth/register",
        json={"full_name": "Again", "email": member.email, "password": "secret123"},
    )
    assert response.status_code == 400
    assert response.json() == {"success": False, "message": "User already exists with this email"}


def test_register_validation_error_is_400(client):
    response = client.post("/api/auth/register", json={"full_name": "No Password", "email": "x@fitzone.in"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"]


def test_login_and_me(client, member):
    response = client.post("/api/auth/login", json={"email": member.email, "password": "secret123"})
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["data"]["id"] == member.id


def test_login_wrong_password(client, member):
    response = client.post("/api/auth/login", json={"email": member.email, "password": "wrong-pass"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid email or password"


def test_me_requires_token(client):
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert response.json()["success"] is False


def test_member_cannot_reach_admin_routes(client, member_headers):
    response = client.get("/api/orders/admin/all", headers=member_headers)
    assert response.status_code == 403


def test_password_reset_token_is_single_use(client, member):
    from fitzone.security_utils import generate_password_reset_token

    token = generate_password_reset_token(member.id, member.password_hash)
    first = client.post("/api/auth/resetpassword", json={"token": token, "password": "newpass123"})
    assert first.status_code == 200
    assert first.json()["message"] == "Password reset successful"

    # The fingerprint of the old hash no longer matches
    second = client.post("/api/auth/resetpassword", json={"token": token, "password": "another123"})
    assert second.status_code == 400

    login = client.post("/api/auth/login", json={"email": member.email, "password": "newpass123"})
    assert login.status_code == 200


def test_forgot_password_unknown_email(client):
    response = client.post("/api/auth/forgotpassword", json={"email": "nobody@fitzone.in"})
    assert response.status_code == 404
