def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Welcome to FitZone API"
    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert health["timestamp"]


def test_redis_health_when_disabled(client):
    assert client.get("/api/health/redis").json()["status"] == "disabled"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/api/nowhere")
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_security_headers(client):
    response = client.get("/")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["Cache-Control"] == "no-store"
    assert "X-Frame-Options" not in client.get("/api/health").headers
