import pytest
from starlette.requests import Request

from fitzone import rate_limiter
from fitzone.security_utils import create_access_token


def make_request(headers=None, client_host="10.0.0.7"):
    raw = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    return Request({"type": "http", "method": "GET", "path": "/", "headers": raw, "client": (client_host, 5000)})


@pytest.fixture
def counting(monkeypatch):
    """Turn limiting on with in-memory counters only"""

    def redis_down():
        raise ConnectionError("redis unavailable")

    monkeypatch.setattr(rate_limiter, "REDIS_ENABLED", True)
    monkeypatch.setattr(rate_limiter, "get_redis_client", redis_down)
    monkeypatch.setattr(rate_limiter, "memory_cache", {})


def test_forwarded_for_ignored_by_default():
    request = make_request({"X-Forwarded-For": "1.2.3.4"})
    assert rate_limiter.rate_limit_subject(request) == "ip:10.0.0.7"


def test_forwarded_for_used_behind_trusted_proxy(monkeypatch):
    monkeypatch.setattr(rate_limiter, "TRUST_PROXY_HEADERS", True)
    request = make_request({"X-Forwarded-For": "1.2.3.4, 172.16.0.1"})
    assert rate_limiter.rate_limit_subject(request) == "ip:1.2.3.4"


def test_signed_in_requests_keyed_by_user():
    token = create_access_token(42, "member")
    request = make_request({"Authorization": f"Bearer {token}", "X-Forwarded-For": "1.2.3.4"})
    assert rate_limiter.rate_limit_subject(request) == "user:42"


def test_bad_token_falls_back_to_address():
    request = make_request({"Authorization": "Bearer not-a-jwt"})
    assert rate_limiter.rate_limit_subject(request) == "ip:10.0.0.7"


def test_window_counter(counting):
    results = [rate_limiter.check_rate_limit("k", limit=2, window_seconds=60)[0] for _ in range(3)]
    assert results == [True, True, False]


def test_chat_limit_not_reset_by_rotating_forwarded_for(client, member_headers, counting):
    for i in range(20):
        headers = {**member_headers, "X-Forwarded-For": f"203.0.113.{i}"}
        assert client.post("/api/ai-chat", json={"message": "hi"}, headers=headers).status_code == 200

    blocked = client.post(
        "/api/ai-chat", json={"message": "hi"}, headers={**member_headers, "X-Forwarded-For": "198.51.100.9"}
    )
    assert blocked.status_code == 429
    assert blocked.json()["success"] is False
    assert "Retry-After" in blocked.headers


def test_limits_are_per_user(client, member_headers, make_member, auth_headers, counting):
    for _ in range(20):
        client.post("/api/ai-chat", json={"message": "hi"}, headers=member_headers)
    assert client.post("/api/ai-chat", json={"message": "hi"}, headers=member_headers).status_code == 429

    other = auth_headers(make_member("second@fitzone.in"))
    assert client.post("/api/ai-chat", json={"message": "hi"}, headers=other).status_code == 200
