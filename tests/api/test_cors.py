from __future__ import annotations

from fastapi.testclient import TestClient

_ORIGIN = "http://localhost:5173"


def test_preflight_allows_any_origin(client: TestClient) -> None:
    resp = client.options(
        "/videos",
        headers={
            "Origin": _ORIGIN,
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type, Authorization",
        },
    )
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    allowed_methods = resp.headers["access-control-allow-methods"]
    for method in ("GET", "POST", "OPTIONS"):
        assert method in allowed_methods
    allowed_headers = resp.headers["access-control-allow-headers"].lower()
    for header in ("content-type", "authorization", "x-requested-with"):
        assert header in allowed_headers
    assert resp.headers["access-control-max-age"] == "3600"


def test_preflight_rejects_other_methods(client: TestClient) -> None:
    resp = client.options(
        "/videos",
        headers={"Origin": _ORIGIN, "Access-Control-Request-Method": "DELETE"},
    )
    assert resp.status_code == 400


def test_simple_request_carries_cors_header(client: TestClient) -> None:
    resp = client.get("/health", headers={"Origin": _ORIGIN})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_error_responses_carry_cors_header(client: TestClient) -> None:
    resp = client.get("/dashboard", headers={"Origin": _ORIGIN})
    assert resp.status_code == 401
    assert resp.headers["access-control-allow-origin"] == "*"
