"""Prometheus metrics middleware and application counters.

prometheus-client uses one global registry whose counters cannot be
reset, so every test asserts on the delta around the action.
"""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from learning_api.db.seed import DEMO_EMAIL, DEMO_PASSWORD
from tests.conftest import auth_headers


def _get_sample(name: str, labels: dict | None = None) -> float:
    value = REGISTRY.get_sample_value(name, labels=labels or {})
    return value if value is not None else 0.0


def test_request_counter_increments(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/health")
    assert _get_sample("http_requests_total", labels) - before == 1


def test_request_counter_records_error_status(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/courses", "status_code": "401"}
    before = _get_sample("http_requests_total", labels)
    client.get("/courses")
    assert _get_sample("http_requests_total", labels) - before == 1


def test_request_duration_histogram_observes(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/health"}
    before = _get_sample("http_request_duration_seconds_count", labels)
    client.get("/health")
    assert _get_sample("http_request_duration_seconds_count", labels) - before == 1


def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert "http_requests_total" in resp.text
    assert "login_attempts_total" in resp.text


def test_metrics_endpoint_not_self_instrumented(client: TestClient) -> None:
    labels = {"method": "GET", "endpoint": "/metrics", "status_code": "200"}
    before = _get_sample("http_requests_total", labels)
    client.get("/metrics")
    client.get("/metrics")
    assert _get_sample("http_requests_total", labels) == before


def test_login_attempts_counted_by_result(client: TestClient) -> None:
    results = ("success", "invalid_credentials", "missing_fields")
    before = {r: _get_sample("login_attempts_total", {"result": r}) for r in results}

    client.post("/auth", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    client.post("/auth", json={"email": DEMO_EMAIL, "password": "wrong"})
    client.post("/auth", json={"email": DEMO_EMAIL})

    for r in results:
        assert _get_sample("login_attempts_total", {"result": r}) - before[r] == 1


def test_video_progress_updates_counted(client: TestClient) -> None:
    ok_before = _get_sample("video_progress_updates_total", {"result": "ok"})
    err_before = _get_sample("video_progress_updates_total", {"result": "error"})

    headers = auth_headers(1)
    for video_id in (4, 999):
        body = {"video_id": video_id, "watched_seconds": 5}
        client.post("/videos", json=body, headers=headers)

    ok_after = _get_sample("video_progress_updates_total", {"result": "ok"})
    err_after = _get_sample("video_progress_updates_total", {"result": "error"})
    assert ok_after - ok_before == 1
    assert err_after - err_before == 1
