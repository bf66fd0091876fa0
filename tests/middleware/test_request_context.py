"""Every response carries an X-Request-ID and produces one access log line."""

from __future__ import annotations

import logging
import uuid

import pytest
from fastapi.testclient import TestClient


def test_request_id_generated_when_not_provided(client: TestClient) -> None:
    resp = client.get("/health")
    req_id = resp.headers.get("x-request-id")
    assert req_id is not None
    uuid.UUID(req_id)  # raises ValueError if invalid


def test_request_id_echoed_when_provided(client: TestClient) -> None:
    custom_id = "my-custom-request-id-123"
    resp = client.get("/health", headers={"X-Request-ID": custom_id})
    assert resp.headers.get("x-request-id") == custom_id


def test_request_id_present_on_error_responses(client: TestClient) -> None:
    resp = client.get("/dashboard")  # no token -> 401
    assert resp.status_code == 401
    assert resp.headers.get("x-request-id") is not None


def test_access_log_line_has_request_fields(
    client: TestClient, caplog: pytest.LogCaptureFixture
) -> None:
    logger_name = "learning_api.middleware.request_context"
    with caplog.at_level(logging.INFO, logger=logger_name):
        client.get("/health", headers={"X-Request-ID": "trace-me"})

    records = [r for r in caplog.records if getattr(r, "path", None) == "/health"]
    assert records
    record = records[-1]
    assert record.method == "GET"  # type: ignore[attr-defined]
    assert record.status_code == 200  # type: ignore[attr-defined]
    assert record.duration_ms >= 0  # type: ignore[attr-defined]
    assert "trace-me" not in record.getMessage()
