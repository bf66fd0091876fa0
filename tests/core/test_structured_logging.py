"""With LOG_JSON the API's own log lines come out as one JSON object each."""

from __future__ import annotations

import json
import logging

import pytest
from fastapi.testclient import TestClient

from learning_api.core.logging import setup_logging
from learning_api.db.seed import DEMO_EMAIL, DEMO_PASSWORD
from tests.conftest import auth_headers


@pytest.fixture
def json_logs(capsys: pytest.CaptureFixture[str]):
    setup_logging("info", json_format=True)
    capsys.readouterr()

    def read() -> list[dict]:
        return [json.loads(line) for line in capsys.readouterr().out.splitlines()]

    yield read
    setup_logging("info")


def test_failed_progress_write_record_carries_request_and_ids(
    client: TestClient, json_logs
) -> None:
    headers = {**auth_headers(1), "X-Request-ID": "trace-progress-1"}
    resp = client.post(
        "/videos", json={"video_id": 999, "watched_seconds": 5}, headers=headers
    )
    assert resp.status_code == 500

    records = json_logs()
    failure = next(r for r in records if r["logger"] == "learning_api.api.videos")
    assert failure["level"] == "ERROR"
    assert failure["request_id"] == "trace-progress-1"
    assert failure["user_id"] == 1
    assert failure["video_id"] == 999
    assert "ProgressWriteError" in failure["exception"]


def test_access_line_for_progress_write_is_structured(
    client: TestClient, json_logs
) -> None:
    headers = {**auth_headers(1), "X-Request-ID": "trace-progress-2"}
    client.post(
        "/videos", json={"video_id": 4, "watched_seconds": 30}, headers=headers
    )

    access = [r for r in json_logs() if r.get("path") == "/videos"]
    assert len(access) == 1
    assert access[0]["method"] == "POST"
    assert access[0]["status_code"] == 200
    assert access[0]["request_id"] == "trace-progress-2"
    assert isinstance(access[0]["duration_ms"], float)


def test_successful_login_record_carries_user_id_only(
    client: TestClient, json_logs
) -> None:
    resp = client.post("/auth", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    assert resp.status_code == 200

    records = json_logs()
    login = next(r for r in records if r["logger"] == "learning_api.api.auth")
    assert login["user_id"] == 1
    assert "video_id" not in login
    assert resp.json()["token"] not in json.dumps(records)


def test_lines_outside_a_request_have_no_request_id(json_logs) -> None:
    logging.getLogger("learning_api.main").info("started")

    (record,) = json_logs()
    assert record["message"] == "started"
    assert "request_id" not in record
