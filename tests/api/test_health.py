from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from learning_api.db import engine as db_engine


def test_health_returns_ok(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    # Tests run without a database or Redis.
    assert resp.json() == {
        "status": "ok",
        "checks": {"database": "not_configured", "redis": "not_configured"},
    }


def test_ready_returns_200_without_database(client: TestClient) -> None:
    assert client.get("/ready").status_code == 200


def test_unreachable_database_degrades_health_and_readiness(
    client: TestClient, monkeypatch: pytest.MonkeyPatch
) -> None:
    async def _ping_fails() -> bool:
        return False

    monkeypatch.setattr(db_engine, "engine", object())
    monkeypatch.setattr(db_engine, "ping_database", _ping_fails)

    health = client.get("/health").json()
    assert health["status"] == "degraded"
    assert health["checks"]["database"] == "degraded"
    assert client.get("/ready").status_code == 503
