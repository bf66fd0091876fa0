from __future__ import annotations

import sys
import time
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import learning_api` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from learning_api.api.dependencies import demo_store  # noqa: E402
from learning_api.api.ratelimit import _rate_limiter  # noqa: E402
from learning_api.db.seed import seed_demo_data  # noqa: E402
from learning_api.main import app  # noqa: E402
from learning_api.services import token_service  # noqa: E402

# Seed clock shared by every test, so relative timestamps are predictable.
SEED_NOW = int(time.time())


def mint_token(user_id: int = 1, *, ttl_minutes: int | None = None) -> str:
    return token_service.create_access_token(sub=str(user_id), ttl_minutes=ttl_minutes)


def auth_headers(user_id: int = 1) -> dict[str, str]:
    return {"Authorization": f"Bearer {mint_token(user_id)}"}


@pytest.fixture(autouse=True)
def reset_demo_store() -> None:
    """Every test starts from the seeded demo catalogue."""
    demo_store.clear()
    seed_demo_data(demo_store, now=SEED_NOW)


@pytest.fixture(autouse=True)
def reset_rate_limiter() -> None:
    """Clear rate limit buckets between tests so limits don't bleed."""
    if hasattr(_rate_limiter, "_buckets"):
        _rate_limiter._buckets.clear()  # type: ignore[union-attr]


@pytest.fixture(autouse=True)
def reset_dependency_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def token() -> str:
    return mint_token(1)
