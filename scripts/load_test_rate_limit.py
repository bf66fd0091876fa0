#!/usr/bin/env python3
"""Hammer POST /auth with bad passwords and show the login rate limit.

RUN:  python scripts/load_test_rate_limit.py [BASE_URL]

Prerequisite: the API is running, e.g.
    uvicorn learning_api.main:app --port 8000
"""

from __future__ import annotations

import sys
import time

import httpx

from learning_api.db.seed import DEMO_EMAIL

DEFAULT_BASE_URL = "http://localhost:8000"
TOTAL_REQUESTS = 30


def main() -> None:
    base_url = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_BASE_URL
    print(f"Target: {base_url}/auth  ({TOTAL_REQUESTS} requests)")
    print()

    results: dict[int, int] = {}
    retry_after: str | None = None
    start = time.monotonic()

    with httpx.Client(base_url=base_url, timeout=10) as client:
        for _ in range(TOTAL_REQUESTS):
            resp = client.post(
                "/auth", json={"email": DEMO_EMAIL, "password": "not-the-password"}
            )
            results[resp.status_code] = results.get(resp.status_code, 0) + 1
            if resp.status_code == 429:
                retry_after = resp.headers.get("retry-after")

    elapsed = time.monotonic() - start
    print(f"Results ({elapsed:.2f}s):")
    for code in sorted(results):
        print(f"  {code}: {results[code]:>4}")
    print()

    if results.get(429):
        print(f"Login is rate limited (last Retry-After: {retry_after}s).")
    else:
        print("WARNING: no request was throttled.")
        sys.exit(1)


if __name__ == "__main__":
    main()
