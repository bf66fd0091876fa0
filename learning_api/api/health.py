"""Liveness and readiness probes.

/health always answers 200 while the process is up; its ``status`` field
turns "degraded" when a configured backing service stops responding.
/ready answers 503 when the database is configured but unreachable, so a
load balancer stops routing here without restarting the process.  Redis
is not checked by /ready: the rate limiter is the only thing using it.
"""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from learning_api.db import engine as db_engine
from learning_api.db import redis as db_redis

router = APIRouter(tags=["health"])


async def _check_database() -> str:
    if db_engine.engine is None:
        return "not_configured"
    return "ok" if await db_engine.ping_database() else "degraded"


async def _check_redis() -> str:
    if db_redis.redis_pool is None:
        return "not_configured"
    return "ok" if await db_redis.ping_redis() else "degraded"


@router.get("/health")
async def health() -> dict:
    checks = {"database": await _check_database(), "redis": await _check_redis()}
    overall = "degraded" if "degraded" in checks.values() else "ok"
    return {"status": overall, "checks": checks}


@router.get("/ready")
async def ready() -> Response:
    if await _check_database() == "degraded":
        return Response(status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
    return Response(status_code=status.HTTP_200_OK)
