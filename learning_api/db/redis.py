"""Optional Redis connection.

Only the login rate limiter uses Redis, to share buckets between API
processes.  With REDIS_URL unset ``redis_pool`` is None and the limiter
keeps its buckets in process memory.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import redis.asyncio as aioredis

from learning_api.core.config import SETTINGS

logger = logging.getLogger(__name__)

if SETTINGS.redis_url:
    redis_pool: aioredis.Redis | None = aioredis.from_url(  # type: ignore[type-arg]
        SETTINGS.redis_url,
        decode_responses=True,
        max_connections=20,
    )
else:
    redis_pool = None


async def ping_redis() -> bool:
    if redis_pool is None:
        return False
    try:
        await redis_pool.ping()  # type: ignore[misc]
    except Exception:
        logger.exception("Redis ping failed")
        return False
    return True


@asynccontextmanager
async def lifespan_redis():
    if redis_pool is None:
        logger.info("No REDIS_URL configured; rate limits are per process")
        yield
        return

    if await ping_redis():
        logger.info("Redis connected")
    else:
        # Keep serving: the limiter surfaces Redis errors per request.
        logger.warning("Redis unreachable at startup")

    yield

    await redis_pool.aclose()
    logger.info("Redis connection pool closed")
