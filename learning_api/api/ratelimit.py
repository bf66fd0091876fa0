"""Rate limiting as a route dependency.

Only POST /auth declares it: credential guessing is the abuse worth
throttling, and the read endpoints already require a token.  Buckets are
keyed by client IP since the caller is anonymous at that point.

Every checked response carries X-RateLimit-Limit / X-RateLimit-Remaining;
a rejected one is a 429 with Retry-After.
"""

from __future__ import annotations

import logging

from fastapi import HTTPException, Request, Response, status

from learning_api.core.metrics import RATE_LIMIT_HITS
from learning_api.db.redis import redis_pool
from learning_api.services.rate_limiter import (
    InMemoryRateLimiter,
    RateLimitConfig,
    RateLimiter,
    RedisRateLimiter,
)

logger = logging.getLogger(__name__)

if redis_pool is not None:
    _rate_limiter: RateLimiter = RedisRateLimiter(redis_pool)
else:
    _rate_limiter = InMemoryRateLimiter()

# ~1 token every 6 seconds, bursts of 10
LOGIN_LIMIT = RateLimitConfig(capacity=10, refill_rate=0.17)


def require_rate_limit(config: RateLimitConfig):
    """Dependency factory: ``dependencies=[Depends(require_rate_limit(cfg))]``."""

    async def _check(request: Request, response: Response) -> None:
        key = client_key(request)
        result = await _rate_limiter.check(key, config)
        response.headers["X-RateLimit-Limit"] = str(result.limit)
        response.headers["X-RateLimit-Remaining"] = str(result.remaining)
        if result.allowed:
            return

        RATE_LIMIT_HITS.labels(key_type="ip").inc()
        logger.warning("Rate limit exceeded key=%s path=%s", key, request.url.path)
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Try again later.",
            headers={
                "Retry-After": str(int(result.retry_after) + 1),
                "X-RateLimit-Limit": str(result.limit),
                "X-RateLimit-Remaining": "0",
            },
        )

    return _check


def client_key(request: Request) -> str:
    client_ip = request.client.host if request.client else "unknown"
    return f"ip:{client_ip}"
