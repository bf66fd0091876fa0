"""Token-bucket rate limiting for credential endpoints.

A bucket holds up to ``capacity`` tokens and refills at ``refill_rate``
tokens per second; each request spends one.  Bursts up to the capacity
go through, the long-run rate is capped by the refill rate.

Two backends share the RateLimiter protocol:

  InMemoryRateLimiter  per-process buckets; used when REDIS_URL is unset
  RedisRateLimiter     buckets shared by every API process, updated by an
                       atomic Lua script
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    limit: int
    retry_after: float  # seconds until the next token; 0 when allowed


@dataclass(frozen=True, slots=True)
class RateLimitConfig:
    capacity: int = 60
    refill_rate: float = 1.0  # tokens per second


@runtime_checkable
class RateLimiter(Protocol):
    async def check(self, key: str, config: RateLimitConfig) -> RateLimitResult: ...
    async def reset(self, key: str) -> None: ...


def _take_token(
    tokens: float, elapsed: float, config: RateLimitConfig
) -> tuple[float, RateLimitResult]:
    tokens = min(config.capacity, tokens + elapsed * config.refill_rate)
    if tokens >= 1:
        tokens -= 1
        return tokens, RateLimitResult(
            allowed=True, remaining=int(tokens), limit=config.capacity, retry_after=0
        )
    return tokens, RateLimitResult(
        allowed=False,
        remaining=0,
        limit=config.capacity,
        retry_after=(1 - tokens) / config.refill_rate,
    )


class InMemoryRateLimiter:
    """Per-process buckets, at most ``max_keys`` of them.

    A key with no bucket reads as full, so buckets that have refilled are
    dropped first once the map is over its cap; after that the least
    recently used ones go.
    """

    def __init__(self, *, max_keys: int = 10_000) -> None:
        # key -> (tokens, monotonic time of last update, time it is full again)
        # Ordered by last use: check() pops and re-inserts.
        self._buckets: dict[str, tuple[float, float, float]] = {}
        self._max_keys = max_keys

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitResult:
        now = time.monotonic()
        tokens, last, _ = self._buckets.pop(key, (float(config.capacity), now, now))
        tokens, result = _take_token(tokens, now - last, config)
        full_at = now + (config.capacity - tokens) / config.refill_rate
        self._buckets[key] = (tokens, now, full_at)
        if len(self._buckets) > self._max_keys:
            self._evict(now)
        return result

    def _evict(self, now: float) -> None:
        refilled = [k for k, (_, _, full_at) in self._buckets.items() if full_at <= now]
        for key in refilled:
            del self._buckets[key]
        while len(self._buckets) > self._max_keys:
            del self._buckets[next(iter(self._buckets))]

    async def reset(self, key: str) -> None:
        self._buckets.pop(key, None)


class RedisRateLimiter:
    # KEYS[1] bucket key; ARGV: capacity, refill_rate, now (seconds)
    # Returns {allowed, remaining, retry_after_ms}
    _LUA_SCRIPT = """
    local capacity = tonumber(ARGV[1])
    local refill_rate = tonumber(ARGV[2])
    local now = tonumber(ARGV[3])
    local ttl = math.ceil(capacity / refill_rate) + 60

    local bucket = redis.call('HMGET', KEYS[1], 'tokens', 'last_refill')
    local tokens = tonumber(bucket[1]) or capacity
    local last_refill = tonumber(bucket[2]) or now

    tokens = math.min(capacity, tokens + (now - last_refill) * refill_rate)

    local allowed = 0
    local retry_after_ms = 0
    if tokens >= 1 then
        tokens = tokens - 1
        allowed = 1
    else
        retry_after_ms = math.ceil((1 - tokens) / refill_rate * 1000)
    end

    redis.call('HSET', KEYS[1], 'tokens', tokens, 'last_refill', now)
    redis.call('EXPIRE', KEYS[1], ttl)
    return {allowed, math.floor(tokens), retry_after_ms}
    """

    def __init__(self, redis_client, *, prefix: str = "ratelimit") -> None:
        self._redis = redis_client
        self._prefix = prefix
        self._script = redis_client.register_script(self._LUA_SCRIPT)

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    async def check(self, key: str, config: RateLimitConfig) -> RateLimitResult:
        allowed, remaining, retry_after_ms = await self._script(
            keys=[self._key(key)],
            args=[config.capacity, config.refill_rate, time.time()],
        )
        return RateLimitResult(
            allowed=bool(allowed),
            remaining=int(remaining) if allowed else 0,
            limit=config.capacity,
            retry_after=int(retry_after_ms) / 1000,
        )

    async def reset(self, key: str) -> None:
        await self._redis.delete(self._key(key))
