"""Fixed-window rate limiting on redis (INCR + EXPIRE)."""
import logging
from dataclasses import dataclass

import redis
from fastapi import Request

from growtools.backend.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    retry_after: int


def get_redis() -> redis.Redis:
    s = get_settings()
    return redis.Redis(
        host=s.redis_host,
        port=s.redis_port,
        socket_connect_timeout=1,
        socket_timeout=1,
    )


def check_rate_limit(identifier: str, action: str, max_attempts: int, window_seconds: int) -> RateLimitResult:
    """Count one attempt. Fails open when redis is unreachable."""
    key = f"growtools:ratelimit:{action}:{identifier}"
    try:
        r = get_redis()
        count = r.incr(key)
        if count == 1:
            r.expire(key, window_seconds)
        ttl = r.ttl(key)
    except redis.RedisError as e:
        logger.warning("rate limit store unavailable, allowing %s: %s", action, e)
        return RateLimitResult(allowed=True, remaining=max_attempts, retry_after=0)
    retry_after = ttl if ttl and ttl > 0 else window_seconds
    if count > max_attempts:
        return RateLimitResult(allowed=False, remaining=0, retry_after=retry_after)
    return RateLimitResult(allowed=True, remaining=max_attempts - count, retry_after=0)


def get_client_ip(request: Request) -> str:
    h = request.headers
    forwarded = h.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    for name in ("x-real-ip", "cf-connecting-ip"):
        if h.get(name):
            return h[name].strip()
    return request.client.host if request.client else "unknown"
