# clinic_booking/middleware/rate_limit.py
"""
Per-IP fixed-window rate limiting for /api/*.

Counter key: rl:ip:{ip}, INCR + TTL in one pipeline, EXPIRE on first hit.
Disabled without Redis or with rate_limit=0. Fails open on Redis errors.
"""

import logging
from typing import Optional

from fastapi import Request
from redis.exceptions import RedisError
from starlette.responses import JSONResponse

from .. import redis_client as redis_module
from ..config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_PREFIX = "rl"
LIMITED_PATH_PREFIX = "/api"


def _check_limit(key: str, limit: int, window: int) -> tuple[bool, Optional[int]]:
    """
    Check the limit. Returns (allowed, retry_after).

    limit=0 means disabled — always allowed.
    """
    redis = redis_module.redis_client
    if limit <= 0 or redis is None:
        return True, None

    try:
        pipe = redis.pipeline()
        pipe.incr(key)
        pipe.ttl(key)
        count, ttl = pipe.execute()

        if ttl == -1:
            redis.expire(key, window)
            ttl = window

        if count > limit:
            return False, ttl

        return True, None

    except RedisError as e:
        logger.error(f"Rate limit check failed: {e}")
        return True, None  # fail open


def check_ip_limit(ip: str) -> tuple[bool, Optional[int]]:
    key = f"{RATE_LIMIT_PREFIX}:ip:{ip}"
    return _check_limit(key, settings.rate_limit, settings.rate_limit_window_seconds)


async def rate_limit_middleware(request: Request, call_next):
    if not request.url.path.startswith(LIMITED_PATH_PREFIX):
        return await call_next(request)

    ip = request.client.host if request.client else "unknown"
    allowed, retry_after = check_ip_limit(ip)
    if not allowed:
        logger.warning(f"Rate limit exceeded: ip={ip} path={request.url.path}")
        return JSONResponse(
            status_code=429,
            content={"error": {"code": "RATE_LIMITED", "message": "Too many requests, please try again later."}},
            headers={"Retry-After": str(retry_after or settings.rate_limit_window_seconds)},
        )

    return await call_next(request)
