"""
Rate limit middleware: Redis sliding window per owner (X-User-ID).
Skipped entirely when REDIS_URL is unset; Redis failures let the request through.
"""
import time
import uuid
from typing import Callable, Optional

from fastapi import Request, Response
from redis.asyncio import Redis
from starlette.middleware.base import BaseHTTPMiddleware

from garden_planner.config import get_settings
from garden_planner.deps import HEADER_USER_ID
from garden_planner.logging_config import get_logger

logger = get_logger(__name__)

REDIS_KEY_PREFIX = "gp:rl:"
WINDOW_SECONDS = 60


def _rate_limit_key(request: Request) -> Optional[str]:
    owner = request.headers.get(HEADER_USER_ID, "").strip()
    if owner:
        return f"owner:{owner[:64]}"
    return None


async def _check_sliding_window(redis_url: str, key: str, limit: int) -> bool:
    """
    ZADD now, ZREMRANGEBYSCORE -inf (now-60), ZCARD.
    True when the request is within the limit.
    """
    now = time.time()
    rkey = REDIS_KEY_PREFIX + key
    try:
        client = Redis.from_url(redis_url, decode_responses=True)
        try:
            pipe = client.pipeline()
            pipe.zadd(rkey, {str(uuid.uuid4()): now})
            pipe.zremrangebyscore(rkey, "-inf", now - WINDOW_SECONDS)
            pipe.zcard(rkey)
            pipe.expire(rkey, WINDOW_SECONDS + 10)
            results = await pipe.execute()
            count = results[2] if len(results) > 2 else 0
            return count <= limit
        finally:
            await client.aclose()
    except Exception as e:
        logger.warning("rate_limit.redis_error", key=key, error=str(e))
        return True


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-owner request budget (RATE_LIMIT_PER_MIN)."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.redis_url:
            return await call_next(request)
        key = _rate_limit_key(request)
        if not key:
            return await call_next(request)
        limit = settings.rate_limit_per_min
        if not await _check_sliding_window(settings.redis_url, key, limit):
            logger.info("rate_limit.exceeded", key=key, limit=limit)
            return Response(
                content='{"detail":"Rate limit exceeded.","code":"rate_limited"}',
                status_code=429,
                media_type="application/json",
            )
        return await call_next(request)
