"""Redis client wrapper for token revocation and rate limiting."""

import redis.asyncio as redis
from redis.asyncio import Redis

from portfolio_cms.config import settings
from portfolio_cms.core.logging import get_logger

logger = get_logger(__name__)

# Global Redis connection pool
_redis_pool: redis.ConnectionPool | None = None
_redis_client: Redis | None = None


async def init_redis() -> Redis:
    """Initialize Redis connection pool.

    Call this during application startup.
    """
    global _redis_pool, _redis_client

    if _redis_client is not None:
        return _redis_client

    _redis_pool = redis.ConnectionPool.from_url(
        str(settings.redis_url),
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    client = Redis(connection_pool=_redis_pool)

    try:
        await client.ping()
        logger.info("redis_connected", url=str(settings.redis_url).split("@")[-1])
    except Exception as e:
        logger.error("redis_connection_failed", error=str(e))
        await _redis_pool.disconnect()
        _redis_pool = None
        raise

    _redis_client = client
    return _redis_client


async def close_redis() -> None:
    """Close Redis connections.

    Call this during application shutdown.
    """
    global _redis_pool, _redis_client

    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None

    if _redis_pool is not None:
        await _redis_pool.disconnect()
        _redis_pool = None

    logger.info("redis_disconnected")


def get_redis_client() -> Redis | None:
    """Get Redis client directly (for middleware use).

    Returns None if Redis is not initialized.
    """
    return _redis_client


async def check_redis_connection() -> bool:
    """Check Redis connectivity for health checks."""
    if _redis_client is None:
        return False

    try:
        await _redis_client.ping()
        return True
    except Exception:
        return False


class RateLimiter:
    """Fixed-window rate limiter backed by Redis counters.

    Usage:
        limiter = RateLimiter(redis_client)
        allowed, remaining, reset = await limiter.is_allowed("login:1.2.3.4", 10, 60)
    """

    def __init__(self, redis_client: Redis):
        self.redis = redis_client

    async def is_allowed(
        self,
        key: str,
        max_requests: int,
        window_seconds: int,
    ) -> tuple[bool, int, int]:
        """Check if request is allowed under rate limit.

        Returns:
            Tuple of (is_allowed, remaining_requests, reset_seconds)
        """
        full_key = f"rl:{key}"

        current = await self.redis.incr(full_key)

        # Set expiry on first request
        if current == 1:
            await self.redis.expire(full_key, window_seconds)

        ttl = await self.redis.ttl(full_key)
        if ttl < 0:
            ttl = window_seconds

        remaining = max(0, max_requests - current)
        return current <= max_requests, remaining, ttl


class TokenBlacklist:
    """Token blacklist for JWT invalidation.

    Stores revoked token IDs (jti) with a TTL matching the token expiry.
    Used on logout and on forced sign-out of non-admin sessions.
    """

    PREFIX = "bl:"

    def __init__(self, redis_client: Redis):
        self.redis = redis_client

    async def add(self, jti: str, expires_in: int) -> None:
        """Add a token to the blacklist."""
        await self.redis.setex(f"{self.PREFIX}{jti}", max(expires_in, 1), "1")

    async def is_blacklisted(self, jti: str) -> bool:
        """Check if a token is blacklisted."""
        return await self.redis.exists(f"{self.PREFIX}{jti}") > 0


async def get_token_blacklist() -> TokenBlacklist | None:
    """Get token blacklist instance.

    Returns None if Redis is not initialized.
    """
    if _redis_client is None:
        return None
    return TokenBlacklist(_redis_client)
