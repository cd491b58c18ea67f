"""Login rate limiting middleware using Redis."""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from portfolio_cms.config import settings
from portfolio_cms.core.exceptions import RateLimitExceededError
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.redis import RateLimiter, get_redis_client
from portfolio_cms.middleware.request_logging import get_client_ip

logger = get_logger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Brute force protection for the login endpoint.

    Only ``POST {api_prefix}/auth/login`` is limited, per client IP.
    Without Redis the limit is skipped.

    Rate limit headers are added to limited responses:
    - X-RateLimit-Limit: Maximum requests allowed
    - X-RateLimit-Remaining: Requests remaining in window
    - X-RateLimit-Reset: Seconds until limit resets
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        if not self._is_limited(request.url.path, request.method):
            return await call_next(request)

        redis_client = get_redis_client()
        if redis_client is None:
            logger.warning("rate_limit_skipped", reason="redis_unavailable")
            return await call_next(request)

        max_requests = settings.rate_limit_login_requests
        window_seconds = settings.rate_limit_login_window_seconds
        client_ip = get_client_ip(request)

        limiter = RateLimiter(redis_client)
        try:
            is_allowed, remaining, reset_seconds = await limiter.is_allowed(
                f"login:{client_ip}", max_requests, window_seconds
            )
        except Exception as e:
            logger.warning("rate_limit_skipped", reason="redis_error", error=str(e))
            return await call_next(request)

        if not is_allowed:
            logger.warning(
                "rate_limit_exceeded",
                client_ip=client_ip,
                limit=max_requests,
                window=window_seconds,
            )
            exc = RateLimitExceededError(reset_seconds)
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.to_body(),
                headers={
                    "X-RateLimit-Limit": str(max_requests),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(reset_seconds),
                    "Retry-After": str(reset_seconds),
                },
            )

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset_seconds)

        return response

    def _is_limited(self, path: str, method: str) -> bool:
        return method == "POST" and path == f"{settings.api_prefix}/auth/login"
