"""Request logging middleware for tracking all requests."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from portfolio_cms.core.logging import bind_context, clear_context, get_logger

logger = get_logger(__name__)


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        # Take the first IP in the chain
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client:
        return request.client.host

    return "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with timing and a request id.

    The id is taken from an incoming ``X-Request-ID`` header when present,
    bound to the log context for the duration of the request, and echoed
    back on the response.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        bind_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_ip=get_client_ip(request),
        )

        start_time = time.perf_counter()
        logger.info(
            "request_started",
            query_params=str(request.query_params),
            user_agent=request.headers.get("user-agent", ""),
        )

        try:
            response = await call_next(request)

            process_time = time.perf_counter() - start_time
            logger.info(
                "request_completed",
                status_code=response.status_code,
                process_time_ms=round(process_time * 1000, 2),
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"
            return response

        except Exception as exc:
            process_time = time.perf_counter() - start_time
            logger.exception(
                "request_failed",
                error=str(exc),
                process_time_ms=round(process_time * 1000, 2),
            )
            raise

        finally:
            clear_context()
