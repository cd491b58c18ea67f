"""Application middleware."""

from portfolio_cms.middleware.rate_limit import RateLimitMiddleware
from portfolio_cms.middleware.request_logging import RequestLoggingMiddleware
from portfolio_cms.middleware.route_access import RouteAccessMiddleware

__all__ = [
    "RateLimitMiddleware",
    "RequestLoggingMiddleware",
    "RouteAccessMiddleware",
]
