"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from portfolio_cms.config import settings
from portfolio_cms.core.database import check_db_connection, close_db
from portfolio_cms.core.exceptions import AppException, ValidationError
from portfolio_cms.core.logging import get_logger, setup_logging
from portfolio_cms.core.redis import close_redis, init_redis
from portfolio_cms.middleware.rate_limit import RateLimitMiddleware
from portfolio_cms.middleware.request_logging import RequestLoggingMiddleware
from portfolio_cms.middleware.route_access import RouteAccessMiddleware
from portfolio_cms.modules.auth.session import SessionResolver

# Setup logging on module load
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Neither the database nor Redis being down stops startup; readiness
    reports them instead.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    if await check_db_connection():
        logger.info("database_connected")
    else:
        logger.error("database_connection_failed")

    try:
        await init_redis()
    except Exception as e:
        logger.warning("redis_init_failed", error=str(e))

    yield

    logger.info("application_shutting_down")
    await close_redis()
    await close_db()
    logger.info("application_stopped")


def create_app(session_resolver: SessionResolver | None = None) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        session_resolver: Replaces the cookie/database backed session
            resolver used by the route access middleware.
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Trilingual portfolio content backend",
        docs_url="/docs" if not settings.is_production else None,
        redoc_url="/redoc" if not settings.is_production else None,
        openapi_url="/openapi.json" if not settings.is_production else None,
        lifespan=lifespan,
    )

    _setup_middleware(app, session_resolver)
    _setup_exception_handlers(app)
    _setup_routers(app)

    return app


def _setup_middleware(app: FastAPI, session_resolver: SessionResolver | None) -> None:
    """Configure application middleware.

    The last middleware added runs first on the request.
    """
    # Session refresh, admin gating and locale routing (closest to the routes)
    app.add_middleware(RouteAccessMiddleware, resolver=session_resolver)

    # Login brute force protection
    app.add_middleware(RateLimitMiddleware)

    # Request logging (runs first, logs all requests)
    app.add_middleware(RequestLoggingMiddleware)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _format_location(loc: tuple) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "form")]
    return ".".join(parts) or "request"


def _setup_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers.

    Every error body has the shape ``{"error": "<message>"}``.
    """

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report schema violations field by field."""
        fields: dict[str, str] = {}
        for error in exc.errors():
            fields.setdefault(_format_location(tuple(error.get("loc", ()))), error.get("msg", ""))

        logger.info("request_validation_failed", fields=list(fields))
        error = ValidationError(fields=fields)
        return JSONResponse(status_code=error.status_code, content=error.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("unhandled_exception", error=str(exc), path=request.url.path)

        message = "Internal server error"
        if not settings.is_production:
            message = f"Internal server error: {exc}"

        return JSONResponse(status_code=500, content={"error": message})


def _setup_routers(app: FastAPI) -> None:
    """Register routers."""
    from portfolio_cms.modules.auth.router import router as auth_router
    from portfolio_cms.modules.auth.router import session_router
    from portfolio_cms.modules.content.router import legacy_projects_router
    from portfolio_cms.modules.content.router import router as content_router
    from portfolio_cms.modules.health.router import router as health_router
    from portfolio_cms.modules.pages.router import router as pages_router

    # Health checks (no prefix)
    app.include_router(health_router, tags=["Health"])

    # API v1 routes
    app.include_router(
        auth_router,
        prefix=f"{settings.api_prefix}/auth",
        tags=["Authentication"],
    )
    app.include_router(
        content_router,
        prefix=settings.api_prefix,
        tags=["Content"],
    )

    # Unversioned endpoints used by the frontend
    app.include_router(session_router, prefix="/api", tags=["Authentication"])
    app.include_router(legacy_projects_router, prefix="/api", tags=["Content"])

    # Page models, reached through the locale rewrite
    app.include_router(pages_router)


# Create app instance
app = create_app()
