"""Route access middleware.

Runs on every request:

1. Resolve the session from cookies, refreshing an expired access token
   when the refresh token is still valid.
2. Classify the path as a public page, the admin login page, or a
   protected admin page. API, health, docs and media paths pass through
   untouched; their handlers enforce auth with dependencies.
3. Gate admin pages: no session redirects to the login page with the
   original path in ``redirect``; a session whose user is not an admin is
   revoked and redirected with ``error=unauthorized``.
4. Handle the locale prefix of page paths: ``/ru/admin`` is rewritten to
   ``/admin`` with ``request.state.locale = "ru"``; a page path without a
   prefix is redirected to the detected locale.

Role lookup failures count as "not admin".
"""

from enum import Enum
from typing import Callable
from urllib.parse import quote

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse
from starlette.types import ASGIApp

from portfolio_cms.config import settings
from portfolio_cms.core.locale import (
    DEFAULT_LOCALE,
    SUPPORTED_LOCALES,
    is_supported_locale,
    negotiate_locale,
)
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.security import clear_session_cookies, set_session_cookies
from portfolio_cms.modules.auth.session import SessionResolver, SessionState

logger = get_logger(__name__)

PASSTHROUGH_PREFIXES = (
    "/api",
    "/health",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/media",
    "/favicon.ico",
)


class RouteKind(str, Enum):
    """Access class of a request path."""

    PUBLIC = "public"
    ADMIN_LOGIN = "admin_login"
    ADMIN_PROTECTED = "admin_protected"


def split_locale(path: str) -> tuple[str | None, str]:
    """Split a leading locale segment off ``path``.

    Example:
        >>> split_locale("/ru/admin/projects")
        ('ru', '/admin/projects')
        >>> split_locale("/admin")
        (None, '/admin')
    """
    segments = path.split("/", 2)
    if len(segments) > 1 and segments[1] in SUPPORTED_LOCALES:
        rest = "/" + segments[2] if len(segments) > 2 else "/"
        return segments[1], rest
    return None, path


def classify(path: str) -> RouteKind:
    """Classify a request path, with or without a locale prefix."""
    _, rest = split_locale(path)
    rest = rest.rstrip("/") or "/"

    if rest == "/admin/login":
        return RouteKind.ADMIN_LOGIN
    if rest == "/admin" or rest.startswith("/admin/"):
        return RouteKind.ADMIN_PROTECTED
    return RouteKind.PUBLIC


def is_passthrough(path: str) -> bool:
    """API, health, docs and media paths skip locale handling."""
    return any(path == prefix or path.startswith(prefix + "/") for prefix in PASSTHROUGH_PREFIXES)


def detect_locale(request: Request) -> str:
    """Locale for an unprefixed page: cookie, then Accept-Language, then default."""
    cookie_locale = request.cookies.get(settings.locale_cookie_name)
    if is_supported_locale(cookie_locale):
        return cookie_locale

    return negotiate_locale(request.headers.get("accept-language")) or DEFAULT_LOCALE


def is_safe_redirect(target: str | None) -> bool:
    """Only same-site relative paths may be redirect targets."""
    if not target or not target.startswith("/"):
        return False
    return not target.startswith("//") and "\\" not in target


class RouteAccessMiddleware(BaseHTTPMiddleware):
    """Session refresh, admin gating and locale routing for page paths."""

    def __init__(self, app: ASGIApp, resolver: SessionResolver | None = None) -> None:
        super().__init__(app)
        self.resolver = resolver or SessionResolver()

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        state = await self.resolver.resolve(request)
        request.state.session_token = state.token

        path = request.url.path
        if is_passthrough(path):
            return self._finish(await call_next(request), state)

        locale, rest = split_locale(path)
        page_locale = locale or detect_locale(request)
        kind = classify(path)

        if kind is RouteKind.ADMIN_PROTECTED:
            if not state.is_authenticated:
                original = path
                if request.url.query:
                    original = f"{path}?{request.url.query}"
                logger.info("admin_redirect_to_login", path=path)
                return self._finish(
                    self._redirect(
                        f"/{page_locale}/admin/login?redirect={quote(original, safe='/')}"
                    ),
                    state,
                )

            if not await self._is_admin(state):
                return await self._sign_out(request, state, page_locale)

        elif kind is RouteKind.ADMIN_LOGIN:
            if state.is_authenticated and await self._is_admin(state):
                target = request.query_params.get("redirect")
                if not is_safe_redirect(target):
                    target = f"/{page_locale}/admin"
                return self._finish(self._redirect(target), state)

        if locale is None:
            target = f"/{page_locale}" if path == "/" else f"/{page_locale}{path}"
            if request.url.query:
                target = f"{target}?{request.url.query}"
            return self._finish(self._redirect(target), state)

        request.scope["path"] = rest
        request.scope["raw_path"] = rest.encode("utf-8")
        request.state.locale = locale

        return self._finish(await call_next(request), state)

    async def _is_admin(self, state: SessionState) -> bool:
        role = await self.resolver.lookup_role(state.token.user_id)
        return role == settings.admin_role

    async def _sign_out(self, request: Request, state: SessionState, locale: str) -> Response:
        """End a non-admin session and send it back to the login page."""
        logger.warning(
            "admin_access_denied",
            user_id=str(state.token.user_id),
            path=request.url.path,
        )
        await self.resolver.revoke(request, state)

        response = self._redirect(f"/{locale}/admin/login?error=unauthorized")
        clear_session_cookies(response)
        return response

    def _redirect(self, url: str) -> Response:
        return RedirectResponse(url, status_code=307)

    def _finish(self, response: Response, state: SessionState) -> Response:
        if state.refreshed is not None:
            set_session_cookies(
                response,
                state.refreshed.access_token,
                state.refreshed.refresh_token,
            )
        return response
