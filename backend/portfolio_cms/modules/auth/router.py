"""API routes for authentication."""

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_cms.config import settings
from portfolio_cms.core.database import get_db
from portfolio_cms.core.exceptions import AppException, AuthenticationError
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.security import (
    TokenPayload,
    clear_session_cookies,
    decode_session_token,
    get_current_token,
    get_current_user,
    revoke_token,
    set_session_cookies,
)
from portfolio_cms.modules.auth.models import AdminUser
from portfolio_cms.modules.auth.schemas import (
    AuthUser,
    LoginRequest,
    LoginResponse,
    SessionResponse,
    TokenPair,
    TokenRefresh,
)
from portfolio_cms.modules.auth.service import AuthService

logger = get_logger(__name__)

router = APIRouter()

# Mounted under /api for the session probe used by the admin UI
session_router = APIRouter()


# ============================================================================
# Authentication Routes
# ============================================================================


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Login",
    description="Authenticate with email and password. Sets the session cookies.",
)
async def login(
    data: LoginRequest,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Authenticate user and start a cookie session."""
    service = AuthService(db)
    user, tokens = await service.authenticate(data)

    set_session_cookies(response, tokens.access_token, tokens.refresh_token)

    return LoginResponse(tokens=tokens, user=AuthUser.model_validate(user))


@router.post(
    "/refresh",
    response_model=TokenPair,
    summary="Refresh tokens",
    description="Get a new token pair using the refresh token (body or cookie).",
)
async def refresh_tokens(
    request: Request,
    response: Response,
    data: TokenRefresh | None = None,
    db: AsyncSession = Depends(get_db),
) -> TokenPair:
    """Refresh the session tokens."""
    refresh_token = (data.refresh_token if data else None) or request.cookies.get(
        settings.refresh_cookie_name
    )
    if not refresh_token:
        raise AuthenticationError()

    service = AuthService(db)
    _, tokens = await service.refresh_tokens(refresh_token)

    set_session_cookies(response, tokens.access_token, tokens.refresh_token)
    return tokens


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout",
    description="Revoke the current tokens and clear the session cookies.",
)
async def logout(
    request: Request,
    response: Response,
    token: TokenPayload = Depends(get_current_token),
) -> None:
    """Logout current user.

    Both tokens are added to the Redis blacklist with a TTL matching
    their expiry, so they are rejected even if a copy survives.
    """
    await revoke_token(token)

    refresh_token = request.cookies.get(settings.refresh_cookie_name)
    if refresh_token:
        try:
            await revoke_token(await decode_session_token(refresh_token, "refresh"))
        except AppException:
            logger.debug("logout_refresh_token_skipped")

    clear_session_cookies(response)
    logger.info("logout", user_id=str(token.user_id))


# ============================================================================
# Current User Routes
# ============================================================================


@router.get(
    "/me",
    response_model=AuthUser,
    summary="Get current user",
)
async def get_me(
    user: AdminUser = Depends(get_current_user),
) -> AuthUser:
    """Get current user information."""
    return AuthUser.model_validate(user)


@router.get(
    "/session",
    response_model=SessionResponse,
    summary="Get session",
    description="Current session user, or null. Never fails.",
)
@session_router.get(
    "/auth/session",
    response_model=SessionResponse,
    summary="Get session",
    description="Current session user, or null. Never fails.",
)
async def get_session(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> SessionResponse:
    """Return the signed-in user or ``{"user": null}``."""
    try:
        token = await get_current_token(request)
        user = await AuthService(db).get_active_user(token.user_id)
    except AppException:
        return SessionResponse(user=None)
    except Exception as e:
        logger.warning("session_lookup_failed", error=str(e))
        return SessionResponse(user=None)

    if user is None:
        return SessionResponse(user=None)

    return SessionResponse(user=AuthUser.model_validate(user))
