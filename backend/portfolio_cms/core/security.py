"""Security utilities - JWT, password hashing, session cookies, role checks."""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID, uuid4

import bcrypt
from fastapi import Depends, Request, Response
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_cms.config import settings
from portfolio_cms.core.database import get_db
from portfolio_cms.core.exceptions import (
    AuthenticationError,
    InsufficientRoleError,
    InvalidTokenError,
    TokenExpiredError,
)
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.redis import get_token_blacklist
from portfolio_cms.modules.auth.models import AdminUser

logger = get_logger(__name__)


# ============================================================================
# Password Utilities
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Bcrypt has a 72 byte limit, so we truncate if necessary.
    """
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        password_bytes = plain_password.encode("utf-8")[:72]
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError:
        return False


# ============================================================================
# JWT Utilities
# ============================================================================


def _create_token(data: dict[str, Any], token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    now = datetime.now(UTC)
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now,
        "type": token_type,
        "jti": str(uuid4()),  # Unique token ID for blacklist
    })
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token."""
    return _create_token(
        data,
        "access",
        expires_delta or timedelta(minutes=settings.jwt_access_token_expire_minutes),
    )


def create_refresh_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT refresh token."""
    return _create_token(
        data,
        "refresh",
        expires_delta or timedelta(days=settings.jwt_refresh_token_expire_days),
    )


def decode_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token."""
    try:
        return jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()


class TokenPayload:
    """Parsed JWT token payload."""

    def __init__(self, payload: dict[str, Any]) -> None:
        self.user_id: UUID = UUID(payload["sub"])
        self.email: str = payload["email"]
        self.role: str | None = payload.get("role")
        self.token_type: str = payload.get("type", "access")
        self.exp: datetime = datetime.fromtimestamp(payload["exp"], tz=UTC)
        self.jti: str | None = payload.get("jti")

    @property
    def expires_in_seconds(self) -> int:
        """Get remaining TTL in seconds."""
        remaining = self.exp - datetime.now(UTC)
        return max(0, int(remaining.total_seconds()))


async def decode_session_token(token: str, expected_type: str) -> TokenPayload:
    """Decode a token, check its type and that it was not revoked."""
    payload = decode_token(token)

    if payload.get("type") != expected_type:
        raise InvalidTokenError("Invalid token type")

    jti = payload.get("jti")
    if jti:
        blacklist = await get_token_blacklist()
        if blacklist and await blacklist.is_blacklisted(jti):
            logger.warning("blacklisted_token_used", jti=jti[:8])
            raise InvalidTokenError("Token has been revoked")

    try:
        return TokenPayload(payload)
    except (KeyError, ValueError):
        raise InvalidTokenError()


async def revoke_token(token: TokenPayload) -> None:
    """Blacklist a token until it expires. No-op without Redis."""
    if not token.jti:
        return

    blacklist = await get_token_blacklist()
    if blacklist is None:
        logger.warning("token_revoke_skipped", reason="redis_unavailable")
        return

    await blacklist.add(token.jti, token.expires_in_seconds)
    logger.info("token_revoked", jti=token.jti[:8], user_id=str(token.user_id))


# ============================================================================
# Session Cookies
# ============================================================================


def set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """Store the token pair in httpOnly cookies."""
    response.set_cookie(
        settings.access_cookie_name,
        access_token,
        max_age=settings.jwt_access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )
    response.set_cookie(
        settings.refresh_cookie_name,
        refresh_token,
        max_age=settings.jwt_refresh_token_expire_days * 24 * 3600,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
        path="/",
    )


def clear_session_cookies(response: Response) -> None:
    """Remove the session cookies."""
    response.delete_cookie(settings.access_cookie_name, path="/")
    response.delete_cookie(settings.refresh_cookie_name, path="/")


def extract_access_token(request: Request) -> str | None:
    """Read the access token from the Authorization header or session cookie."""
    authorization = request.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials
    return request.cookies.get(settings.access_cookie_name)


# ============================================================================
# FastAPI Dependencies
# ============================================================================


async def get_current_token(request: Request) -> TokenPayload:
    """Dependency to get current token payload.

    Prefers a token already validated (or refreshed) by the route access
    middleware for this request.
    """
    token = getattr(request.state, "session_token", None)
    if token is not None:
        return token

    raw = extract_access_token(request)
    if not raw:
        raise AuthenticationError()

    return await decode_session_token(raw, "access")


async def get_current_user(
    token: TokenPayload = Depends(get_current_token),
    db: AsyncSession = Depends(get_db),
) -> AdminUser:
    """Dependency to get current authenticated, active user."""
    stmt = (
        select(AdminUser)
        .where(AdminUser.id == token.user_id)
        .where(AdminUser.is_active.is_(True))
    )
    result = await db.execute(stmt)
    user = result.scalar_one_or_none()

    if not user:
        raise AuthenticationError()

    return user


class RoleChecker:
    """Dependency class for checking user role.

    Usage:
        @router.delete("/admin/projects/{id}")
        async def delete_project(
            user: AdminUser = Depends(RoleChecker("admin")),
        ):
            ...
    """

    def __init__(self, required_role: str) -> None:
        self.required_role = required_role

    async def __call__(
        self,
        user: AdminUser = Depends(get_current_user),
    ) -> AdminUser:
        if user.role == self.required_role:
            return user

        raise InsufficientRoleError(required_role=self.required_role)


# Convenience instance for admin-only endpoints
require_admin = RoleChecker(settings.admin_role)
