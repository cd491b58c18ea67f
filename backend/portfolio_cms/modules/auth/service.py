"""Authentication service - business logic for auth operations."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_cms.config import settings
from portfolio_cms.core.exceptions import InvalidCredentialsError, InvalidTokenError
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.security import (
    create_access_token,
    create_refresh_token,
    decode_session_token,
    verify_password,
)
from portfolio_cms.modules.auth.models import AdminUser
from portfolio_cms.modules.auth.schemas import LoginRequest, TokenPair

logger = get_logger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def authenticate(self, data: LoginRequest) -> tuple[AdminUser, TokenPair]:
        """Authenticate user and return tokens.

        Any active user with valid credentials gets a session; whether the
        session may enter the admin panel is decided by the route access
        gate from the stored role.

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        stmt = select(AdminUser).where(AdminUser.email == data.email.lower())
        result = await self.db.execute(stmt)
        user = result.scalar_one_or_none()

        if not user or not verify_password(data.password, user.password_hash):
            logger.info("login_failed", email=data.email)
            raise InvalidCredentialsError()

        if not user.is_active:
            raise InvalidCredentialsError("Account is disabled")

        user.last_login_at = datetime.now(UTC)
        tokens = self.create_tokens(user)

        await self.db.commit()
        await self.db.refresh(user)

        logger.info("login_succeeded", user_id=str(user.id), role=user.role)
        return user, tokens

    async def refresh_tokens(self, refresh_token: str) -> tuple[AdminUser, TokenPair]:
        """Issue a new token pair from a valid refresh token.

        Raises:
            InvalidTokenError: If the token is invalid or the user is gone
        """
        payload = await decode_session_token(refresh_token, "refresh")

        user = await self.get_active_user(payload.user_id)
        if not user:
            raise InvalidTokenError("User not found")

        return user, self.create_tokens(user)

    async def get_active_user(self, user_id: UUID) -> AdminUser | None:
        """Load an active user by id."""
        stmt = (
            select(AdminUser)
            .where(AdminUser.id == user_id)
            .where(AdminUser.is_active.is_(True))
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_role(self, user_id: UUID) -> str | None:
        """Return the stored role of an active user, or None."""
        stmt = (
            select(AdminUser.role)
            .where(AdminUser.id == user_id)
            .where(AdminUser.is_active.is_(True))
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def create_tokens(user: AdminUser) -> TokenPair:
        """Create access and refresh tokens for user."""
        token_data = {
            "sub": str(user.id),
            "email": user.email,
            "role": user.role,
        }

        return TokenPair(
            access_token=create_access_token(token_data),
            refresh_token=create_refresh_token(token_data),
            expires_in=settings.jwt_access_token_expire_minutes * 60,
        )
