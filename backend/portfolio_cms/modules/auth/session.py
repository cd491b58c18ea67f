"""Session resolution for the route access middleware.

Reads the session cookies of a request, refreshes an expired access token
from a valid refresh token, and looks up the stored role of the session
user. Every failure here degrades to "no session" or "no role"; the
middleware decides what that means for the route.
"""

from dataclasses import dataclass
from uuid import UUID

from fastapi import Request

from portfolio_cms.config import settings
from portfolio_cms.core.database import get_db_context
from portfolio_cms.core.exceptions import AppException
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.security import (
    TokenPayload,
    decode_session_token,
    decode_token,
    extract_access_token,
    revoke_token,
)
from portfolio_cms.modules.auth.schemas import TokenPair
from portfolio_cms.modules.auth.service import AuthService

logger = get_logger(__name__)


@dataclass
class SessionState:
    """Session attached to a request.

    ``refreshed`` holds a freshly issued token pair that must be written
    back to the response cookies.
    """

    token: TokenPayload | None = None
    refreshed: TokenPair | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None


class SessionResolver:
    """Resolve and end sessions from request cookies."""

    async def resolve(self, request: Request) -> SessionState:
        """Return the current session, refreshing it when possible."""
        access_token = extract_access_token(request)
        if access_token:
            try:
                return SessionState(token=await decode_session_token(access_token, "access"))
            except AppException as e:
                logger.debug("access_token_rejected", reason=e.error_code)
            except Exception as e:
                logger.warning("access_token_check_failed", error=str(e))

        refresh_token = request.cookies.get(settings.refresh_cookie_name)
        if not refresh_token:
            return SessionState()

        try:
            tokens = await self._refresh(refresh_token)
            payload = TokenPayload(decode_token(tokens.access_token))
        except AppException as e:
            logger.info("session_refresh_rejected", reason=e.error_code)
            return SessionState()
        except Exception as e:
            logger.warning("session_refresh_failed", error=str(e))
            return SessionState()

        logger.info("session_refreshed", user_id=str(payload.user_id))
        return SessionState(token=payload, refreshed=tokens)

    async def _refresh(self, refresh_token: str) -> TokenPair:
        async with get_db_context() as db:
            _, tokens = await AuthService(db).refresh_tokens(refresh_token)
        return tokens

    async def lookup_role(self, user_id: UUID) -> str | None:
        """Return the stored role of ``user_id``.

        Returns None when the user is missing, inactive, or the lookup fails.
        """
        try:
            async with get_db_context() as db:
                return await AuthService(db).get_role(user_id)
        except Exception as e:
            logger.warning("role_lookup_failed", user_id=str(user_id), error=str(e))
            return None

    async def revoke(self, request: Request, state: SessionState) -> None:
        """Revoke the access and refresh tokens of the session."""
        if state.token is not None:
            await self._revoke_quietly(state.token)

        refresh_token = request.cookies.get(settings.refresh_cookie_name)
        if refresh_token:
            try:
                await self._revoke_quietly(TokenPayload(decode_token(refresh_token)))
            except AppException:
                # Expired or malformed, nothing left to revoke
                pass

    async def _revoke_quietly(self, token: TokenPayload) -> None:
        try:
            await revoke_token(token)
        except Exception as e:
            logger.warning("token_revoke_failed", user_id=str(token.user_id), error=str(e))
