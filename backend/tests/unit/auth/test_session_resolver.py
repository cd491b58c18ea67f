"""Unit tests for cookie session resolution."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest
from starlette.requests import Request

from portfolio_cms.config import settings
from portfolio_cms.core.exceptions import InvalidTokenError
from portfolio_cms.modules.auth.schemas import TokenPair
from portfolio_cms.modules.auth.service import AuthService
from portfolio_cms.modules.auth.session import SessionResolver, SessionState
from tests.fixtures.factories import AdminUserFactory
from tests.fixtures.sessions import make_token


def make_request(headers: dict[str, str] | None = None) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/en/admin",
        "query_string": b"",
        "headers": [
            (key.lower().encode(), value.encode()) for key, value in (headers or {}).items()
        ],
    }
    return Request(scope)


@pytest.fixture
def resolver() -> SessionResolver:
    return SessionResolver()


@pytest.fixture
def tokens() -> TokenPair:
    return AuthService.create_tokens(AdminUserFactory())


class TestResolve:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_cookies_is_anonymous(self, resolver: SessionResolver) -> None:
        state = await resolver.resolve(make_request())

        assert not state.is_authenticated
        assert state.refreshed is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_valid_access_cookie(self, resolver: SessionResolver, tokens: TokenPair) -> None:
        request = make_request({"Cookie": f"{settings.access_cookie_name}={tokens.access_token}"})

        state = await resolver.resolve(request)

        assert state.is_authenticated
        assert state.refreshed is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_bearer_header(self, resolver: SessionResolver, tokens: TokenPair) -> None:
        request = make_request({"Authorization": f"Bearer {tokens.access_token}"})

        state = await resolver.resolve(request)

        assert state.is_authenticated

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_expired_access_is_refreshed(
        self, resolver: SessionResolver, tokens: TokenPair
    ) -> None:
        fresh = AuthService.create_tokens(AdminUserFactory())
        request = make_request({
            "Cookie": (
                f"{settings.access_cookie_name}=expired.token.value; "
                f"{settings.refresh_cookie_name}={tokens.refresh_token}"
            )
        })

        with patch.object(SessionResolver, "_refresh", AsyncMock(return_value=fresh)):
            state = await resolver.resolve(request)

        assert state.is_authenticated
        assert state.refreshed == fresh

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_rejected_refresh_is_anonymous(
        self, resolver: SessionResolver, tokens: TokenPair
    ) -> None:
        request = make_request({"Cookie": f"{settings.refresh_cookie_name}={tokens.refresh_token}"})

        with patch.object(
            SessionResolver, "_refresh", AsyncMock(side_effect=InvalidTokenError("User not found"))
        ):
            state = await resolver.resolve(request)

        assert not state.is_authenticated

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_database_error_during_refresh_is_anonymous(
        self, resolver: SessionResolver, tokens: TokenPair
    ) -> None:
        request = make_request({"Cookie": f"{settings.refresh_cookie_name}={tokens.refresh_token}"})

        with patch.object(
            SessionResolver, "_refresh", AsyncMock(side_effect=ConnectionRefusedError())
        ):
            state = await resolver.resolve(request)

        assert state == SessionState()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_blacklist_error_is_anonymous(
        self, resolver: SessionResolver, tokens: TokenPair
    ) -> None:
        blacklist = AsyncMock()
        blacklist.is_blacklisted.side_effect = ConnectionError("redis down")
        request = make_request({"Cookie": f"{settings.access_cookie_name}={tokens.access_token}"})

        with patch(
            "portfolio_cms.core.security.get_token_blacklist",
            AsyncMock(return_value=blacklist),
        ):
            state = await resolver.resolve(request)

        assert state == SessionState()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_blacklist_error_falls_back_to_refresh(
        self, resolver: SessionResolver, tokens: TokenPair
    ) -> None:
        blacklist = AsyncMock()
        blacklist.is_blacklisted.side_effect = ConnectionError("redis down")
        fresh = AuthService.create_tokens(AdminUserFactory())
        request = make_request({
            "Cookie": (
                f"{settings.access_cookie_name}={tokens.access_token}; "
                f"{settings.refresh_cookie_name}={tokens.refresh_token}"
            )
        })

        with (
            patch(
                "portfolio_cms.core.security.get_token_blacklist",
                AsyncMock(return_value=blacklist),
            ),
            patch.object(SessionResolver, "_refresh", AsyncMock(return_value=fresh)),
        ):
            state = await resolver.resolve(request)

        assert state.is_authenticated
        assert state.refreshed == fresh


class TestLookupRole:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_lookup_failure_means_no_role(self, resolver: SessionResolver) -> None:
        with patch(
            "portfolio_cms.modules.auth.session.get_db_context",
            side_effect=ConnectionRefusedError("db down"),
        ):
            assert await resolver.lookup_role(uuid4()) is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_stored_role(self, resolver: SessionResolver) -> None:
        with (
            patch("portfolio_cms.modules.auth.session.get_db_context") as db_context,
            patch.object(AuthService, "get_role", AsyncMock(return_value="admin")),
        ):
            db_context.return_value.__aenter__.return_value = AsyncMock()
            assert await resolver.lookup_role(uuid4()) == "admin"


class TestRevoke:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_revokes_access_and_refresh(
        self, resolver: SessionResolver, tokens: TokenPair
    ) -> None:
        request = make_request({"Cookie": f"{settings.refresh_cookie_name}={tokens.refresh_token}"})
        state = SessionState(token=make_token())

        with patch("portfolio_cms.modules.auth.session.revoke_token", AsyncMock()) as revoke:
            await resolver.revoke(request, state)

        assert revoke.await_count == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_revoke_errors_are_swallowed(self, resolver: SessionResolver) -> None:
        request = make_request({"Cookie": f"{settings.refresh_cookie_name}=garbage"})
        state = SessionState(token=make_token())

        with patch(
            "portfolio_cms.modules.auth.session.revoke_token",
            AsyncMock(side_effect=ConnectionError("redis down")),
        ):
            await resolver.revoke(request, state)
