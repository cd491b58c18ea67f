"""Tests for the route access middleware.

The app runs with an in-memory session resolver; page handlers read a
mocked database session that returns empty results.
"""

import pytest
from fastapi import FastAPI
from httpx import AsyncClient

from portfolio_cms.core.security import require_admin
from portfolio_cms.middleware.route_access import (
    RouteKind,
    classify,
    is_safe_redirect,
    split_locale,
)
from portfolio_cms.modules.auth.models import AdminUser
from portfolio_cms.modules.auth.schemas import TokenPair
from portfolio_cms.modules.auth.session import SessionState
from tests.fixtures.sessions import FakeSessionResolver, make_token


def set_session(
    resolver: FakeSessionResolver,
    role: str | None,
    refreshed: TokenPair | None = None,
) -> None:
    resolver.state = SessionState(token=make_token(role=role or "viewer"), refreshed=refreshed)
    resolver.role = role


class TestClassify:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("path", "kind"),
        [
            ("/", RouteKind.PUBLIC),
            ("/en", RouteKind.PUBLIC),
            ("/ru/projects", RouteKind.PUBLIC),
            ("/administrator", RouteKind.PUBLIC),
            ("/admin/login", RouteKind.ADMIN_LOGIN),
            ("/uz/admin/login/", RouteKind.ADMIN_LOGIN),
            ("/admin", RouteKind.ADMIN_PROTECTED),
            ("/ru/admin", RouteKind.ADMIN_PROTECTED),
            ("/en/admin/projects", RouteKind.ADMIN_PROTECTED),
            ("/admin/login/extra", RouteKind.ADMIN_PROTECTED),
        ],
    )
    def test_classify(self, path: str, kind: RouteKind) -> None:
        assert classify(path) is kind

    @pytest.mark.unit
    def test_split_locale(self) -> None:
        assert split_locale("/ru/admin/projects") == ("ru", "/admin/projects")
        assert split_locale("/uz") == ("uz", "/")
        assert split_locale("/fr/admin") == (None, "/fr/admin")

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("target", "safe"),
        [
            ("/en/admin/projects", True),
            ("//evil.example.com", False),
            ("https://evil.example.com", False),
            ("/\\evil.example.com", False),
            (None, False),
        ],
    )
    def test_safe_redirect(self, target: str | None, safe: bool) -> None:
        assert is_safe_redirect(target) is safe


class TestProtectedPages:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_anonymous_is_sent_to_login(self, client: AsyncClient) -> None:
        response = await client.get("/admin/projects")

        assert response.status_code == 307
        assert response.headers["location"] == "/en/admin/login?redirect=/admin/projects"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_redirect_keeps_locale_and_query(self, client: AsyncClient) -> None:
        response = await client.get("/ru/admin/skills?page=2")

        assert response.status_code == 307
        assert response.headers["location"] == (
            "/ru/admin/login?redirect=/ru/admin/skills%3Fpage%3D2"
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_admin_is_signed_out(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        set_session(session_resolver, role="viewer")

        response = await client.get("/ru/admin/projects")

        assert response.status_code == 307
        assert response.headers["location"] == "/ru/admin/login?error=unauthorized"
        assert len(session_resolver.revoked) == 1
        cleared = " ".join(response.headers.get_list("set-cookie"))
        assert "pf_access=" in cleared
        assert "pf_refresh=" in cleared

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failed_role_lookup_is_denied(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        set_session(session_resolver, role=None)

        response = await client.get("/en/admin")

        assert response.status_code == 307
        assert response.headers["location"] == "/en/admin/login?error=unauthorized"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_role_comes_from_lookup_not_token(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        session_resolver.state = SessionState(token=make_token(role="admin"))
        session_resolver.role = "viewer"

        response = await client.get("/en/admin")

        assert response.headers["location"] == "/en/admin/login?error=unauthorized"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_admin_reaches_page_without_prefix(
        self,
        app: FastAPI,
        client: AsyncClient,
        session_resolver: FakeSessionResolver,
        admin_user: AdminUser,
    ) -> None:
        set_session(session_resolver, role="admin")
        app.dependency_overrides[require_admin] = lambda: admin_user

        response = await client.get("/uz/admin/projects")

        assert response.status_code == 200
        data = response.json()
        assert data["locale"] == "uz"
        assert data["section"] == "projects"
        assert data["items"] == []


class TestLoginPage:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_anonymous_sees_login(self, client: AsyncClient) -> None:
        response = await client.get("/ru/admin/login?error=unauthorized")

        assert response.status_code == 200
        assert response.json() == {"locale": "ru", "redirect": None, "error": "unauthorized"}

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_admin_is_sent_to_redirect_target(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        set_session(session_resolver, role="admin")

        response = await client.get("/en/admin/login?redirect=/en/admin/stats")

        assert response.status_code == 307
        assert response.headers["location"] == "/en/admin/stats"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_offsite_redirect_is_ignored(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        set_session(session_resolver, role="admin")

        response = await client.get("/uz/admin/login?redirect=//evil.example.com")

        assert response.headers["location"] == "/uz/admin"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_admin_stays_on_login(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        set_session(session_resolver, role="viewer")

        response = await client.get("/en/admin/login")

        assert response.status_code == 200


class TestLocaleRouting:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_root_uses_default_locale(self, client: AsyncClient) -> None:
        response = await client.get("/")

        assert response.status_code == 307
        assert response.headers["location"] == "/en"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_locale_cookie_wins(self, client: AsyncClient) -> None:
        response = await client.get(
            "/",
            headers={"Cookie": "NEXT_LOCALE=ru", "Accept-Language": "uz"},
        )

        assert response.headers["location"] == "/ru"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_accept_language(self, client: AsyncClient) -> None:
        response = await client.get("/projects?x=1", headers={"Accept-Language": "uz-UZ,uz;q=0.9"})

        assert response.headers["location"] == "/uz/projects?x=1"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unsupported_cookie_is_ignored(self, client: AsyncClient) -> None:
        response = await client.get("/", headers={"Cookie": "NEXT_LOCALE=fr"})

        assert response.headers["location"] == "/en"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_prefixed_page_is_served(self, client: AsyncClient) -> None:
        response = await client.get("/ru")

        assert response.status_code == 200
        assert response.json()["locale"] == "ru"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_api_paths_are_not_prefixed(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200


class TestSessionRefresh:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_refreshed_tokens_are_written_to_cookies(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        refreshed = TokenPair(access_token="new-access", refresh_token="new-refresh", expires_in=1800)
        set_session(session_resolver, role="admin", refreshed=refreshed)

        response = await client.get("/en")

        assert response.status_code == 200
        cookies = " ".join(response.headers.get_list("set-cookie"))
        assert "pf_access=new-access" in cookies
        assert "pf_refresh=new-refresh" in cookies

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_refreshed_tokens_survive_redirects(
        self, client: AsyncClient, session_resolver: FakeSessionResolver
    ) -> None:
        refreshed = TokenPair(access_token="new-access", refresh_token="new-refresh", expires_in=1800)
        set_session(session_resolver, role="admin", refreshed=refreshed)

        response = await client.get("/")

        assert response.status_code == 307
        assert "pf_access=new-access" in " ".join(response.headers.get_list("set-cookie"))
