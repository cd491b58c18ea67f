"""API tests for authentication endpoints."""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient

from portfolio_cms.config import settings
from portfolio_cms.core.database import get_db
from portfolio_cms.main import create_app
from portfolio_cms.modules.auth.models import AdminUser
from portfolio_cms.modules.auth.service import AuthService
from tests.fixtures.db import make_result
from tests.fixtures.factories import TEST_USER_PASSWORD, AdminUserFactory


class TestLogin:
    @pytest.mark.asyncio
    async def test_login_sets_session_cookies(
        self, client: AsyncClient, mock_db: AsyncMock
    ) -> None:
        user = AdminUserFactory(email="admin@example.com")
        mock_db.execute.return_value = make_result(scalar=user)

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "admin@example.com", "password": TEST_USER_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == "admin@example.com"
        assert data["tokens"]["token_type"] == "bearer"

        cookies = " ".join(response.headers.get_list("set-cookie"))
        assert f"{settings.access_cookie_name}=" in cookies
        assert f"{settings.refresh_cookie_name}=" in cookies
        assert "httponly" in cookies.lower()

    @pytest.mark.asyncio
    async def test_wrong_password(self, client: AsyncClient, mock_db: AsyncMock) -> None:
        mock_db.execute.return_value = make_result(scalar=AdminUserFactory())

        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "admin@example.com", "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid email or password"}

    @pytest.mark.asyncio
    async def test_invalid_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/v1/auth/login",
            json={"email": "not-an-email", "password": "secret"},
        )

        assert response.status_code == 400
        assert "email" in response.json()["fields"]


class TestSession:
    @pytest.mark.asyncio
    async def test_anonymous_session_is_null(self, client: AsyncClient) -> None:
        response = await client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json() == {"user": None}

    @pytest.mark.asyncio
    async def test_garbage_token_is_null(self, client: AsyncClient) -> None:
        response = await client.get(
            "/api/auth/session",
            headers={"Authorization": "Bearer not.a.token"},
        )

        assert response.status_code == 200
        assert response.json() == {"user": None}

    @pytest.mark.asyncio
    async def test_signed_in_session(
        self, client: AsyncClient, mock_db: AsyncMock, admin_user: AdminUser
    ) -> None:
        tokens = AuthService.create_tokens(admin_user)
        mock_db.execute.return_value = make_result(scalar=admin_user)

        response = await client.get(
            "/api/v1/auth/session",
            headers={"Authorization": f"Bearer {tokens.access_token}"},
        )

        assert response.json()["user"]["id"] == str(admin_user.id)

    @pytest.mark.asyncio
    async def test_database_error_is_null(
        self, client: AsyncClient, mock_db: AsyncMock, admin_user: AdminUser
    ) -> None:
        tokens = AuthService.create_tokens(admin_user)
        mock_db.execute.side_effect = ConnectionRefusedError("db down")

        response = await client.get(
            "/api/auth/session",
            headers={"Authorization": f"Bearer {tokens.access_token}"},
        )

        assert response.status_code == 200
        assert response.json() == {"user": None}

    @pytest.mark.asyncio
    async def test_redis_error_with_session_cookie_is_null(
        self, mock_db: AsyncMock, admin_user: AdminUser
    ) -> None:
        application = create_app()

        async def override_get_db():
            yield mock_db

        application.dependency_overrides[get_db] = override_get_db

        blacklist = AsyncMock()
        blacklist.is_blacklisted.side_effect = ConnectionError("redis down")
        tokens = AuthService.create_tokens(admin_user)

        with patch(
            "portfolio_cms.core.security.get_token_blacklist",
            AsyncMock(return_value=blacklist),
        ):
            async with AsyncClient(
                transport=ASGITransport(app=application),
                base_url="http://test",
                cookies={settings.access_cookie_name: tokens.access_token},
            ) as ac:
                response = await ac.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json() == {"user": None}


class TestMeAndLogout:
    @pytest.mark.asyncio
    async def test_me(self, admin_client: AsyncClient, admin_user: AdminUser) -> None:
        response = await admin_client.get("/api/v1/auth/me")

        assert response.json()["email"] == admin_user.email

    @pytest.mark.asyncio
    async def test_logout_clears_cookies(self, client: AsyncClient, admin_user: AdminUser) -> None:
        tokens = AuthService.create_tokens(admin_user)

        with patch("portfolio_cms.modules.auth.router.revoke_token", AsyncMock()) as revoke:
            response = await client.post(
                "/api/v1/auth/logout",
                headers={
                    "Authorization": f"Bearer {tokens.access_token}",
                    "Cookie": f"{settings.refresh_cookie_name}={tokens.refresh_token}",
                },
            )

        assert response.status_code == 204
        assert revoke.await_count == 2
        cleared = " ".join(response.headers.get_list("set-cookie"))
        assert f"{settings.access_cookie_name}=" in cleared

    @pytest.mark.asyncio
    async def test_logout_requires_session(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/auth/logout")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_refresh_without_token(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/auth/refresh")

        assert response.status_code == 401


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": settings.app_version}

    @pytest.mark.asyncio
    async def test_liveness(self, client: AsyncClient) -> None:
        response = await client.get("/health/live")

        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_ready(self, client: AsyncClient) -> None:
        with (
            patch("portfolio_cms.modules.health.router.check_db_connection", AsyncMock(return_value=True)),
            patch("portfolio_cms.modules.health.router.check_redis_connection", AsyncMock(return_value=True)),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"] == {"database": True, "redis": True, "storage": True}

    @pytest.mark.asyncio
    async def test_ready_degraded_without_redis(self, client: AsyncClient) -> None:
        with (
            patch("portfolio_cms.modules.health.router.check_db_connection", AsyncMock(return_value=True)),
            patch("portfolio_cms.modules.health.router.check_redis_connection", AsyncMock(return_value=False)),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 200
        assert response.json()["status"] == "degraded"

    @pytest.mark.asyncio
    async def test_not_ready_without_database(self, client: AsyncClient) -> None:
        with (
            patch("portfolio_cms.modules.health.router.check_db_connection", AsyncMock(return_value=False)),
            patch("portfolio_cms.modules.health.router.check_redis_connection", AsyncMock(return_value=True)),
        ):
            response = await client.get("/health/ready")

        assert response.status_code == 503
        assert response.json()["status"] == "unavailable"
