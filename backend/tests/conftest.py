"""Pytest configuration and fixtures.

No PostgreSQL, Redis or S3 is needed: the database session and the asset
manager are mocks, and the route access middleware gets an in-memory
session resolver.
"""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock, Mock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from portfolio_cms.core.database import get_db
from portfolio_cms.core.security import get_current_user, require_admin
from portfolio_cms.core.storage import CleanupResult, get_asset_manager
from portfolio_cms.main import create_app
from portfolio_cms.modules.auth.models import AdminUser, UserRole
from tests.fixtures.db import UPLOADED_URL, fake_refresh, make_result
from tests.fixtures.factories import AdminUserFactory
from tests.fixtures.sessions import FakeSessionResolver

# ============================================================================
# Mock Infrastructure
# ============================================================================


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock database session.

    ``execute`` returns an empty result unless a test configures it.
    """
    db = AsyncMock()
    db.add = Mock()
    db.execute.return_value = make_result()
    db.refresh.side_effect = fake_refresh
    return db


@pytest.fixture
def mock_assets() -> MagicMock:
    """Create mock asset manager."""
    assets = MagicMock()
    assets.upload = AsyncMock(return_value=UPLOADED_URL)
    assets.replace = AsyncMock(return_value=UPLOADED_URL)
    assets.remove = AsyncMock(return_value=CleanupResult(ok=True))
    return assets


@pytest.fixture
def session_resolver() -> FakeSessionResolver:
    """Anonymous session by default."""
    return FakeSessionResolver()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(
    mock_db: AsyncMock,
    mock_assets: MagicMock,
    session_resolver: FakeSessionResolver,
) -> FastAPI:
    """Create test FastAPI application."""
    application = create_app(session_resolver=session_resolver)

    async def override_get_db() -> AsyncGenerator[AsyncMock, None]:
        yield mock_db

    application.dependency_overrides[get_db] = override_get_db
    application.dependency_overrides[get_asset_manager] = lambda: mock_assets

    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ============================================================================
# Authentication Fixtures
# ============================================================================


@pytest.fixture
def admin_user() -> AdminUser:
    return AdminUserFactory(role=UserRole.ADMIN)


@pytest.fixture
def viewer_user() -> AdminUser:
    return AdminUserFactory(role=UserRole.VIEWER)


@pytest_asyncio.fixture
async def admin_client(app: FastAPI, admin_user: AdminUser) -> AsyncGenerator[AsyncClient, None]:
    """Client whose requests pass the admin role check."""
    app.dependency_overrides[require_admin] = lambda: admin_user
    app.dependency_overrides[get_current_user] = lambda: admin_user

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
