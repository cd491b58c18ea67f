"""Common FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_cms.core.database import get_db
from portfolio_cms.core.exceptions import InvalidLocaleError
from portfolio_cms.core.locale import DEFAULT_LOCALE, is_supported_locale
from portfolio_cms.core.security import require_admin
from portfolio_cms.core.storage import AssetManager, get_asset_manager
from portfolio_cms.modules.auth.models import AdminUser

# Type alias for database dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

# Asset manager, overridable in tests
Assets = Annotated[AssetManager, Depends(get_asset_manager)]

# Authenticated user with the admin role
CurrentAdmin = Annotated[AdminUser, Depends(require_admin)]


class LocaleParams:
    """Locale parameter for public API.

    Unlike page rendering, the API rejects unsupported locales instead of
    falling back.
    """

    def __init__(
        self,
        locale: str = Query(
            default=DEFAULT_LOCALE,
            description="Locale code: 'en', 'ru' or 'uz'",
        ),
    ) -> None:
        locale = locale or DEFAULT_LOCALE
        if not is_supported_locale(locale):
            raise InvalidLocaleError(locale)
        self.locale = locale


Locale = Annotated[LocaleParams, Depends()]
