"""Page routes.

These are reached through the route access middleware, which strips the
locale prefix (``/ru/admin`` arrives here as ``/admin``) and stores the
locale on ``request.state``.
"""

from fastapi import APIRouter, Query, Request

from portfolio_cms.core.dependencies import CurrentAdmin, DBSession
from portfolio_cms.core.locale import normalize_locale
from portfolio_cms.modules.auth.schemas import AuthUser
from portfolio_cms.modules.pages.schemas import (
    DashboardPage,
    HomePage,
    LoginPage,
    SectionPage,
)
from portfolio_cms.modules.pages.service import PageService

router = APIRouter(tags=["Pages"])


def _page_locale(request: Request) -> str:
    return normalize_locale(getattr(request.state, "locale", None))


@router.get("/", response_model=HomePage, summary="Home page")
async def home_page(request: Request, db: DBSession) -> HomePage:
    service = PageService(db)
    return await service.home(_page_locale(request))


@router.get("/admin/login", response_model=LoginPage, summary="Admin login page")
async def login_page(
    request: Request,
    redirect: str | None = Query(default=None),
    error: str | None = Query(default=None),
) -> LoginPage:
    return LoginPage(locale=_page_locale(request), redirect=redirect, error=error)


@router.get("/admin", response_model=DashboardPage, summary="Admin dashboard")
async def dashboard_page(request: Request, admin: CurrentAdmin, db: DBSession) -> DashboardPage:
    service = PageService(db)
    return DashboardPage(
        locale=_page_locale(request),
        user=AuthUser.model_validate(admin),
        counts=await service.dashboard_counts(),
    )


@router.get("/admin/{section}", response_model=SectionPage, summary="Admin section page")
async def section_page(
    section: str,
    request: Request,
    admin: CurrentAdmin,
    db: DBSession,
) -> SectionPage:
    service = PageService(db)
    return SectionPage(
        locale=_page_locale(request),
        section=section,
        items=await service.section_items(section),
    )
