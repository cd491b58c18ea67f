"""Page models served to the frontend."""

from pydantic import BaseModel

from portfolio_cms.modules.auth.schemas import AuthUser
from portfolio_cms.modules.content.schemas import (
    AboutPublic,
    HeroPublic,
    ProjectPublic,
    SkillPublic,
    StatPublic,
)


class HomePage(BaseModel):
    """Everything the public home page renders for one locale.

    Unpublished or missing singletons are ``null``; the page renders
    without that section.
    """

    locale: str
    hero: HeroPublic | None = None
    about: AboutPublic | None = None
    projects: list[ProjectPublic]
    skills: list[SkillPublic]
    stats: list[StatPublic]


class LoginPage(BaseModel):
    locale: str
    redirect: str | None = None
    error: str | None = None


class SectionCount(BaseModel):
    total: int
    published: int


class DashboardPage(BaseModel):
    """Admin landing page with per-section counts."""

    locale: str
    user: AuthUser
    counts: dict[str, SectionCount]


class SectionPage(BaseModel):
    """Admin list page for one content section."""

    locale: str
    section: str
    items: list[dict]
