"""Page composition service."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_cms.core.exceptions import NotFoundError
from portfolio_cms.modules.content.mappers import (
    map_about_to_public,
    map_hero_to_public,
    map_project_to_admin,
    map_projects_to_public,
    map_skills_to_public,
    map_stats_to_public,
)
from portfolio_cms.modules.content.schemas import (
    AboutResponse,
    HeroResponse,
    SkillResponse,
    StatResponse,
)
from portfolio_cms.modules.content.service import (
    AboutService,
    HeroService,
    ProjectService,
    SkillService,
    StatService,
)
from portfolio_cms.modules.pages.schemas import HomePage, SectionCount


class PageService:
    """Builds page models from content services."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def home(self, locale: str) -> HomePage:
        """Public home page: published content only, resolved for ``locale``."""
        hero = await HeroService(self.db).get_published()
        about = await AboutService(self.db).get_published()
        projects = await ProjectService(self.db).list_published()
        skills = await SkillService(self.db).list_published()
        stats = await StatService(self.db).list_published()

        return HomePage(
            locale=locale,
            hero=map_hero_to_public(hero, locale),
            about=map_about_to_public(about, locale),
            projects=map_projects_to_public(projects, locale),
            skills=map_skills_to_public(skills),
            stats=map_stats_to_public(stats, locale),
        )

    async def dashboard_counts(self) -> dict[str, SectionCount]:
        """Total and published counts per section."""
        counts: dict[str, SectionCount] = {}

        for name, service in (
            ("projects", ProjectService(self.db)),
            ("skills", SkillService(self.db)),
            ("stats", StatService(self.db)),
        ):
            counts[name] = SectionCount(
                total=await service.count(),
                published=await service.count(published_only=True),
            )

        for name, singleton in (
            ("hero", HeroService(self.db)),
            ("about", AboutService(self.db)),
        ):
            row = await singleton.get()
            counts[name] = SectionCount(
                total=0 if row is None else 1,
                published=1 if row is not None and row.is_published else 0,
            )

        return counts

    async def section_items(self, section: str) -> list[dict[str, Any]]:
        """Admin list of one section, including unpublished records.

        Raises:
            NotFoundError: If the section does not exist
        """
        if section == "projects":
            projects = await ProjectService(self.db).list_all()
            return [map_project_to_admin(p).model_dump(mode="json") for p in projects]

        if section == "skills":
            skills = await SkillService(self.db).list_all()
            return [SkillResponse.model_validate(s).model_dump(mode="json") for s in skills]

        if section == "stats":
            stats = await StatService(self.db).list_all()
            return [StatResponse.model_validate(s).model_dump(mode="json") for s in stats]

        if section == "hero":
            hero = await HeroService(self.db).get()
            return [] if hero is None else [HeroResponse.model_validate(hero).model_dump(mode="json")]

        if section == "about":
            about = await AboutService(self.db).get()
            return [] if about is None else [AboutResponse.model_validate(about).model_dump(mode="json")]

        raise NotFoundError("Page")
