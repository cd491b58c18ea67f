"""Content module service layer.

Every write commits through ``@transactional``. Asset removal runs only
after the commit and is best-effort: a failed storage delete is logged
and never undoes the content change.
"""

from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_cms.core.base_service import BaseService, SingletonService
from portfolio_cms.core.database import transactional
from portfolio_cms.core.locale import SUPPORTED_LOCALES
from portfolio_cms.core.logging import get_logger
from portfolio_cms.core.storage import AssetCategory, AssetManager
from portfolio_cms.modules.content.models import (
    About,
    Hero,
    Project,
    ProjectLocale,
    Skill,
    Stat,
)
from portfolio_cms.modules.content.schemas import (
    AboutUpdate,
    HeroUpdate,
    ProjectCreate,
    ProjectTranslations,
    ProjectUpdate,
    SkillCreate,
    SkillUpdate,
    StatCreate,
    StatUpdate,
)

logger = get_logger(__name__)


async def _cleanup(
    assets: AssetManager | None,
    old_url: str | None,
    new_url: str | None,
    category: AssetCategory,
) -> None:
    """Remove a replaced or orphaned asset, if any."""
    if assets is None or not old_url or old_url == new_url:
        return

    result = await assets.remove(old_url, category)
    if not result.ok:
        logger.warning("orphaned_asset", url=old_url, reason=result.reason)


# ============================================================================
# Hero & About
# ============================================================================


class HeroService(SingletonService[Hero]):
    """Service for the hero section."""

    model = Hero
    resource_name = "Hero"

    def __init__(self, db: AsyncSession, assets: AssetManager | None = None) -> None:
        super().__init__(db)
        self.assets = assets

    @transactional
    async def _save(self, entity_id: UUID, data: HeroUpdate) -> tuple[Hero, str | None]:
        hero = await self.get_by_id(entity_id)
        old_resume_url = hero.resume_url

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(hero, field, value)

        await self.db.flush()
        await self.db.refresh(hero)
        return hero, old_resume_url

    async def update(self, entity_id: UUID, data: HeroUpdate) -> Hero:
        """Update hero; a replaced resume is removed from storage."""
        hero, old_resume_url = await self._save(entity_id, data)
        logger.info("hero_updated", id=str(hero.id))

        if "resume_url" in data.model_fields_set:
            await _cleanup(self.assets, old_resume_url, hero.resume_url, AssetCategory.RESUMES)

        return hero

    @transactional
    async def _set_resume_url(self, url: str) -> tuple[Hero, str | None]:
        hero = await self.get_or_404()
        previous = hero.resume_url
        hero.resume_url = url

        await self.db.flush()
        await self.db.refresh(hero)
        return hero, previous

    async def replace_resume(self, file: UploadFile, old_url: str | None = None) -> str:
        """Upload a new resume, store its URL, then remove the old file.

        The upload happens first; if it fails the stored URL and the old
        file are left untouched.
        """
        new_url = await self.assets.upload(file, AssetCategory.RESUMES)
        _, previous = await self._set_resume_url(new_url)
        logger.info("hero_resume_replaced", url=new_url)

        for stale in {previous, old_url}:
            await _cleanup(self.assets, stale, new_url, AssetCategory.RESUMES)

        return new_url


class AboutService(SingletonService[About]):
    """Service for the about section."""

    model = About
    resource_name = "About"

    def __init__(self, db: AsyncSession, assets: AssetManager | None = None) -> None:
        super().__init__(db)
        self.assets = assets

    @transactional
    async def _save(self, entity_id: UUID, data: AboutUpdate) -> tuple[About, str | None]:
        about = await self.get_by_id(entity_id)
        old_image_url = about.image_url

        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(about, field, value)

        await self.db.flush()
        await self.db.refresh(about)
        return about, old_image_url

    async def update(self, entity_id: UUID, data: AboutUpdate) -> About:
        """Update about; a replaced image is removed from storage."""
        about, old_image_url = await self._save(entity_id, data)
        logger.info("about_updated", id=str(about.id))

        if "image_url" in data.model_fields_set:
            await _cleanup(self.assets, old_image_url, about.image_url, AssetCategory.CONTENT)

        return about

    @transactional
    async def _set_image_url(self, url: str) -> tuple[About, str | None]:
        about = await self.get_or_404()
        previous = about.image_url
        about.image_url = url

        await self.db.flush()
        await self.db.refresh(about)
        return about, previous

    async def replace_image(self, file: UploadFile, old_url: str | None = None) -> str:
        """Upload a new about image, store its URL, then remove the old one."""
        new_url = await self.assets.upload(file, AssetCategory.CONTENT)
        _, previous = await self._set_image_url(new_url)
        logger.info("about_image_replaced", url=new_url)

        for stale in {previous, old_url}:
            await _cleanup(self.assets, stale, new_url, AssetCategory.CONTENT)

        return new_url


# ============================================================================
# Projects
# ============================================================================


class ProjectService(BaseService[Project]):
    """Service for portfolio projects."""

    model = Project
    resource_name = "Project"

    def __init__(self, db: AsyncSession, assets: AssetManager | None = None) -> None:
        super().__init__(db)
        self.assets = assets

    def _set_translations(self, project: Project, translations: ProjectTranslations) -> None:
        existing = {item.locale: item for item in project.locales}
        for locale in SUPPORTED_LOCALES:
            value = getattr(translations, locale)
            row = existing.get(locale)
            if row is None:
                project.locales.append(
                    ProjectLocale(
                        locale=locale,
                        title=value.title,
                        description=value.description,
                    )
                )
            else:
                row.title = value.title
                row.description = value.description

    @transactional
    async def create(self, data: ProjectCreate) -> Project:
        """Create a project with all its translations."""
        project = Project(
            image_url=data.image_url,
            live_url=data.live_url,
            github_url=data.github_url,
            tech=list(data.tech),
            sort_order=data.sort_order,
            is_published=data.is_published,
            locales=[],
        )
        self._set_translations(project, data.translations)

        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)

        logger.info("project_created", id=str(project.id))
        return project

    @transactional
    async def _save(self, entity_id: UUID, data: ProjectUpdate) -> tuple[Project, str]:
        project = await self.get_by_id(entity_id)
        old_image_url = project.image_url

        self._apply(
            project,
            data.model_dump(
                exclude_unset=True,
                exclude_none=True,
                exclude={"translations"},
            ),
        )

        if data.translations is not None:
            self._set_translations(project, data.translations)

        await self.db.flush()
        await self.db.refresh(project)
        return project, old_image_url

    async def update(self, entity_id: UUID, data: ProjectUpdate) -> Project:
        """Update only the provided fields.

        Raises:
            NotFoundError: If project not found
        """
        project, old_image_url = await self._save(entity_id, data)
        logger.info("project_updated", id=str(project.id))

        await _cleanup(self.assets, old_image_url, project.image_url, AssetCategory.PROJECTS)
        return project

    async def delete(self, entity_id: UUID) -> None:
        """Delete a project, then its image (best-effort).

        Raises:
            NotFoundError: If project not found
        """
        project = await self._delete_row(entity_id)
        logger.info("project_deleted", id=str(entity_id))

        await _cleanup(self.assets, project.image_url, None, AssetCategory.PROJECTS)


# ============================================================================
# Skills & Stats
# ============================================================================


class SkillService(BaseService[Skill]):
    """Service for skills."""

    model = Skill
    resource_name = "Skill"

    @transactional
    async def create(self, data: SkillCreate) -> Skill:
        skill = Skill(**data.model_dump())
        self.db.add(skill)
        await self.db.flush()
        await self.db.refresh(skill)

        logger.info("skill_created", id=str(skill.id), name=skill.name)
        return skill

    @transactional
    async def update(self, entity_id: UUID, data: SkillUpdate) -> Skill:
        skill = await self.get_by_id(entity_id)
        self._apply(skill, data.model_dump(exclude_unset=True))

        await self.db.flush()
        await self.db.refresh(skill)

        logger.info("skill_updated", id=str(skill.id))
        return skill


class StatService(BaseService[Stat]):
    """Service for stats."""

    model = Stat
    resource_name = "Stat"

    @transactional
    async def create(self, data: StatCreate) -> Stat:
        stat = Stat(**data.model_dump())
        self.db.add(stat)
        await self.db.flush()
        await self.db.refresh(stat)

        logger.info("stat_created", id=str(stat.id), number=stat.number)
        return stat

    @transactional
    async def update(self, entity_id: UUID, data: StatUpdate) -> Stat:
        stat = await self.get_by_id(entity_id)
        self._apply(stat, data.model_dump(exclude_unset=True))

        await self.db.flush()
        await self.db.refresh(stat)

        logger.info("stat_updated", id=str(stat.id))
        return stat
