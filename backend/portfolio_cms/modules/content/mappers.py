"""Mappers for transforming ORM models to DTOs in content module.

Public mappers resolve every localized field through the locale resolver,
so a missing translation falls back to English instead of failing.
"""

from portfolio_cms.core.locale import SUPPORTED_LOCALES, resolve, resolve_many
from portfolio_cms.modules.content.models import About, Hero, Project, Skill, Stat
from portfolio_cms.modules.content.schemas import (
    AboutPublic,
    HeroPublic,
    ProjectAdminResponse,
    ProjectPublic,
    ProjectTranslationValue,
    SkillPublic,
    StatPublic,
)

HERO_FIELDS = ("profession", "description", "view_projects_text", "resume_text")
ABOUT_FIELDS = ("title", "description", "location", "availability", "education", "what_i_do")
ABOUT_SERVICES = ("service_1", "service_2", "service_3", "service_4")


# ============================================================================
# Public Mappers
# ============================================================================


def map_hero_to_public(hero: Hero | None, locale: str) -> HeroPublic | None:
    """Map a hero row to its public DTO; ``None`` stays ``None``."""
    if hero is None:
        return None

    return HeroPublic(
        name=hero.name,
        resume_url=hero.resume_url,
        **resolve_many(hero, HERO_FIELDS, locale),
    )


def map_about_to_public(about: About | None, locale: str) -> AboutPublic | None:
    """Map an about row to its public DTO; ``None`` stays ``None``."""
    if about is None:
        return None

    return AboutPublic(
        services=[resolve(about, field, locale) for field in ABOUT_SERVICES],
        image_url=about.image_url,
        **resolve_many(about, ABOUT_FIELDS, locale),
    )


def map_project_to_public(project: Project, locale: str) -> ProjectPublic:
    return ProjectPublic(
        id=project.id,
        title=resolve(project, "title", locale),
        description=resolve(project, "description", locale),
        image=project.image_url,
        tech=list(project.tech or []),
        live_url=project.live_url,
        github_url=project.github_url,
    )


def map_projects_to_public(projects: list[Project], locale: str) -> list[ProjectPublic]:
    return [map_project_to_public(p, locale) for p in projects]


def map_skills_to_public(skills: list[Skill]) -> list[SkillPublic]:
    return [SkillPublic.model_validate(s) for s in skills]


def map_stats_to_public(stats: list[Stat], locale: str) -> list[StatPublic]:
    return [
        StatPublic(id=s.id, number=s.number, label=resolve(s, "label", locale))
        for s in stats
    ]


# ============================================================================
# Admin Mappers
# ============================================================================


def map_project_to_admin(project: Project) -> ProjectAdminResponse:
    """Map a project with every locale filled in (empty when missing)."""
    stored = {item.locale: item for item in project.locales}
    translations = {
        locale: ProjectTranslationValue(
            title=stored[locale].title if locale in stored else "",
            description=stored[locale].description if locale in stored else "",
        )
        for locale in SUPPORTED_LOCALES
    }

    return ProjectAdminResponse(
        id=project.id,
        image_url=project.image_url,
        live_url=project.live_url,
        github_url=project.github_url,
        tech=list(project.tech or []),
        sort_order=project.sort_order,
        is_published=project.is_published,
        created_at=project.created_at,
        updated_at=project.updated_at,
        translations=translations,
    )
