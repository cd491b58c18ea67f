"""Content module sub-routers."""

from portfolio_cms.modules.content.routers.hero_router import router as hero_router
from portfolio_cms.modules.content.routers.project_router import (
    legacy_router as legacy_projects_router,
)
from portfolio_cms.modules.content.routers.project_router import router as project_router
from portfolio_cms.modules.content.routers.skill_router import router as skill_router
from portfolio_cms.modules.content.routers.stat_router import router as stat_router

__all__ = [
    "hero_router",
    "project_router",
    "legacy_projects_router",
    "skill_router",
    "stat_router",
]
