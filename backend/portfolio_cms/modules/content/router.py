"""API routes for content module."""

from fastapi import APIRouter

from portfolio_cms.modules.content.routers import (
    hero_router,
    legacy_projects_router,
    project_router,
    skill_router,
    stat_router,
)

router = APIRouter()
router.include_router(hero_router)
router.include_router(project_router)
router.include_router(skill_router)
router.include_router(stat_router)

__all__ = ["router", "legacy_projects_router"]
