"""Skill routes for content module."""

from uuid import UUID

from fastapi import APIRouter, status

from portfolio_cms.core.dependencies import CurrentAdmin, DBSession
from portfolio_cms.modules.content.icons import ICON_KEYS
from portfolio_cms.modules.content.mappers import map_skills_to_public
from portfolio_cms.modules.content.schemas import (
    IconListResponse,
    PublishToggle,
    SkillCreate,
    SkillEnvelope,
    SkillListResponse,
    SkillPublicListResponse,
    SkillResponse,
    SkillUpdate,
    SuccessResponse,
)
from portfolio_cms.modules.content.service import SkillService

router = APIRouter()


# ============================================================================
# Public Routes - Skills
# ============================================================================


@router.get(
    "/public/skills",
    response_model=SkillPublicListResponse,
    summary="List skills",
    tags=["Public - Content"],
)
async def list_skills_public(db: DBSession) -> SkillPublicListResponse:
    service = SkillService(db)
    skills = await service.list_published()
    return SkillPublicListResponse(skills=map_skills_to_public(skills))


# ============================================================================
# Admin Routes - Skills
# ============================================================================


@router.get(
    "/admin/icons",
    response_model=IconListResponse,
    summary="List icon keys",
    tags=["Admin - Content"],
)
async def list_icons(admin: CurrentAdmin) -> IconListResponse:
    """Icon keys a skill may use."""
    return IconListResponse(icons=list(ICON_KEYS))


@router.get(
    "/admin/skills",
    response_model=SkillListResponse,
    summary="List skills (admin)",
    tags=["Admin - Content"],
)
async def list_skills_admin(admin: CurrentAdmin, db: DBSession) -> SkillListResponse:
    service = SkillService(db)
    skills = await service.list_all()
    return SkillListResponse(skills=[SkillResponse.model_validate(s) for s in skills])


@router.get(
    "/admin/skills/{skill_id}",
    response_model=SkillEnvelope,
    summary="Get skill",
    tags=["Admin - Content"],
)
async def get_skill(skill_id: UUID, admin: CurrentAdmin, db: DBSession) -> SkillEnvelope:
    service = SkillService(db)
    skill = await service.get_by_id(skill_id)
    return SkillEnvelope(skill=SkillResponse.model_validate(skill))


@router.post(
    "/admin/skills",
    response_model=SkillEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create skill",
    tags=["Admin - Content"],
)
async def create_skill(data: SkillCreate, admin: CurrentAdmin, db: DBSession) -> SkillEnvelope:
    service = SkillService(db)
    skill = await service.create(data)
    return SkillEnvelope(skill=SkillResponse.model_validate(skill))


@router.put(
    "/admin/skills/{skill_id}",
    response_model=SkillEnvelope,
    summary="Update skill",
    tags=["Admin - Content"],
)
async def update_skill(
    skill_id: UUID,
    data: SkillUpdate,
    admin: CurrentAdmin,
    db: DBSession,
) -> SkillEnvelope:
    service = SkillService(db)
    skill = await service.update(skill_id, data)
    return SkillEnvelope(skill=SkillResponse.model_validate(skill))


@router.patch(
    "/admin/skills/{skill_id}/publish",
    response_model=SkillEnvelope,
    summary="Publish or unpublish skill",
    tags=["Admin - Content"],
)
async def toggle_skill_publish(
    skill_id: UUID,
    data: PublishToggle,
    admin: CurrentAdmin,
    db: DBSession,
) -> SkillEnvelope:
    service = SkillService(db)
    skill = await service.toggle_publish(skill_id, data.is_published)
    return SkillEnvelope(skill=SkillResponse.model_validate(skill))


@router.delete(
    "/admin/skills/{skill_id}",
    response_model=SuccessResponse,
    summary="Delete skill",
    tags=["Admin - Content"],
)
async def delete_skill(skill_id: UUID, admin: CurrentAdmin, db: DBSession) -> SuccessResponse:
    service = SkillService(db)
    await service.delete(skill_id)
    return SuccessResponse()
