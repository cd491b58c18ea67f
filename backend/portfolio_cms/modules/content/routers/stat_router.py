"""Stat routes for content module."""

from uuid import UUID

from fastapi import APIRouter, status

from portfolio_cms.core.dependencies import CurrentAdmin, DBSession, Locale
from portfolio_cms.modules.content.mappers import map_stats_to_public
from portfolio_cms.modules.content.schemas import (
    PublishToggle,
    StatCreate,
    StatEnvelope,
    StatListResponse,
    StatPublicListResponse,
    StatResponse,
    StatUpdate,
    SuccessResponse,
)
from portfolio_cms.modules.content.service import StatService

router = APIRouter()


@router.get(
    "/public/stats",
    response_model=StatPublicListResponse,
    summary="List stats",
    tags=["Public - Content"],
)
async def list_stats_public(locale: Locale, db: DBSession) -> StatPublicListResponse:
    service = StatService(db)
    stats = await service.list_published()
    return StatPublicListResponse(stats=map_stats_to_public(stats, locale.locale))


@router.get(
    "/admin/stats",
    response_model=StatListResponse,
    summary="List stats (admin)",
    tags=["Admin - Content"],
)
async def list_stats_admin(admin: CurrentAdmin, db: DBSession) -> StatListResponse:
    service = StatService(db)
    stats = await service.list_all()
    return StatListResponse(stats=[StatResponse.model_validate(s) for s in stats])


@router.get(
    "/admin/stats/{stat_id}",
    response_model=StatEnvelope,
    summary="Get stat",
    tags=["Admin - Content"],
)
async def get_stat(stat_id: UUID, admin: CurrentAdmin, db: DBSession) -> StatEnvelope:
    service = StatService(db)
    stat = await service.get_by_id(stat_id)
    return StatEnvelope(stat=StatResponse.model_validate(stat))


@router.post(
    "/admin/stats",
    response_model=StatEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create stat",
    tags=["Admin - Content"],
)
async def create_stat(data: StatCreate, admin: CurrentAdmin, db: DBSession) -> StatEnvelope:
    service = StatService(db)
    stat = await service.create(data)
    return StatEnvelope(stat=StatResponse.model_validate(stat))


@router.put(
    "/admin/stats/{stat_id}",
    response_model=StatEnvelope,
    summary="Update stat",
    tags=["Admin - Content"],
)
async def update_stat(
    stat_id: UUID,
    data: StatUpdate,
    admin: CurrentAdmin,
    db: DBSession,
) -> StatEnvelope:
    service = StatService(db)
    stat = await service.update(stat_id, data)
    return StatEnvelope(stat=StatResponse.model_validate(stat))


@router.patch(
    "/admin/stats/{stat_id}/publish",
    response_model=StatEnvelope,
    summary="Publish or unpublish stat",
    tags=["Admin - Content"],
)
async def toggle_stat_publish(
    stat_id: UUID,
    data: PublishToggle,
    admin: CurrentAdmin,
    db: DBSession,
) -> StatEnvelope:
    service = StatService(db)
    stat = await service.toggle_publish(stat_id, data.is_published)
    return StatEnvelope(stat=StatResponse.model_validate(stat))


@router.delete(
    "/admin/stats/{stat_id}",
    response_model=SuccessResponse,
    summary="Delete stat",
    tags=["Admin - Content"],
)
async def delete_stat(stat_id: UUID, admin: CurrentAdmin, db: DBSession) -> SuccessResponse:
    service = StatService(db)
    await service.delete(stat_id)
    return SuccessResponse()
