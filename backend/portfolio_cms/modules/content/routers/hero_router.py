"""Hero and about routes for content module."""

from fastapi import APIRouter, File, Form, UploadFile

from portfolio_cms.core.dependencies import Assets, CurrentAdmin, DBSession, Locale
from portfolio_cms.core.exceptions import ValidationError
from portfolio_cms.modules.content.mappers import map_about_to_public, map_hero_to_public
from portfolio_cms.modules.content.schemas import (
    AboutPublic,
    AboutResponse,
    AboutUpdate,
    HeroPublic,
    HeroResponse,
    HeroUpdate,
    PublishToggle,
    UploadResponse,
)
from portfolio_cms.modules.content.service import AboutService, HeroService

router = APIRouter()


# ============================================================================
# Public Routes
# ============================================================================


@router.get(
    "/public/hero",
    response_model=HeroPublic | None,
    summary="Get hero",
    tags=["Public - Content"],
)
async def get_hero_public(locale: Locale, db: DBSession) -> HeroPublic | None:
    """Published hero, or null."""
    service = HeroService(db)
    return map_hero_to_public(await service.get_published(), locale.locale)


@router.get(
    "/public/about",
    response_model=AboutPublic | None,
    summary="Get about",
    tags=["Public - Content"],
)
async def get_about_public(locale: Locale, db: DBSession) -> AboutPublic | None:
    """Published about section, or null."""
    service = AboutService(db)
    return map_about_to_public(await service.get_published(), locale.locale)


# ============================================================================
# Admin Routes - Hero
# ============================================================================


@router.get(
    "/admin/hero",
    response_model=HeroResponse,
    summary="Get hero (admin)",
    tags=["Admin - Content"],
)
async def get_hero_admin(admin: CurrentAdmin, db: DBSession) -> HeroResponse:
    service = HeroService(db)
    return HeroResponse.model_validate(await service.get_or_404())


@router.put(
    "/admin/hero",
    response_model=HeroResponse,
    summary="Update hero",
    tags=["Admin - Content"],
)
async def update_hero(
    data: HeroUpdate,
    admin: CurrentAdmin,
    db: DBSession,
    assets: Assets,
) -> HeroResponse:
    service = HeroService(db, assets)
    hero = await service.get_or_404()
    hero = await service.update(hero.id, data)
    return HeroResponse.model_validate(hero)


@router.patch(
    "/admin/hero/publish",
    response_model=HeroResponse,
    summary="Publish or unpublish hero",
    tags=["Admin - Content"],
)
async def toggle_hero_publish(
    data: PublishToggle,
    admin: CurrentAdmin,
    db: DBSession,
) -> HeroResponse:
    service = HeroService(db)
    hero = await service.get_or_404()
    hero = await service.toggle_publish(hero.id, data.is_published)
    return HeroResponse.model_validate(hero)


@router.post(
    "/admin/hero/resume",
    response_model=UploadResponse,
    summary="Upload resume",
    tags=["Admin - Content"],
)
async def upload_resume(
    admin: CurrentAdmin,
    db: DBSession,
    assets: Assets,
    file: UploadFile | None = File(default=None),
    old_resume_url: str | None = Form(default=None, alias="oldResumeUrl"),
) -> UploadResponse:
    """Upload the resume file and point the hero at it.

    Supported formats: PDF, DOC, DOCX
    Maximum size: 10MB
    """
    if file is None:
        raise ValidationError("No file provided", fields={"file": "Required"})

    service = HeroService(db, assets)
    url = await service.replace_resume(file, old_resume_url)
    return UploadResponse(url=url)


# ============================================================================
# Admin Routes - About
# ============================================================================


@router.get(
    "/admin/about",
    response_model=AboutResponse,
    summary="Get about (admin)",
    tags=["Admin - Content"],
)
async def get_about_admin(admin: CurrentAdmin, db: DBSession) -> AboutResponse:
    service = AboutService(db)
    return AboutResponse.model_validate(await service.get_or_404())


@router.put(
    "/admin/about",
    response_model=AboutResponse,
    summary="Update about",
    tags=["Admin - Content"],
)
async def update_about(
    data: AboutUpdate,
    admin: CurrentAdmin,
    db: DBSession,
    assets: Assets,
) -> AboutResponse:
    service = AboutService(db, assets)
    about = await service.get_or_404()
    about = await service.update(about.id, data)
    return AboutResponse.model_validate(about)


@router.patch(
    "/admin/about/publish",
    response_model=AboutResponse,
    summary="Publish or unpublish about",
    tags=["Admin - Content"],
)
async def toggle_about_publish(
    data: PublishToggle,
    admin: CurrentAdmin,
    db: DBSession,
) -> AboutResponse:
    service = AboutService(db)
    about = await service.get_or_404()
    about = await service.toggle_publish(about.id, data.is_published)
    return AboutResponse.model_validate(about)


@router.post(
    "/admin/about/image",
    response_model=UploadResponse,
    summary="Upload about image",
    tags=["Admin - Content"],
)
async def upload_about_image(
    admin: CurrentAdmin,
    db: DBSession,
    assets: Assets,
    image: UploadFile | None = File(default=None),
    old_image_url: str | None = Form(default=None, alias="oldImageUrl"),
) -> UploadResponse:
    """Upload the about image and point the section at it.

    Supported formats: JPEG, PNG, WebP
    Maximum size: 5MB
    """
    if image is None:
        raise ValidationError("No image file provided", fields={"image": "Required"})

    service = AboutService(db, assets)
    url = await service.replace_image(image, old_image_url)
    return UploadResponse(url=url)
