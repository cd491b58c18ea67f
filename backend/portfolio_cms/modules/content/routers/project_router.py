"""Project routes for content module."""

from uuid import UUID

from fastapi import APIRouter, File, Form, UploadFile, status

from portfolio_cms.core.dependencies import Assets, CurrentAdmin, DBSession, Locale
from portfolio_cms.core.exceptions import ValidationError
from portfolio_cms.core.storage import AssetCategory
from portfolio_cms.modules.content.mappers import (
    map_project_to_admin,
    map_projects_to_public,
)
from portfolio_cms.modules.content.schemas import (
    ProjectAdminListResponse,
    ProjectCreate,
    ProjectEnvelope,
    ProjectPublicListResponse,
    ProjectUpdate,
    PublishToggle,
    SuccessResponse,
    UploadResponse,
)
from portfolio_cms.modules.content.service import ProjectService

router = APIRouter()

# Unversioned public endpoint, mounted under /api
legacy_router = APIRouter()


# ============================================================================
# Public Routes - Projects
# ============================================================================


@router.get(
    "/public/projects",
    response_model=ProjectPublicListResponse,
    summary="List projects",
    tags=["Public - Content"],
)
@legacy_router.get(
    "/projects",
    response_model=ProjectPublicListResponse,
    summary="List projects",
    tags=["Public - Content"],
)
async def list_projects_public(locale: Locale, db: DBSession) -> ProjectPublicListResponse:
    """List published projects localized for ``locale``."""
    service = ProjectService(db)
    projects = await service.list_published()
    return ProjectPublicListResponse(projects=map_projects_to_public(projects, locale.locale))


# ============================================================================
# Admin Routes - Projects
# ============================================================================


@router.get(
    "/admin/projects",
    response_model=ProjectAdminListResponse,
    summary="List projects (admin)",
    tags=["Admin - Content"],
)
async def list_projects_admin(
    admin: CurrentAdmin,
    db: DBSession,
) -> ProjectAdminListResponse:
    """List all projects with every translation, including unpublished."""
    service = ProjectService(db)
    projects = await service.list_all()
    return ProjectAdminListResponse(projects=[map_project_to_admin(p) for p in projects])


@router.post(
    "/admin/projects/upload-image",
    response_model=UploadResponse,
    summary="Upload project image",
    tags=["Admin - Content"],
)
async def upload_project_image(
    admin: CurrentAdmin,
    assets: Assets,
    image: UploadFile | None = File(default=None),
    old_image_url: str | None = Form(default=None, alias="oldImageUrl"),
) -> UploadResponse:
    """Upload a project image, replacing ``oldImageUrl`` if given.

    Supported formats: JPEG, PNG, WebP
    Maximum size: 2MB
    """
    if image is None:
        raise ValidationError("No image file provided", fields={"image": "Required"})

    url = await assets.replace(old_image_url, image, AssetCategory.PROJECTS)
    return UploadResponse(url=url)


@router.get(
    "/admin/projects/{project_id}",
    response_model=ProjectEnvelope,
    summary="Get project",
    tags=["Admin - Content"],
)
async def get_project(
    project_id: UUID,
    admin: CurrentAdmin,
    db: DBSession,
) -> ProjectEnvelope:
    service = ProjectService(db)
    project = await service.get_by_id(project_id)
    return ProjectEnvelope(project=map_project_to_admin(project))


@router.post(
    "/admin/projects",
    response_model=ProjectEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    tags=["Admin - Content"],
)
async def create_project(
    data: ProjectCreate,
    admin: CurrentAdmin,
    db: DBSession,
) -> ProjectEnvelope:
    """Create a project with en/ru/uz translations."""
    service = ProjectService(db)
    project = await service.create(data)
    return ProjectEnvelope(project=map_project_to_admin(project))


@router.put(
    "/admin/projects/{project_id}",
    response_model=SuccessResponse,
    summary="Update project",
    tags=["Admin - Content"],
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    admin: CurrentAdmin,
    db: DBSession,
    assets: Assets,
) -> SuccessResponse:
    """Update a project. A replaced image is removed from storage."""
    service = ProjectService(db, assets)
    await service.update(project_id, data)
    return SuccessResponse()


@router.patch(
    "/admin/projects/{project_id}/publish",
    response_model=ProjectEnvelope,
    summary="Publish or unpublish project",
    tags=["Admin - Content"],
)
async def toggle_project_publish(
    project_id: UUID,
    data: PublishToggle,
    admin: CurrentAdmin,
    db: DBSession,
) -> ProjectEnvelope:
    service = ProjectService(db)
    project = await service.toggle_publish(project_id, data.is_published)
    return ProjectEnvelope(project=map_project_to_admin(project))


@router.delete(
    "/admin/projects/{project_id}",
    response_model=SuccessResponse,
    summary="Delete project",
    tags=["Admin - Content"],
)
async def delete_project(
    project_id: UUID,
    admin: CurrentAdmin,
    db: DBSession,
    assets: Assets,
) -> SuccessResponse:
    """Delete a project and its image."""
    service = ProjectService(db, assets)
    await service.delete(project_id)
    return SuccessResponse()
