"""Pydantic schemas for content module.

Admin forms require a value for every locale. Public responses carry a
single resolved value per field.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from portfolio_cms.modules.content.icons import is_known_icon

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"

_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value: str) -> str:
    """Validate as an http(s) URL but keep the submitted text."""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise ValueError("Invalid URL")
    return value


WebUrl = Annotated[str, Field(max_length=500), AfterValidator(_check_http_url)]


class PublishToggle(BaseModel):
    """Body of the publish/unpublish endpoints."""

    is_published: bool


class SuccessResponse(BaseModel):
    success: bool = True


class UploadResponse(BaseModel):
    """Public URL of an uploaded asset."""

    url: str


# ============================================================================
# Hero Schemas
# ============================================================================


class HeroUpdate(BaseModel):
    """Hero form. All locales are required."""

    name: str = Field(..., min_length=1, max_length=100)
    profession_en: str = Field(..., min_length=1, max_length=200)
    profession_ru: str = Field(..., min_length=1, max_length=200)
    profession_uz: str = Field(..., min_length=1, max_length=200)
    description_en: str = Field(..., min_length=1, max_length=500)
    description_ru: str = Field(..., min_length=1, max_length=500)
    description_uz: str = Field(..., min_length=1, max_length=500)
    view_projects_text_en: str = Field(..., min_length=1, max_length=50)
    view_projects_text_ru: str = Field(..., min_length=1, max_length=50)
    view_projects_text_uz: str = Field(..., min_length=1, max_length=50)
    resume_text_en: str = Field(..., min_length=1, max_length=50)
    resume_text_ru: str = Field(..., min_length=1, max_length=50)
    resume_text_uz: str = Field(..., min_length=1, max_length=50)
    resume_url: str | None = Field(default=None, max_length=200)
    is_published: bool = True


class HeroResponse(BaseModel):
    """Hero as stored, for the admin panel."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    profession_en: str
    profession_ru: str
    profession_uz: str
    description_en: str
    description_ru: str
    description_uz: str
    view_projects_text_en: str
    view_projects_text_ru: str
    view_projects_text_uz: str
    resume_text_en: str
    resume_text_ru: str
    resume_text_uz: str
    resume_url: str | None = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


class HeroPublic(BaseModel):
    """Hero resolved for one locale."""

    name: str
    profession: str
    description: str
    view_projects_text: str
    resume_text: str
    resume_url: str | None = None


# ============================================================================
# About Schemas
# ============================================================================


class AboutUpdate(BaseModel):
    """About form. All locales are required."""

    title_en: str = Field(..., min_length=1, max_length=100)
    title_ru: str = Field(..., min_length=1, max_length=100)
    title_uz: str = Field(..., min_length=1, max_length=100)
    description_en: str = Field(..., min_length=1, max_length=1000)
    description_ru: str = Field(..., min_length=1, max_length=1000)
    description_uz: str = Field(..., min_length=1, max_length=1000)
    location_en: str = Field(..., min_length=1, max_length=100)
    location_ru: str = Field(..., min_length=1, max_length=100)
    location_uz: str = Field(..., min_length=1, max_length=100)
    availability_en: str = Field(..., min_length=1, max_length=100)
    availability_ru: str = Field(..., min_length=1, max_length=100)
    availability_uz: str = Field(..., min_length=1, max_length=100)
    education_en: str = Field(..., min_length=1, max_length=200)
    education_ru: str = Field(..., min_length=1, max_length=200)
    education_uz: str = Field(..., min_length=1, max_length=200)
    what_i_do_en: str = Field(..., min_length=1, max_length=100)
    what_i_do_ru: str = Field(..., min_length=1, max_length=100)
    what_i_do_uz: str = Field(..., min_length=1, max_length=100)
    service_1_en: str = Field(..., min_length=1, max_length=100)
    service_1_ru: str = Field(..., min_length=1, max_length=100)
    service_1_uz: str = Field(..., min_length=1, max_length=100)
    service_2_en: str = Field(..., min_length=1, max_length=100)
    service_2_ru: str = Field(..., min_length=1, max_length=100)
    service_2_uz: str = Field(..., min_length=1, max_length=100)
    service_3_en: str = Field(..., min_length=1, max_length=100)
    service_3_ru: str = Field(..., min_length=1, max_length=100)
    service_3_uz: str = Field(..., min_length=1, max_length=100)
    service_4_en: str = Field(..., min_length=1, max_length=100)
    service_4_ru: str = Field(..., min_length=1, max_length=100)
    service_4_uz: str = Field(..., min_length=1, max_length=100)
    image_url: str | None = Field(default=None, max_length=500)
    is_published: bool = True


class AboutResponse(BaseModel):
    """About as stored, for the admin panel."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title_en: str
    title_ru: str
    title_uz: str
    description_en: str
    description_ru: str
    description_uz: str
    location_en: str
    location_ru: str
    location_uz: str
    availability_en: str
    availability_ru: str
    availability_uz: str
    education_en: str
    education_ru: str
    education_uz: str
    what_i_do_en: str
    what_i_do_ru: str
    what_i_do_uz: str
    service_1_en: str
    service_1_ru: str
    service_1_uz: str
    service_2_en: str
    service_2_ru: str
    service_2_uz: str
    service_3_en: str
    service_3_ru: str
    service_3_uz: str
    service_4_en: str
    service_4_ru: str
    service_4_uz: str
    image_url: str | None = None
    is_published: bool
    created_at: datetime
    updated_at: datetime


class AboutPublic(BaseModel):
    """About resolved for one locale."""

    title: str
    description: str
    location: str
    availability: str
    education: str
    what_i_do: str
    services: list[str]
    image_url: str | None = None


# ============================================================================
# Project Schemas
# ============================================================================


class ProjectTranslation(BaseModel):
    """Title and description in one locale."""

    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=1000)


class ProjectTranslations(BaseModel):
    """Translations keyed by locale. All locales are required."""

    en: ProjectTranslation
    ru: ProjectTranslation
    uz: ProjectTranslation


class ProjectBase(BaseModel):
    image_url: str = Field(..., min_length=1, max_length=500)
    live_url: WebUrl
    github_url: WebUrl
    tech: list[str] = Field(..., min_length=1)
    sort_order: int = Field(default=0, ge=0)
    is_published: bool = True

    @field_validator("tech")
    @classmethod
    def strip_tech(cls, v: list[str]) -> list[str]:
        cleaned = [item.strip() for item in v if item.strip()]
        if not cleaned:
            raise ValueError("At least one technology is required")
        return cleaned


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""

    translations: ProjectTranslations


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only provided fields change."""

    image_url: str | None = Field(default=None, min_length=1, max_length=500)
    live_url: WebUrl | None = None
    github_url: WebUrl | None = None
    tech: list[str] | None = Field(default=None, min_length=1)
    sort_order: int | None = Field(default=None, ge=0)
    is_published: bool | None = None
    translations: ProjectTranslations | None = None


class ProjectTranslationValue(BaseModel):
    """Stored translation; may be empty for non-English locales."""

    title: str = ""
    description: str = ""


class ProjectAdminResponse(BaseModel):
    """Project with all translations, for the admin panel."""

    id: UUID
    image_url: str
    live_url: str | None = None
    github_url: str | None = None
    tech: list[str]
    sort_order: int
    is_published: bool
    created_at: datetime
    updated_at: datetime
    translations: dict[str, ProjectTranslationValue]


class ProjectAdminListResponse(BaseModel):
    projects: list[ProjectAdminResponse]


class ProjectEnvelope(BaseModel):
    project: ProjectAdminResponse


class ProjectPublic(BaseModel):
    """Project card resolved for one locale."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    description: str
    image: str
    tech: list[str]
    live_url: str | None = Field(default=None, alias="liveUrl")
    github_url: str | None = Field(default=None, alias="githubUrl")


class ProjectPublicListResponse(BaseModel):
    projects: list[ProjectPublic]


# ============================================================================
# Skill Schemas
# ============================================================================


class SkillBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon_key: str = Field(..., min_length=1, max_length=50)
    color_from: str = Field(..., pattern=HEX_COLOR_PATTERN)
    color_to: str = Field(..., pattern=HEX_COLOR_PATTERN)
    sort_order: int = Field(default=0, ge=0)
    is_published: bool = True

    @field_validator("icon_key")
    @classmethod
    def validate_icon_key(cls, v: str) -> str:
        if not is_known_icon(v):
            raise ValueError(f"Unknown icon: {v}")
        return v


class SkillCreate(SkillBase):
    """Schema for creating a skill."""

    pass


class SkillUpdate(BaseModel):
    """Schema for updating a skill. Only provided fields change."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    icon_key: str | None = Field(default=None, min_length=1, max_length=50)
    color_from: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    color_to: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    sort_order: int | None = Field(default=None, ge=0)
    is_published: bool | None = None

    @field_validator("icon_key")
    @classmethod
    def validate_icon_key(cls, v: str | None) -> str | None:
        if v is not None and not is_known_icon(v):
            raise ValueError(f"Unknown icon: {v}")
        return v


class SkillResponse(SkillBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


class SkillListResponse(BaseModel):
    skills: list[SkillResponse]


class SkillEnvelope(BaseModel):
    skill: SkillResponse


class SkillPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    icon_key: str
    color_from: str
    color_to: str


class SkillPublicListResponse(BaseModel):
    skills: list[SkillPublic]


class IconListResponse(BaseModel):
    icons: list[str]


# ============================================================================
# Stat Schemas
# ============================================================================


class StatBase(BaseModel):
    number: str = Field(..., min_length=1, max_length=20)
    label_en: str = Field(..., min_length=1, max_length=100)
    label_ru: str = Field(..., min_length=1, max_length=100)
    label_uz: str = Field(..., min_length=1, max_length=100)
    sort_order: int = Field(default=0, ge=0)
    is_published: bool = True


class StatCreate(StatBase):
    """Schema for creating a stat."""

    pass


class StatUpdate(BaseModel):
    """Schema for updating a stat. Only provided fields change."""

    number: str | None = Field(default=None, min_length=1, max_length=20)
    label_en: str | None = Field(default=None, min_length=1, max_length=100)
    label_ru: str | None = Field(default=None, min_length=1, max_length=100)
    label_uz: str | None = Field(default=None, min_length=1, max_length=100)
    sort_order: int | None = Field(default=None, ge=0)
    is_published: bool | None = None


class StatResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    number: str
    label_en: str
    label_ru: str
    label_uz: str
    sort_order: int
    is_published: bool
    created_at: datetime
    updated_at: datetime


class StatListResponse(BaseModel):
    stats: list[StatResponse]


class StatEnvelope(BaseModel):
    stat: StatResponse


class StatPublic(BaseModel):
    id: UUID
    number: str
    label: str


class StatPublicListResponse(BaseModel):
    stats: list[StatPublic]
