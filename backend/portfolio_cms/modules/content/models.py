"""Content module database models.

Hero, About and Stat keep their translations in ``<field>_<locale>``
columns. Project translations live in ``project_locales``, one row per
locale. Skill has no translatable fields.
"""

from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.dialects.postgresql import UUID as PGUUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_cms.core.base_model import (
    Base,
    PublishableMixin,
    SortOrderMixin,
    TimestampMixin,
    UUIDMixin,
)


# ============================================================================
# Singletons
# ============================================================================


class Hero(Base, UUIDMixin, TimestampMixin, PublishableMixin):
    """Landing section of the home page. Exactly one row, seeded."""

    __tablename__ = "hero"

    name: Mapped[str] = mapped_column(String(100), nullable=False)

    profession_en: Mapped[str] = mapped_column(String(200), nullable=False)
    profession_ru: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    profession_uz: Mapped[str] = mapped_column(String(200), default="", nullable=False)

    description_en: Mapped[str] = mapped_column(String(500), nullable=False)
    description_ru: Mapped[str] = mapped_column(String(500), default="", nullable=False)
    description_uz: Mapped[str] = mapped_column(String(500), default="", nullable=False)

    view_projects_text_en: Mapped[str] = mapped_column(String(50), nullable=False)
    view_projects_text_ru: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    view_projects_text_uz: Mapped[str] = mapped_column(String(50), default="", nullable=False)

    resume_text_en: Mapped[str] = mapped_column(String(50), nullable=False)
    resume_text_ru: Mapped[str] = mapped_column(String(50), default="", nullable=False)
    resume_text_uz: Mapped[str] = mapped_column(String(50), default="", nullable=False)

    resume_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<Hero {self.name}>"


class About(Base, UUIDMixin, TimestampMixin, PublishableMixin):
    """About section of the home page. Exactly one row, seeded."""

    __tablename__ = "about"

    title_en: Mapped[str] = mapped_column(String(100), nullable=False)
    title_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    title_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    description_en: Mapped[str] = mapped_column(Text, nullable=False)
    description_ru: Mapped[str] = mapped_column(Text, default="", nullable=False)
    description_uz: Mapped[str] = mapped_column(Text, default="", nullable=False)

    location_en: Mapped[str] = mapped_column(String(100), nullable=False)
    location_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    location_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    availability_en: Mapped[str] = mapped_column(String(100), nullable=False)
    availability_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    availability_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    education_en: Mapped[str] = mapped_column(String(200), nullable=False)
    education_ru: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    education_uz: Mapped[str] = mapped_column(String(200), default="", nullable=False)

    what_i_do_en: Mapped[str] = mapped_column(String(100), nullable=False)
    what_i_do_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    what_i_do_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    service_1_en: Mapped[str] = mapped_column(String(100), nullable=False)
    service_1_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    service_1_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    service_2_en: Mapped[str] = mapped_column(String(100), nullable=False)
    service_2_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    service_2_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    service_3_en: Mapped[str] = mapped_column(String(100), nullable=False)
    service_3_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    service_3_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    service_4_en: Mapped[str] = mapped_column(String(100), nullable=False)
    service_4_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    service_4_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    def __repr__(self) -> str:
        return f"<About {self.id}>"


# ============================================================================
# Projects
# ============================================================================


class Project(Base, UUIDMixin, TimestampMixin, PublishableMixin, SortOrderMixin):
    """Portfolio project card."""

    __tablename__ = "projects"

    image_url: Mapped[str] = mapped_column(String(500), nullable=False)
    live_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    tech: Mapped[list[str]] = mapped_column(ARRAY(String(50)), default=list, nullable=False)

    locales: Mapped[list["ProjectLocale"]] = relationship(
        "ProjectLocale",
        back_populates="project",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_projects_published_order", "is_published", "sort_order"),
    )

    def __repr__(self) -> str:
        return f"<Project {self.id}>"


class ProjectLocale(Base, UUIDMixin, TimestampMixin):
    """Localized title and description of a project."""

    __tablename__ = "project_locales"

    project_id: Mapped[UUID] = mapped_column(
        PGUUID(as_uuid=True),
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    locale: Mapped[str] = mapped_column(String(5), nullable=False)

    title: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)

    project: Mapped["Project"] = relationship("Project", back_populates="locales")

    __table_args__ = (
        UniqueConstraint("project_id", "locale", name="uq_project_locales"),
        CheckConstraint("locale IN ('en', 'ru', 'uz')", name="ck_project_locales_locale"),
    )


# ============================================================================
# Skills & Stats
# ============================================================================


class Skill(Base, UUIDMixin, TimestampMixin, PublishableMixin, SortOrderMixin):
    """Technology badge with an icon and gradient colors."""

    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    icon_key: Mapped[str] = mapped_column(String(50), nullable=False)
    color_from: Mapped[str] = mapped_column(String(7), nullable=False)
    color_to: Mapped[str] = mapped_column(String(7), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "color_from ~ '^#[0-9A-Fa-f]{6}$' AND color_to ~ '^#[0-9A-Fa-f]{6}$'",
            name="ck_skills_color_format",
        ),
    )

    def __repr__(self) -> str:
        return f"<Skill {self.name}>"


class Stat(Base, UUIDMixin, TimestampMixin, PublishableMixin, SortOrderMixin):
    """Headline number shown on the home page, e.g. "2+" years."""

    __tablename__ = "stats"

    number: Mapped[str] = mapped_column(String(20), nullable=False)

    label_en: Mapped[str] = mapped_column(String(100), nullable=False)
    label_ru: Mapped[str] = mapped_column(String(100), default="", nullable=False)
    label_uz: Mapped[str] = mapped_column(String(100), default="", nullable=False)

    def __repr__(self) -> str:
        return f"<Stat {self.number}>"
