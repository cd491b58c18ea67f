"""Create admin users and portfolio content tables.

Revision ID: 001
Revises: 
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

LOCALES = ("en", "ru", "uz")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _localized(name: str, type_: sa.types.TypeEngine) -> list[sa.Column]:
    """English column required, ru/uz default to empty."""
    columns = [sa.Column(f"{name}_en", type_, nullable=False)]
    for locale in LOCALES[1:]:
        columns.append(sa.Column(f"{name}_{locale}", type_, nullable=False, server_default=""))
    return columns


def upgrade() -> None:
    """Create admin_users, hero, about, projects, project_locales, skills, stats."""
    # Admin users
    op.create_table(
        "admin_users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="viewer"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.CheckConstraint("role IN ('admin', 'viewer')", name="ck_admin_users_role"),
    )
    op.create_index("ix_admin_users_email", "admin_users", ["email"], unique=True)

    # Hero singleton
    op.create_table(
        "hero",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        *_localized("profession", sa.String(200)),
        *_localized("description", sa.String(500)),
        *_localized("view_projects_text", sa.String(50)),
        *_localized("resume_text", sa.String(50)),
        sa.Column("resume_url", sa.String(500), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # About singleton
    op.create_table(
        "about",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        *_localized("title", sa.String(100)),
        *_localized("description", sa.Text()),
        *_localized("location", sa.String(100)),
        *_localized("availability", sa.String(100)),
        *_localized("education", sa.String(200)),
        *_localized("what_i_do", sa.String(100)),
        *_localized("service_1", sa.String(100)),
        *_localized("service_2", sa.String(100)),
        *_localized("service_3", sa.String(100)),
        *_localized("service_4", sa.String(100)),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )

    # Projects
    op.create_table(
        "projects",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("image_url", sa.String(500), nullable=False),
        sa.Column("live_url", sa.String(500), nullable=True),
        sa.Column("github_url", sa.String(500), nullable=True),
        sa.Column("tech", postgresql.ARRAY(sa.String(50)), nullable=False, server_default="{}"),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_projects_published_order", "projects", ["is_published", "sort_order"])

    op.create_table(
        "project_locales",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "project_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("locale", sa.String(5), nullable=False),
        sa.Column("title", sa.String(200), nullable=False, server_default=""),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        *_timestamps(),
        sa.UniqueConstraint("project_id", "locale", name="uq_project_locales"),
        sa.CheckConstraint("locale IN ('en', 'ru', 'uz')", name="ck_project_locales_locale"),
    )
    op.create_index("ix_project_locales_project", "project_locales", ["project_id"])

    # Skills
    op.create_table(
        "skills",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("icon_key", sa.String(50), nullable=False),
        sa.Column("color_from", sa.String(7), nullable=False),
        sa.Column("color_to", sa.String(7), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.CheckConstraint(
            "color_from ~ '^#[0-9A-Fa-f]{6}$' AND color_to ~ '^#[0-9A-Fa-f]{6}$'",
            name="ck_skills_color_format",
        ),
    )
    op.create_index("ix_skills_published_order", "skills", ["is_published", "sort_order"])

    # Stats
    op.create_table(
        "stats",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("number", sa.String(20), nullable=False),
        *_localized("label", sa.String(100)),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_stats_published_order", "stats", ["is_published", "sort_order"])


def downgrade() -> None:
    """Drop all portfolio tables."""
    op.drop_table("stats")
    op.drop_table("skills")
    op.drop_table("project_locales")
    op.drop_table("projects")
    op.drop_table("about")
    op.drop_table("hero")
    op.drop_table("admin_users")
