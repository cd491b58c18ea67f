"""Authentication database models."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from portfolio_cms.core.base_model import Base, TimestampMixin, UUIDMixin


class UserRole:
    """Known admin panel roles."""

    ADMIN = "admin"
    VIEWER = "viewer"

    ALL = (ADMIN, VIEWER)


class AdminUser(Base, UUIDMixin, TimestampMixin):
    """User of the admin panel.

    Only users with the ``admin`` role may use the panel; other roles can
    authenticate but are signed out by the route access gate.
    """

    __tablename__ = "admin_users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.VIEWER, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'viewer')", name="ck_admin_users_role"),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self) -> str:
        return f"<AdminUser {self.email} role={self.role}>"
