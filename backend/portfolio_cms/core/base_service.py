"""Base services with common content operations.

Provides the ordering, publish filtering and lookup shared by every
content service, so entity services only add what is specific to them.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from portfolio_cms.core.base_model import Base
from portfolio_cms.core.database import transactional
from portfolio_cms.core.exceptions import NotFoundError
from portfolio_cms.core.logging import get_logger

logger = get_logger(__name__)

# Type variable for models
ModelT = TypeVar("ModelT", bound=Base)


class BaseService(Generic[ModelT]):
    """Base service for ordered, publishable collections.

    Usage:
        class StatService(BaseService[Stat]):
            model = Stat
            resource_name = "Stat"
    """

    # Override in subclass
    model: type[ModelT]
    resource_name: str = "Resource"

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _ordered(self, stmt: Select) -> Select:
        """Order by sort key, ties broken by insertion order."""
        return stmt.order_by(
            self.model.sort_order.asc(),
            self.model.created_at.asc(),
            self.model.id.asc(),
        )

    async def list_all(self) -> list[ModelT]:
        """All records regardless of publish status (admin)."""
        stmt = self._ordered(select(self.model))
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def list_published(self) -> list[ModelT]:
        """Published records only (public)."""
        stmt = self._ordered(
            select(self.model).where(self.model.is_published.is_(True))
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: UUID) -> ModelT:
        """Get record by ID.

        Raises:
            NotFoundError: If record not found
        """
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.db.execute(stmt)
        entity = result.scalar_one_or_none()

        if not entity:
            raise NotFoundError(self.resource_name, entity_id)

        return entity

    async def count(self, *, published_only: bool = False) -> int:
        stmt = select(func.count()).select_from(self.model)
        if published_only:
            stmt = stmt.where(self.model.is_published.is_(True))
        return (await self.db.execute(stmt)).scalar() or 0

    def _apply(self, entity: ModelT, values: dict[str, Any]) -> None:
        for field, value in values.items():
            setattr(entity, field, value)

    @transactional
    async def toggle_publish(self, entity_id: UUID, is_published: bool) -> ModelT:
        """Set ``is_published``; nothing else changes."""
        entity = await self.get_by_id(entity_id)
        entity.is_published = is_published

        await self.db.flush()
        await self.db.refresh(entity)

        logger.info(
            "publish_toggled",
            resource=self.resource_name,
            id=str(entity_id),
            is_published=is_published,
        )
        return entity

    @transactional
    async def _delete_row(self, entity_id: UUID) -> ModelT:
        entity = await self.get_by_id(entity_id)
        await self.db.delete(entity)
        return entity

    async def delete(self, entity_id: UUID) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If record not found
        """
        await self._delete_row(entity_id)
        logger.info("content_deleted", resource=self.resource_name, id=str(entity_id))


class SingletonService(Generic[ModelT]):
    """Base service for content with exactly one row (hero, about).

    The row is seeded; it is never created or deleted through the API.
    """

    model: type[ModelT]
    resource_name: str = "Resource"

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get(self) -> ModelT | None:
        """The row regardless of publish status."""
        stmt = select(self.model).order_by(self.model.created_at.asc()).limit(1)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_published(self) -> ModelT | None:
        """The row if it is published, else None."""
        stmt = (
            select(self.model)
            .where(self.model.is_published.is_(True))
            .order_by(self.model.created_at.asc())
            .limit(1)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, entity_id: UUID) -> ModelT:
        stmt = select(self.model).where(self.model.id == entity_id)
        result = await self.db.execute(stmt)
        entity = result.scalar_one_or_none()

        if not entity:
            raise NotFoundError(self.resource_name, entity_id)

        return entity

    async def get_or_404(self) -> ModelT:
        entity = await self.get()
        if entity is None:
            raise NotFoundError(self.resource_name)
        return entity

    @transactional
    async def toggle_publish(self, entity_id: UUID, is_published: bool) -> ModelT:
        """Set ``is_published``; nothing else changes."""
        entity = await self.get_by_id(entity_id)
        entity.is_published = is_published

        await self.db.flush()
        await self.db.refresh(entity)

        logger.info(
            "publish_toggled",
            resource=self.resource_name,
            id=str(entity_id),
            is_published=is_published,
        )
        return entity
