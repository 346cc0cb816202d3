"""Base repository: shared session handling and ORM lookups."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with ORM get/add/remove helpers.

    Public methods of subclasses return application DTOs; the _orm helpers
    here return ORM instances for internal use only.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    @property
    def dialect_name(self) -> str:
        """Name of the bound database dialect (e.g. 'postgresql', 'sqlite')."""
        bind = self.db.get_bind()
        return bind.dialect.name

    async def _get_orm_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single ORM row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _add(self, obj: ModelType) -> ModelType:
        """Persist a new ORM row and refresh server defaults."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj
