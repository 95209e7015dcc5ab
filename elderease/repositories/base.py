"""
Base Repository

Shared data access for every table. Subclasses bind a model and add the
queries their service needs; services never build SQL themselves.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from elderease.db.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Primary-key lookups, inserts and partial updates for one model."""

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    # -----------------------------
    # Lookups
    # -----------------------------
    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Fetch one row by primary key (UUID for users, string for tutorials)."""
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def exists_by_id(self, id: Any) -> bool:
        """Cheap existence check used to validate foreign ids."""
        result = await self.db.execute(
            select(exists().where(self.model.id == id))
        )
        return bool(result.scalar())

    # -----------------------------
    # Writes (each one commits)
    # -----------------------------
    async def create(self, **kwargs) -> ModelType:
        instance = self.model(**kwargs)
        self.db.add(instance)
        await self.db.commit()
        await self.db.refresh(instance)
        return instance

    async def update(self, id: Any, **kwargs) -> Optional[ModelType]:
        """Set the given columns; returns None when the row is gone."""
        instance = await self.get_by_id(id)
        if instance is None:
            return None

        for key, value in kwargs.items():
            setattr(instance, key, value)

        await self.db.commit()
        await self.db.refresh(instance)
        return instance
