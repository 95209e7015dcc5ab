"""
Bookmark Repository

Data access layer for Bookmark model. A row's presence is the bookmark.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError

from elderease.repositories.base import BaseRepository
from elderease.models import Bookmark


class BookmarkRepository(BaseRepository[Bookmark]):
    """Repository for Bookmark model."""

    def __init__(self, db: AsyncSession):
        super().__init__(Bookmark, db)

    async def exists(self, user_id: UUID, tutorial_id: str) -> bool:
        result = await self.db.execute(
            select(Bookmark.id).where(
                Bookmark.user_id == user_id,
                Bookmark.tutorial_id == tutorial_id,
            )
        )
        return result.first() is not None

    async def tutorial_ids_for_user(self, user_id: UUID) -> List[str]:
        result = await self.db.execute(
            select(Bookmark.tutorial_id)
            .where(Bookmark.user_id == user_id)
            .order_by(Bookmark.created_at.desc())
        )
        return list(result.scalars().all())

    async def add(self, user_id: UUID, tutorial_id: str) -> None:
        """Insert the marker; a no-op if it is already there."""
        if await self.exists(user_id, tutorial_id):
            return
        try:
            await self.create(user_id=user_id, tutorial_id=tutorial_id)
        except IntegrityError:
            await self.db.rollback()

    async def remove(self, user_id: UUID, tutorial_id: str) -> None:
        """Delete the marker; a no-op if it is absent."""
        await self.db.execute(
            delete(Bookmark).where(
                Bookmark.user_id == user_id,
                Bookmark.tutorial_id == tutorial_id,
            )
        )
        await self.db.commit()
