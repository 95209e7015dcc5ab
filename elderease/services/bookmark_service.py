"""
Bookmark Set Service

Per-user set of saved tutorial ids, independent of progress.
Add and remove are idempotent, so a retried request never flips the
state twice.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from elderease.repositories.bookmark_repo import BookmarkRepository
from elderease.repositories.tutorial_repo import TutorialRepository
from elderease.repositories.user_repo import UserRepository
from elderease.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class BookmarkService:
    """Service for bookmarks."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.bookmark_repo = BookmarkRepository(db)
        self.tutorial_repo = TutorialRepository(db)
        self.user_repo = UserRepository(db)

    async def _require(self, user_id: UUID, tutorial_id: str) -> None:
        if not await self.user_repo.exists_by_id(user_id):
            raise NotFoundError("We couldn't find that account.")
        if not await self.tutorial_repo.exists_by_id(tutorial_id):
            raise NotFoundError("We couldn't find that tutorial.")

    async def is_bookmarked(self, user_id: UUID, tutorial_id: str) -> bool:
        return await self.bookmark_repo.exists(user_id, tutorial_id)

    async def list_for_user(self, user_id: UUID) -> List[str]:
        """Bookmarked tutorial ids, newest first."""
        if not await self.user_repo.exists_by_id(user_id):
            raise NotFoundError("We couldn't find that account.")
        return await self.bookmark_repo.tutorial_ids_for_user(user_id)

    async def add(self, user_id: UUID, tutorial_id: str) -> bool:
        await self._require(user_id, tutorial_id)
        await self.bookmark_repo.add(user_id, tutorial_id)
        logger.info(f"Bookmark added {user_id}/{tutorial_id}")
        return True

    async def remove(self, user_id: UUID, tutorial_id: str) -> bool:
        await self._require(user_id, tutorial_id)
        await self.bookmark_repo.remove(user_id, tutorial_id)
        logger.info(f"Bookmark removed {user_id}/{tutorial_id}")
        return False

    async def toggle(self, user_id: UUID, tutorial_id: str) -> bool:
        """Add if absent, remove if present. Returns the new state."""
        if await self.is_bookmarked(user_id, tutorial_id):
            return await self.remove(user_id, tutorial_id)
        return await self.add(user_id, tutorial_id)
