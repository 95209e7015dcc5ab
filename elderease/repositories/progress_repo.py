"""
Progress Repository

Data access layer for TutorialProgress model.

Step advances are written with a single conditional UPDATE so two rapid
requests can never move the stored step backwards, whatever order they
reach the database in.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, case
from sqlalchemy.exc import IntegrityError

from elderease.repositories.base import BaseRepository
from elderease.models import TutorialProgress


class ProgressRepository(BaseRepository[TutorialProgress]):
    """Repository for TutorialProgress model."""

    def __init__(self, db: AsyncSession):
        super().__init__(TutorialProgress, db)

    async def get_for(self, user_id: UUID, tutorial_id: str) -> Optional[TutorialProgress]:
        result = await self.db.execute(
            select(TutorialProgress).where(
                TutorialProgress.user_id == user_id,
                TutorialProgress.tutorial_id == tutorial_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_all_for_user(self, user_id: UUID) -> List[TutorialProgress]:
        result = await self.db.execute(
            select(TutorialProgress)
            .where(TutorialProgress.user_id == user_id)
            .order_by(TutorialProgress.updated_at.desc())
        )
        return list(result.scalars().all())

    async def get_or_create(self, user_id: UUID, tutorial_id: str) -> TutorialProgress:
        """Return the record, creating a not-started one on first interaction."""
        existing = await self.get_for(user_id, tutorial_id)
        if existing:
            return existing

        try:
            return await self.create(
                user_id=user_id,
                tutorial_id=tutorial_id,
                current_step=0,
                completed=False,
            )
        except IntegrityError:
            # Another request created it first
            await self.db.rollback()
            return await self.get_for(user_id, tutorial_id)

    async def advance_to(
        self,
        user_id: UUID,
        tutorial_id: str,
        step: int,
        mark_completed: bool,
    ) -> TutorialProgress:
        """
        Raise current_step to ``step`` if it is higher (monotonic max).

        ``mark_completed`` only ever sets the flag; it is never cleared here.
        """
        record = await self.get_or_create(user_id, tutorial_id)

        values = {
            "current_step": case(
                (TutorialProgress.current_step < step, step),
                else_=TutorialProgress.current_step,
            )
        }
        if mark_completed:
            values["completed"] = True

        await self.db.execute(
            update(TutorialProgress)
            .where(TutorialProgress.id == record.id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        await self.db.refresh(record)
        return record
