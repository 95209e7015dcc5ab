"""
Progress Tracker Service

Per (user, tutorial) cursor. Absence means "not started". Writes are a
monotonic max: a repeated, late or out-of-order "Next" can never move a
user backwards, and nothing here clears the completed flag.
"""

import logging
from collections import Counter
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from elderease.repositories.progress_repo import ProgressRepository
from elderease.repositories.tutorial_repo import TutorialRepository
from elderease.repositories.user_repo import UserRepository
from elderease.schemas.progress import ProgressRecordResponse, ProgressSummary
from elderease.core.exceptions import InputValidationError, NotFoundError

logger = logging.getLogger(__name__)


class ProgressService:
    """Service for tutorial progress."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.progress_repo = ProgressRepository(db)
        self.tutorial_repo = TutorialRepository(db)
        self.user_repo = UserRepository(db)

    async def _require_user(self, user_id: UUID) -> None:
        if not await self.user_repo.exists_by_id(user_id):
            raise NotFoundError("We couldn't find that account.")

    async def _step_count(self, tutorial_id: str) -> int:
        count = await self.tutorial_repo.step_count(tutorial_id)
        if count is None:
            raise NotFoundError("We couldn't find that tutorial.")
        return count

    # ============================================================
    # READ
    # ============================================================

    async def get_progress(self, user_id: UUID, tutorial_id: str) -> ProgressRecordResponse:
        """Stored progress, or step 0 / not completed if there is none."""
        record = await self.progress_repo.get_for(user_id, tutorial_id)
        if record is None:
            return ProgressRecordResponse(user_id=user_id, tutorial_id=tutorial_id)
        return ProgressRecordResponse.model_validate(record)

    async def list_for_user(self, user_id: UUID) -> List[ProgressRecordResponse]:
        await self._require_user(user_id)
        records = await self.progress_repo.get_all_for_user(user_id)
        return [ProgressRecordResponse.model_validate(r) for r in records]

    # ============================================================
    # WRITE
    # ============================================================

    async def advance_step(self, user_id: UUID, tutorial_id: str, new_step: int) -> ProgressRecordResponse:
        """
        Move the stored step forward to ``new_step``.

        Any non-negative index is accepted. Indices past the last step
        are clamped to the step count and mark the tutorial complete.
        A lower index than the stored one leaves the record as it is.

        Raises:
            InputValidationError: Negative step
            NotFoundError: Unknown user or tutorial
        """
        if new_step is None or new_step < 0:
            raise InputValidationError("Step must be zero or more.", field="currentStep")

        await self._require_user(user_id)
        step_count = await self._step_count(tutorial_id)

        step = min(new_step, step_count)
        record = await self.progress_repo.advance_to(
            user_id,
            tutorial_id,
            step=step,
            mark_completed=step >= step_count,
        )
        logger.info(
            f"Progress {user_id}/{tutorial_id}: requested {new_step}, "
            f"stored {record.current_step} (completed={record.completed})"
        )
        return ProgressRecordResponse.model_validate(record)

    async def mark_complete(self, user_id: UUID, tutorial_id: str) -> ProgressRecordResponse:
        """Jump to the end and set completed. Idempotent."""
        await self._require_user(user_id)
        step_count = await self._step_count(tutorial_id)

        record = await self.progress_repo.advance_to(
            user_id,
            tutorial_id,
            step=step_count,
            mark_completed=True,
        )
        logger.info(f"Progress {user_id}/{tutorial_id}: marked complete")
        return ProgressRecordResponse.model_validate(record)

    # ============================================================
    # DASHBOARD STATISTICS
    # ============================================================

    async def summary(self, user_id: UUID) -> ProgressSummary:
        """
        Dashboard numbers for one user.

        Time spent is the estimated duration of each completed tutorial.
        Favourite platforms are those the user has started, most first.
        """
        await self._require_user(user_id)

        tutorials = {t.id: t for t in await self.tutorial_repo.list_all()}
        records = [
            r for r in await self.progress_repo.get_all_for_user(user_id)
            if r.tutorial_id in tutorials
        ]

        completed = [r for r in records if r.completed]
        platforms = Counter(tutorials[r.tutorial_id].platform for r in records)

        return ProgressSummary(
            total_tutorials=len(tutorials),
            completed_tutorials=len(completed),
            in_progress_tutorials=len(records) - len(completed),
            total_time_spent=sum(tutorials[r.tutorial_id].estimated_minutes for r in completed),
            favorite_platforms=[platform for platform, _ in platforms.most_common()],
        )
