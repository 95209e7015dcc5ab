"""
Tutorial Catalog Service

Read-only lookups over the seeded catalog. When a user id is given, each
tutorial is merged with that user's progress and bookmark flag so the
dashboard and detail pages can render from a single response.
"""

import logging
from typing import Dict, List, Optional, Set
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from elderease.models import Tutorial, TutorialProgress
from elderease.repositories.tutorial_repo import TutorialRepository
from elderease.repositories.progress_repo import ProgressRepository
from elderease.repositories.bookmark_repo import BookmarkRepository
from elderease.schemas.tutorial import (
    ProgressState,
    TutorialDetail,
    TutorialFilters,
    TutorialStepResponse,
    TutorialSummary,
)
from elderease.core.exceptions import NotFoundError
from elderease.utils.filters import filter_tutorials

logger = logging.getLogger(__name__)


def _summary_fields(
    tutorial: Tutorial,
    progress: Optional[TutorialProgress],
    bookmarked: bool,
) -> dict:
    return {
        "id": tutorial.id,
        "title": tutorial.title,
        "description": tutorial.description,
        "category": tutorial.category,
        "platform": tutorial.platform,
        "difficulty": tutorial.difficulty,
        "estimated_time": tutorial.estimated_minutes,
        "step_count": len(tutorial.steps),
        "progress": (
            ProgressState(current_step=progress.current_step, completed=progress.completed)
            if progress is not None else None
        ),
        "is_bookmarked": bookmarked,
    }


class TutorialService:
    """Service for the tutorial catalog."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tutorial_repo = TutorialRepository(db)
        self.progress_repo = ProgressRepository(db)
        self.bookmark_repo = BookmarkRepository(db)

    # ============================================================
    # SINGLE TUTORIAL
    # ============================================================

    async def get_tutorial(self, tutorial_id: str) -> Tutorial:
        tutorial = await self.tutorial_repo.get_by_id(tutorial_id)
        if tutorial is None:
            raise NotFoundError("We couldn't find that tutorial.")
        return tutorial

    async def get_detail(self, tutorial_id: str, user_id: Optional[UUID] = None) -> TutorialDetail:
        """
        Full tutorial with ordered steps.

        Raises:
            NotFoundError: Unknown tutorial id
        """
        tutorial = await self.get_tutorial(tutorial_id)

        progress = None
        bookmarked = False
        if user_id is not None:
            progress = await self.progress_repo.get_for(user_id, tutorial.id)
            bookmarked = await self.bookmark_repo.exists(user_id, tutorial.id)

        return TutorialDetail(
            **_summary_fields(tutorial, progress, bookmarked),
            steps=[TutorialStepResponse.model_validate(step) for step in tutorial.steps],
        )

    # ============================================================
    # LISTING
    # ============================================================

    async def list_tutorials(self, filters: TutorialFilters) -> List[TutorialSummary]:
        """All tutorials passing the filters, in catalog order."""
        tutorials = filter_tutorials(
            await self.tutorial_repo.list_all(),
            search=filters.search,
            category=filters.category,
            difficulty=filters.difficulty,
            platform=filters.platform,
        )

        progress_by_tutorial: Dict[str, TutorialProgress] = {}
        bookmarked: Set[str] = set()
        if filters.user_id is not None:
            progress_by_tutorial = {
                p.tutorial_id: p
                for p in await self.progress_repo.get_all_for_user(filters.user_id)
            }
            bookmarked = set(await self.bookmark_repo.tutorial_ids_for_user(filters.user_id))

        logger.debug(f"Catalog listing: {len(tutorials)} tutorials after filters")

        return [
            TutorialSummary(**_summary_fields(t, progress_by_tutorial.get(t.id), t.id in bookmarked))
            for t in tutorials
        ]
