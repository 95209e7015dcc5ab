"""
Tutorial Repository

Read access to the tutorial catalog, plus the idempotent seed used at startup.
"""

from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from elderease.repositories.base import BaseRepository
from elderease.models import Tutorial, TutorialStep


class TutorialRepository(BaseRepository[Tutorial]):
    """Repository for Tutorial model. Steps load eagerly (selectin)."""

    def __init__(self, db: AsyncSession):
        super().__init__(Tutorial, db)

    async def list_all(self) -> List[Tutorial]:
        result = await self.db.execute(
            select(Tutorial).order_by(Tutorial.id)
        )
        return list(result.scalars().all())

    async def step_count(self, tutorial_id: str) -> Optional[int]:
        """Number of steps, or None if the tutorial doesn't exist."""
        tutorial = await self.get_by_id(tutorial_id)
        if tutorial is None:
            return None
        return len(tutorial.steps)

    async def add_tutorial(self, data: dict) -> bool:
        """
        Insert one seed tutorial with its steps.

        Returns False when a tutorial with that id already exists, so
        seeding can run on every startup.
        """
        if await self.exists_by_id(data["id"]):
            return False

        tutorial = Tutorial(
            id=data["id"],
            title=data["title"],
            description=data["description"],
            category=data["category"],
            platform=data["platform"],
            difficulty=data["difficulty"],
            estimated_minutes=data["estimated_minutes"],
        )
        for position, step in enumerate(data["steps"]):
            tutorial.steps.append(
                TutorialStep(
                    position=position,
                    title=step["title"],
                    instruction=step["instruction"],
                    description=step.get("description"),
                    image_url=step.get("image_url"),
                    video_url=step.get("video_url"),
                    tips=list(step.get("tips", [])),
                    duration_minutes=step.get("duration", 1),
                )
            )
        self.db.add(tutorial)
        await self.db.flush()
        return True
