"""
Tutorial Schemas

Catalog content, optionally merged with one user's progress and bookmark.
"""

from enum import Enum
from typing import List, Optional
from uuid import UUID

from pydantic import AliasChoices, Field

from elderease.schemas.base import CamelModel


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TutorialStepResponse(CamelModel):
    index: int = Field(validation_alias=AliasChoices("index", "position"))
    title: str
    instruction: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    tips: List[str] = []
    duration: int = Field(validation_alias=AliasChoices("duration", "duration_minutes"))


class ProgressState(CamelModel):
    current_step: int = 0
    completed: bool = False


class TutorialSummary(CamelModel):
    id: str
    title: str
    description: str
    category: str
    platform: str
    difficulty: Difficulty
    estimated_time: int = Field(validation_alias=AliasChoices("estimatedTime", "estimated_time", "estimated_minutes"))
    step_count: int = 0
    progress: Optional[ProgressState] = None
    is_bookmarked: bool = False


class TutorialDetail(TutorialSummary):
    steps: List[TutorialStepResponse] = []


class TutorialResponse(CamelModel):
    tutorial: TutorialDetail


class TutorialListResponse(CamelModel):
    tutorials: List[TutorialSummary]
    total: int


class TutorialFilters(CamelModel):
    """Catalog filters. Empty or "all" means no filter."""
    search: Optional[str] = None
    category: Optional[str] = None
    difficulty: Optional[str] = None
    platform: Optional[str] = None
    user_id: Optional[UUID] = None
