"""
Progress & Bookmark Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field, model_validator

from elderease.schemas.base import CamelModel


class ProgressUpdate(CamelModel):
    """
    Body of PUT /progress.

    ``completed=True`` marks the tutorial complete; otherwise
    ``current_step`` is required and advances the stored step.
    """

    user_id: UUID
    tutorial_id: str = Field(min_length=1, max_length=50)
    current_step: Optional[int] = Field(default=None, ge=0)
    completed: Optional[bool] = None

    @model_validator(mode="after")
    def require_step_or_completion(self):
        if self.current_step is None and not self.completed:
            raise ValueError("currentStep is required unless completed is true")
        return self


class ProgressRecordResponse(CamelModel):
    user_id: UUID
    tutorial_id: str
    current_step: int = 0
    completed: bool = False
    updated_at: Optional[datetime] = None


class ProgressResponse(CamelModel):
    progress: ProgressRecordResponse


class ProgressListResponse(CamelModel):
    progress: List[ProgressRecordResponse]


class ProgressSummary(CamelModel):
    """Dashboard statistics for one user."""
    total_tutorials: int
    completed_tutorials: int
    in_progress_tutorials: int
    total_time_spent: int  # minutes
    favorite_platforms: List[str] = []


class BookmarkRequest(CamelModel):
    user_id: UUID
    tutorial_id: str = Field(min_length=1, max_length=50)


class BookmarkResponse(CamelModel):
    tutorial_id: str
    bookmarked: bool


class BookmarkListResponse(CamelModel):
    tutorial_ids: List[str]
