"""
Tutorial pages.

TutorialView is the step-by-step detail page; TutorialDashboard is the
catalog page. Both render from local state that is updated before the
server confirms a write:

- progress ("Next", "Mark complete") is kept when the write fails, and
  the user sees a soft notice;
- a bookmark flip is reverted when the write fails.
"""

import logging
from typing import List, Optional
from uuid import UUID

from elderease.client.api import ElderEaseClient
from elderease.client.commands import CommandResult, OptimisticCommand
from elderease.client.notices import BOOKMARK_NOT_SAVED, PROGRESS_NOT_SAVED
from elderease.client.session import SessionStore
from elderease.core.exceptions import InputValidationError, NotAuthenticatedError
from elderease.schemas.progress import ProgressSummary
from elderease.schemas.tutorial import ProgressState, TutorialDetail, TutorialStepResponse, TutorialSummary
from elderease.utils.filters import filter_tutorials

logger = logging.getLogger(__name__)


def _bookmark_command(
    api: ElderEaseClient,
    user_id: UUID,
    tutorial: TutorialSummary,
) -> OptimisticCommand:
    """Flip the star now, write it, flip it back if the write fails."""
    previous = tutorial.is_bookmarked
    target = not previous

    def apply() -> None:
        tutorial.is_bookmarked = target

    def compensate() -> None:
        tutorial.is_bookmarked = previous

    async def remote() -> bool:
        if target:
            return await api.add_bookmark(user_id, tutorial.id)
        return await api.remove_bookmark(user_id, tutorial.id)

    return OptimisticCommand(
        name=f"bookmark {tutorial.id}",
        apply=apply,
        remote=remote,
        compensate=compensate,
        failure_notice=BOOKMARK_NOT_SAVED,
    )


# ============================================================
# DETAIL PAGE
# ============================================================

class TutorialView:
    """One tutorial, viewed step by step."""

    def __init__(self, api: ElderEaseClient, session: SessionStore, tutorial_id: str):
        self.api = api
        self.session = session
        self.tutorial_id = tutorial_id
        self.tutorial: Optional[TutorialDetail] = None
        self.current_step = 0
        self.completed = False
        self.notices: List[str] = []

    async def load(self) -> TutorialDetail:
        """Fetch the tutorial and resume where the user left off."""
        user_id = await self.session.user_id()
        self.tutorial = await self.api.get_tutorial(self.tutorial_id, user_id=user_id)

        progress = self.tutorial.progress or ProgressState()
        self.completed = progress.completed
        self.current_step = min(progress.current_step, self.last_index)
        return self.tutorial

    # ------------------------------------------------------------
    # View state
    # ------------------------------------------------------------
    def _require_loaded(self) -> TutorialDetail:
        if self.tutorial is None:
            raise RuntimeError("TutorialView.load() must be awaited first")
        return self.tutorial

    @property
    def step_count(self) -> int:
        return len(self._require_loaded().steps)

    @property
    def last_index(self) -> int:
        return max(self.step_count - 1, 0)

    @property
    def step(self) -> Optional[TutorialStepResponse]:
        steps = self._require_loaded().steps
        return steps[self.current_step] if steps else None

    @property
    def percent_complete(self) -> int:
        if self.completed or not self.step_count:
            return 100 if self.completed else 0
        return round(self.current_step * 100 / self.step_count)

    def select_step(self, index: int) -> None:
        """Jump to a step from the overview list. Doesn't save progress."""
        if not 0 <= index < self.step_count:
            raise InputValidationError("That step doesn't exist.", field="step")
        self.current_step = index

    def previous_step(self) -> None:
        """Go back one step. Doesn't save progress."""
        self.current_step = max(self.current_step - 1, 0)

    # ------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------
    async def _run_progress(self, name: str, apply, remote) -> CommandResult:
        user_id = await self.session.user_id()
        if user_id is None:
            # Anonymous visitors can still read through the steps
            apply()
            return CommandResult(saved=False)

        result = await OptimisticCommand(
            name=name,
            apply=apply,
            remote=lambda: remote(user_id),
            failure_notice=PROGRESS_NOT_SAVED,
        ).run()
        if result.notice:
            self.notices.append(result.notice)
        return result

    async def next_step(self) -> CommandResult:
        """
        Advance one step and save it.

        Going past the last step completes the tutorial. The local step is
        kept even when saving fails.
        """
        self._require_loaded()
        new_step = min(self.current_step + 1, self.step_count)

        def apply() -> None:
            if new_step >= self.step_count:
                self.completed = True
            self.current_step = min(new_step, self.last_index)

        return await self._run_progress(
            f"next step {self.tutorial_id}",
            apply,
            lambda user_id: self.api.update_progress(user_id, self.tutorial_id, new_step),
        )

    async def mark_complete(self) -> CommandResult:
        self._require_loaded()

        def apply() -> None:
            self.completed = True
            self.current_step = self.last_index

        return await self._run_progress(
            f"mark complete {self.tutorial_id}",
            apply,
            lambda user_id: self.api.mark_complete(user_id, self.tutorial_id),
        )

    async def toggle_bookmark(self) -> CommandResult:
        tutorial = self._require_loaded()
        user_id = await self.session.user_id()
        if user_id is None:
            raise NotAuthenticatedError()

        result = await _bookmark_command(self.api, user_id, tutorial).run()
        if result.notice:
            self.notices.append(result.notice)
        return result

    @property
    def is_bookmarked(self) -> bool:
        return self._require_loaded().is_bookmarked


# ============================================================
# DASHBOARD
# ============================================================

class TutorialDashboard:
    """Catalog page with filters, statistics and bookmark stars."""

    def __init__(self, api: ElderEaseClient, session: SessionStore):
        self.api = api
        self.session = session
        self.tutorials: List[TutorialSummary] = []
        self.summary = ProgressSummary(
            total_tutorials=0,
            completed_tutorials=0,
            in_progress_tutorials=0,
            total_time_spent=0,
        )
        self.notices: List[str] = []

    async def load(self) -> List[TutorialSummary]:
        user_id = await self.session.user_id()
        self.tutorials = await self.api.list_tutorials(user_id=user_id)

        if user_id is not None:
            self.summary = await self.api.progress_summary(user_id)
        else:
            self.summary = ProgressSummary(
                total_tutorials=len(self.tutorials),
                completed_tutorials=0,
                in_progress_tutorials=0,
                total_time_spent=0,
            )
        return self.tutorials

    def filtered(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> List[TutorialSummary]:
        """Same rules as the server-side listing ("all" means no filter)."""
        return filter_tutorials(
            self.tutorials,
            search=search,
            category=category,
            difficulty=difficulty,
            platform=platform,
        )

    @property
    def bookmarked(self) -> List[TutorialSummary]:
        return [t for t in self.tutorials if t.is_bookmarked]

    def _find(self, tutorial_id: str) -> TutorialSummary:
        for tutorial in self.tutorials:
            if tutorial.id == tutorial_id:
                return tutorial
        raise InputValidationError("That tutorial isn't in the list.", field="tutorialId")

    async def toggle_bookmark(self, tutorial_id: str) -> CommandResult:
        tutorial = self._find(tutorial_id)
        user_id = await self.session.user_id()
        if user_id is None:
            raise NotAuthenticatedError()

        result = await _bookmark_command(self.api, user_id, tutorial).run()
        if result.notice:
            self.notices.append(result.notice)
        return result
