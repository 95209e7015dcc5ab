from elderease.repositories.base import BaseRepository
from elderease.repositories.user_repo import UserRepository, UserPreferenceRepository
from elderease.repositories.tutorial_repo import TutorialRepository
from elderease.repositories.progress_repo import ProgressRepository
from elderease.repositories.bookmark_repo import BookmarkRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "UserPreferenceRepository",
    "TutorialRepository",
    "ProgressRepository",
    "BookmarkRepository",
]
