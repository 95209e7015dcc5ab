from elderease.models.base import Base
from elderease.models.user import User
from elderease.models.user_preference import UserPreference
from elderease.models.tutorial import Tutorial, TutorialStep
from elderease.models.progress import TutorialProgress
from elderease.models.bookmark import Bookmark

__all__ = [
    "Base",
    "User",
    "UserPreference",
    "Tutorial",
    "TutorialStep",
    "TutorialProgress",
    "Bookmark",
]
