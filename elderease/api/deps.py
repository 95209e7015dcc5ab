from uuid import UUID

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from elderease.db.database import get_db
from elderease.services.auth_service import AuthService
from elderease.services.tutorial_service import TutorialService
from elderease.services.progress_service import ProgressService
from elderease.services.bookmark_service import BookmarkService


# =====================================================
# Services
# =====================================================
def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


def get_tutorial_service(db: AsyncSession = Depends(get_db)) -> TutorialService:
    return TutorialService(db)


def get_progress_service(db: AsyncSession = Depends(get_db)) -> ProgressService:
    return ProgressService(db)


def get_bookmark_service(db: AsyncSession = Depends(get_db)) -> BookmarkService:
    return BookmarkService(db)


# =====================================================
# Caller identity
# =====================================================
async def get_user_id(
    user_id: UUID = Query(..., alias="userId", description="Id of the signed-in user")
) -> UUID:
    """
    The ``?userId=`` query parameter.

    A missing or malformed id is a request validation error (400).
    """
    return user_id
