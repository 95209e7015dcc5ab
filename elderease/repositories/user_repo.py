"""
User Repository

Data access layer for User and UserPreference models.
All user-related database operations.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from elderease.repositories.base import BaseRepository
from elderease.models import User, UserPreference
from elderease.core.exceptions import DuplicateEmailError
from elderease.schemas.auth import UserRegister
from elderease.schemas.preferences import AccessibilityPreferences, PREFERENCES_VERSION
from elderease.core.security import get_password_hash


class UserRepository(BaseRepository[User]):
    """Repository for User model."""

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    # =================
    # Get by email
    # =================
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address (case-insensitive)."""
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalar_one_or_none()

    # =================
    # Create user
    # =================
    async def create_user(self, user_data: UserRegister) -> User:
        """
        Create a new user together with default preferences.

        Both rows are committed in one transaction. The unique index on
        e-mail is the final word when two sign-ups race past the lookup.

        Raises:
            DuplicateEmailError: The e-mail is already taken
        """
        user = User(
            email=user_data.email.strip().lower(),
            password_hash=get_password_hash(user_data.password),
            name=user_data.name,
            phone=user_data.phone,
            birth_year=user_data.birth_year,
        )
        self.db.add(user)

        try:
            await self.db.flush()
            self.db.add(
                UserPreference(
                    user_id=user.id,
                    preferences=AccessibilityPreferences().to_stored(),
                    version=PREFERENCES_VERSION,
                )
            )
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmailError()

        await self.db.refresh(user)

        return user

    # =================
    # Update user
    # =================
    async def update_user(self, user_id, **kwargs) -> Optional[User]:
        """
        Update user fields.

        Raises:
            DuplicateEmailError: A new e-mail collided with another account
        """
        try:
            return await self.update(user_id, **kwargs)
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmailError()


class UserPreferenceRepository(BaseRepository[UserPreference]):
    """Repository for the one-to-one preferences row."""

    def __init__(self, db: AsyncSession):
        super().__init__(UserPreference, db)

    async def get_by_user(self, user_id: UUID) -> Optional[UserPreference]:
        result = await self.db.execute(
            select(UserPreference).where(UserPreference.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def upsert(self, user_id: UUID, preferences: dict, version: int) -> UserPreference:
        """Create the row if absent, otherwise replace the blob wholesale."""
        row = await self.get_by_user(user_id)
        if row is None:
            row = UserPreference(user_id=user_id)
            self.db.add(row)

        row.preferences = preferences
        row.version = version

        await self.db.commit()
        await self.db.refresh(row)
        return row
