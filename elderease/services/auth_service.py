import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from elderease.models import User
from elderease.repositories.user_repo import UserRepository, UserPreferenceRepository
from elderease.schemas.auth import UserRegister, UserLogin, ProfileUpdate, UserResponse
from elderease.schemas.preferences import AccessibilityPreferences, PREFERENCES_VERSION
from elderease.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    NotFoundError,
)
from elderease.core.security import verify_password, burn_password_check

logger = logging.getLogger(__name__)


def to_user_response(user: User, preferences: Optional[AccessibilityPreferences] = None) -> UserResponse:
    """
    Client-facing view of a user.

    Built field by field so the password hash can never leak into a response.
    """
    return UserResponse(
        id=user.id,
        email=user.email,
        name=user.name,
        phone=user.phone,
        birth_year=user.birth_year,
        profile_photo=user.profile_photo,
        created_at=user.created_at,
        last_login=user.last_login,
        preferences=preferences,
    )


class AuthService:
    """
    Service class for account operations.

    The only code path that reads or writes password hashes, users and
    their preferences.
    """
    def __init__(self, db: AsyncSession):
        """
        Initialize with database session.

        Args:
            db: AsyncSession instance
        """
        self.db = db
        self.user_repo = UserRepository(db)
        self.preference_repo = UserPreferenceRepository(db)

    # ============================================================
    # User Registration
    # ============================================================
    async def register(self, user_data: UserRegister) -> UserResponse:
        """
        Register a new user with default preferences.

        Args:
            user_data: Validated registration data

        Returns:
            UserResponse (no credential field)

        Raises:
            DuplicateEmailError: If the e-mail is already registered, in any case
        """
        existing_user = await self.user_repo.get_by_email(user_data.email)
        if existing_user:
            raise DuplicateEmailError()

        user = await self.user_repo.create_user(user_data)
        logger.info(f"Registered user {user.id}")

        return to_user_response(user, AccessibilityPreferences())

    # ============================================================
    # User Login
    # ============================================================
    async def login(self, login_data: UserLogin) -> UserResponse:
        """
        Verify credentials and return the user.

        Raises:
            InvalidCredentialsError: For an unknown e-mail and for a wrong
                password alike
        """
        user = await self.user_repo.get_by_email(login_data.email)

        if user is None:
            # Same bcrypt cost as a real comparison
            burn_password_check(login_data.password)
            raise InvalidCredentialsError()

        if not verify_password(login_data.password, user.password_hash):
            raise InvalidCredentialsError()

        # Update last login time
        user.last_login = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(user)

        preferences = await self.get_preferences(user.id)
        return to_user_response(user, preferences)

    # ============================================================
    # Profile
    # ============================================================
    async def get_user(self, user_id: UUID) -> User:
        """Load a user or raise NotFoundError."""
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("We couldn't find that account.")
        return user

    async def get_profile(self, user_id: UUID) -> UserResponse:
        user = await self.get_user(user_id)
        preferences = await self.get_preferences(user.id)
        return to_user_response(user, preferences)

    async def update_profile(self, update: ProfileUpdate) -> UserResponse:
        """
        Partially update name, e-mail, phone and photo.

        Only fields present in the request body are written.

        Raises:
            NotFoundError: Unknown user id
            DuplicateEmailError: The new e-mail belongs to another account
        """
        user = await self.get_user(update.user_id)

        changes = update.model_dump(exclude_unset=True, exclude={"user_id"})

        # name/email are required columns; an explicit null leaves them unchanged
        for required in ("name", "email"):
            if required in changes and changes[required] is None:
                changes.pop(required)

        new_email = changes.get("email")
        if new_email and new_email != user.email:
            owner = await self.user_repo.get_by_email(new_email)
            if owner is not None and owner.id != user.id:
                raise DuplicateEmailError()

        if changes:
            user = await self.user_repo.update_user(user.id, **changes)
            logger.info(f"Updated profile {user.id}: {sorted(changes)}")

        preferences = await self.get_preferences(user.id)
        return to_user_response(user, preferences)

    # ============================================================
    # Accessibility Preferences
    # ============================================================
    async def get_preferences(self, user_id: UUID) -> AccessibilityPreferences:
        """Stored preferences migrated to the current version."""
        row = await self.preference_repo.get_by_user(user_id)
        if row is None:
            return AccessibilityPreferences()
        return AccessibilityPreferences.from_stored(row.preferences)

    async def get_user_preferences(self, user_id: UUID) -> AccessibilityPreferences:
        """Like get_preferences, but the user must exist."""
        await self.get_user(user_id)
        return await self.get_preferences(user_id)

    async def update_preferences(
        self,
        user_id: UUID,
        preferences: AccessibilityPreferences,
    ) -> AccessibilityPreferences:
        """
        Replace the preferences mapping wholesale, creating the row if needed.

        Raises:
            NotFoundError: Unknown user id
        """
        await self.get_user(user_id)

        stored = preferences.model_copy(update={"version": PREFERENCES_VERSION})
        row = await self.preference_repo.upsert(
            user_id=user_id,
            preferences=stored.to_stored(),
            version=PREFERENCES_VERSION,
        )
        return AccessibilityPreferences.from_stored(row.preferences)
