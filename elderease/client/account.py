"""
Account management for the client.

Every successful write goes through the Session Store before returning,
so navigation and other tabs never show a stale name, photo or
preference after this client changed it.
"""

import logging
from typing import Optional
from uuid import UUID

from elderease.client.api import ElderEaseClient
from elderease.client.session import SessionStore
from elderease.core.exceptions import NotAuthenticatedError
from elderease.schemas.auth import UserResponse
from elderease.schemas.preferences import AccessibilityPreferences

logger = logging.getLogger(__name__)


class AccountManager:
    """Register, sign in and out, and edit the signed-in account."""

    def __init__(self, api: ElderEaseClient, session: SessionStore):
        self.api = api
        self.session = session

    async def _require_user_id(self) -> UUID:
        user_id = await self.session.user_id()
        if user_id is None:
            raise NotAuthenticatedError()
        return user_id

    # ============================================================
    # Sign up / in / out
    # ============================================================
    async def register(
        self,
        email: str,
        name: str,
        password: str,
        phone: Optional[str] = None,
        birth_year: Optional[int] = None,
    ) -> UserResponse:
        user = await self.api.register(email, name, password, phone=phone, birth_year=birth_year)
        await self.session.set_session(user)
        logger.info(f"Signed in new account {user.id}")
        return user

    async def login(self, email: str, password: str) -> UserResponse:
        user = await self.api.login(email, password)
        await self.session.set_session(user)
        return user

    async def logout(self) -> None:
        await self.session.clear_session()

    # ============================================================
    # Profile
    # ============================================================
    async def refresh_profile(self) -> UserResponse:
        """Replace the cached user with the server's copy."""
        user = await self.api.get_profile(await self._require_user_id())
        await self.session.set_session(user)
        return user

    async def update_profile(self, **fields) -> UserResponse:
        """Partial update of name, email, phone and profile_photo."""
        user = await self.api.update_profile(await self._require_user_id(), **fields)
        await self.session.set_session(user)
        return user

    # ============================================================
    # Preferences & onboarding
    # ============================================================
    async def update_preferences(self, preferences: AccessibilityPreferences) -> AccessibilityPreferences:
        saved = await self.api.update_preferences(await self._require_user_id(), preferences)

        user = await self.session.current_user()
        if user is not None:
            await self.session.set_session(user.model_copy(update={"preferences": saved}))
        else:
            await self.session.set_preferences(saved)
        return saved

    async def complete_onboarding(self) -> None:
        await self.session.set_onboarding_complete(True)
