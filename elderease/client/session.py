"""
Session Store

Client-side cache of "who is signed in right now", so a page can decide
between the signed-in and anonymous views without a server round trip.

The cache is not the source of truth. Writes made by this client refresh
it immediately; writes made elsewhere arrive as change notifications and
trigger ``reconcile()``. A missing or unreadable entry is treated as
absent, so a damaged cache degrades to the anonymous view and never
raises.
"""

import json
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional
from uuid import UUID

from pydantic import ValidationError

from elderease.client.storage import KeyValueStore
from elderease.schemas.auth import UserResponse
from elderease.schemas.preferences import AccessibilityPreferences

logger = logging.getLogger(__name__)

# ============================================================
# Keys (shared with every other tab / component)
# ============================================================
LOGGED_IN_KEY = "elderease_is_logged_in"
USER_KEY = "elderease_user"
USER_ID_KEY = "elderease_user_id"
PREFERENCES_KEY = "elderease_preferences"
ONBOARDING_KEY = "elderease_onboarding_complete"

SESSION_KEYS = (LOGGED_IN_KEY, USER_KEY, USER_ID_KEY, PREFERENCES_KEY, ONBOARDING_KEY)


@dataclass
class SessionSnapshot:
    """What navigation needs to render."""
    is_authenticated: bool = False
    user: Optional[UserResponse] = None

    @property
    def display_name(self) -> Optional[str]:
        return self.user.name if self.user else None


SessionSubscriber = Callable[[SessionSnapshot], Awaitable[None]]


class SessionStore:
    """Typed access to the session keys of a KeyValueStore."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.snapshot = SessionSnapshot()
        self._subscribers: List[SessionSubscriber] = []
        self._remove_listener = store.add_listener(self._on_change)

    # ------------------------------------------------------------
    # Raw reads (never raise)
    # ------------------------------------------------------------
    async def _read(self, key: str) -> Optional[str]:
        """A backend that can't be reached reads as an empty cache."""
        try:
            return await self.store.get(key)
        except Exception as e:
            logger.warning(f"Session cache read failed for {key!r}: {e!r}")
            return None

    async def _read_json(self, key: str):
        raw = await self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unreadable session value for {key!r}")
            return None

    # ------------------------------------------------------------
    # Session
    # ------------------------------------------------------------
    async def set_session(self, user: UserResponse) -> None:
        """Persist the signed-in user and refresh the in-memory snapshot."""
        await self.store.set(USER_KEY, user.model_dump_json(by_alias=True))
        await self.store.set(USER_ID_KEY, str(user.id))
        if user.preferences is not None:
            await self.store.set(PREFERENCES_KEY, json.dumps(user.preferences.to_stored()))
        await self.store.set(LOGGED_IN_KEY, json.dumps(True))
        await self.reconcile()

    async def clear_session(self) -> None:
        """Remove every session key (sign out)."""
        for key in SESSION_KEYS:
            await self.store.delete(key)
        await self.reconcile()

    async def current_user(self) -> Optional[UserResponse]:
        raw = await self._read(USER_KEY)
        if raw is None:
            return None
        try:
            return UserResponse.model_validate_json(raw)
        except (ValidationError, ValueError):
            logger.warning("Ignoring unreadable cached user")
            return None

    async def is_authenticated(self) -> bool:
        """Signed in means the flag is set and the user snapshot is readable."""
        if await self._read_json(LOGGED_IN_KEY) is not True:
            return False
        return await self.current_user() is not None

    async def user_id(self) -> Optional[UUID]:
        if not await self.is_authenticated():
            return None
        raw = await self._read(USER_ID_KEY)
        if not raw:
            return None
        # Stored bare; older caches hold it JSON-quoted
        try:
            return UUID(raw.strip().strip('"'))
        except (AttributeError, ValueError):
            logger.warning("Ignoring unreadable cached user id")
            return None

    # ------------------------------------------------------------
    # Preferences & onboarding
    # ------------------------------------------------------------
    async def preferences(self) -> AccessibilityPreferences:
        """Cached preferences, with defaults for anything missing."""
        return AccessibilityPreferences.from_stored(await self._read_json(PREFERENCES_KEY))

    async def set_preferences(self, preferences: AccessibilityPreferences) -> None:
        await self.store.set(PREFERENCES_KEY, json.dumps(preferences.to_stored()))

    async def onboarding_complete(self) -> bool:
        return await self._read_json(ONBOARDING_KEY) is True

    async def set_onboarding_complete(self, complete: bool = True) -> None:
        await self.store.set(ONBOARDING_KEY, json.dumps(bool(complete)))

    # ------------------------------------------------------------
    # Cross-tab reconciliation
    # ------------------------------------------------------------
    def subscribe(self, subscriber: SessionSubscriber) -> Callable[[], None]:
        """Call ``subscriber`` with the new snapshot after every reconcile."""
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    async def reconcile(self) -> SessionSnapshot:
        """Re-read the cache and notify subscribers."""
        authenticated = await self.is_authenticated()
        user = await self.current_user() if authenticated else None
        self.snapshot = SessionSnapshot(is_authenticated=authenticated, user=user)

        for subscriber in list(self._subscribers):
            try:
                await subscriber(self.snapshot)
            except Exception as e:
                logger.warning(f"Session subscriber failed: {e}")
        return self.snapshot

    async def _on_change(self, key: str) -> None:
        if key in (LOGGED_IN_KEY, USER_KEY, USER_ID_KEY):
            await self.reconcile()

    def close(self) -> None:
        """Stop listening for changes."""
        self._remove_listener()
