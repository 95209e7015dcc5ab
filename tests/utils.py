"""Utility helpers for test factories."""

from datetime import datetime, timezone
from uuid import uuid4

from elderease.client.storage import KeyValueStore
from elderease.schemas.auth import UserRegister, UserResponse
from elderease.schemas.preferences import AccessibilityPreferences
from elderease.schemas.tutorial import TutorialDetail, TutorialStepResponse
from elderease.services.auth_service import AuthService


def register_payload(**overrides) -> dict:
    """camelCase body for POST /auth/register."""
    payload = {
        "email": "alice@example.com",
        "name": "Alice Johnson",
        "password": "pw123456",
        "phone": "555-0100",
        "birthYear": 1950,
    }
    payload.update(overrides)
    return payload


async def create_user(db, **kwargs) -> UserResponse:
    data = register_payload()
    data.update(kwargs)
    return await AuthService(db).register(UserRegister.model_validate(data))


def make_user_response(**overrides) -> UserResponse:
    """A user snapshot as the client would cache it, without touching the server."""
    defaults = {
        "id": uuid4(),
        "email": "bob@example.com",
        "name": "Bob Smith",
        "created_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
        "preferences": AccessibilityPreferences(),
    }
    defaults.update(overrides)
    return UserResponse(**defaults)


def make_tutorial_detail(tutorial_id: str = "5", step_count: int = 3, **overrides) -> TutorialDetail:
    defaults = {
        "id": tutorial_id,
        "title": "Watching Videos on YouTube",
        "description": "Search, play and share videos",
        "category": "youtube",
        "platform": "youtube",
        "difficulty": "beginner",
        "estimated_time": 12,
        "step_count": step_count,
        "steps": [
            TutorialStepResponse(index=i, title=f"Step {i + 1}", instruction="Do this", duration=2)
            for i in range(step_count)
        ],
    }
    defaults.update(overrides)
    return TutorialDetail(**defaults)


class UnreachableStore(KeyValueStore):
    """Session cache whose every call fails like a dropped connection."""

    async def get(self, key):
        raise ConnectionError("cache backend unavailable")

    async def set(self, key, value):
        raise ConnectionError("cache backend unavailable")

    async def delete(self, key):
        raise ConnectionError("cache backend unavailable")
