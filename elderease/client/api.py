"""
ElderEase HTTP Client

Async wrapper around the ElderEase API. Responses are parsed into the
same Pydantic schemas the server uses, and failures come back as the
shared typed errors:

- 400 -> InputValidationError (DuplicateEmailError for a taken e-mail)
- 401 -> InvalidCredentialsError
- 404 -> NotFoundError
- 5xx, timeouts, connection errors -> TransientIOError
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

import httpx

from elderease.core.config import settings
from elderease.core.exceptions import (
    DuplicateEmailError,
    ElderEaseError,
    InputValidationError,
    InvalidCredentialsError,
    NotFoundError,
    TransientIOError,
)
from elderease.schemas.auth import UserResponse
from elderease.schemas.preferences import AccessibilityPreferences
from elderease.schemas.progress import ProgressRecordResponse, ProgressSummary
from elderease.schemas.tutorial import TutorialDetail, TutorialSummary

logger = logging.getLogger(__name__)


def _detail(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return None


def error_for_response(response: httpx.Response) -> ElderEaseError:
    """Translate an unsuccessful response into a typed error."""
    status = response.status_code
    detail = _detail(response)

    if status >= 500:
        return TransientIOError()
    if status == 400:
        if detail == DuplicateEmailError.default_message:
            return DuplicateEmailError()
        return InputValidationError(detail)
    if status == 401:
        return InvalidCredentialsError()
    if status == 404:
        return NotFoundError(detail)
    return ElderEaseError(detail)


class ElderEaseClient:
    """
    One client per app instance.

    Usage:
        async with ElderEaseClient() as api:
            user = await api.login("alice@example.com", "pw123456")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        self.http = http or httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.HTTP_TIMEOUT_SECONDS,
            transport=transport,
        )

    async def __aenter__(self) -> "ElderEaseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self.http.aclose()

    # ============================================================
    # Transport
    # ============================================================
    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if params:
            params = {k: str(v) for k, v in params.items() if v is not None}
        try:
            response = await self.http.request(method, path, json=json, params=params or None)
        except httpx.TransportError as e:
            logger.warning(f"{method} {path} failed: {e!r}")
            raise TransientIOError() from e

        if response.is_success:
            return response.json()

        error = error_for_response(response)
        log = logger.warning if isinstance(error, TransientIOError) else logger.info
        log(f"{method} {path} -> {response.status_code}: {error.message}")
        raise error

    # ============================================================
    # Auth & Profile
    # ============================================================
    async def register(
        self,
        email: str,
        name: str,
        password: str,
        phone: Optional[str] = None,
        birth_year: Optional[int] = None,
    ) -> UserResponse:
        body = {"email": email, "name": name, "password": password}
        if phone:
            body["phone"] = phone
        if birth_year is not None:
            body["birthYear"] = birth_year
        data = await self._request("POST", "/auth/register", json=body)
        return UserResponse.model_validate(data["user"])

    async def login(self, email: str, password: str) -> UserResponse:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        return UserResponse.model_validate(data["user"])

    async def get_profile(self, user_id: UUID) -> UserResponse:
        data = await self._request("GET", "/profile", params={"userId": user_id})
        return UserResponse.model_validate(data["user"])

    async def update_profile(self, user_id: UUID, **fields) -> UserResponse:
        """
        Partial update. Accepts name, email, phone and profile_photo;
        only the keyword arguments given are sent.
        """
        allowed = {"name": "name", "email": "email", "phone": "phone", "profile_photo": "profilePhoto"}
        unknown = set(fields) - set(allowed)
        if unknown:
            raise InputValidationError(f"Can't update {', '.join(sorted(unknown))} here.")

        body = {"userId": str(user_id)}
        body.update({allowed[k]: v for k, v in fields.items()})
        data = await self._request("PUT", "/profile", json=body)
        return UserResponse.model_validate(data["user"])

    async def get_preferences(self, user_id: UUID) -> AccessibilityPreferences:
        data = await self._request("GET", "/preferences", params={"userId": user_id})
        return AccessibilityPreferences.from_stored(data.get("preferences"))

    async def update_preferences(
        self,
        user_id: UUID,
        preferences: AccessibilityPreferences,
    ) -> AccessibilityPreferences:
        data = await self._request(
            "PUT",
            "/preferences",
            json={"userId": str(user_id), "preferences": preferences.to_stored()},
        )
        return AccessibilityPreferences.from_stored(data.get("preferences"))

    # ============================================================
    # Catalog
    # ============================================================
    async def list_tutorials(
        self,
        user_id: Optional[UUID] = None,
        search: Optional[str] = None,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> List[TutorialSummary]:
        data = await self._request(
            "GET",
            "/tutorials",
            params={
                "userId": user_id,
                "search": search,
                "category": category,
                "difficulty": difficulty,
                "platform": platform,
            },
        )
        return [TutorialSummary.model_validate(t) for t in data["tutorials"]]

    async def get_tutorial(self, tutorial_id: str, user_id: Optional[UUID] = None) -> TutorialDetail:
        data = await self._request("GET", f"/tutorials/{tutorial_id}", params={"userId": user_id})
        return TutorialDetail.model_validate(data["tutorial"])

    # ============================================================
    # Progress
    # ============================================================
    async def update_progress(self, user_id: UUID, tutorial_id: str, current_step: int) -> ProgressRecordResponse:
        data = await self._request(
            "PUT",
            "/progress",
            json={"userId": str(user_id), "tutorialId": tutorial_id, "currentStep": current_step},
        )
        return ProgressRecordResponse.model_validate(data["progress"])

    async def mark_complete(self, user_id: UUID, tutorial_id: str) -> ProgressRecordResponse:
        data = await self._request(
            "PUT",
            "/progress",
            json={"userId": str(user_id), "tutorialId": tutorial_id, "completed": True},
        )
        return ProgressRecordResponse.model_validate(data["progress"])

    async def list_progress(self, user_id: UUID) -> List[ProgressRecordResponse]:
        data = await self._request("GET", "/progress", params={"userId": user_id})
        return [ProgressRecordResponse.model_validate(p) for p in data["progress"]]

    async def progress_summary(self, user_id: UUID) -> ProgressSummary:
        data = await self._request("GET", "/progress/summary", params={"userId": user_id})
        return ProgressSummary.model_validate(data)

    # ============================================================
    # Bookmarks
    # ============================================================
    async def add_bookmark(self, user_id: UUID, tutorial_id: str) -> bool:
        data = await self._request("POST", "/bookmarks", json={"userId": str(user_id), "tutorialId": tutorial_id})
        return bool(data["bookmarked"])

    async def remove_bookmark(self, user_id: UUID, tutorial_id: str) -> bool:
        data = await self._request("DELETE", "/bookmarks", json={"userId": str(user_id), "tutorialId": tutorial_id})
        return bool(data["bookmarked"])

    async def list_bookmarks(self, user_id: UUID) -> List[str]:
        data = await self._request("GET", "/bookmarks", params={"userId": user_id})
        return list(data["tutorialIds"])
