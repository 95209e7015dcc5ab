"""
Profile & Preferences Endpoints

Endpoints:
----------
- GET  /profile?userId=       - User with preferences
- PUT  /profile               - Partial update of name/email/phone/photo
- GET  /preferences?userId=   - Accessibility preferences
- PUT  /preferences           - Replace accessibility preferences
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from elderease.schemas.auth import (
    ProfileUpdate,
    ProfileResponse,
    PreferencesUpdate,
    PreferencesResponse,
    ErrorResponse,
)
from elderease.services.auth_service import AuthService
from elderease.api.deps import get_auth_service, get_user_id
from elderease.core.exceptions import DuplicateEmailError, NotFoundError

router = APIRouter(tags=["Profile"])


# ============================================================
# PROFILE
# ============================================================

@router.get(
    "/profile",
    response_model=ProfileResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing user id"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def get_profile(
    user_id: UUID = Depends(get_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        user = await auth_service.get_profile(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return ProfileResponse(user=user)


@router.put(
    "/profile",
    response_model=ProfileResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing user id or email already in use"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def update_profile(
    update_data: ProfileUpdate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Update only the fields present in the body. Passwords can't be changed here."""
    try:
        user = await auth_service.update_profile(update_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return ProfileResponse(message="Profile updated successfully", user=user)


# ============================================================
# ACCESSIBILITY PREFERENCES
# ============================================================

@router.get(
    "/preferences",
    response_model=PreferencesResponse,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_preferences(
    user_id: UUID = Depends(get_user_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    try:
        preferences = await auth_service.get_user_preferences(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return PreferencesResponse(preferences=preferences)


@router.put(
    "/preferences",
    response_model=PreferencesResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing user id or invalid option"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def update_preferences(
    update_data: PreferencesUpdate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Create or replace the user's preferences (upsert)."""
    try:
        preferences = await auth_service.update_preferences(
            update_data.user_id,
            update_data.preferences,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return PreferencesResponse(message="Preferences saved successfully", preferences=preferences)
