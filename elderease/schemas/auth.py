from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BeforeValidator, ConfigDict, EmailStr, Field, field_validator

from elderease.schemas.base import CamelModel
from elderease.schemas.preferences import AccessibilityPreferences


def _normalize_email(v):
    if isinstance(v, str):
        return v.strip().lower()
    return v


# Lower-cased so lookups and the uniqueness rule ignore case
NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]


def _collapse_spaces(v: str) -> str:
    return " ".join(v.split())


# ============================================================
# Request Schemas (What client sends)
# ============================================================

class UserRegister(CamelModel):
    """Schema for user registration request"""

    email: NormalizedEmail
    name: str = Field(min_length=1, max_length=100)
    password: str = Field(
        min_length=6,
        max_length=128,
        description="Password must be 6-128 characters"
    )
    phone: Optional[str] = Field(default=None, max_length=30)
    birth_year: Optional[int] = Field(default=None, ge=1900, le=2100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Remove extra whitespace from name"""
        v = _collapse_spaces(v)
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("birth_year", mode="before")
    @classmethod
    def blank_birth_year(cls, v):
        # Forms send "" when the field is left empty
        if isinstance(v, str) and not v.strip():
            return None
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "alice@example.com",
                "name": "Alice Johnson",
                "password": "pw123456",
                "phone": "555-0100",
                "birthYear": 1950,
            }
        },
    )


class UserLogin(CamelModel):
    """Schema for user login request"""

    email: NormalizedEmail
    password: str = Field(min_length=1)


class ProfileUpdate(CamelModel):
    """
    Partial profile update.

    Only the fields present in the request are changed. The password
    cannot be changed through this schema.
    """

    user_id: UUID
    name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[NormalizedEmail] = None
    phone: Optional[str] = Field(default=None, max_length=30)
    profile_photo: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = _collapse_spaces(v)
        if not v:
            raise ValueError("Name cannot be empty")
        return v


class PreferencesUpdate(CamelModel):
    """Replace a user's accessibility preferences."""

    user_id: UUID
    preferences: AccessibilityPreferences = Field(default_factory=AccessibilityPreferences)


# ============================================================
# Response Schemas (What server sends back)
# ============================================================

class MessageResponse(CamelModel):
    """Schema for simple message responses"""
    message: str
    success: bool = True


class UserResponse(CamelModel):
    """Schema for user data in responses (NO password!)"""

    id: UUID
    email: str
    name: str
    phone: Optional[str] = None
    birth_year: Optional[int] = None
    profile_photo: Optional[str] = None
    created_at: datetime
    last_login: Optional[datetime] = None
    preferences: Optional[AccessibilityPreferences] = None


class AuthResponse(CamelModel):
    """Returned by register and login."""
    message: str
    user: UserResponse


class ProfileResponse(CamelModel):
    message: Optional[str] = None
    user: UserResponse


class PreferencesResponse(CamelModel):
    message: Optional[str] = None
    preferences: AccessibilityPreferences


# ============================================================
# Error Schemas
# ============================================================

class ErrorResponse(CamelModel):
    """Schema for error responses"""

    detail: str
