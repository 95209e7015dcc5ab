from fastapi import APIRouter, Depends, HTTPException, status

from elderease.schemas.auth import (
    UserRegister,
    UserLogin,
    AuthResponse,
    ErrorResponse,
)
from elderease.services.auth_service import AuthService
from elderease.api.deps import get_auth_service
from elderease.core.exceptions import DuplicateEmailError, InvalidCredentialsError

# ============================================================
# Router Setup
# ============================================================

router = APIRouter(tags=["Authentication"])


# ============================================================
# Registration Endpoint
# ============================================================

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "User created successfully"},
        400: {"model": ErrorResponse, "description": "Missing fields or email already exists"},
    }
)
async def register(
    user_data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Register a new user account.

    Creates the user with default accessibility preferences and returns
    the user (never the password).
    """
    try:
        user = await auth_service.register(user_data)
    except DuplicateEmailError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    return AuthResponse(message="User created successfully", user=user)


# ============================================================
# Login Endpoint
# ============================================================
@router.post(
    "/login",
    response_model=AuthResponse,
    responses={
        200: {"description": "Login successful"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    }
)
async def login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Verify e-mail and password.

    - **email**: Registered email address (any case)
    - **password**: Account password

    The same 401 is returned for an unknown e-mail and a wrong password.
    """
    try:
        user = await auth_service.login(login_data)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message
        )
    return AuthResponse(message="Login successful", user=user)
