from fastapi import APIRouter
from elderease.api.v1.endpoints import auth, profile, tutorials, progress, bookmarks

# ============================================================
# Main API v1 Router
# ============================================================

api_router = APIRouter()

# Include auth routes at /auth
api_router.include_router(
    auth.router,
    prefix="/auth"
)

# Profile and preferences routes
api_router.include_router(
    profile.router,
    prefix=""  # Routes define their own paths (/profile, /preferences)
)

# Tutorial catalog routes
api_router.include_router(
    tutorials.router,
    prefix="/tutorials"
)

# Progress routes
api_router.include_router(
    progress.router,
    prefix="/progress"
)

# Bookmark routes
api_router.include_router(
    bookmarks.router,
    prefix="/bookmarks"
)
