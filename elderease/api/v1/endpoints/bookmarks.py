"""
Bookmark Endpoints

Endpoints:
----------
- POST    /bookmarks          - Bookmark a tutorial (idempotent)
- DELETE  /bookmarks          - Remove a bookmark (idempotent)
- GET     /bookmarks?userId=  - Bookmarked tutorial ids
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from elderease.schemas.auth import ErrorResponse
from elderease.schemas.progress import (
    BookmarkRequest,
    BookmarkResponse,
    BookmarkListResponse,
)
from elderease.services.bookmark_service import BookmarkService
from elderease.api.deps import get_bookmark_service, get_user_id
from elderease.core.exceptions import NotFoundError

router = APIRouter(tags=["Bookmarks"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "User or tutorial not found"}}


@router.post("", response_model=BookmarkResponse, responses=_NOT_FOUND)
async def add_bookmark(
    request: BookmarkRequest,
    service: BookmarkService = Depends(get_bookmark_service),
):
    try:
        state = await service.add(request.user_id, request.tutorial_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return BookmarkResponse(tutorial_id=request.tutorial_id, bookmarked=state)


@router.delete("", response_model=BookmarkResponse, responses=_NOT_FOUND)
async def remove_bookmark(
    request: BookmarkRequest,
    service: BookmarkService = Depends(get_bookmark_service),
):
    try:
        state = await service.remove(request.user_id, request.tutorial_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return BookmarkResponse(tutorial_id=request.tutorial_id, bookmarked=state)


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(
    user_id: UUID = Depends(get_user_id),
    service: BookmarkService = Depends(get_bookmark_service),
):
    try:
        tutorial_ids = await service.list_for_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return BookmarkListResponse(tutorial_ids=tutorial_ids)
