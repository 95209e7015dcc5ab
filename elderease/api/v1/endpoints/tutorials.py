"""
Tutorial Catalog Endpoints

Endpoints:
----------
- GET  /tutorials        - Filtered catalog listing
- GET  /tutorials/{id}   - One tutorial with its steps

Both accept an optional ``userId`` to merge in that user's progress and
bookmark flag.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from elderease.schemas.auth import ErrorResponse
from elderease.schemas.tutorial import (
    TutorialFilters,
    TutorialListResponse,
    TutorialResponse,
)
from elderease.services.tutorial_service import TutorialService
from elderease.api.deps import get_tutorial_service
from elderease.core.exceptions import NotFoundError

router = APIRouter(tags=["Tutorials"])


@router.get(
    "",
    response_model=TutorialListResponse,
    summary="List tutorials",
)
async def list_tutorials(
    search: Optional[str] = Query(None, description="Matches title or description"),
    category: Optional[str] = Query(None, description='Category tag, or "all"'),
    difficulty: Optional[str] = Query(None, description='beginner / intermediate / advanced, or "all"'),
    platform: Optional[str] = Query(None, description='Platform tag, or "all"'),
    user_id: Optional[UUID] = Query(None, alias="userId"),
    service: TutorialService = Depends(get_tutorial_service),
):
    tutorials = await service.list_tutorials(
        TutorialFilters(
            search=search,
            category=category,
            difficulty=difficulty,
            platform=platform,
            user_id=user_id,
        )
    )
    return TutorialListResponse(tutorials=tutorials, total=len(tutorials))


@router.get(
    "/{tutorial_id}",
    response_model=TutorialResponse,
    responses={404: {"model": ErrorResponse, "description": "Tutorial not found"}},
)
async def get_tutorial(
    tutorial_id: str,
    user_id: Optional[UUID] = Query(None, alias="userId"),
    service: TutorialService = Depends(get_tutorial_service),
):
    try:
        tutorial = await service.get_detail(tutorial_id, user_id=user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return TutorialResponse(tutorial=tutorial)
