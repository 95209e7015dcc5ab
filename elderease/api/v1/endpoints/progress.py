"""
Progress Endpoints

Endpoints:
----------
- PUT  /progress                  - Advance a step or mark complete
- GET  /progress?userId=          - All progress records of a user
- GET  /progress/summary?userId=  - Dashboard statistics
"""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from elderease.schemas.auth import ErrorResponse
from elderease.schemas.progress import (
    ProgressUpdate,
    ProgressResponse,
    ProgressListResponse,
    ProgressSummary,
)
from elderease.services.progress_service import ProgressService
from elderease.api.deps import get_progress_service, get_user_id
from elderease.core.exceptions import InputValidationError, NotFoundError

router = APIRouter(tags=["Progress"])


# ============================================================
# WRITE
# ============================================================

@router.put(
    "",
    response_model=ProgressResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing userId/tutorialId or bad step"},
        404: {"model": ErrorResponse, "description": "User or tutorial not found"},
    },
)
async def update_progress(
    update_data: ProgressUpdate,
    service: ProgressService = Depends(get_progress_service),
):
    """
    ``completed: true`` marks the tutorial complete; otherwise
    ``currentStep`` is stored as a monotonic max. Repeating a request is safe.
    """
    try:
        if update_data.completed:
            progress = await service.mark_complete(update_data.user_id, update_data.tutorial_id)
        else:
            progress = await service.advance_step(
                update_data.user_id,
                update_data.tutorial_id,
                update_data.current_step,
            )
    except InputValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return ProgressResponse(progress=progress)


# ============================================================
# READ
# ============================================================

@router.get("", response_model=ProgressListResponse)
async def list_progress(
    user_id: UUID = Depends(get_user_id),
    service: ProgressService = Depends(get_progress_service),
):
    try:
        records = await service.list_for_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    return ProgressListResponse(progress=records)


@router.get("/summary", response_model=ProgressSummary)
async def progress_summary(
    user_id: UUID = Depends(get_user_id),
    service: ProgressService = Depends(get_progress_service),
):
    try:
        return await service.summary(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
