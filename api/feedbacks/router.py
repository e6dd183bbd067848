"""
Feedback API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from core.ids import PathId
from dependencies import Store, get_store

from . import schemas, service

router = APIRouter()


@router.post("/feedbacks", status_code=status.HTTP_201_CREATED)
async def create_feedback(
    request: schemas.FeedbackRequest,
    store: Store = Depends(get_store),
) -> dict:
    return await service.create_feedback(store, request)


@router.get("/feedbacks")
async def list_feedbacks(store: Store = Depends(get_store)) -> list[dict]:
    """
    All feedback, newest first.
    """
    return await service.list_feedbacks(store)


# Registered before /feedbacks/{feedback_id} so "by-target" is not parsed as an id.
@router.get("/feedbacks/by-target")
async def list_feedbacks_by_target(
    target_type: str | None = Query(default=None, max_length=50),
    target_id: str | None = Query(default=None, max_length=32),
    store: Store = Depends(get_store),
) -> list[dict]:
    return await service.list_feedbacks_by_target(
        store,
        target_type=target_type,
        target_id=target_id,
    )


@router.get("/feedbacks/{feedback_id}")
async def get_feedback(feedback_id: PathId, store: Store = Depends(get_store)) -> dict:
    return await service.get_feedback(store, feedback_id)


@router.delete("/feedbacks/{feedback_id}")
async def delete_feedback(feedback_id: PathId, store: Store = Depends(get_store)) -> dict:
    return await service.delete_feedback(store, feedback_id)
