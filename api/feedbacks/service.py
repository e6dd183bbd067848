"""
Feedback business logic.

The target's name is copied onto the feedback row at creation time and is
never refreshed afterwards; renaming a person or team leaves existing
feedback untouched.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import asyncpg

from core.errors import InternalFailure, NotFoundError, ValidationError
from core.ids import in_id_range

from . import schemas

if TYPE_CHECKING:
    from dependencies import Store

logger = logging.getLogger(__name__)

FEEDBACK_NOT_FOUND = "Feedback not found"


def feedback_to_dict(row: dict) -> dict:
    return {
        "id": int(row["id"]),
        "content": str(row["content"]),
        "target_type": str(row["target_type"]),
        "target_id": int(row["target_id"]),
        "target_name": str(row["target_name"]),
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
    }


async def resolve_target_name(store: Store, target_type: str, target_id: int) -> str:
    """
    Look up the feedback target and return its current name.
    """
    if target_type == "person":
        person = await store.persons.get(target_id)
        if person is None:
            raise NotFoundError("Person not found")
        return str(person["name"])
    if target_type == "team":
        team = await store.teams.get(target_id)
        if team is None:
            raise NotFoundError("Team not found")
        return str(team["name"])
    raise ValidationError(f"Unknown target_type: {target_type}")


async def create_feedback(store: Store, payload: schemas.FeedbackRequest) -> dict:
    target_name = await resolve_target_name(store, payload.target_type, payload.target_id)
    try:
        row = await store.feedbacks.create(
            content=payload.content,
            target_type=payload.target_type,
            target_id=payload.target_id,
            target_name=target_name,
        )
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to create feedback")
        raise InternalFailure("Failed to create feedback") from exc
    return feedback_to_dict(row)


async def list_feedbacks(store: Store) -> list[dict]:
    return [feedback_to_dict(r) for r in await store.feedbacks.list_all()]


async def get_feedback(store: Store, feedback_id: int) -> dict:
    row = await store.feedbacks.get(feedback_id)
    if row is None:
        raise NotFoundError(FEEDBACK_NOT_FOUND)
    return feedback_to_dict(row)


def parse_target_query(target_type: str | None, target_id: str | None) -> tuple[str, int]:
    target_type = (target_type or "").strip()
    raw_id = (target_id or "").strip()
    if not target_type or not raw_id:
        raise ValidationError("target_type and target_id are required")
    try:
        parsed_id = int(raw_id)
    except ValueError as exc:
        raise ValidationError("Invalid target_id") from exc
    if not in_id_range(parsed_id):
        raise ValidationError("Invalid target_id")
    return target_type, parsed_id


async def list_feedbacks_by_target(
    store: Store,
    *,
    target_type: str | None,
    target_id: str | None,
) -> list[dict]:
    parsed_type, parsed_id = parse_target_query(target_type, target_id)
    rows = await store.feedbacks.list_by_target(target_type=parsed_type, target_id=parsed_id)
    return [feedback_to_dict(r) for r in rows]


async def delete_feedback(store: Store, feedback_id: int) -> dict:
    try:
        await store.feedbacks.delete(feedback_id)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to delete feedback %s", feedback_id)
        raise InternalFailure("Failed to delete feedback") from exc
    return {"message": "Feedback deleted successfully"}
