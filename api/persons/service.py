"""
Person business logic.

Scope:
- CRUD over persons
- team assignment (assign / remove)
- expanding each person's team from persons.team_id
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import asyncpg

from core.errors import InternalFailure, NotFoundError, ValidationError

from . import schemas

if TYPE_CHECKING:
    from dependencies import Store

logger = logging.getLogger(__name__)

PERSON_NOT_FOUND = "Person not found"
TEAM_NOT_FOUND = "Team not found"
EMAIL_IN_USE = "Email is already in use"


def _team_summary(team_row: dict) -> dict:
    return {
        "id": int(team_row["id"]),
        "name": str(team_row["name"]),
        "logo": str(team_row["logo"] or ""),
        "created_at": team_row["created_at"],
        "updated_at": team_row["updated_at"],
    }


def person_to_dict(person_row: dict, team_row: dict | None = None) -> dict:
    """
    Public shape of a person. `team` is only present when the team resolves.
    """
    team_id = person_row.get("team_id")
    out: dict[str, Any] = {
        "id": int(person_row["id"]),
        "name": str(person_row["name"]),
        "email": str(person_row["email"]),
        "picture": str(person_row["picture"] or ""),
        "team_id": int(team_id) if team_id is not None else None,
        "created_at": person_row["created_at"],
        "updated_at": person_row["updated_at"],
    }
    if team_row is not None:
        out["team"] = _team_summary(team_row)
    return out


async def _with_team(store: Store, person_row: dict) -> dict:
    team_id = person_row.get("team_id")
    team_row = await store.teams.get(int(team_id)) if team_id is not None else None
    return person_to_dict(person_row, team_row)


async def create_person(store: Store, payload: schemas.PersonRequest) -> dict:
    try:
        row = await store.persons.create(
            name=payload.name,
            email=payload.email,
            picture=payload.picture or "",
        )
    except asyncpg.UniqueViolationError as exc:
        raise ValidationError(EMAIL_IN_USE) from exc
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to create person")
        raise InternalFailure("Failed to create person") from exc
    return person_to_dict(row)


async def list_persons(store: Store) -> list[dict]:
    rows = await store.persons.list_all()
    team_ids = sorted({int(r["team_id"]) for r in rows if r.get("team_id") is not None})
    teams_by_id = {int(t["id"]): t for t in await store.teams.list_by_ids(team_ids)}
    return [
        person_to_dict(
            row,
            teams_by_id.get(int(row["team_id"])) if row.get("team_id") is not None else None,
        )
        for row in rows
    ]


async def get_person(store: Store, person_id: int) -> dict:
    row = await store.persons.get(person_id)
    if row is None:
        raise NotFoundError(PERSON_NOT_FOUND)
    return await _with_team(store, row)


async def update_person(store: Store, person_id: int, payload: schemas.PersonRequest) -> dict:
    if await store.persons.get(person_id) is None:
        raise NotFoundError(PERSON_NOT_FOUND)

    try:
        row = await store.persons.update(
            person_id,
            name=payload.name,
            email=payload.email,
            picture=payload.picture or "",
        )
    except asyncpg.UniqueViolationError as exc:
        raise ValidationError(EMAIL_IN_USE) from exc
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to update person %s", person_id)
        raise InternalFailure("Failed to update person") from exc

    # Deleted between the existence check and the update.
    if row is None:
        raise NotFoundError(PERSON_NOT_FOUND)
    return await _with_team(store, row)


async def delete_person(store: Store, person_id: int) -> dict:
    try:
        await store.persons.delete(person_id)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to delete person %s", person_id)
        raise InternalFailure("Failed to delete person") from exc
    return {"message": "Person deleted successfully"}


async def assign_to_team(store: Store, payload: schemas.AssignToTeamRequest) -> dict:
    if await store.persons.get(payload.person_id) is None:
        raise NotFoundError(PERSON_NOT_FOUND)
    if await store.teams.get(payload.team_id) is None:
        raise NotFoundError(TEAM_NOT_FOUND)

    try:
        saved = await store.persons.set_team(payload.person_id, payload.team_id)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to assign person %s to team %s", payload.person_id, payload.team_id)
        raise InternalFailure("Failed to assign person to team") from exc
    if saved is None:
        raise NotFoundError(PERSON_NOT_FOUND)

    # The assignment is already committed; a failing re-read still reports 500.
    try:
        person_row = await store.persons.get(payload.person_id)
        if person_row is None:
            raise InternalFailure("Failed to fetch updated person")
        return await _with_team(store, person_row)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to fetch person %s after assignment", payload.person_id)
        raise InternalFailure("Failed to fetch updated person") from exc


async def remove_from_team(store: Store, person_id: int) -> dict:
    if await store.persons.get(person_id) is None:
        raise NotFoundError(PERSON_NOT_FOUND)

    try:
        saved = await store.persons.set_team(person_id, None)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to remove person %s from team", person_id)
        raise InternalFailure("Failed to remove person from team") from exc
    if saved is None:
        raise NotFoundError(PERSON_NOT_FOUND)

    try:
        person_row = await store.persons.get(person_id)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to fetch person %s after removal", person_id)
        raise InternalFailure("Failed to fetch updated person") from exc
    if person_row is None:
        raise InternalFailure("Failed to fetch updated person")

    return {
        "message": "Person removed from team successfully",
        "person": person_to_dict(person_row),
    }
