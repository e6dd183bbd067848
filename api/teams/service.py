"""
Team business logic. Members are every person whose team_id points here.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import asyncpg

from core.errors import InternalFailure, NotFoundError
from persons.service import person_to_dict

from . import schemas

if TYPE_CHECKING:
    from dependencies import Store

logger = logging.getLogger(__name__)

TEAM_NOT_FOUND = "Team not found"


def team_to_dict(team_row: dict, member_rows: list[dict]) -> dict:
    return {
        "id": int(team_row["id"]),
        "name": str(team_row["name"]),
        "logo": str(team_row["logo"] or ""),
        "members": [person_to_dict(m) for m in member_rows],
        "created_at": team_row["created_at"],
        "updated_at": team_row["updated_at"],
    }


async def _with_members(store: Store, team_row: dict) -> dict:
    members = await store.persons.list_by_team_ids([int(team_row["id"])])
    return team_to_dict(team_row, members)


async def create_team(store: Store, payload: schemas.TeamRequest) -> dict:
    try:
        row = await store.teams.create(name=payload.name, logo=payload.logo or "")
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to create team")
        raise InternalFailure("Failed to create team") from exc
    return team_to_dict(row, [])


async def list_teams(store: Store) -> list[dict]:
    rows = await store.teams.list_all()
    members = await store.persons.list_by_team_ids([int(r["id"]) for r in rows])

    members_by_team: dict[int, list[dict]] = {}
    for member in members:
        members_by_team.setdefault(int(member["team_id"]), []).append(member)

    return [team_to_dict(row, members_by_team.get(int(row["id"]), [])) for row in rows]


async def get_team(store: Store, team_id: int) -> dict:
    row = await store.teams.get(team_id)
    if row is None:
        raise NotFoundError(TEAM_NOT_FOUND)
    return await _with_members(store, row)


async def update_team(store: Store, team_id: int, payload: schemas.TeamRequest) -> dict:
    if await store.teams.get(team_id) is None:
        raise NotFoundError(TEAM_NOT_FOUND)

    try:
        row = await store.teams.update(team_id, name=payload.name, logo=payload.logo or "")
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to update team %s", team_id)
        raise InternalFailure("Failed to update team") from exc
    if row is None:
        raise NotFoundError(TEAM_NOT_FOUND)
    return await _with_members(store, row)


async def delete_team(store: Store, team_id: int) -> dict:
    try:
        await store.teams.delete(team_id)
    except asyncpg.PostgresError as exc:
        logger.exception("Failed to delete team %s", team_id)
        raise InternalFailure("Failed to delete team") from exc
    return {"message": "Team deleted successfully"}
