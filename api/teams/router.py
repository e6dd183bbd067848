"""
Team API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.ids import PathId
from dependencies import Store, get_store

from . import schemas, service

router = APIRouter()


@router.post("/teams", status_code=status.HTTP_201_CREATED)
async def create_team(
    request: schemas.TeamRequest,
    store: Store = Depends(get_store),
) -> dict:
    return await service.create_team(store, request)


@router.get("/teams")
async def list_teams(store: Store = Depends(get_store)) -> list[dict]:
    return await service.list_teams(store)


@router.get("/teams/{team_id}")
async def get_team(team_id: PathId, store: Store = Depends(get_store)) -> dict:
    return await service.get_team(store, team_id)


@router.put("/teams/{team_id}")
async def update_team(
    team_id: PathId,
    request: schemas.TeamRequest,
    store: Store = Depends(get_store),
) -> dict:
    return await service.update_team(store, team_id, request)


@router.delete("/teams/{team_id}")
async def delete_team(team_id: PathId, store: Store = Depends(get_store)) -> dict:
    """
    Members are left with a team_id that no longer resolves.
    """
    return await service.delete_team(store, team_id)
