"""
Person API endpoints, including team assignment.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from core.ids import PathId
from dependencies import Store, get_store

from . import schemas, service

router = APIRouter()


@router.post("/persons", status_code=status.HTTP_201_CREATED)
async def create_person(
    request: schemas.PersonRequest,
    store: Store = Depends(get_store),
) -> dict:
    return await service.create_person(store, request)


@router.get("/persons")
async def list_persons(store: Store = Depends(get_store)) -> list[dict]:
    return await service.list_persons(store)


@router.get("/persons/{person_id}")
async def get_person(person_id: PathId, store: Store = Depends(get_store)) -> dict:
    return await service.get_person(store, person_id)


@router.put("/persons/{person_id}")
async def update_person(
    person_id: PathId,
    request: schemas.PersonRequest,
    store: Store = Depends(get_store),
) -> dict:
    """
    Full overwrite of name, email and picture.
    """
    return await service.update_person(store, person_id, request)


@router.delete("/persons/{person_id}")
async def delete_person(person_id: PathId, store: Store = Depends(get_store)) -> dict:
    return await service.delete_person(store, person_id)


@router.post("/persons/{person_id}/remove-from-team")
async def remove_from_team(person_id: PathId, store: Store = Depends(get_store)) -> dict:
    return await service.remove_from_team(store, person_id)


@router.post("/assign")
async def assign_to_team(
    request: schemas.AssignToTeamRequest,
    store: Store = Depends(get_store),
) -> dict:
    return await service.assign_to_team(store, request)
