"""
Store container and the FastAPI dependency that hands it to routes.

The lifespan in `main.py` builds one `Store` per process and puts it on
`app.state.store`. Tests replace `get_store` through
`app.dependency_overrides`.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from core.db import Database
from feedbacks.repository import FeedbackRepository
from persons.repository import PersonRepository
from teams.repository import TeamRepository


@dataclass
class Store:
    persons: PersonRepository
    teams: TeamRepository
    feedbacks: FeedbackRepository


def build_store(db: Database) -> Store:
    return Store(
        persons=PersonRepository(db),
        teams=TeamRepository(db),
        feedbacks=FeedbackRepository(db),
    )


def get_store(request: Request) -> Store:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store is not initialized. It is created in the app lifespan.")
    return store
