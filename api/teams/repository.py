"""
Team persistence (raw SQL). Members live on persons.team_id; see
`persons.repository.PersonRepository.list_by_team_ids`.
"""

from __future__ import annotations

from typing import Any

from core.db import Database

_COLUMNS = "id, name, logo, created_at, updated_at"


class TeamRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create(self, *, name: str, logo: str) -> dict[str, Any]:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO teams (name, logo)
            VALUES ($1, $2)
            RETURNING {_COLUMNS}
            """,
            name,
            logo,
        )
        if row is None:
            raise RuntimeError("Failed to create team.")
        return row

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM teams
            ORDER BY id ASC
            """
        )

    async def get(self, team_id: int) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM teams
            WHERE id = $1
            """,
            team_id,
        )

    async def list_by_ids(self, team_ids: list[int]) -> list[dict[str, Any]]:
        if not team_ids:
            return []
        return await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM teams
            WHERE id = ANY($1::bigint[])
            """,
            team_ids,
        )

    async def update(self, team_id: int, *, name: str, logo: str) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            f"""
            UPDATE teams
            SET name = $2,
                logo = $3,
                updated_at = now()
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            team_id,
            name,
            logo,
        )

    async def delete(self, team_id: int) -> None:
        # Members keep their team_id.
        await self._db.execute(
            """
            DELETE FROM teams
            WHERE id = $1
            """,
            team_id,
        )
