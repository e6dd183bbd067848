"""
Person persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database

_COLUMNS = "id, name, email, picture, team_id, created_at, updated_at"


class PersonRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create(self, *, name: str, email: str, picture: str) -> dict[str, Any]:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO persons (name, email, picture)
            VALUES ($1, $2, $3)
            RETURNING {_COLUMNS}
            """,
            name,
            email,
            picture,
        )
        if row is None:
            raise RuntimeError("Failed to create person.")
        return row

    async def list_all(self) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM persons
            ORDER BY id ASC
            """
        )

    async def get(self, person_id: int) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM persons
            WHERE id = $1
            """,
            person_id,
        )

    async def list_by_team_ids(self, team_ids: list[int]) -> list[dict[str, Any]]:
        """
        Members of the given teams, ordered by id.
        """
        if not team_ids:
            return []
        return await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM persons
            WHERE team_id = ANY($1::bigint[])
            ORDER BY id ASC
            """,
            team_ids,
        )

    async def update(
        self,
        person_id: int,
        *,
        name: str,
        email: str,
        picture: str,
    ) -> dict[str, Any] | None:
        """
        Overwrite name, email and picture. Returns None when the id is unknown.
        """
        return await self._db.fetch_one(
            f"""
            UPDATE persons
            SET name = $2,
                email = $3,
                picture = $4,
                updated_at = now()
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            person_id,
            name,
            email,
            picture,
        )

    async def set_team(self, person_id: int, team_id: int | None) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            f"""
            UPDATE persons
            SET team_id = $2,
                updated_at = now()
            WHERE id = $1
            RETURNING {_COLUMNS}
            """,
            person_id,
            team_id,
        )

    async def delete(self, person_id: int) -> None:
        await self._db.execute(
            """
            DELETE FROM persons
            WHERE id = $1
            """,
            person_id,
        )
