"""
Feedback persistence (raw SQL).
"""

from __future__ import annotations

from typing import Any

from core.db import Database

_COLUMNS = "id, content, target_type, target_id, target_name, created_at, updated_at"


class FeedbackRepository:
    def __init__(self, db: Database) -> None:
        self._db = db

    async def create(
        self,
        *,
        content: str,
        target_type: str,
        target_id: int,
        target_name: str,
    ) -> dict[str, Any]:
        row = await self._db.fetch_one(
            f"""
            INSERT INTO feedbacks (content, target_type, target_id, target_name)
            VALUES ($1, $2, $3, $4)
            RETURNING {_COLUMNS}
            """,
            content,
            target_type,
            target_id,
            target_name,
        )
        if row is None:
            raise RuntimeError("Failed to create feedback.")
        return row

    async def list_all(self) -> list[dict[str, Any]]:
        """
        Newest first.
        """
        return await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM feedbacks
            ORDER BY created_at DESC, id DESC
            """
        )

    async def get(self, feedback_id: int) -> dict[str, Any] | None:
        return await self._db.fetch_one(
            f"""
            SELECT {_COLUMNS}
            FROM feedbacks
            WHERE id = $1
            """,
            feedback_id,
        )

    async def list_by_target(self, *, target_type: str, target_id: int) -> list[dict[str, Any]]:
        return await self._db.fetch_all(
            f"""
            SELECT {_COLUMNS}
            FROM feedbacks
            WHERE target_type = $1
              AND target_id = $2
            ORDER BY created_at DESC, id DESC
            """,
            target_type,
            target_id,
        )

    async def delete(self, feedback_id: int) -> None:
        await self._db.execute(
            """
            DELETE FROM feedbacks
            WHERE id = $1
            """,
            feedback_id,
        )
