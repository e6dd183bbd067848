"""
Versioned schema migrations.

Each migration has a stable id and a list of SQL statements. Applied ids are
recorded in `schema_migrations`; `apply_migrations` runs the pending ones in
order, each inside its own transaction, while holding an advisory lock so
concurrent starters do not race.

No foreign key from persons.team_id to teams.id: deleting a team leaves its
members' team_id in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.db import Database

logger = logging.getLogger(__name__)

# Arbitrary key shared by every process running migrations on this database.
ADVISORY_LOCK_KEY = 72_413_001


@dataclass(frozen=True)
class Migration:
    id: str
    statements: tuple[str, ...]


MIGRATIONS: tuple[Migration, ...] = (
    Migration(
        id="0001_create_teams",
        statements=(
            """
            CREATE TABLE teams (
              id BIGSERIAL PRIMARY KEY,
              name TEXT NOT NULL,
              logo TEXT NOT NULL DEFAULT '',
              created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """,
        ),
    ),
    Migration(
        id="0002_create_persons",
        statements=(
            """
            CREATE TABLE persons (
              id BIGSERIAL PRIMARY KEY,
              name TEXT NOT NULL,
              email TEXT NOT NULL,
              picture TEXT NOT NULL DEFAULT '',
              team_id BIGINT NULL,
              created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
              CONSTRAINT persons_email_key UNIQUE (email)
            )
            """,
            "CREATE INDEX persons_team_id_idx ON persons (team_id)",
        ),
    ),
    Migration(
        id="0003_create_feedbacks",
        statements=(
            """
            CREATE TABLE feedbacks (
              id BIGSERIAL PRIMARY KEY,
              content TEXT NOT NULL,
              target_type TEXT NOT NULL,
              target_id BIGINT NOT NULL,
              target_name TEXT NOT NULL,
              created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
              updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
              CONSTRAINT feedbacks_target_type_check CHECK (target_type IN ('person', 'team'))
            )
            """,
            "CREATE INDEX feedbacks_target_idx ON feedbacks (target_type, target_id)",
            "CREATE INDEX feedbacks_created_at_idx ON feedbacks (created_at DESC)",
        ),
    ),
)

_CREATE_STATE_TABLE = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  id TEXT PRIMARY KEY,
  applied_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


async def _applied_ids(conn) -> set[str]:
    rows = await conn.fetch("SELECT id FROM schema_migrations")
    return {str(r["id"]) for r in rows}


async def list_migrations(
    db: Database,
    migrations: tuple[Migration, ...] = MIGRATIONS,
) -> list[tuple[str, bool]]:
    """
    Return (migration id, applied?) for every known migration, in order.
    """
    async with db.connection() as conn:
        await conn.execute(_CREATE_STATE_TABLE)
        applied = await _applied_ids(conn)
    return [(m.id, m.id in applied) for m in migrations]


async def apply_migrations(
    db: Database,
    migrations: tuple[Migration, ...] = MIGRATIONS,
) -> list[str]:
    """
    Apply pending migrations in order and return the ids that were applied.
    """
    applied_now: list[str] = []
    async with db.connection() as conn:
        await conn.execute(_CREATE_STATE_TABLE)
        await conn.execute("SELECT pg_advisory_lock($1)", ADVISORY_LOCK_KEY)
        try:
            applied = await _applied_ids(conn)
            for migration in migrations:
                if migration.id in applied:
                    continue
                async with conn.transaction():
                    for statement in migration.statements:
                        await conn.execute(statement)
                    await conn.execute(
                        "INSERT INTO schema_migrations (id) VALUES ($1)",
                        migration.id,
                    )
                logger.info("Applied migration %s", migration.id)
                applied_now.append(migration.id)
        finally:
            await conn.execute("SELECT pg_advisory_unlock($1)", ADVISORY_LOCK_KEY)

    if not applied_now:
        logger.info("Schema is up to date")
    return applied_now
