"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns the connection pool. The FastAPI lifespan constructs one,
connects it on startup and closes it on shutdown (see `api/main.py`); it is
then handed to the repositories instead of living in a module global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

logger = logging.getLogger(__name__)


class Database:
    def __init__(
        self,
        dsn: str,
        *,
        min_size: int = 1,
        max_size: int = 5,
        command_timeout: float = 30,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._pool: asyncpg.Pool | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self, *, attempts: int = 10, delay_seconds: float = 2.0) -> None:
        """
        Create the pool, retrying a fixed number of times with a fixed delay.

        The last connection error is re-raised once the attempts run out.
        """
        if self._pool is not None:
            return None

        attempts = max(1, attempts)
        for attempt in range(1, attempts + 1):
            try:
                self._pool = await asyncpg.create_pool(
                    dsn=self._dsn,
                    min_size=self._min_size,
                    max_size=self._max_size,
                    command_timeout=self._command_timeout,
                )
            except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
                if attempt == attempts:
                    logger.error("Giving up on database after %d attempts: %s", attempts, exc)
                    raise
                logger.warning(
                    "Database connection attempt %d/%d failed: %s; retrying in %.1fs",
                    attempt,
                    attempts,
                    exc,
                    delay_seconds,
                )
                await asyncio.sleep(delay_seconds)
            else:
                logger.info("Database pool ready (attempt %d/%d)", attempt, attempts)
                return None

    async def close(self) -> None:
        if self._pool is None:
            return None
        await self._pool.close()
        self._pool = None

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[asyncpg.Connection]:
        """
        Hold one pooled connection for several statements. Only the migration
        runner needs this; request paths run single statements in autocommit.
        """
        async with self.pool().acquire() as conn:
            yield conn

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self.pool().fetchrow(sql, *args)
        return dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self.pool().fetch(sql, *args)
        return [dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL). Returns the command tag.
        """
        return await self.pool().execute(sql, *args)
