#!/usr/bin/env python3
"""Migration runner.

Usage: python3 migrate.py [--list] [--apply]

The API applies pending migrations on startup; this script lets an operator
inspect or apply them ahead of a deploy. Without --apply it only reports what
is pending.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

from core.config import load_settings
from core.db import Database
from core.logging_config import configure_logging
from core.migrations import apply_migrations, list_migrations


async def run(*, list_only: bool, apply: bool) -> int:
    settings = load_settings()
    db = Database(settings.database_dsn(), max_size=1)
    await db.connect(
        attempts=settings.db_connect_attempts,
        delay_seconds=settings.db_connect_delay_seconds,
    )
    try:
        status = await list_migrations(db)
        if list_only:
            for migration_id, applied in status:
                print(f"{migration_id} {'(applied)' if applied else ''}".rstrip())
            return 0

        pending = [migration_id for migration_id, applied in status if not applied]
        if not pending:
            print("No pending migrations")
            return 0

        if not apply:
            print("NOTE: dry run. Pending migrations:")
            for migration_id in pending:
                print(f"  {migration_id}")
            print("To apply them, re-run with --apply")
            return 0

        for migration_id in await apply_migrations(db):
            print(f"Applied {migration_id}")
        print("Migrations complete")
        return 0
    finally:
        await db.close()


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Inspect or apply schema migrations.")
    p.add_argument("--list", action="store_true", help="list migrations and their state")
    p.add_argument("--apply", action="store_true", help="actually apply pending migrations")
    args = p.parse_args(argv)

    configure_logging(load_settings().log_level)
    return asyncio.run(run(list_only=args.list, apply=args.apply))


if __name__ == "__main__":
    sys.exit(main())
