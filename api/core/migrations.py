"""
Versioned SQL migrations (dbmate file format).

Files live in `db/migrations/` and are named `<version>_<description>.sql`:

    -- migrate:up
    CREATE TABLE ...;

    -- migrate:down
    DROP TABLE ...;

Applied versions are recorded in `schema_migrations(version)`. Each pending
file runs in its own transaction, in version order. This is an explicit
operator step (`python -m manage migrate`) and never runs on app startup.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import asyncpg

from . import db
from .config import env_str

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(r"^(?P<version>\d+)_(?P<name>[\w-]+)\.sql$")
_UP_MARKER = "-- migrate:up"
_DOWN_MARKER = "-- migrate:down"

SCHEMA_MIGRATIONS_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version VARCHAR(128) PRIMARY KEY,
    applied_at TIMESTAMPTZ NOT NULL DEFAULT now()
)
"""


class MigrationError(RuntimeError):
    pass


@dataclass(frozen=True)
class Migration:
    version: str
    name: str
    path: Path
    up_sql: str
    down_sql: str


def migrations_dir() -> Path:
    configured = env_str("DB_MIGRATIONS_DIR")
    if configured:
        return Path(configured)
    # api/core/migrations.py -> <repo>/db/migrations
    return Path(__file__).resolve().parents[2] / "db" / "migrations"


def parse_migration(text: str) -> tuple[str, str]:
    """
    Split a migration file into its (up, down) SQL sections.
    """
    up_at = text.find(_UP_MARKER)
    if up_at < 0:
        raise MigrationError("Migration is missing a '-- migrate:up' section.")

    down_at = text.find(_DOWN_MARKER)
    if 0 <= down_at < up_at:
        raise MigrationError("'-- migrate:down' must come after '-- migrate:up'.")

    body_start = up_at + len(_UP_MARKER)
    if down_at < 0:
        return text[body_start:].strip(), ""
    return text[body_start:down_at].strip(), text[down_at + len(_DOWN_MARKER):].strip()


def discover(directory: Path | None = None) -> list[Migration]:
    directory = directory or migrations_dir()
    if not directory.is_dir():
        raise MigrationError(f"Migrations directory not found: {directory}")

    found: list[Migration] = []
    seen: set[str] = set()
    for path in sorted(directory.glob("*.sql")):
        match = _FILENAME_RE.match(path.name)
        if match is None:
            logger.warning("migration_skipped file=%s reason=bad_name", path.name)
            continue

        version = match.group("version")
        if version in seen:
            raise MigrationError(f"Duplicate migration version {version}.")
        seen.add(version)

        up_sql, down_sql = parse_migration(path.read_text(encoding="utf-8"))
        found.append(
            Migration(version=version, name=match.group("name"), path=path, up_sql=up_sql, down_sql=down_sql)
        )

    return sorted(found, key=lambda m: int(m.version))


async def applied_versions(conn: asyncpg.Connection) -> set[str]:
    await conn.execute(SCHEMA_MIGRATIONS_DDL)
    rows = await conn.fetch("SELECT version FROM schema_migrations")
    return {str(r["version"]) for r in rows}


async def status(directory: Path | None = None) -> list[dict]:
    migrations = discover(directory)
    async with db.pool().acquire() as conn:
        applied = await applied_versions(conn)
    return [
        {"version": m.version, "name": m.name, "applied": m.version in applied}
        for m in migrations
    ]


async def upgrade(directory: Path | None = None) -> list[str]:
    """
    Apply every pending migration. Returns the versions applied.
    """
    migrations = discover(directory)
    done: list[str] = []

    async with db.pool().acquire() as conn:
        applied = await applied_versions(conn)
        for migration in migrations:
            if migration.version in applied:
                continue
            async with conn.transaction():
                if migration.up_sql:
                    await conn.execute(migration.up_sql)
                await conn.execute(
                    "INSERT INTO schema_migrations (version) VALUES ($1)",
                    migration.version,
                )
            logger.info("migration_applied version=%s name=%s", migration.version, migration.name)
            done.append(migration.version)

    return done


async def rollback(directory: Path | None = None) -> str | None:
    """
    Revert the most recently applied migration, if any.
    """
    migrations = {m.version: m for m in discover(directory)}

    async with db.pool().acquire() as conn:
        applied = await applied_versions(conn)
        if not applied:
            return None
        latest = max(applied, key=int)
        migration = migrations.get(latest)
        if migration is None:
            raise MigrationError(f"No migration file for applied version {latest}.")

        async with conn.transaction():
            if migration.down_sql:
                await conn.execute(migration.down_sql)
            await conn.execute("DELETE FROM schema_migrations WHERE version = $1", latest)

    logger.info("migration_rolled_back version=%s name=%s", migration.version, migration.name)
    return latest
