"""
Settings persistence: a versioned key-value table plus an append-only history.

Every value change bumps `settings.version` and writes one
`settings_history` row in the same transaction.
"""

from __future__ import annotations

from dataclasses import dataclass

import asyncpg

from core import db

_SETTING_COLUMNS = (
    "id, category, setting_key, setting_value, setting_type, is_public, "
    "version, updated_by, created_at, updated_at"
)


class StaleVersionError(RuntimeError):
    def __init__(self, category: str, key: str, current_version: int) -> None:
        super().__init__(f"{category}.{key} is at version {current_version}.")
        self.current_version = current_version


@dataclass(frozen=True)
class SettingWrite:
    category: str
    key: str
    value: str
    setting_type: str
    is_public: bool
    expected_version: int | None = None


async def list_settings(*, category: str | None = None, public_only: bool = False) -> list[dict]:
    return await db.fetch_all(
        f"""
        SELECT {_SETTING_COLUMNS}
        FROM settings
        WHERE ($1::text IS NULL OR category = $1)
          AND (NOT $2::boolean OR is_public)
        ORDER BY category, setting_key
        """,
        category,
        public_only,
    )


async def get_setting(category: str, key: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_SETTING_COLUMNS}
        FROM settings
        WHERE category = $1
          AND setting_key = $2
        """,
        category,
        key,
    )


async def _write_one(conn: asyncpg.Connection, item: SettingWrite, changed_by: int | None) -> dict:
    current = await conn.fetchrow(
        f"""
        SELECT {_SETTING_COLUMNS}
        FROM settings
        WHERE category = $1
          AND setting_key = $2
        FOR UPDATE
        """,
        item.category,
        item.key,
    )

    if current is None:
        if item.expected_version not in (None, 0):
            raise StaleVersionError(item.category, item.key, 0)
        row = await conn.fetchrow(
            f"""
            INSERT INTO settings (category, setting_key, setting_value, setting_type, is_public, updated_by)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {_SETTING_COLUMNS}
            """,
            item.category,
            item.key,
            item.value,
            item.setting_type,
            item.is_public,
            changed_by,
        )
        old_value = None
    else:
        if item.expected_version is not None and int(current["version"]) != item.expected_version:
            raise StaleVersionError(item.category, item.key, int(current["version"]))
        if current["setting_value"] == item.value and current["setting_type"] == item.setting_type:
            return dict(current)
        row = await conn.fetchrow(
            f"""
            UPDATE settings
            SET setting_value = $2,
                setting_type = $3,
                version = version + 1,
                updated_by = $4,
                updated_at = now()
            WHERE id = $1
            RETURNING {_SETTING_COLUMNS}
            """,
            current["id"],
            item.value,
            item.setting_type,
            changed_by,
        )
        old_value = current["setting_value"]

    await conn.execute(
        """
        INSERT INTO settings_history
            (setting_id, category, setting_key, old_value, new_value, version, changed_by)
        VALUES ($1, $2, $3, $4, $5, $6, $7)
        """,
        row["id"],
        item.category,
        item.key,
        old_value,
        item.value,
        row["version"],
        changed_by,
    )
    return dict(row)


async def write_settings(items: list[SettingWrite], *, changed_by: int | None) -> list[dict]:
    """
    Apply several writes atomically; any stale version aborts them all.
    """
    async with db.transaction() as conn:
        return [await _write_one(conn, item, changed_by) for item in items]


async def insert_missing(items: list[SettingWrite]) -> int:
    inserted = 0
    async with db.transaction() as conn:
        for item in items:
            status_tag = await conn.execute(
                """
                INSERT INTO settings (category, setting_key, setting_value, setting_type, is_public)
                VALUES ($1, $2, $3, $4, $5)
                ON CONFLICT (category, setting_key) DO NOTHING
                """,
                item.category,
                item.key,
                item.value,
                item.setting_type,
                item.is_public,
            )
            inserted += db.affected_rows(status_tag)
    return inserted


async def list_history(
    *,
    category: str | None = None,
    key: str | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT h.*, u.email AS changed_by_email
        FROM settings_history h
        LEFT JOIN users u ON u.id = h.changed_by
        WHERE ($1::text IS NULL OR h.category = $1)
          AND ($2::text IS NULL OR h.setting_key = $2)
        ORDER BY h.changed_at DESC, h.id DESC
        LIMIT $3 OFFSET $4
        """,
        category,
        key,
        limit,
        offset,
    )
