"""
Persistence for the `recent_activity` audit log.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from core import crud, db

RECENT_ACTIVITY = crud.Table(
    name="recent_activity",
    columns=(
        "activity_type",
        "activity_title",
        "activity_description",
        "user_name",
        "user_id",
        "module",
        "module_id",
        "action",
        "ip_address",
        "user_agent",
        "metadata",
        "status",
    ),
    order_by="created_at DESC, id DESC",
    required=("activity_title",),
)


async def insert_activity(entry: dict[str, Any]) -> dict[str, Any]:
    return await crud.insert(RECENT_ACTIVITY, entry)


async def search_activity(query: str, *, limit: int, offset: int = 0) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM recent_activity
        WHERE activity_title ILIKE $1
           OR activity_description ILIKE $1
           OR user_name ILIKE $1
           OR module ILIKE $1
           OR action ILIKE $1
        ORDER BY created_at DESC, id DESC
        LIMIT $2 OFFSET $3
        """,
        f"%{query}%",
        limit,
        offset,
    )


async def list_between(start: date, end: date, *, limit: int, offset: int = 0) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM recent_activity
        WHERE created_at::date BETWEEN $1 AND $2
        ORDER BY created_at DESC, id DESC
        LIMIT $3 OFFSET $4
        """,
        start,
        end,
        limit,
        offset,
    )


async def stats() -> dict[str, Any]:
    totals = await db.fetch_one(
        """
        SELECT count(*) AS total,
               count(*) FILTER (WHERE created_at >= now() - interval '7 days') AS last_7_days,
               count(*) FILTER (WHERE created_at >= now() - interval '1 day') AS last_24_hours
        FROM recent_activity
        """
    )
    by_module = await db.fetch_all(
        """
        SELECT module, count(*) AS count
        FROM recent_activity
        GROUP BY module
        ORDER BY count DESC, module
        """
    )
    by_action = await db.fetch_all(
        """
        SELECT action, count(*) AS count
        FROM recent_activity
        GROUP BY action
        ORDER BY count DESC, action
        """
    )
    return {
        **(totals or {"total": 0, "last_7_days": 0, "last_24_hours": 0}),
        "by_module": by_module,
        "by_action": by_action,
    }


async def delete_older_than(days: int) -> int:
    status_tag = await db.execute(
        "DELETE FROM recent_activity WHERE created_at < now() - make_interval(days => $1)",
        days,
    )
    return db.affected_rows(status_tag)
