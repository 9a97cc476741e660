"""
Activity log service: recording audit rows and reading them back.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from core import crud
from core.errors import ValidationError
from core.responses import listing, ok

from . import repository

logger = logging.getLogger(__name__)

NOT_FOUND = "Activity not found."


def build_entry(
    *,
    action: str,
    title: str,
    entity_type: str | None,
    entity_id: int | None,
    user: dict | None,
    ip_address: str | None,
    user_agent: str | None,
    activity_type: str = "general",
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    user = user or {}
    return {
        "activity_type": activity_type,
        "activity_title": title,
        "activity_description": f"{title} ({entity_type} #{entity_id})" if entity_id else title,
        "user_name": user.get("name") or user.get("email"),
        "user_id": user.get("id"),
        "module": entity_type,
        "module_id": entity_id,
        "action": action,
        "ip_address": ip_address,
        "user_agent": user_agent,
        "metadata": metadata or {},
    }


async def record_activity_safely(entry: dict[str, Any]) -> None:
    """
    BackgroundTasks entrypoint. Audit logging never fails the request that
    triggered it, so every failure is logged and dropped here.
    """
    try:
        await repository.insert_activity(entry)
    except Exception:
        logger.exception(
            "activity_record_failed action=%s module=%s module_id=%s",
            entry.get("action"),
            entry.get("module"),
            entry.get("module_id"),
        )


async def list_activities(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(repository.RECENT_ACTIVITY, limit=limit, offset=offset)
    return listing("activities", rows)


async def recent_activities(limit: int) -> dict:
    rows = await crud.list_rows(repository.RECENT_ACTIVITY, limit=limit)
    return listing("activities", rows)


async def activities_by(column: str, value: Any, *, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(
        repository.RECENT_ACTIVITY,
        filters={column: value},
        limit=limit,
        offset=offset,
    )
    return listing("activities", rows)


async def search_activities(query: str, *, limit: int, offset: int = 0) -> dict:
    query = (query or "").strip()
    if not query:
        raise ValidationError("Search query is required.")
    rows = await repository.search_activity(query, limit=limit, offset=offset)
    return listing("activities", rows)


async def activities_between(start: date, end: date, *, limit: int, offset: int = 0) -> dict:
    if start > end:
        raise ValidationError("start_date must be on or before end_date.")
    rows = await repository.list_between(start, end, limit=limit, offset=offset)
    return listing("activities", rows)


async def activity_stats() -> dict:
    return ok(stats=await repository.stats())


async def get_activity(activity_id: int) -> dict:
    row = await crud.get_or_404(repository.RECENT_ACTIVITY, activity_id, NOT_FOUND)
    return ok(activity=row)


async def delete_activity(activity_id: int) -> dict:
    await crud.get_or_404(repository.RECENT_ACTIVITY, activity_id, NOT_FOUND)
    await crud.delete(repository.RECENT_ACTIVITY, activity_id)
    return ok("Activity deleted successfully.")


async def cleanup(days: int) -> dict:
    deleted = await repository.delete_older_than(days)
    logger.info("activity_cleanup days=%s deleted=%s", days, deleted)
    return ok(f"Deleted {deleted} activities older than {days} days.", deleted=deleted)
