"""
Task service layer.
"""

from __future__ import annotations

import logging
from datetime import date

from core import crud
from core.errors import NotFoundError, ValidationError
from core.responses import listing, ok

from . import repository, schemas
from .repository import TASKS

logger = logging.getLogger(__name__)

NOT_FOUND = "Task not found."
DUPLICATE_SLUG = "Task with this slug already exists."


async def create_task(payload: schemas.TaskCreate) -> dict:
    await crud.ensure_unique(TASKS, "slug", payload.slug, DUPLICATE_SLUG)
    row = await crud.insert(TASKS, payload.model_dump(exclude_none=True))
    logger.info("task_created task_id=%s", row["id"])
    return ok("Task created successfully.", data=row)


async def list_tasks(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(TASKS, limit=limit, offset=offset)
    return listing("data", rows)


async def recent_tasks(limit: int) -> dict:
    return listing("data", await crud.list_rows(TASKS, limit=limit))


async def search_tasks(query: str, *, limit: int | None = None, offset: int = 0) -> dict:
    query = (query or "").strip()
    if not query:
        raise ValidationError("Search query is required.")
    rows = await repository.search_tasks(query, limit=limit, offset=offset)
    return listing("data", rows)


async def tasks_between(start: date, end: date) -> dict:
    if start > end:
        raise ValidationError("start_date must be on or before end_date.")
    return listing("data", await repository.tasks_between(start, end))


async def tasks_for_assignee(assign: str) -> dict:
    return listing("data", await crud.list_rows(TASKS, filters={"assign": assign}))


async def get_task(task_id: int) -> dict:
    return ok(data=await crud.get_or_404(TASKS, task_id, NOT_FOUND))


async def get_task_by_slug(slug: str) -> dict:
    row = await crud.get_by(TASKS, "slug", slug)
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return ok(data=row)


async def update_task(task_id: int, payload: schemas.TaskUpdate) -> dict:
    existing = await crud.get_or_404(TASKS, task_id, NOT_FOUND)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("slug") not in (None, existing.get("slug")):
        await crud.ensure_unique(TASKS, "slug", changes["slug"], DUPLICATE_SLUG, exclude_id=task_id)

    merged = crud.merge_update(TASKS, existing, changes)
    if not (merged.get("title") or "").strip() and not (merged.get("heading") or "").strip():
        raise ValidationError("title or heading is required.")

    await crud.update(TASKS, task_id, merged)
    return ok("Task updated successfully.", data={"id": task_id, **merged})


async def delete_task(task_id: int) -> dict:
    await crud.get_or_404(TASKS, task_id, NOT_FOUND)
    await crud.delete(TASKS, task_id)
    logger.info("task_deleted task_id=%s", task_id)
    return ok("Task deleted successfully.")
