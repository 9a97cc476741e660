"""
Task endpoints. Reads are public; writes are admin only.
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(track_action("create", entity_type="task"))],
)
async def create_task(
    payload: schemas.TaskCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_task(payload)


@router.get("/all")
async def list_tasks(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_tasks(limit=limit, offset=offset)


@router.get("/recent")
async def recent_tasks(limit: int = Query(default=5, ge=1, le=100)) -> dict:
    return await service.recent_tasks(limit)


@router.get("/search")
async def search_tasks(
    q: str = Query(..., min_length=1, max_length=200),
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.search_tasks(q, limit=limit, offset=offset)


@router.get("/date-range")
async def tasks_between(start_date: date, end_date: date) -> dict:
    return await service.tasks_between(start_date, end_date)


@router.get("/assignee/{assign}")
async def tasks_for_assignee(assign: str) -> dict:
    return await service.tasks_for_assignee(assign)


@router.get("/slug/{slug}")
async def get_task_by_slug(slug: str) -> dict:
    return await service.get_task_by_slug(slug)


@router.get("/{task_id}")
async def get_task(task_id: int) -> dict:
    return await service.get_task(task_id)


@router.put("/{task_id}", dependencies=[Depends(track_action("update", entity_type="task"))])
async def update_task(
    task_id: int,
    payload: schemas.TaskUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_task(task_id, payload)


@router.delete("/{task_id}", dependencies=[Depends(track_action("delete", entity_type="task"))])
async def delete_task(
    task_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_task(task_id)
