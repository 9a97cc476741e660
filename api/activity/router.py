"""
Activity log endpoints (admin only).
"""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from auth import dependencies as auth_dependencies

from . import service

router = APIRouter(dependencies=[Depends(auth_dependencies.require_admin)])


@router.get("/all")
async def list_activities(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_activities(limit=limit, offset=offset)


@router.get("/recent")
async def recent_activities(limit: int = Query(default=10, ge=1, le=100)) -> dict:
    return await service.recent_activities(limit)


@router.get("/stats")
async def activity_stats() -> dict:
    return await service.activity_stats()


@router.get("/search")
async def search_activities(
    q: str = Query(..., min_length=1, max_length=200),
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.search_activities(q, limit=limit, offset=offset)


@router.get("/date-range")
async def activities_between(
    start_date: date,
    end_date: date,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.activities_between(start_date, end_date, limit=limit, offset=offset)


@router.get("/user/{user_id}")
async def activities_by_user(
    user_id: int,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.activities_by("user_id", user_id, limit=limit, offset=offset)


@router.get("/module/{module}")
async def activities_by_module(
    module: str,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.activities_by("module", module, limit=limit, offset=offset)


@router.get("/action/{action}")
async def activities_by_action(
    action: str,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.activities_by("action", action, limit=limit, offset=offset)


@router.delete("/cleanup")
async def cleanup(days: int = Query(default=90, ge=1, le=3650)) -> dict:
    return await service.cleanup(days)


@router.get("/{activity_id}")
async def get_activity(activity_id: int) -> dict:
    return await service.get_activity(activity_id)


@router.delete("/{activity_id}")
async def delete_activity(activity_id: int) -> dict:
    return await service.delete_activity(activity_id)
