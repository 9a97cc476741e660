"""
Notice endpoints. Reads are public; writes are admin only.
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
    dependencies=[Depends(track_action("create", entity_type="notice"))],
)
async def create_notice(
    payload: schemas.NoticeCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_notice(payload)


@router.get("/all")
async def list_notices(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_notices(limit=limit, offset=offset)


@router.get("/recent")
async def recent_notices(limit: int = Query(default=5, ge=1, le=100)) -> dict:
    return await service.recent_notices(limit)


@router.get("/search")
async def search_notices(
    q: str = Query(..., min_length=1, max_length=200),
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.search_notices(q, limit=limit, offset=offset)


@router.get("/date-range")
async def notices_between(start_date: date, end_date: date) -> dict:
    return await service.notices_between(start_date, end_date)


@router.get("/assignee/{assign}")
async def notices_for_assignee(assign: str) -> dict:
    return await service.notices_for_assignee(assign)


@router.get("/slug/{slug}")
async def get_notice_by_slug(slug: str) -> dict:
    return await service.get_notice_by_slug(slug)


@router.get("/{notice_id}")
async def get_notice(notice_id: int) -> dict:
    return await service.get_notice(notice_id)


@router.put("/{notice_id}", dependencies=[Depends(track_action("update", entity_type="notice"))])
async def update_notice(
    notice_id: int,
    payload: schemas.NoticeUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_notice(notice_id, payload)


@router.delete("/{notice_id}", dependencies=[Depends(track_action("delete", entity_type="notice"))])
async def delete_notice(
    notice_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_notice(notice_id)
