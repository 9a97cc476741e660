"""
Building style endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(track_action("create", entity_type="building_style"))],
)
async def create_style(
    payload: schemas.BuildingStyleCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_style(payload)


@router.get("/all")
async def list_styles(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_styles(limit=limit, offset=offset)


@router.get("/{style_id}")
async def get_style(style_id: int) -> dict:
    return await service.get_style(style_id)


@router.put("/{style_id}", dependencies=[Depends(track_action("update", entity_type="building_style"))])
async def update_style(
    style_id: int,
    payload: schemas.BuildingStyleUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_style(style_id, payload)


@router.delete("/{style_id}", dependencies=[Depends(track_action("delete", entity_type="building_style"))])
async def delete_style(
    style_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_style(style_id)
