"""
Column action endpoints (admin only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter(dependencies=[Depends(auth_dependencies.require_admin)])


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(track_action("create", entity_type="column_action"))],
)
async def create_action(payload: schemas.ColumnActionCreate) -> dict:
    return await service.create_action(payload)


@router.get("/all")
async def list_actions(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_actions(limit=limit, offset=offset)


@router.get("/module/{module_name}")
async def actions_for_module(module_name: str) -> dict:
    return await service.actions_for_module(module_name)


@router.get("/{action_id}")
async def get_action(action_id: int) -> dict:
    return await service.get_action(action_id)


@router.put("/{action_id}", dependencies=[Depends(track_action("update", entity_type="column_action"))])
async def update_action(action_id: int, payload: schemas.ColumnActionUpdate) -> dict:
    return await service.update_action(action_id, payload)


@router.delete("/{action_id}", dependencies=[Depends(track_action("delete", entity_type="column_action"))])
async def delete_action(action_id: int) -> dict:
    return await service.delete_action(action_id)
