"""
Comment endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_comment(
    payload: schemas.CommentCreate,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.create_comment(payload, current_user=current_user)


@router.get("/entity/{entity_type}/{p_id}")
async def comments_for_entity(entity_type: str, p_id: int) -> dict:
    return await service.comments_for_entity(entity_type, p_id)


@router.get("/all")
async def list_comments(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.list_comments(limit=limit, offset=offset)


@router.get("/{comment_id}")
async def get_comment(
    comment_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_comment(comment_id)


@router.put("/{comment_id}", dependencies=[Depends(track_action("update", entity_type="comment"))])
async def update_comment(
    comment_id: int,
    payload: schemas.CommentUpdate,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.update_comment(comment_id, payload, current_user=current_user)


@router.delete("/{comment_id}", dependencies=[Depends(track_action("delete", entity_type="comment"))])
async def delete_comment(
    comment_id: int,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.delete_comment(comment_id, current_user=current_user)
