"""
Column action service: per-module table column toggles for the admin UI.
"""

from __future__ import annotations

from core import crud
from core.responses import listing, ok

from . import schemas
from .repository import COLUMN_ACTION

NOT_FOUND = "Column action not found."


async def create_action(payload: schemas.ColumnActionCreate) -> dict:
    row = await crud.insert(COLUMN_ACTION, payload.model_dump(exclude_none=True))
    return ok("Column action created successfully.", action=row)


async def list_actions(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(COLUMN_ACTION, limit=limit, offset=offset)
    return listing("actions", rows)


async def actions_for_module(module_name: str) -> dict:
    rows = await crud.list_rows(COLUMN_ACTION, filters={"module_name": module_name})
    return listing("actions", rows)


async def get_action(action_id: int) -> dict:
    return ok(action=await crud.get_or_404(COLUMN_ACTION, action_id, NOT_FOUND))


async def update_action(action_id: int, payload: schemas.ColumnActionUpdate) -> dict:
    existing = await crud.get_or_404(COLUMN_ACTION, action_id, NOT_FOUND)
    merged = crud.merge_update(COLUMN_ACTION, existing, payload.model_dump(exclude_unset=True))
    await crud.update(COLUMN_ACTION, action_id, merged)
    return ok("Column action updated successfully.", action={"id": action_id, **merged})


async def delete_action(action_id: int) -> dict:
    await crud.get_or_404(COLUMN_ACTION, action_id, NOT_FOUND)
    await crud.delete(COLUMN_ACTION, action_id)
    return ok("Column action deleted successfully.")
