"""
Building style lookup service.
"""

from __future__ import annotations

from core import crud
from core.responses import listing, ok

from . import schemas
from .repository import BUILDING_STYLE

NOT_FOUND = "Building style not found."
DUPLICATE_NAME = "Building style with this name already exists."


async def create_style(payload: schemas.BuildingStyleCreate) -> dict:
    name = payload.name.strip()
    await crud.ensure_unique(BUILDING_STYLE, "name", name, DUPLICATE_NAME)
    row = await crud.insert(BUILDING_STYLE, {"name": name})
    return ok("Building style created successfully.", style=row)


async def list_styles(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(BUILDING_STYLE, limit=limit, offset=offset)
    return listing("styles", rows)


async def get_style(style_id: int) -> dict:
    return ok(style=await crud.get_or_404(BUILDING_STYLE, style_id, NOT_FOUND))


async def update_style(style_id: int, payload: schemas.BuildingStyleUpdate) -> dict:
    existing = await crud.get_or_404(BUILDING_STYLE, style_id, NOT_FOUND)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
        if changes["name"] != existing["name"]:
            await crud.ensure_unique(BUILDING_STYLE, "name", changes["name"], DUPLICATE_NAME, exclude_id=style_id)

    merged = crud.merge_update(BUILDING_STYLE, existing, changes)
    await crud.update(BUILDING_STYLE, style_id, merged)
    return ok("Building style updated successfully.", style={"id": style_id, **merged})


async def delete_style(style_id: int) -> dict:
    await crud.get_or_404(BUILDING_STYLE, style_id, NOT_FOUND)
    await crud.delete(BUILDING_STYLE, style_id)
    return ok("Building style deleted successfully.")
