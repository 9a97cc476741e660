"""
Commercial amenity lookup service.
"""

from __future__ import annotations

from core import crud
from core.responses import listing, ok

from . import schemas
from .repository import COMMERCIAL_AMENITIES

NOT_FOUND = "Commercial amenity not found."
DUPLICATE_NAME = "Commercial amenity with this name already exists."


async def create_amenity(payload: schemas.AmenityCreate) -> dict:
    name = payload.name.strip()
    await crud.ensure_unique(COMMERCIAL_AMENITIES, "name", name, DUPLICATE_NAME)
    row = await crud.insert(COMMERCIAL_AMENITIES, {"name": name})
    return ok("Commercial amenity created successfully.", amenity=row)


async def list_amenities(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(COMMERCIAL_AMENITIES, limit=limit, offset=offset)
    return listing("amenities", rows)


async def get_amenity(amenity_id: int) -> dict:
    return ok(amenity=await crud.get_or_404(COMMERCIAL_AMENITIES, amenity_id, NOT_FOUND))


async def update_amenity(amenity_id: int, payload: schemas.AmenityUpdate) -> dict:
    existing = await crud.get_or_404(COMMERCIAL_AMENITIES, amenity_id, NOT_FOUND)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name") is not None:
        changes["name"] = changes["name"].strip()
        if changes["name"] != existing["name"]:
            await crud.ensure_unique(
                COMMERCIAL_AMENITIES, "name", changes["name"], DUPLICATE_NAME, exclude_id=amenity_id
            )

    merged = crud.merge_update(COMMERCIAL_AMENITIES, existing, changes)
    await crud.update(COMMERCIAL_AMENITIES, amenity_id, merged)
    return ok("Commercial amenity updated successfully.", amenity={"id": amenity_id, **merged})


async def delete_amenity(amenity_id: int) -> dict:
    await crud.get_or_404(COMMERCIAL_AMENITIES, amenity_id, NOT_FOUND)
    await crud.delete(COMMERCIAL_AMENITIES, amenity_id)
    return ok("Commercial amenity deleted successfully.")
