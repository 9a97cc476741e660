"""
City service layer, including the city image.
"""

from __future__ import annotations

import logging

from fastapi import UploadFile

from core import crud, uploads
from core.errors import NotFoundError
from core.responses import listing, ok

from . import repository, schemas
from .repository import CITIES

logger = logging.getLogger(__name__)

NOT_FOUND = "City not found."
DUPLICATE_SLUG = "City with this slug already exists."


async def create_city(payload: schemas.CityCreate) -> dict:
    await crud.ensure_unique(CITIES, "slug", payload.slug, DUPLICATE_SLUG)
    row = await crud.insert(CITIES, payload.model_dump(exclude_none=True))
    logger.info("city_created city_id=%s slug=%s", row["id"], row["slug"])
    return ok("City created successfully.", data=row)


async def list_cities(
    *,
    query: str | None = None,
    status: int | None = None,
    country_id: int | None = None,
    state_id: int | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> dict:
    if query or status is not None or country_id is not None or state_id is not None:
        rows = await repository.search_cities(
            query=query,
            status=status,
            country_id=country_id,
            state_id=state_id,
            limit=limit,
            offset=offset,
        )
    else:
        rows = await crud.list_rows(CITIES, limit=limit, offset=offset)
    return listing("data", rows)


async def cities_by(column: str, value: int) -> dict:
    rows = await crud.list_rows(CITIES, filters={column: value})
    return listing("data", rows)


async def get_city(city_id: int) -> dict:
    return ok(data=await crud.get_or_404(CITIES, city_id, NOT_FOUND))


async def get_city_by_slug(slug: str) -> dict:
    row = await crud.get_by(CITIES, "slug", slug)
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return ok(data=row)


async def update_city(city_id: int, payload: schemas.CityUpdate) -> dict:
    existing = await crud.get_or_404(CITIES, city_id, NOT_FOUND)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("slug") not in (None, existing.get("slug")):
        await crud.ensure_unique(CITIES, "slug", changes["slug"], DUPLICATE_SLUG, exclude_id=city_id)

    merged = crud.merge_update(CITIES, existing, changes)
    await crud.update(CITIES, city_id, merged)
    return ok("City updated successfully.", data={"id": city_id, **merged})


async def replace_city_image(city_id: int, file: UploadFile) -> dict:
    existing = await crud.get_or_404(CITIES, city_id, NOT_FOUND)
    stored = await uploads.save_upload(file, uploads.get_policy("cities"))

    merged = crud.merge_update(CITIES, existing, {"img": stored.public_path})
    try:
        await crud.update(CITIES, city_id, merged)
    except Exception:
        # Don't leave an orphaned file behind when the row update fails.
        uploads.delete_upload(stored.public_path)
        raise

    if existing.get("img"):
        uploads.delete_upload(existing["img"])
    return ok("City image updated successfully.", data={"id": city_id, **merged})


async def delete_city(city_id: int) -> dict:
    existing = await crud.get_or_404(CITIES, city_id, NOT_FOUND)
    await crud.delete(CITIES, city_id)
    if existing.get("img"):
        uploads.delete_upload(existing["img"])
    logger.info("city_deleted city_id=%s", city_id)
    return ok("City deleted successfully.")
