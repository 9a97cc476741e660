"""
City reference data service layer.
"""

from __future__ import annotations

from core import crud
from core.responses import listing, ok

from . import schemas
from .repository import CITIES_DATA

NOT_FOUND = "City data not found."


async def create_city_data(payload: schemas.CityDataCreate) -> dict:
    row = await crud.insert(CITIES_DATA, payload.model_dump(exclude_none=True))
    return ok("City data created successfully.", city=row)


async def list_city_data(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(CITIES_DATA, limit=limit, offset=offset)
    return listing("cities", rows)


async def city_data_by_country(country_id: int) -> dict:
    rows = await crud.list_rows(CITIES_DATA, filters={"country_id": country_id})
    return listing("cities", rows)


async def get_city_data(city_data_id: int) -> dict:
    return ok(city=await crud.get_or_404(CITIES_DATA, city_data_id, NOT_FOUND))


async def update_city_data(city_data_id: int, payload: schemas.CityDataUpdate) -> dict:
    existing = await crud.get_or_404(CITIES_DATA, city_data_id, NOT_FOUND)
    merged = crud.merge_update(CITIES_DATA, existing, payload.model_dump(exclude_unset=True))
    await crud.update(CITIES_DATA, city_data_id, merged)
    return ok("City data updated successfully.", city={"id": city_data_id, **merged})


async def delete_city_data(city_data_id: int) -> dict:
    await crud.get_or_404(CITIES_DATA, city_data_id, NOT_FOUND)
    await crud.delete(CITIES_DATA, city_data_id)
    return ok("City data deleted successfully.")
