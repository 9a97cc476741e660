"""
City reference data endpoints.
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
    dependencies=[Depends(track_action("create", entity_type="city_data"))],
)
async def create_city_data(
    payload: schemas.CityDataCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_city_data(payload)


@router.get("/all")
async def list_city_data(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_city_data(limit=limit, offset=offset)


@router.get("/country/{country_id}")
async def city_data_by_country(country_id: int) -> dict:
    return await service.city_data_by_country(country_id)


@router.get("/{city_data_id}")
async def get_city_data(city_data_id: int) -> dict:
    return await service.get_city_data(city_data_id)


@router.put("/{city_data_id}", dependencies=[Depends(track_action("update", entity_type="city_data"))])
async def update_city_data(
    city_data_id: int,
    payload: schemas.CityDataUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_city_data(city_data_id, payload)


@router.delete("/{city_data_id}", dependencies=[Depends(track_action("delete", entity_type="city_data"))])
async def delete_city_data(
    city_data_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_city_data(city_data_id)
