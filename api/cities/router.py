"""
City endpoints. Reads are public; writes are admin only.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies

from . import schemas, service

router = APIRouter()


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(track_action("create", entity_type="city"))],
)
async def create_city(
    payload: schemas.CityCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_city(payload)


@router.get("/all")
async def list_cities(
    q: str | None = Query(default=None, max_length=200),
    city_status: int | None = Query(default=None, alias="status", ge=0, le=1),
    country_id: int | None = Query(default=None),
    state_id: int | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_cities(
        query=q,
        status=city_status,
        country_id=country_id,
        state_id=state_id,
        limit=limit,
        offset=offset,
    )


@router.get("/slug/{slug}")
async def get_city_by_slug(slug: str) -> dict:
    return await service.get_city_by_slug(slug)


@router.get("/country/{country_id}")
async def cities_by_country(country_id: int) -> dict:
    return await service.cities_by("country_id", country_id)


@router.get("/state/{state_id}")
async def cities_by_state(state_id: int) -> dict:
    return await service.cities_by("state_id", state_id)


@router.get("/{city_id}")
async def get_city(city_id: int) -> dict:
    return await service.get_city(city_id)


@router.put("/{city_id}", dependencies=[Depends(track_action("update", entity_type="city"))])
async def update_city(
    city_id: int,
    payload: schemas.CityUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_city(city_id, payload)


@router.put("/{city_id}/image", dependencies=[Depends(track_action("update_image", entity_type="city"))])
async def replace_city_image(
    city_id: int,
    img: UploadFile = File(...),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.replace_city_image(city_id, img)


@router.delete("/{city_id}", dependencies=[Depends(track_action("delete", entity_type="city"))])
async def delete_city(
    city_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_city(city_id)
