"""
Commercial amenity endpoints.
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
    dependencies=[Depends(track_action("create", entity_type="commercial_amenity"))],
)
async def create_amenity(
    payload: schemas.AmenityCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_amenity(payload)


@router.get("/all")
async def list_amenities(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
) -> dict:
    return await service.list_amenities(limit=limit, offset=offset)


@router.get("/{amenity_id}")
async def get_amenity(amenity_id: int) -> dict:
    return await service.get_amenity(amenity_id)


@router.put("/{amenity_id}", dependencies=[Depends(track_action("update", entity_type="commercial_amenity"))])
async def update_amenity(
    amenity_id: int,
    payload: schemas.AmenityUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_amenity(amenity_id, payload)


@router.delete("/{amenity_id}", dependencies=[Depends(track_action("delete", entity_type="commercial_amenity"))])
async def delete_amenity(
    amenity_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_amenity(amenity_id)
