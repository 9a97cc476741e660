"""
Agency endpoints.
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
    dependencies=[Depends(track_action("create", entity_type="agency"))],
)
async def create_agency(
    payload: schemas.AgencyCreate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.create_agency(payload)


@router.get("/all")
async def list_agencies(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.list_agencies(limit=limit, offset=offset)


@router.get("/cuid/{cuid}")
async def get_agency_by_cuid(cuid: str) -> dict:
    return await service.get_agency_by_cuid(cuid)


@router.get("/{agency_id}")
async def get_agency(
    agency_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_agency(agency_id)


@router.put("/{agency_id}", dependencies=[Depends(track_action("update", entity_type="agency"))])
async def update_agency(
    agency_id: int,
    payload: schemas.AgencyUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_agency(agency_id, payload)


@router.delete("/{agency_id}", dependencies=[Depends(track_action("delete", entity_type="agency"))])
async def delete_agency(
    agency_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_agency(agency_id)
