"""
Site settings endpoints, mounted under `/admin/settings`.

Everything is admin-only except the public settings read and the
maintenance status probe.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, File, Query, UploadFile

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies
from core.errors import ValidationError

from . import schemas, service

router = APIRouter()


@router.get("/public")
async def public_settings() -> dict:
    return await service.get_public_settings()


@router.get("/maintenance-status")
async def maintenance_status() -> dict:
    return await service.maintenance_status()


@router.get("")
async def all_settings(_: dict = Depends(auth_dependencies.require_admin)) -> dict:
    return await service.get_all_settings()


@router.put("", dependencies=[Depends(track_action("update", entity_type="settings"))])
async def update_settings(
    body: dict[str, Any] = Body(...),
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    try:
        values = schemas.settings_body(body)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return await service.update_settings(values, current_user=current_user)


@router.get("/categories")
async def categories(_: dict = Depends(auth_dependencies.require_admin)) -> dict:
    return service.list_categories()


@router.post(
    "/toggle-maintenance",
    dependencies=[Depends(track_action("toggle_maintenance", entity_type="settings"))],
)
async def toggle_maintenance(
    payload: schemas.MaintenanceToggle | None = None,
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    enabled = payload.enabled if payload is not None else None
    return await service.toggle_maintenance(enabled=enabled, current_user=current_user)


@router.get("/history")
async def history(
    category: str | None = Query(default=None),
    key: str | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.history(category=category, key=key, limit=limit, offset=offset)


@router.post("/logo", dependencies=[Depends(track_action("update_logo", entity_type="settings"))])
async def upload_logo(
    file: UploadFile = File(...),
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_site_image("logo", file, current_user=current_user)


@router.post("/favicon", dependencies=[Depends(track_action("update_favicon", entity_type="settings"))])
async def upload_favicon(
    file: UploadFile = File(...),
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_site_image("favicon", file, current_user=current_user)


@router.get("/{category}")
async def category_settings(
    category: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.get_category(category)


@router.put("/{category}", dependencies=[Depends(track_action("update", entity_type="settings"))])
async def update_category(
    category: str,
    values: dict[str, schemas.SettingValue] = Body(...),
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_category(category, values, current_user=current_user)


@router.post("/{category}/reset", dependencies=[Depends(track_action("reset", entity_type="settings"))])
async def reset_category(
    category: str,
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.reset_category(category, current_user=current_user)


@router.get("/{category}/{key}")
async def get_setting(
    category: str,
    key: str,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.get_setting(category, key)


@router.patch("/{category}/{key}", dependencies=[Depends(track_action("update", entity_type="settings"))])
async def update_setting(
    category: str,
    key: str,
    payload: schemas.SettingValueUpdate,
    current_user: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_setting(
        category,
        key,
        payload.value,
        expected_version=payload.expected_version,
        current_user=current_user,
    )
