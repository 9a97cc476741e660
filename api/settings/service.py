"""
Site settings service.

The `settings` table is the authoritative configuration store. Reads overlay
stored rows on top of `DEFAULT_SETTINGS` so a fresh database still answers
with sensible values; writes go through `repository.write_settings`, which
versions every change.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Mapping

from fastapi import UploadFile

from core import uploads
from core.errors import ConflictError, NotFoundError, ValidationError
from core.responses import ok

from . import defaults, envfile, repository
from .repository import SettingWrite

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[a-z0-9_]{1,100}$")


def _check_category(category: str) -> str:
    if category not in defaults.DEFAULT_SETTINGS:
        raise NotFoundError(f"Unknown settings category '{category}'.")
    return category


def _check_key(key: str) -> str:
    if not _KEY_RE.match(key or ""):
        raise ValidationError(f"Invalid setting key '{key}'.")
    return key


def _default_value(category: str, key: str) -> Any:
    return defaults.DEFAULT_SETTINGS.get(category, {}).get(key)


def _coerce(category: str, key: str, value: Any, *, stored_type: str | None = None) -> tuple[str, str]:
    """
    Validate `value` against the setting's type and return (text, type).

    The type comes from the stored row, else the default catalogue, else the
    value itself.
    """
    default = _default_value(category, key)
    kind = stored_type or (defaults.setting_type(default) if default is not None else defaults.setting_type(value))

    if kind == "boolean":
        if isinstance(value, bool):
            return defaults.serialize(value), kind
        text = str(value).strip().lower()
        if text in {"true", "1", "yes", "on"}:
            return "true", kind
        if text in {"false", "0", "no", "off", ""}:
            return "false", kind
        raise ValidationError(f"{category}.{key} must be a boolean.")

    if kind == "number":
        if isinstance(value, bool):
            raise ValidationError(f"{category}.{key} must be a number.")
        if isinstance(value, (int, float)):
            return str(value), kind
        text = str(value).strip()
        try:
            float(text)
        except ValueError as exc:
            raise ValidationError(f"{category}.{key} must be a number.") from exc
        return text, kind

    if isinstance(value, (dict, list)):
        raise ValidationError(f"{category}.{key} must be a scalar value.")
    return defaults.serialize(value), "text"


def _typed(row: Mapping[str, Any]) -> Any:
    return defaults.deserialize(row.get("setting_value"), str(row.get("setting_type") or "text"))


def _grouped(rows: list[dict], *, public_only: bool = False) -> dict[str, dict[str, Any]]:
    result: dict[str, dict[str, Any]] = {}
    for category, values in copy.deepcopy(defaults.DEFAULT_SETTINGS).items():
        for key, value in values.items():
            if public_only and not defaults.is_public(category, key):
                continue
            result.setdefault(category, {})[key] = value
    for row in rows:
        result.setdefault(row["category"], {})[row["setting_key"]] = _typed(row)
    return result


async def _write(values: Mapping[str, Mapping[str, Any]], *, current_user: dict | None) -> list[dict]:
    items: list[SettingWrite] = []
    for category, entries in values.items():
        _check_category(category)
        existing = {r["setting_key"]: r for r in await repository.list_settings(category=category)}
        for key, value in entries.items():
            _check_key(key)
            stored = existing.get(key)
            text, kind = _coerce(category, key, value, stored_type=stored["setting_type"] if stored else None)
            items.append(
                SettingWrite(
                    category=category,
                    key=key,
                    value=text,
                    setting_type=kind,
                    is_public=defaults.is_public(category, key),
                )
            )
    if not items:
        raise ValidationError("No settings provided.")

    rows = await repository.write_settings(items, changed_by=_user_id(current_user))
    envfile.mirror_settings({item.key: item.value for item in items})
    logger.info("settings_written count=%s user_id=%s", len(items), _user_id(current_user))
    return rows


def _user_id(user: dict | None) -> int | None:
    return int(user["id"]) if user and user.get("id") is not None else None


async def get_all_settings() -> dict:
    rows = await repository.list_settings()
    return ok(settings=_grouped(rows))


async def get_public_settings() -> dict:
    rows = await repository.list_settings(public_only=True)
    grouped = _grouped(rows, public_only=True)
    return ok(settings={c: v for c, v in grouped.items() if c in defaults.PUBLIC_CATEGORIES})


def list_categories() -> dict:
    return ok(categories=list(defaults.CATEGORIES))


async def get_category(category: str) -> dict:
    _check_category(category)
    rows = await repository.list_settings(category=category)
    return ok(category=category, settings=_grouped(rows).get(category, {}))


async def get_setting(category: str, key: str) -> dict:
    _check_category(category)
    row = await repository.get_setting(category, _check_key(key))
    if row is not None:
        return ok(
            setting={
                "category": category,
                "key": key,
                "value": _typed(row),
                "type": row["setting_type"],
                "version": row["version"],
                "updated_at": row["updated_at"],
            }
        )

    default = _default_value(category, key)
    if default is None:
        raise NotFoundError(f"Setting {category}.{key} not found.")
    return ok(
        setting={
            "category": category,
            "key": key,
            "value": default,
            "type": defaults.setting_type(default),
            "version": 0,
            "updated_at": None,
        }
    )


async def update_settings(values: Mapping[str, Mapping[str, Any]], *, current_user: dict | None) -> dict:
    rows = await _write(values, current_user=current_user)
    return ok("Settings updated successfully.", updated=len(rows))


async def update_category(category: str, values: Mapping[str, Any], *, current_user: dict | None) -> dict:
    rows = await _write({category: values}, current_user=current_user)
    return ok(f"{category} settings updated successfully.", updated=len(rows))


async def update_setting(
    category: str,
    key: str,
    value: Any,
    *,
    expected_version: int | None = None,
    current_user: dict | None,
) -> dict:
    _check_category(category)
    _check_key(key)
    stored = await repository.get_setting(category, key)
    text, kind = _coerce(category, key, value, stored_type=stored["setting_type"] if stored else None)
    item = SettingWrite(
        category=category,
        key=key,
        value=text,
        setting_type=kind,
        is_public=defaults.is_public(category, key),
        expected_version=expected_version,
    )
    try:
        (row,) = await repository.write_settings([item], changed_by=_user_id(current_user))
    except repository.StaleVersionError as exc:
        raise ConflictError(
            f"Setting {category}.{key} was changed by someone else (current version {exc.current_version})."
        ) from exc

    envfile.mirror_settings({key: text})
    return ok(
        "Setting updated successfully.",
        setting={"category": category, "key": key, "value": _typed(row), "version": row["version"]},
    )


async def reset_category(category: str, *, current_user: dict | None) -> dict:
    _check_category(category)
    rows = await _write({category: defaults.DEFAULT_SETTINGS[category]}, current_user=current_user)
    return ok(f"{category} settings reset to defaults.", updated=len(rows))


async def history(*, category: str | None, key: str | None, limit: int, offset: int) -> dict:
    if category is not None:
        _check_category(category)
    rows = await repository.list_history(category=category, key=key, limit=limit, offset=offset)
    return ok(count=len(rows), history=rows)


async def is_maintenance_mode() -> bool:
    row = await repository.get_setting(defaults.MAINTENANCE_CATEGORY, defaults.MAINTENANCE_KEY)
    if row is None:
        return bool(_default_value(defaults.MAINTENANCE_CATEGORY, defaults.MAINTENANCE_KEY))
    return defaults.deserialize(row.get("setting_value"), "boolean")


async def maintenance_status() -> dict:
    return ok(maintenanceMode=await is_maintenance_mode())


async def toggle_maintenance(*, enabled: bool | None, current_user: dict | None) -> dict:
    target = (not await is_maintenance_mode()) if enabled is None else enabled
    await _write(
        {defaults.MAINTENANCE_CATEGORY: {defaults.MAINTENANCE_KEY: target}},
        current_user=current_user,
    )
    logger.warning("maintenance_mode_changed enabled=%s user_id=%s", target, _user_id(current_user))
    state = "enabled" if target else "disabled"
    return ok(f"Maintenance mode {state}.", maintenanceMode=target)


async def update_site_image(kind: str, file: UploadFile, *, current_user: dict | None) -> dict:
    """
    Store a new logo/favicon and point `general.<kind>` at it.
    """
    if kind not in {"logo", "favicon"}:
        raise NotFoundError(f"Unknown site image '{kind}'.")

    previous = await repository.get_setting("general", kind)
    stored = await uploads.save_upload(file, uploads.get_policy("settings"))
    try:
        await _write({"general": {kind: stored.public_path}}, current_user=current_user)
    except Exception:
        uploads.delete_upload(stored.public_path)
        raise

    if previous and previous.get("setting_value"):
        uploads.delete_upload(previous["setting_value"])
    return ok(f"Site {kind} updated successfully.", path=stored.public_path)


async def seed_defaults() -> int:
    items = []
    for category, values in defaults.DEFAULT_SETTINGS.items():
        for key, value in values.items():
            items.append(
                SettingWrite(
                    category=category,
                    key=key,
                    value=defaults.serialize(value),
                    setting_type=defaults.setting_type(value),
                    is_public=defaults.is_public(category, key),
                )
            )
    inserted = await repository.insert_missing(items)
    logger.info("settings_seeded inserted=%s total=%s", inserted, len(items))
    return inserted
