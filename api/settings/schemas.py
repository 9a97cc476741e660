"""
Settings request models.
"""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel, Field

SettingValue = Union[bool, int, float, str, None]


class SettingValueUpdate(BaseModel):
    value: SettingValue
    expected_version: int | None = Field(default=None, ge=0)


class MaintenanceToggle(BaseModel):
    # Omitted flips the current state.
    enabled: bool | None = None


def settings_body(body: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """
    Accept either {"settings": {...}} or the bare {category: {key: value}} map.
    """
    inner = body.get("settings", body) if isinstance(body, dict) else body
    if not isinstance(inner, dict) or not all(isinstance(v, dict) for v in inner.values()):
        raise ValueError("Body must map category -> {key: value}.")
    return inner
