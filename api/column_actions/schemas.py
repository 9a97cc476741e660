"""
Column action request models.

`label` is also accepted as `lable`, the spelling older admin clients send.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field


class ColumnActionCreate(BaseModel):
    module_name: str = Field(..., min_length=1, max_length=100)
    label: str = Field(..., min_length=1, max_length=255, validation_alias=AliasChoices("label", "lable"))
    status: int | None = Field(default=None, ge=0, le=1)


class ColumnActionUpdate(BaseModel):
    module_name: str | None = Field(default=None, min_length=1, max_length=100)
    label: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("label", "lable"),
    )
    status: int | None = Field(default=None, ge=0, le=1)
