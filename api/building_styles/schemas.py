from __future__ import annotations

from pydantic import BaseModel, Field


class BuildingStyleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class BuildingStyleUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
