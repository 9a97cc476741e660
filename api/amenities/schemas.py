from __future__ import annotations

from pydantic import BaseModel, Field


class AmenityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)


class AmenityUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
