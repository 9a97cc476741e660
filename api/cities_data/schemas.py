from __future__ import annotations

from pydantic import BaseModel, Field


class CityDataCreate(BaseModel):
    country_id: int | None = None
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: int | None = Field(default=None, ge=0, le=1)


class CityDataUpdate(BaseModel):
    country_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: int | None = Field(default=None, ge=0, le=1)
