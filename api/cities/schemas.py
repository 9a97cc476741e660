"""
City request models.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CityCreate(BaseModel):
    country_id: int | None = None
    state_id: int | None = None
    city_data_id: int | None = None
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)
    description: str | None = None
    seo_title: str | None = Field(default=None, max_length=255)
    seo_keywords: str | None = None
    seo_description: str | None = None
    status: int | None = Field(default=None, ge=0, le=1)


class CityUpdate(BaseModel):
    country_id: int | None = None
    state_id: int | None = None
    city_data_id: int | None = None
    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    latitude: Decimal | None = Field(default=None, ge=-90, le=90)
    longitude: Decimal | None = Field(default=None, ge=-180, le=180)
    description: str | None = None
    seo_title: str | None = Field(default=None, max_length=255)
    seo_keywords: str | None = None
    seo_description: str | None = None
    status: int | None = Field(default=None, ge=0, le=1)
