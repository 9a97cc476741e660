"""
Notice request models.
"""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class NoticeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    headings: str | None = Field(default=None, max_length=255)
    description: str | None = None
    assign: str | None = Field(default=None, max_length=255)
    date: dt.date | None = None
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    descriptions: str | None = None
    seo_title: str | None = Field(default=None, max_length=255)
    seo_keywords: str | None = None
    seo_description: str | None = None


class NoticeUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    headings: str | None = Field(default=None, max_length=255)
    description: str | None = None
    assign: str | None = Field(default=None, max_length=255)
    date: dt.date | None = None
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    descriptions: str | None = None
    seo_title: str | None = Field(default=None, max_length=255)
    seo_keywords: str | None = None
    seo_description: str | None = None
