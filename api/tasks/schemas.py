"""
Task request models.

`commission` is also accepted as `Commission`, the key the admin task form posts.
"""

from __future__ import annotations

import datetime as dt

from pydantic import AliasChoices, BaseModel, Field, model_validator

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class _TaskFields(BaseModel):
    commission: str | None = Field(
        default=None,
        max_length=255,
        validation_alias=AliasChoices("commission", "Commission"),
    )
    assign: str | None = Field(default=None, max_length=255)
    date: dt.date | None = None
    title: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    descriptions: str | None = None
    heading: str | None = Field(default=None, max_length=255)
    seo_title: str | None = Field(default=None, max_length=255)
    seo_keywords: str | None = None
    seo_description: str | None = None


class TaskCreate(_TaskFields):
    @model_validator(mode="after")
    def _title_or_heading(self) -> "TaskCreate":
        if not (self.title or "").strip() and not (self.heading or "").strip():
            raise ValueError("title or heading is required")
        return self


class TaskUpdate(_TaskFields):
    pass
