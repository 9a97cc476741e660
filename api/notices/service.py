"""
Notice service layer.
"""

from __future__ import annotations

import logging
from datetime import date

from core import crud
from core.errors import NotFoundError, ValidationError
from core.responses import listing, ok

from . import repository, schemas
from .repository import NOTICES

logger = logging.getLogger(__name__)

NOT_FOUND = "Notice not found."
DUPLICATE_SLUG = "Notice with this slug already exists."


def check_date_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("start_date must be on or before end_date.")


async def create_notice(payload: schemas.NoticeCreate) -> dict:
    await crud.ensure_unique(NOTICES, "slug", payload.slug, DUPLICATE_SLUG)
    row = await crud.insert(NOTICES, payload.model_dump(exclude_none=True))
    logger.info("notice_created notice_id=%s slug=%s", row["id"], row["slug"])
    return ok("Notice created successfully.", data=row)


async def list_notices(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(NOTICES, limit=limit, offset=offset)
    return listing("data", rows)


async def recent_notices(limit: int) -> dict:
    return listing("data", await crud.list_rows(NOTICES, limit=limit))


async def search_notices(query: str, *, limit: int | None = None, offset: int = 0) -> dict:
    query = (query or "").strip()
    if not query:
        raise ValidationError("Search query is required.")
    rows = await repository.search_notices(query, limit=limit, offset=offset)
    return listing("data", rows)


async def notices_between(start: date, end: date) -> dict:
    check_date_range(start, end)
    return listing("data", await repository.notices_between(start, end))


async def notices_for_assignee(assign: str) -> dict:
    return listing("data", await crud.list_rows(NOTICES, filters={"assign": assign}))


async def get_notice(notice_id: int) -> dict:
    return ok(data=await crud.get_or_404(NOTICES, notice_id, NOT_FOUND))


async def get_notice_by_slug(slug: str) -> dict:
    row = await crud.get_by(NOTICES, "slug", slug)
    if row is None:
        raise NotFoundError(NOT_FOUND)
    return ok(data=row)


async def update_notice(notice_id: int, payload: schemas.NoticeUpdate) -> dict:
    existing = await crud.get_or_404(NOTICES, notice_id, NOT_FOUND)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("slug") not in (None, existing.get("slug")):
        await crud.ensure_unique(NOTICES, "slug", changes["slug"], DUPLICATE_SLUG, exclude_id=notice_id)

    merged = crud.merge_update(NOTICES, existing, changes)
    await crud.update(NOTICES, notice_id, merged)
    return ok("Notice updated successfully.", data={"id": notice_id, **merged})


async def delete_notice(notice_id: int) -> dict:
    await crud.get_or_404(NOTICES, notice_id, NOT_FOUND)
    await crud.delete(NOTICES, notice_id)
    logger.info("notice_deleted notice_id=%s", notice_id)
    return ok("Notice deleted successfully.")
