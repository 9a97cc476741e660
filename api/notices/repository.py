"""
Notice persistence and finders.
"""

from __future__ import annotations

from datetime import date

from core import crud, db

NOTICES = crud.Table(
    name="notices",
    columns=(
        "title",
        "headings",
        "description",
        "assign",
        "date",
        "slug",
        "descriptions",
        "seo_title",
        "seo_keywords",
        "seo_description",
    ),
    order_by="id DESC",
    required=("title", "slug", "date"),
)


async def search_notices(query: str, *, limit: int | None = None, offset: int = 0) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM notices
        WHERE title ILIKE $1
           OR headings ILIKE $1
           OR description ILIKE $1
           OR assign ILIKE $1
           OR slug ILIKE $1
           OR descriptions ILIKE $1
        ORDER BY id DESC
        LIMIT $2 OFFSET $3
        """,
        f"%{query}%",
        limit,
        offset,
    )


async def notices_between(start: date, end: date) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM notices
        WHERE date BETWEEN $1 AND $2
        ORDER BY date DESC, id DESC
        """,
        start,
        end,
    )
