"""
Task persistence and finders.
"""

from __future__ import annotations

from datetime import date

from core import crud, db

TASKS = crud.Table(
    name="tasks",
    columns=(
        "commission",
        "assign",
        "date",
        "title",
        "slug",
        "descriptions",
        "heading",
        "seo_title",
        "seo_keywords",
        "seo_description",
    ),
    order_by="id DESC",
    required=("date",),
)


async def search_tasks(query: str, *, limit: int | None = None, offset: int = 0) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM tasks
        WHERE title ILIKE $1
           OR heading ILIKE $1
           OR assign ILIKE $1
           OR commission ILIKE $1
           OR descriptions ILIKE $1
        ORDER BY id DESC
        LIMIT $2 OFFSET $3
        """,
        f"%{query}%",
        limit,
        offset,
    )


async def tasks_between(start: date, end: date) -> list[dict]:
    return await db.fetch_all(
        """
        SELECT *
        FROM tasks
        WHERE date BETWEEN $1 AND $2
        ORDER BY date DESC, id DESC
        """,
        start,
        end,
    )
