"""
City persistence.
"""

from __future__ import annotations

from core import crud, db

CITIES = crud.Table(
    name="cities",
    columns=(
        "country_id",
        "state_id",
        "city_data_id",
        "name",
        "slug",
        "latitude",
        "longitude",
        "img",
        "description",
        "seo_title",
        "seo_keywords",
        "seo_description",
        "status",
    ),
    order_by="name ASC, id ASC",
    required=("name", "slug", "status"),
)


async def search_cities(
    *,
    query: str | None = None,
    status: int | None = None,
    country_id: int | None = None,
    state_id: int | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[dict]:
    """
    Filtered listing. Each filter is optional; the SQL is fixed and unused
    filters are neutralised with `$n IS NULL`.
    """
    pattern = f"%{query}%" if query else None
    return await db.fetch_all(
        """
        SELECT *
        FROM cities
        WHERE ($1::text IS NULL OR name ILIKE $1 OR slug ILIKE $1)
          AND ($2::smallint IS NULL OR status = $2)
          AND ($3::bigint IS NULL OR country_id = $3)
          AND ($4::bigint IS NULL OR state_id = $4)
        ORDER BY name ASC, id ASC
        LIMIT $5 OFFSET $6
        """,
        pattern,
        status,
        country_id,
        state_id,
        limit,
        offset,
    )
