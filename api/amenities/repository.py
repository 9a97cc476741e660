from __future__ import annotations

from core import crud

COMMERCIAL_AMENITIES = crud.Table(
    name="commercial_amenities",
    columns=("name",),
    order_by="name ASC",
    required=("name",),
)
