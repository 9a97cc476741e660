from __future__ import annotations

from core import crud

BUILDING_STYLE = crud.Table(
    name="building_style",
    columns=("name",),
    order_by="name ASC",
    required=("name",),
)
