from __future__ import annotations

from core import crud

COLUMN_ACTION = crud.Table(
    name="column_action",
    columns=("module_name", "label", "status"),
    order_by="module_name ASC, id ASC",
    required=("module_name", "label", "status"),
)
