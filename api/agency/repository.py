"""
Agency persistence.
"""

from __future__ import annotations

from core import crud

AGENCY = crud.Table(
    name="agency",
    columns=("cuid", "owner_name", "office_name", "email", "phone", "orn", "status"),
    order_by="create_date DESC, id DESC",
    required=("cuid", "owner_name", "office_name", "email", "status"),
    touch_column="updated_date",
)
