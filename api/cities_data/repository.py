"""
City reference data persistence.
"""

from __future__ import annotations

from core import crud

CITIES_DATA = crud.Table(
    name="cities_data",
    columns=("country_id", "name", "description", "status"),
    order_by="name ASC, id ASC",
    required=("name", "status"),
    touch_column="update_date",
)
