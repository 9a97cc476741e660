"""
Company persistence.
"""

from __future__ import annotations

from core import crud

COMPANY = crud.Table(
    name="company",
    columns=(
        "cuid",
        "company_field",
        "company_name",
        "email",
        "trade_licence",
        "referral",
        "owner_name",
        "mobile",
    ),
    order_by="create_date DESC, id DESC",
    required=("cuid", "company_name", "email"),
    touch_column="update_date",
)
