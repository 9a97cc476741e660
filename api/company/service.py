"""
Company service layer.
"""

from __future__ import annotations

import logging
import uuid
from html import escape

from core import crud
from core.errors import NotFoundError
from core.responses import listing, ok

from . import schemas
from .repository import COMPANY

logger = logging.getLogger(__name__)

DUPLICATE_CUID = "Company with this CUID already exists."


def _not_found(company_id: int) -> str:
    return f"Company not found with id: {company_id}"


def registration_email(row: dict) -> dict[str, str]:
    name = row.get("owner_name") or row.get("company_name")
    text = (
        f"Hello {name},\n\n"
        f"Thank you for registering {row['company_name']}.\n"
        f"Your company reference is {row['cuid']}.\n"
    )
    html = (
        f"<p>Hello {escape(str(name))},</p>"
        f"<p>Thank you for registering <strong>{escape(str(row['company_name']))}</strong>.</p>"
        f"<p>Your company reference is <code>{escape(str(row['cuid']))}</code>.</p>"
    )
    return {
        "to": str(row["email"]),
        "subject": "Company registration received",
        "text": text,
        "html": html,
    }


async def create_company(payload: schemas.CompanyCreate) -> dict:
    data = payload.model_dump(exclude_none=True)
    if payload.cuid is not None:
        await crud.ensure_unique(COMPANY, "cuid", payload.cuid, DUPLICATE_CUID)
    else:
        data["cuid"] = str(uuid.uuid4())

    row = await crud.insert(COMPANY, data)
    logger.info("company_created company_id=%s cuid=%s", row["id"], row["cuid"])
    return ok("Company registered successfully.", company=row)


async def list_companies(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(COMPANY, limit=limit, offset=offset)
    return listing("companies", rows)


async def get_company(company_id: int) -> dict:
    row = await crud.get_or_404(COMPANY, company_id, _not_found(company_id))
    return ok(company=row)


async def get_company_by_cuid(cuid: str) -> dict:
    row = await crud.get_by(COMPANY, "cuid", cuid)
    if row is None:
        raise NotFoundError(f"Company not found with cuid: {cuid}")
    return ok(company=row)


async def update_company(company_id: int, payload: schemas.CompanyUpdate) -> dict:
    existing = await crud.get_or_404(COMPANY, company_id, _not_found(company_id))
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("cuid") not in (None, existing.get("cuid")):
        await crud.ensure_unique(COMPANY, "cuid", changes["cuid"], DUPLICATE_CUID, exclude_id=company_id)

    merged = crud.merge_update(COMPANY, existing, changes)
    await crud.update(COMPANY, company_id, merged)
    return ok("Company details updated successfully.", company={"id": company_id, **merged})


async def delete_company(company_id: int) -> dict:
    await crud.get_or_404(COMPANY, company_id, _not_found(company_id))
    await crud.delete(COMPANY, company_id)
    logger.info("company_deleted company_id=%s", company_id)
    return ok("Company deleted successfully.")
