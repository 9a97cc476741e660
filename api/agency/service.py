"""
Agency service layer.

Create generates a `cuid` when the caller omits one; a caller-supplied `cuid`
must be unused. Update merges only the fields present in the request body onto
the stored row.
"""

from __future__ import annotations

import logging
import uuid

from core import crud
from core.errors import NotFoundError
from core.responses import listing, ok

from . import schemas
from .repository import AGENCY

logger = logging.getLogger(__name__)

DUPLICATE_CUID = "Agency with this CUID already exists."


def _not_found(agency_id: int) -> str:
    return f"Agency not found with id: {agency_id}"


async def create_agency(payload: schemas.AgencyCreate) -> dict:
    data = payload.model_dump(exclude_none=True)
    if payload.cuid is not None:
        await crud.ensure_unique(AGENCY, "cuid", payload.cuid, DUPLICATE_CUID)
    else:
        data["cuid"] = str(uuid.uuid4())

    row = await crud.insert(AGENCY, data)
    logger.info("agency_created agency_id=%s cuid=%s", row["id"], row["cuid"])
    return ok("Agency registered successfully.", agency=row)


async def list_agencies(*, limit: int | None = None, offset: int = 0) -> dict:
    rows = await crud.list_rows(AGENCY, limit=limit, offset=offset)
    return listing("agencies", rows)


async def get_agency(agency_id: int) -> dict:
    row = await crud.get_or_404(AGENCY, agency_id, _not_found(agency_id))
    return ok(agency=row)


async def get_agency_by_cuid(cuid: str) -> dict:
    row = await crud.get_by(AGENCY, "cuid", cuid)
    if row is None:
        raise NotFoundError(f"Agency not found with cuid: {cuid}")
    return ok(agency=row)


async def update_agency(agency_id: int, payload: schemas.AgencyUpdate) -> dict:
    existing = await crud.get_or_404(AGENCY, agency_id, _not_found(agency_id))
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("cuid") not in (None, existing.get("cuid")):
        await crud.ensure_unique(AGENCY, "cuid", changes["cuid"], DUPLICATE_CUID, exclude_id=agency_id)

    merged = crud.merge_update(AGENCY, existing, changes)
    await crud.update(AGENCY, agency_id, merged)
    return ok("Agency details updated successfully.", agency={"id": agency_id, **merged})


async def delete_agency(agency_id: int) -> dict:
    await crud.get_or_404(AGENCY, agency_id, _not_found(agency_id))
    await crud.delete(AGENCY, agency_id)
    logger.info("agency_deleted agency_id=%s", agency_id)
    return ok("Agency deleted successfully.")
