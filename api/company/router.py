"""
Company endpoints. Registration is public; managing companies is admin only.
"""

from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status

from activity.dependencies import track_action
from auth import dependencies as auth_dependencies
from core import mailer

from . import schemas, service

router = APIRouter()


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_company(payload: schemas.CompanyCreate, background_tasks: BackgroundTasks) -> dict:
    result = await service.create_company(payload)
    # Confirmation mail goes out after the response; failures are only logged.
    background_tasks.add_task(
        mailer.send_email_background,
        **service.registration_email(result["company"]),
    )
    return result


@router.get("/all")
async def list_companies(
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.list_companies(limit=limit, offset=offset)


@router.get("/cuid/{cuid}")
async def get_company_by_cuid(cuid: str) -> dict:
    return await service.get_company_by_cuid(cuid)


@router.get("/{company_id}")
async def get_company(
    company_id: int,
    _: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    return await service.get_company(company_id)


@router.put("/{company_id}", dependencies=[Depends(track_action("update", entity_type="company"))])
async def update_company(
    company_id: int,
    payload: schemas.CompanyUpdate,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.update_company(company_id, payload)


@router.delete("/{company_id}", dependencies=[Depends(track_action("delete", entity_type="company"))])
async def delete_company(
    company_id: int,
    _: dict = Depends(auth_dependencies.require_admin),
) -> dict:
    return await service.delete_company(company_id)
