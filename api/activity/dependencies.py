"""
Route-level activity tracking.

    @router.post("/create", dependencies=[Depends(track_action("create", entity_type="agency"))])

The dependency runs after the route's auth guard has resolved the caller and
schedules the audit insert as a background task, so it is written after the
response has been determined and cannot fail the request.
"""

from __future__ import annotations

from typing import Callable

from fastapi import BackgroundTasks, Depends, Request

from auth import dependencies as auth_dependencies
from core.client import client_ip, user_agent

from . import service


def _entity_id(request: Request) -> int | None:
    for name, value in request.path_params.items():
        if name.endswith("_id") or name == "id":
            try:
                return int(value)
            except (TypeError, ValueError):
                return None
    return None


def track_action(
    action: str,
    *,
    entity_type: str,
    title: str | None = None,
    activity_type: str = "general",
) -> Callable:
    label = title or f"{entity_type.replace('_', ' ').title()} {action}"

    async def _track(
        request: Request,
        background_tasks: BackgroundTasks,
        current_user: dict = Depends(auth_dependencies.get_current_user),
    ) -> None:
        entry = service.build_entry(
            action=action,
            title=label,
            entity_type=entity_type,
            entity_id=_entity_id(request),
            user=current_user,
            ip_address=client_ip(request),
            user_agent=user_agent(request),
            activity_type=activity_type,
            metadata={"method": request.method, "path": request.url.path},
        )
        background_tasks.add_task(service.record_activity_safely, entry)

    return _track
