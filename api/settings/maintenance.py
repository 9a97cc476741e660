"""
Maintenance gate.

While `other.maintenance_mode` is on, every request outside the allow-list is
answered with 503. The admin namespace, auth endpoints and the public status
probes stay reachable so operators can log in and switch it back off.
"""

from __future__ import annotations

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from core.errors import MaintenanceError, error_response

from . import service

logger = logging.getLogger(__name__)

MAINTENANCE_MESSAGE = "Site is currently under maintenance. Please try again later."


def allowed_during_maintenance(path: str, api_prefix: str) -> bool:
    if path in {"/", "/health"}:
        return True
    exempt_prefixes = (f"{api_prefix}/admin/", f"{api_prefix}/auth/")
    return path.startswith(exempt_prefixes) or path in {f"{api_prefix}/admin", f"{api_prefix}/auth"}


class MaintenanceMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, api_prefix: str) -> None:
        super().__init__(app)
        self.api_prefix = api_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "OPTIONS" or allowed_during_maintenance(request.url.path, self.api_prefix):
            return await call_next(request)

        try:
            enabled = await service.is_maintenance_mode()
        except Exception:
            logger.exception("maintenance_check_failed path=%s", request.url.path)
            enabled = False

        if enabled:
            return error_response(MaintenanceError.status_code, MAINTENANCE_MESSAGE, maintenanceMode=True)
        return await call_next(request)
