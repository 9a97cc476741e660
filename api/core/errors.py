"""
Typed API errors and the handlers that render them.

Services raise the `ApiError` subclasses below; everything else (driver
failures, bugs) falls through to the generic 500 handler. Every error response
has the same shape: {"success": false, "message": "..."}.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(status_code=type(self).status_code, detail=message)

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ApiError):
    status_code = status.HTTP_409_CONFLICT


class UploadRejectedError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class MaintenanceError(ApiError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


def _validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    # loc looks like ("body", "owner_name") or ("path", "agency_id")
    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    if first.get("type") == "missing" and field:
        return f"{field} is required."
    detail = str(first.get("msg") or "Invalid value.")
    return f"{field}: {detail}" if field else detail


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def _request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _validation_message(exc))


async def _unique_violation_handler(request: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
    logger.info(
        "unique_violation path=%s constraint=%s",
        request.url.path,
        getattr(exc, "constraint_name", None),
    )
    return error_response(status.HTTP_409_CONFLICT, "A record with this value already exists.")


async def _integrity_violation_handler(request: Request, exc: asyncpg.IntegrityConstraintViolationError) -> JSONResponse:
    logger.info(
        "integrity_violation path=%s constraint=%s",
        request.url.path,
        getattr(exc, "constraint_name", None),
    )
    return error_response(status.HTTP_400_BAD_REQUEST, "Referenced record is missing or a value is not allowed.")


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(asyncpg.UniqueViolationError, _unique_violation_handler)
    app.add_exception_handler(asyncpg.ForeignKeyViolationError, _integrity_violation_handler)
    app.add_exception_handler(asyncpg.NotNullViolationError, _integrity_violation_handler)
    app.add_exception_handler(asyncpg.CheckViolationError, _integrity_violation_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
