"""
Auth dependencies (guards) for protected FastAPI routes.

    Depends(get_current_user)   -> any active, authenticated user
    Depends(require_admin)      -> additionally usertype == "admin"
"""

from __future__ import annotations

from fastapi import Depends, Header

from core.errors import AuthenticationError, ForbiddenError

from . import security, service


def _extract_bearer_token(authorization: str | None) -> str:
    raw = (authorization or "").strip()
    if not raw:
        raise AuthenticationError("Please login to access this resource.")

    parts = raw.split(" ", 1)
    if len(parts) != 2:
        raise AuthenticationError("Invalid Authorization header format.")

    scheme, token = parts[0].strip().lower(), parts[1].strip()
    if scheme != "bearer" or not token:
        raise AuthenticationError("Authorization must be: Bearer <token>.")
    return token


async def get_bearer_token(authorization: str | None = Header(default=None)) -> str:
    return _extract_bearer_token(authorization)


async def get_current_user(access_token: str = Depends(get_bearer_token)) -> dict:
    return await service.get_user_from_access_token(access_token)


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    if not security.is_admin(current_user):
        raise ForbiddenError("Access denied. Admin only.")
    return current_user

