"""
Auth business logic: accounts, credential checks and the token lifecycle.

Access tokens are short-lived JWTs carrying the user's role. Refresh tokens
are opaque random strings; only their hash is stored, and each one can be
exchanged for a new pair exactly once.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from core.errors import AuthenticationError, ConflictError, ForbiddenError, ValidationError

from . import repository, schemas, security

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."
INACTIVE_ACCOUNT = "Your account is inactive."


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _role(user_row: dict) -> str:
    return str(user_row.get("usertype") or security.USER_ROLE)


def to_user_response(user_row: dict) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        name=user_row.get("name"),
        email=str(user_row["email"]),
        usertype=_role(user_row),
        is_active=bool(user_row["is_active"]),
        created_at=user_row["created_at"],
    )


def _refresh_expiry() -> datetime:
    return _utc_now() + timedelta(days=security.refresh_token_expire_days())


def _access_token(user_row: dict) -> str:
    return security.build_access_token(
        user_id=int(user_row["id"]),
        email=str(user_row["email"]),
        usertype=_role(user_row),
    )


async def _start_session(user_row: dict, *, user_agent: str | None, ip_address: str | None) -> schemas.AuthResponse:
    raw_refresh_token = security.build_refresh_token()
    await repository.insert_refresh_token(
        user_id=int(user_row["id"]),
        token_hash=security.hash_refresh_token(raw_refresh_token),
        expires_at=_refresh_expiry(),
        user_agent=user_agent,
        ip_address=ip_address,
    )
    return schemas.AuthResponse(
        user=to_user_response(user_row),
        tokens=schemas.TokenPairResponse(
            access_token=_access_token(user_row),
            refresh_token=raw_refresh_token,
        ),
    )


async def register(
    payload: schemas.RegisterRequest,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> schemas.AuthResponse:
    if await repository.get_user_by_email(payload.email) is not None:
        raise ConflictError("Email is already registered.")

    user_row = await repository.create_user(
        email=payload.email,
        password_hash=security.hash_password(payload.password),
        name=payload.name,
    )
    logger.info("user_registered user_id=%s", user_row["id"])
    return await _start_session(user_row, user_agent=user_agent, ip_address=ip_address)


async def login(
    payload: schemas.LoginRequest,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> schemas.AuthResponse:
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None:
        logger.info("login_failed reason=unknown_email")
        raise AuthenticationError(INVALID_CREDENTIALS)

    if not user_row.get("is_active"):
        raise ForbiddenError(INACTIVE_ACCOUNT)

    if not security.verify_password(payload.password, str(user_row.get("password_hash") or "")):
        logger.info("login_failed reason=bad_password user_id=%s", user_row["id"])
        raise AuthenticationError(INVALID_CREDENTIALS)

    logger.info("login_succeeded user_id=%s role=%s", user_row["id"], _role(user_row))
    return await _start_session(user_row, user_agent=user_agent, ip_address=ip_address)


async def refresh_tokens(
    payload: schemas.RefreshRequest,
    *,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> schemas.TokenPairResponse:
    incoming = (payload.refresh_token or "").strip()
    if not incoming:
        raise ValidationError("refresh_token is required.")

    token_row = await repository.get_refresh_token_by_hash(security.hash_refresh_token(incoming))
    if token_row is None:
        raise AuthenticationError("Invalid refresh token.")
    if token_row.get("revoked_at") is not None:
        raise AuthenticationError("Refresh token is revoked.")

    token_id = int(token_row["id"])
    expires_at = token_row.get("expires_at")
    if not isinstance(expires_at, datetime) or expires_at <= _utc_now():
        await repository.revoke_refresh_tokens("id", token_id)
        raise AuthenticationError("Refresh token is expired.")

    user_row = await repository.get_user_by_id(int(token_row["user_id"]))
    if user_row is None or not user_row.get("is_active"):
        await repository.revoke_refresh_tokens("id", token_id)
        raise AuthenticationError("Invalid refresh token owner.")

    raw_refresh_token = security.build_refresh_token()
    rotated = await repository.rotate_refresh_token(
        old_token_id=token_id,
        user_id=int(user_row["id"]),
        token_hash=security.hash_refresh_token(raw_refresh_token),
        expires_at=_refresh_expiry(),
        user_agent=user_agent,
        ip_address=ip_address,
    )
    if rotated is None:
        logger.warning("refresh_token_reused token_id=%s user_id=%s", token_id, user_row["id"])
        raise AuthenticationError("Refresh token is revoked.")

    return schemas.TokenPairResponse(access_token=_access_token(user_row), refresh_token=raw_refresh_token)


async def logout(payload: schemas.LogoutRequest, *, current_user_id: int) -> dict:
    """
    Revoke one session when a refresh token is given, otherwise every
    session of the caller.
    """
    refresh_token = (payload.refresh_token or "").strip()
    if refresh_token:
        revoked = await repository.revoke_refresh_tokens("token_hash", security.hash_refresh_token(refresh_token))
    else:
        revoked = await repository.revoke_refresh_tokens("user_id", current_user_id)
    logger.info("logout user_id=%s revoked=%s", current_user_id, revoked)
    return {"success": True, "message": "Logged out successfully."}


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise AuthenticationError(str(exc)) from exc

    subject = str(payload.get("sub") or "").strip()
    if not subject.isdigit():
        raise AuthenticationError("Invalid access token subject.")

    user_row = await repository.get_user_by_id(int(subject))
    if user_row is None:
        raise AuthenticationError("User not found.")
    if not user_row.get("is_active"):
        raise ForbiddenError(INACTIVE_ACCOUNT)
    return user_row


async def ensure_admin(*, email: str, password: str, name: str | None = None) -> dict:
    """
    Create an administrator, or promote the existing account with that email
    (resetting its password). Used by the operations CLI.
    """
    password_hash = security.hash_password(password)
    existing = await repository.get_user_by_email(email)
    if existing is None:
        user_row = await repository.create_user(
            email=email,
            password_hash=password_hash,
            name=name,
            usertype=security.ADMIN_ROLE,
        )
        logger.info("admin_created user_id=%s", user_row["id"])
        return user_row

    user_row = await repository.set_user_role(
        int(existing["id"]),
        usertype=security.ADMIN_ROLE,
        password_hash=password_hash,
    )
    if user_row is None:
        raise RuntimeError("Failed to promote user.")
    logger.info("admin_promoted user_id=%s", user_row["id"])
    return user_row
