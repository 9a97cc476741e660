"""
Auth persistence: users and refresh tokens.

Refresh tokens are stored as SHA-256 hashes only. Rotation inserts the new
token and retires the old one in a single transaction, so a refresh token can
be exchanged at most once.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from core import crud, db

USERS = crud.Table(
    name="users",
    columns=("name", "email", "password_hash", "usertype", "is_active"),
    order_by="id ASC",
    required=("email", "password_hash", "usertype"),
)

REFRESH_TOKENS = crud.Table(
    name="refresh_tokens",
    columns=(
        "user_id",
        "token_hash",
        "expires_at",
        "revoked_at",
        "replaced_by_token_id",
        "last_used_at",
        "user_agent",
        "ip_address",
    ),
    order_by="id DESC",
    touch_column=None,
)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


async def create_user(
    *,
    email: str,
    password_hash: str,
    name: str | None = None,
    usertype: str = "user",
) -> dict:
    return await crud.insert(
        USERS,
        {
            "name": name,
            "email": normalize_email(email),
            "password_hash": password_hash,
            "usertype": usertype,
        },
    )


async def get_user_by_email(email: str) -> dict | None:
    # Matches the unique index on lower(email).
    return await db.fetch_one(
        "SELECT * FROM users WHERE lower(email) = $1",
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await crud.get(USERS, user_id)


async def set_user_role(user_id: int, *, usertype: str, password_hash: str | None = None) -> dict | None:
    """
    Change a user's role and reactivate the account. The password is only
    replaced when a new hash is given.
    """
    return await db.fetch_one(
        """
        UPDATE users
        SET usertype = $2,
            password_hash = COALESCE($3, password_hash),
            is_active = TRUE,
            updated_at = now()
        WHERE id = $1
        RETURNING *
        """,
        user_id,
        usertype,
        password_hash,
    )


async def insert_refresh_token(
    *,
    user_id: int,
    token_hash: str,
    expires_at: datetime,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> dict:
    return await crud.insert(
        REFRESH_TOKENS,
        {
            "user_id": user_id,
            "token_hash": token_hash,
            "expires_at": _aware(expires_at),
            "user_agent": user_agent,
            "ip_address": ip_address,
        },
    )


async def get_refresh_token_by_hash(token_hash: str) -> dict | None:
    return await crud.get_by(REFRESH_TOKENS, "token_hash", token_hash)


class _TokenAlreadyRotated(Exception):
    pass


async def rotate_refresh_token(
    *,
    old_token_id: int,
    user_id: int,
    token_hash: str,
    expires_at: datetime,
    user_agent: str | None = None,
    ip_address: str | None = None,
) -> dict | None:
    """
    Insert the replacement token and retire the old one.

    Returns None (and stores nothing) when the old token was already revoked,
    e.g. by a concurrent refresh with the same token.
    """
    try:
        async with db.transaction() as conn:
            new_row = await conn.fetchrow(
                """
                INSERT INTO refresh_tokens (user_id, token_hash, expires_at, user_agent, ip_address)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING *
                """,
                user_id,
                token_hash,
                _aware(expires_at),
                user_agent,
                ip_address,
            )
            retired = await conn.execute(
                """
                UPDATE refresh_tokens
                SET revoked_at = now(),
                    last_used_at = now(),
                    replaced_by_token_id = $2
                WHERE id = $1
                  AND revoked_at IS NULL
                """,
                old_token_id,
                new_row["id"],
            )
            if db.affected_rows(retired) == 0:
                # Rolls back the insert above.
                raise _TokenAlreadyRotated()
    except _TokenAlreadyRotated:
        return None
    return dict(new_row)


async def revoke_refresh_tokens(by: Literal["id", "token_hash", "user_id"], value: int | str) -> int:
    """
    Revoke every live refresh token matching one column. Returns the count.
    """
    column = REFRESH_TOKENS.check_column(by)
    status_tag = await db.execute(
        f"UPDATE refresh_tokens SET revoked_at = now() WHERE {column} = $1 AND revoked_at IS NULL",
        value,
    )
    return db.affected_rows(status_tag)
