"""
Auth request and response models.

Back-office accounts are either `admin` or `user`; the same two values are
enforced by `users_usertype_check` in the database.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, Field

UserType = Literal["admin", "user"]

AccountEmail = Annotated[str, Field(min_length=3, max_length=320)]
SessionToken = Annotated[str, Field(min_length=20)]


class RegisterRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    email: AccountEmail
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: AccountEmail
    password: str = Field(..., min_length=1, max_length=128)


class RefreshRequest(BaseModel):
    refresh_token: SessionToken


class LogoutRequest(BaseModel):
    # Omitted: every session of the caller is revoked.
    refresh_token: SessionToken | None = None


class UserResponse(BaseModel):
    id: int
    name: str | None = None
    email: str
    usertype: UserType
    is_active: bool
    created_at: datetime


class TokenPairResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: Literal["bearer"] = "bearer"


class AuthResponse(BaseModel):
    success: bool = True
    user: UserResponse
    tokens: TokenPairResponse
