"""
Request metadata helpers.
"""

from __future__ import annotations

from fastapi import Request


def client_ip(request: Request) -> str | None:
    # First hop of X-Forwarded-For when behind a proxy, else the socket peer.
    forwarded = (request.headers.get("x-forwarded-for") or "").split(",")[0].strip()
    if forwarded:
        return forwarded
    return request.client.host if request.client else None


def user_agent(request: Request) -> str | None:
    return request.headers.get("user-agent")
