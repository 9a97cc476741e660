"""
Success envelopes: {"success": true, "message"?: str, <key>: ..., "count"?: int}.
"""

from __future__ import annotations

from typing import Any


def ok(message: str | None = None, **payload: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"success": True}
    if message:
        body["message"] = message
    body.update(payload)
    return body


def listing(key: str, rows: list[Any], message: str | None = None, **extra: Any) -> dict[str, Any]:
    body = ok(message, count=len(rows), **extra)
    body[key] = rows
    return body
