"""
Shared fixtures.

Tests never touch Postgres: `memory_db` swaps the generic table operations in
`core.crud` for an in-memory store, and auth guards are satisfied through
`app.dependency_overrides`.
"""

from __future__ import annotations

import itertools
from datetime import date, datetime, timezone
from typing import Any
from unittest.mock import AsyncMock

import asyncpg
import pytest
from fastapi.testclient import TestClient

from auth import dependencies as auth_dependencies
from core import crud
from main import app
from settings import service as settings_service

# Column DEFAULTs from db/migrations, applied on insert like Postgres would.
TABLE_DEFAULTS: dict[str, dict[str, Any]] = {
    "agency": {"status": "Active"},
    "cities": {"status": 1},
    "cities_data": {"status": 1},
    "column_action": {"status": 1},
    "comments": {"status": 0},
    "notices": {"date": date.today},
    "tasks": {"date": date.today},
    "recent_activity": {"status": "completed", "activity_type": "general"},
}

UNIQUE_COLUMNS: dict[str, tuple[str, ...]] = {
    "agency": ("cuid",),
    "company": ("cuid",),
    "cities": ("slug",),
    "notices": ("slug",),
    "tasks": ("slug",),
    "building_style": ("name",),
    "commercial_amenities": ("name",),
}


class MemoryDB:
    """
    Minimal stand-in for the tables behind `core.crud`.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[int, dict[str, Any]]] = {}
        self._ids = itertools.count(1)

    def rows(self, table_name: str) -> list[dict[str, Any]]:
        return list(self.tables.get(table_name, {}).values())

    def _check_unique(self, table: crud.Table, data: dict[str, Any], row_id: int | None = None) -> None:
        for column in UNIQUE_COLUMNS.get(table.name, ()):
            value = data.get(column)
            if value is None:
                continue
            for existing in self.rows(table.name):
                if existing.get(column) == value and existing["id"] != row_id:
                    raise asyncpg.UniqueViolationError(f"duplicate key value violates {table.name}_{column}_key")

    def seed(self, table: crud.Table, **data: Any) -> dict[str, Any]:
        row_id = next(self._ids)
        now = datetime.now(timezone.utc)
        row: dict[str, Any] = {column: None for column in table.columns}
        for column, default in TABLE_DEFAULTS.get(table.name, {}).items():
            row[column] = default() if callable(default) else default
        row.update(data)
        row["id"] = row_id
        row.setdefault("created_at", now)
        if table.touch_column:
            row[table.touch_column] = now
        self.tables.setdefault(table.name, {})[row_id] = row
        return dict(row)

    async def insert(self, table: crud.Table, data: dict[str, Any]) -> dict[str, Any]:
        payload = {c: data[c] for c in table.columns if c in data}
        self._check_unique(table, payload)
        return self.seed(table, **payload)

    async def list_rows(self, table: crud.Table, *, filters=None, limit=None, offset=0) -> list[dict[str, Any]]:
        rows = [
            dict(r)
            for r in self.rows(table.name)
            if all(r.get(table.check_column(c)) == v for c, v in (filters or {}).items())
        ]
        rows.sort(key=lambda r: r["id"], reverse="DESC" in table.order_by.split(",")[0])
        if limit is not None:
            rows = rows[offset:offset + limit]
        return rows

    async def get(self, table: crud.Table, row_id: int) -> dict[str, Any] | None:
        row = self.tables.get(table.name, {}).get(row_id)
        return dict(row) if row is not None else None

    async def get_by(self, table: crud.Table, column: str, value: Any) -> dict[str, Any] | None:
        table.check_column(column)
        for row in self.rows(table.name):
            if row.get(column) == value:
                return dict(row)
        return None

    async def update(self, table: crud.Table, row_id: int, data: dict[str, Any]) -> int:
        row = self.tables.get(table.name, {}).get(row_id)
        if row is None:
            return 0
        payload = {c: data[c] for c in table.columns if c in data}
        self._check_unique(table, payload, row_id=row_id)
        row.update(payload)
        if table.touch_column:
            row[table.touch_column] = datetime.now(timezone.utc)
        return 1

    async def delete(self, table: crud.Table, row_id: int) -> int:
        return 1 if self.tables.get(table.name, {}).pop(row_id, None) is not None else 0


@pytest.fixture
def memory_db(monkeypatch) -> MemoryDB:
    fake = MemoryDB()
    for name in ("insert", "list_rows", "get", "get_by", "update", "delete"):
        monkeypatch.setattr(crud, name, getattr(fake, name))
    return fake


@pytest.fixture(autouse=True)
def maintenance_off(monkeypatch) -> AsyncMock:
    check = AsyncMock(return_value=False)
    monkeypatch.setattr(settings_service, "is_maintenance_mode", check)
    return check


@pytest.fixture
def admin_user() -> dict:
    return {"id": 1, "name": "Admin", "email": "admin@example.com", "usertype": "admin", "is_active": True}


@pytest.fixture
def regular_user() -> dict:
    return {"id": 2, "name": "Sam", "email": "sam@example.com", "usertype": "user", "is_active": True}


@pytest.fixture
def other_user() -> dict:
    return {"id": 3, "name": "Alex", "email": "alex@example.com", "usertype": "user", "is_active": True}


@pytest.fixture
def login_as():
    """
    Make every guarded route see `user` as the caller.
    """

    def _login(user: dict) -> None:
        app.dependency_overrides[auth_dependencies.get_current_user] = lambda: user

    yield _login
    app.dependency_overrides.clear()


@pytest.fixture
def client(memory_db) -> TestClient:
    # No `with` block: the lifespan (and its DB pool) is not started.
    return TestClient(app)
