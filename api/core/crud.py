"""
Generic table access shared by every resource package.

A resource declares its table once as a `Table` (name, writable columns,
ordering, required columns) and gets the five canonical operations:

    insert(table, data)           -> stored row (with DB defaults applied)
    list_rows(table, ...)         -> ordered rows
    get(table, id) / get_by(...)  -> row or None
    update(table, id, data)       -> affected row count
    delete(table, id)             -> affected row count

Identifiers (table and column names, ORDER BY) only ever come from the
`Table` declaration; values always travel as `$n` parameters. Resource-specific
finders (search, date ranges, joins) stay in the resource's own repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from . import db
from .errors import ConflictError, NotFoundError, ValidationError


@dataclass(frozen=True)
class Table:
    name: str
    columns: tuple[str, ...]
    order_by: str = "id DESC"
    required: tuple[str, ...] = ()
    touch_column: str | None = "updated_at"

    def check_column(self, column: str) -> str:
        if column != "id" and column not in self.columns:
            raise ValueError(f"Unknown column {column!r} for table {self.name!r}.")
        return column


# ----------------------------
# SQL builders (pure)
# ----------------------------
def insert_statement(table: Table, data: Mapping[str, Any]) -> tuple[str, list[Any]]:
    """
    INSERT only the columns present in `data` so omitted ones take the
    column DEFAULT declared in the migration.
    """
    columns = [c for c in table.columns if c in data]
    if not columns:
        return f"INSERT INTO {table.name} DEFAULT VALUES RETURNING *", []

    placeholders = ", ".join(f"${i}" for i in range(1, len(columns) + 1))
    sql = (
        f"INSERT INTO {table.name} ({', '.join(columns)}) "
        f"VALUES ({placeholders}) RETURNING *"
    )
    return sql, [data[c] for c in columns]


def select_statement(
    table: Table,
    *,
    filters: Mapping[str, Any] | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> tuple[str, list[Any]]:
    args: list[Any] = []
    conditions: list[str] = []
    for column, value in (filters or {}).items():
        args.append(value)
        conditions.append(f"{table.check_column(column)} = ${len(args)}")

    sql = f"SELECT * FROM {table.name}"
    if conditions:
        sql += " WHERE " + " AND ".join(conditions)
    sql += f" ORDER BY {table.order_by}"

    if limit is not None:
        args.append(limit)
        sql += f" LIMIT ${len(args)}"
        args.append(offset)
        sql += f" OFFSET ${len(args)}"
    return sql, args


def update_statement(table: Table, row_id: int, data: Mapping[str, Any]) -> tuple[str, list[Any]]:
    columns = [c for c in table.columns if c in data]
    assignments = [f"{c} = ${i}" for i, c in enumerate(columns, start=1)]
    if table.touch_column:
        assignments.append(f"{table.touch_column} = now()")
    if not assignments:
        raise ValueError(f"Nothing to update on table {table.name!r}.")

    args = [data[c] for c in columns]
    args.append(row_id)
    sql = f"UPDATE {table.name} SET {', '.join(assignments)} WHERE id = ${len(args)}"
    return sql, args


def delete_statement(table: Table, row_id: int) -> tuple[str, list[Any]]:
    return f"DELETE FROM {table.name} WHERE id = $1", [row_id]


# ----------------------------
# Operations
# ----------------------------
async def insert(table: Table, data: Mapping[str, Any]) -> dict[str, Any]:
    sql, args = insert_statement(table, data)
    row = await db.fetch_one(sql, *args)
    if row is None:
        raise RuntimeError(f"Insert into {table.name} returned no row.")
    return row


async def list_rows(
    table: Table,
    *,
    filters: Mapping[str, Any] | None = None,
    limit: int | None = None,
    offset: int = 0,
) -> list[dict[str, Any]]:
    sql, args = select_statement(table, filters=filters, limit=limit, offset=offset)
    return await db.fetch_all(sql, *args)


async def get(table: Table, row_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(f"SELECT * FROM {table.name} WHERE id = $1", row_id)


async def get_by(table: Table, column: str, value: Any) -> dict[str, Any] | None:
    column = table.check_column(column)
    return await db.fetch_one(
        f"SELECT * FROM {table.name} WHERE {column} = $1 ORDER BY id LIMIT 1",
        value,
    )


async def update(table: Table, row_id: int, data: Mapping[str, Any]) -> int:
    sql, args = update_statement(table, row_id, data)
    return db.affected_rows(await db.execute(sql, *args))


async def delete(table: Table, row_id: int) -> int:
    sql, args = delete_statement(table, row_id)
    return db.affected_rows(await db.execute(sql, *args))


# ----------------------------
# Service helpers
# ----------------------------
async def get_or_404(table: Table, row_id: int, message: str) -> dict[str, Any]:
    row = await get(table, row_id)
    if row is None:
        raise NotFoundError(message)
    return row


async def ensure_unique(
    table: Table,
    column: str,
    value: Any,
    message: str,
    *,
    exclude_id: int | None = None,
) -> None:
    """
    Fast-path duplicate check before a write.

    The UNIQUE constraint in the schema is still what decides; a race that
    slips past this check surfaces as UniqueViolationError -> 409.
    """
    if value is None:
        return None
    row = await get_by(table, column, value)
    if row is not None and row.get("id") != exclude_id:
        raise ConflictError(message)


def merge_update(table: Table, existing: Mapping[str, Any], changes: Mapping[str, Any]) -> dict[str, Any]:
    """
    Overlay the fields present in `changes` onto `existing`.

    `changes` must only hold fields the client actually sent
    (`model_dump(exclude_unset=True)`), so an explicit 0 / "" / False wins
    over the stored value while absent fields keep it.
    """
    merged = {c: (changes[c] if c in changes else existing.get(c)) for c in table.columns}
    for column in table.required:
        value = merged.get(column)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{column} cannot be empty.")
    return merged

