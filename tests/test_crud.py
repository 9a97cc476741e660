"""
Tests for the generic table helpers (SQL builders and merge-on-update).
"""

import pytest

from core import crud, db
from core.errors import ValidationError

WIDGETS = crud.Table(
    name="widgets",
    columns=("name", "size", "enabled"),
    order_by="name ASC",
    required=("name",),
)


class TestInsertStatement:
    def test_only_present_columns_are_inserted(self):
        sql, args = crud.insert_statement(WIDGETS, {"name": "a", "size": 0})

        assert sql == "INSERT INTO widgets (name, size) VALUES ($1, $2) RETURNING *"
        assert args == ["a", 0]

    def test_unknown_keys_are_ignored(self):
        sql, args = crud.insert_statement(WIDGETS, {"name": "a", "id": 99, "drop table": 1})

        assert sql == "INSERT INTO widgets (name) VALUES ($1) RETURNING *"
        assert args == ["a"]

    def test_empty_payload_uses_defaults(self):
        sql, args = crud.insert_statement(WIDGETS, {})

        assert sql == "INSERT INTO widgets DEFAULT VALUES RETURNING *"
        assert args == []


class TestSelectStatement:
    def test_unbounded_list(self):
        sql, args = crud.select_statement(WIDGETS)

        assert sql == "SELECT * FROM widgets ORDER BY name ASC"
        assert args == []

    def test_filters_and_pagination_are_parameters(self):
        sql, args = crud.select_statement(WIDGETS, filters={"size": 3}, limit=10, offset=20)

        assert sql == "SELECT * FROM widgets WHERE size = $1 ORDER BY name ASC LIMIT $2 OFFSET $3"
        assert args == [3, 10, 20]

    def test_unknown_filter_column_is_rejected(self):
        with pytest.raises(ValueError):
            crud.select_statement(WIDGETS, filters={"name; DROP TABLE widgets": 1})


class TestUpdateStatement:
    def test_sets_columns_and_touches_timestamp(self):
        sql, args = crud.update_statement(WIDGETS, 7, {"name": "b", "enabled": False})

        assert sql == "UPDATE widgets SET name = $1, enabled = $2, updated_at = now() WHERE id = $3"
        assert args == ["b", False, 7]

    def test_custom_touch_column(self):
        table = crud.Table(name="agency", columns=("email",), touch_column="updated_date")

        sql, _ = crud.update_statement(table, 1, {"email": "x@y.z"})

        assert "updated_date = now()" in sql


class TestMergeUpdate:
    existing = {"id": 1, "name": "old", "size": 5, "enabled": True}

    def test_empty_changes_reproduce_existing_row(self):
        merged = crud.merge_update(WIDGETS, self.existing, {})

        assert merged == {"name": "old", "size": 5, "enabled": True}

    def test_falsy_values_are_kept(self):
        merged = crud.merge_update(WIDGETS, self.existing, {"size": 0, "enabled": False})

        assert merged["size"] == 0
        assert merged["enabled"] is False
        assert merged["name"] == "old"

    def test_clearing_required_column_is_rejected(self):
        with pytest.raises(ValidationError):
            crud.merge_update(WIDGETS, self.existing, {"name": "  "})

    def test_optional_column_can_be_cleared(self):
        merged = crud.merge_update(WIDGETS, self.existing, {"size": None})

        assert merged["size"] is None


@pytest.mark.parametrize(
    "status_tag, expected",
    [("UPDATE 1", 1), ("DELETE 0", 0), ("INSERT 0 3", 3), ("CREATE TABLE", 0), (None, 0)],
)
def test_affected_rows(status_tag, expected):
    assert db.affected_rows(status_tag) == expected
