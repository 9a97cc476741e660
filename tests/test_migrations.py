"""
Migration file parsing and discovery.
"""

import pytest

from core import migrations


def test_parse_splits_up_and_down():
    up, down = migrations.parse_migration(
        "-- migrate:up\nCREATE TABLE a (id INT);\n\n-- migrate:down\nDROP TABLE a;\n"
    )

    assert up == "CREATE TABLE a (id INT);"
    assert down == "DROP TABLE a;"


def test_parse_without_down_section():
    up, down = migrations.parse_migration("-- migrate:up\nSELECT 1;")

    assert (up, down) == ("SELECT 1;", "")


@pytest.mark.parametrize(
    "text",
    ["CREATE TABLE a (id INT);", "-- migrate:down\nDROP TABLE a;\n-- migrate:up\nCREATE TABLE a (id INT);"],
)
def test_parse_rejects_malformed_files(text):
    with pytest.raises(migrations.MigrationError):
        migrations.parse_migration(text)


def test_discover_orders_by_version_and_skips_bad_names(tmp_path):
    (tmp_path / "20240102_second.sql").write_text("-- migrate:up\nSELECT 2;", encoding="utf-8")
    (tmp_path / "20240101_first.sql").write_text("-- migrate:up\nSELECT 1;", encoding="utf-8")
    (tmp_path / "notes.sql").write_text("-- migrate:up\nSELECT 0;", encoding="utf-8")

    found = migrations.discover(tmp_path)

    assert [(m.version, m.name) for m in found] == [("20240101", "first"), ("20240102", "second")]


def test_discover_rejects_duplicate_versions(tmp_path):
    (tmp_path / "1_a.sql").write_text("-- migrate:up\nSELECT 1;", encoding="utf-8")
    (tmp_path / "1_b.sql").write_text("-- migrate:up\nSELECT 1;", encoding="utf-8")

    with pytest.raises(migrations.MigrationError, match="Duplicate"):
        migrations.discover(tmp_path)


def test_missing_directory_is_an_error(tmp_path):
    with pytest.raises(migrations.MigrationError):
        migrations.discover(tmp_path / "absent")


def test_shipped_migrations_are_well_formed():
    found = migrations.discover(migrations.migrations_dir())

    assert found
    for migration in found:
        assert migration.up_sql, migration.path.name
        assert migration.down_sql, migration.path.name
    versions = [m.version for m in found]
    assert versions == sorted(versions, key=int)


def test_shipped_schema_declares_unique_keys():
    schema = "\n".join(m.up_sql for m in migrations.discover(migrations.migrations_dir()))

    for table in ("agency", "company", "cities", "notices", "building_style", "commercial_amenities"):
        assert f"CREATE TABLE IF NOT EXISTS {table} (" in schema
    assert "UNIQUE" in schema
