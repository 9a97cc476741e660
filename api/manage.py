"""
Operations CLI.

    python -m manage migrate
    python -m manage migrate-status
    python -m manage rollback
    python -m manage seed-settings
    python -m manage create-admin --email admin@example.com --password '...'

Every command opens its own DB pool from DATABASE_URL; none of this runs as
part of the web app's startup.
"""

from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import sys

from auth import service as auth_service
from core import db, migrations
from core.logging_setup import configure_logging
from settings import service as settings_service

logger = logging.getLogger("manage")


async def _with_pool(coro_factory):
    await db.init_pool()
    try:
        return await coro_factory()
    finally:
        await db.close_pool()


async def cmd_migrate(_: argparse.Namespace) -> int:
    applied = await _with_pool(migrations.upgrade)
    if applied:
        print(f"Applied {len(applied)} migration(s): {', '.join(applied)}")
    else:
        print("Database is up to date.")
    return 0


async def cmd_migrate_status(_: argparse.Namespace) -> int:
    rows = await _with_pool(migrations.status)
    for row in rows:
        mark = "x" if row["applied"] else " "
        print(f"[{mark}] {row['version']}_{row['name']}")
    pending = sum(1 for r in rows if not r["applied"])
    print(f"\nApplied: {len(rows) - pending}, pending: {pending}")
    return 0


async def cmd_rollback(_: argparse.Namespace) -> int:
    version = await _with_pool(migrations.rollback)
    print(f"Rolled back {version}" if version else "Nothing to roll back.")
    return 0


async def cmd_seed_settings(_: argparse.Namespace) -> int:
    inserted = await _with_pool(settings_service.seed_defaults)
    print(f"Inserted {inserted} default setting(s).")
    return 0


async def cmd_create_admin(args: argparse.Namespace) -> int:
    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < 8:
        print("Password must be at least 8 characters.", file=sys.stderr)
        return 1

    user = await _with_pool(
        lambda: auth_service.ensure_admin(email=args.email, password=password, name=args.name)
    )
    print(f"Admin ready: id={user['id']} email={user['email']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="manage", description="Realty admin API operations")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("migrate", help="Apply pending schema migrations").set_defaults(func=cmd_migrate)
    sub.add_parser("migrate-status", help="List migrations and whether they are applied").set_defaults(
        func=cmd_migrate_status
    )
    sub.add_parser("rollback", help="Revert the most recent migration").set_defaults(func=cmd_rollback)
    sub.add_parser("seed-settings", help="Insert missing default site settings").set_defaults(
        func=cmd_seed_settings
    )

    admin = sub.add_parser("create-admin", help="Create or promote an administrator")
    admin.add_argument("--email", required=True)
    admin.add_argument("--password", help="Prompted for when omitted")
    admin.add_argument("--name")
    admin.set_defaults(func=cmd_create_admin)

    return parser


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return asyncio.run(args.func(args))
    except RuntimeError as exc:
        logger.error("command_failed command=%s error=%s", args.command, exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
