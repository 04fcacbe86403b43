#!/usr/bin/env python

"""
Data Portal - Command Line Entry Point

Log in, list your assigned work items and tick them off. Every change is
recorded in the audit log.

Usage:
    python main.py login john@company.com demo123
    python main.py items --priority high
    python main.py check john_1
    python main.py logs

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import argparse
import asyncio
import logging
import sys

from portal import DataPortal
from portal.domain.errors import PortalError
from portal.domain.models import ItemFilter
from portal.infra.db import DatabaseEngine
from portal.services.validation import validate_login_form, validate_registration_form


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Data portal")
    ap.add_argument("-v", "--verbose", action="store_true", help="Show service logging")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("register", help="Create an account and log in")
    p.add_argument("email")
    p.add_argument("password")
    p.add_argument("confirm_password")

    p = sub.add_parser("login", help="Log in")
    p.add_argument("email")
    p.add_argument("password")

    sub.add_parser("logout", help="Log out")
    sub.add_parser("whoami", help="Show the logged-in user")

    p = sub.add_parser("items", help="List your items")
    p.add_argument("--search", default="")
    p.add_argument("--category", default="all")
    p.add_argument("--priority", default="all", choices=["all", "low", "medium", "high"])

    for name in ("check", "uncheck"):
        p = sub.add_parser(name, help=f"{name.capitalize()} an item")
        p.add_argument("item_id")

    p = sub.add_parser("logs", help="Show the audit log")
    p.add_argument("--all", action="store_true", help="Include every user's entries")

    p = sub.add_parser("trail", help="Show the audit trail of one item")
    p.add_argument("item_id")

    return ap


async def _require_session(portal: DataPortal):
    session = await portal.get_current_session()
    if session is None:
        raise PortalError("Not logged in. Run 'login' first.")
    return session


async def run(args: argparse.Namespace) -> None:
    try:
        await dispatch(args)
    finally:
        await DatabaseEngine.reset_instance()


async def dispatch(args: argparse.Namespace) -> None:
    portal = await DataPortal.open()

    if args.command == "register":
        validate_registration_form(args.email, args.password, args.confirm_password,
                                   portal.options.min_password_length)
        user = await portal.register(args.email, args.password)
        print(f"Registered and logged in as {user.email}")

    elif args.command == "login":
        validate_login_form(args.email, args.password)
        user = await portal.login(args.email, args.password)
        print(f"Welcome back, {user.email}!")

    elif args.command == "logout":
        await portal.logout()
        print("You have been successfully logged out.")

    elif args.command == "whoami":
        user = await portal.get_current_user()
        print(user.email if user else "Not logged in")

    elif args.command == "items":
        view = await portal.open_dashboard(await _require_session(portal))
        stats = view.stats
        print(f"Total: {stats.total_items}  Completed: {stats.checked_items} "
              f"({stats.completion_rate}%)  High priority: {stats.high_priority}")
        rows = view.visible_items(ItemFilter(search=args.search, category=args.category,
                                             priority=args.priority))
        for item in rows:
            mark = "x" if view.is_checked(item.id) else " "
            print(f"[{mark}] {item.id:<10} {item.priority.value:<6} {item.category:<13} "
                  f"{item.due_date:%b %d, %Y}  {item.title}")
        print(f"Showing {len(rows)} of {len(view.items)} records")

    elif args.command in ("check", "uncheck"):
        view = await portal.open_dashboard(await _require_session(portal))
        if args.item_id not in {item.id for item in view.items}:
            raise PortalError(f"No item '{args.item_id}' assigned to you")
        await view.toggle(args.item_id, args.command == "check")
        print(f"{args.item_id}: {'checked' if args.command == 'check' else 'unchecked'}")

    elif args.command == "logs":
        session = await _require_session(portal)
        entries = await portal.get_logs(None if args.all else session.email)
        for entry in entries:
            print(f"{entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.owner_email:<20} "
                  f"{entry.item_id:<10} {'checked' if entry.checked else 'unchecked'}")

    elif args.command == "trail":
        for entry in await portal.get_audit_trail(args.item_id):
            print(f"{entry.timestamp:%Y-%m-%d %H:%M:%S}  {entry.owner_email:<20} "
                  f"{'checked' if entry.checked else 'unchecked'}")


def main():
    """Main entry point"""
    args = build_parser().parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(run(args))
    except PortalError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
