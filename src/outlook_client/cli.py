"""CLI for outlook-client.

Usage:
    outlook-client status                          # Show credential status
    outlook-client token refresh                   # Exchange refresh token, show token info
    outlook-client calendars list                  # List calendars
    outlook-client events list [--calendar ID]     # List upcoming events
    outlook-client folders list                    # List mail folders
    outlook-client messages list [--folder ID]     # List messages in a folder

List commands accept --max N and --next-link URL for paging.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone


def _check_status() -> dict:
    """Get credential status."""
    from outlook_client.config import get_credential_status

    return get_credential_status()


def cmd_status() -> int:
    """Show status of configured credentials."""
    status = _check_status()

    print("=" * 60)
    print("OUTLOOK-CLIENT CREDENTIAL STATUS")
    print("=" * 60)
    print()
    print(f"Repository: {status['repo_root']}")
    print(f".env:       {'[x]' if status['env_file'] else '[ ]'}")
    print()

    print("Application:")
    for name, configured in status["app"].items():
        mark = "[x]" if configured else "[ ]"
        print(f"  {mark} {name}")
    print()

    print("User:")
    print(f"  {'[x]' if status['refresh_token'] else '[ ]'} OUTLOOK_REFRESH_TOKEN")
    print()

    return 0 if all(status["app"].values()) and status["refresh_token"] else 1


async def _with_session(action):
    """Open a client, refresh a session from the environment and run ``action``."""
    from outlook_client.config import get_refresh_token
    from outlook_client.graph import ClientConfig, GraphClient

    refresh_token = get_refresh_token()
    if not refresh_token:
        raise SystemExit("OUTLOOK_REFRESH_TOKEN is not set - run 'outlook-client status'")

    async with GraphClient(ClientConfig.from_env()) as client:
        session = await client.new_session(refresh_token)
        return await action(session)


def _run(action) -> int:
    """Run an async session action, mapping client errors to exit code 1."""
    from outlook_client.graph import OutlookError, StatusCodeError

    try:
        asyncio.run(_with_session(action))
    except StatusCodeError as e:
        print(f"Error: HTTP {e.status_code}")
        if e.message:
            print(e.message)
        if e.is_rate_limited:
            print(f"Retry after: {e.retry_after}")
        return 1
    except OutlookError as e:
        print(f"Error: {e}")
        return 1
    return 0


def _print_paging(page) -> None:
    total = "" if page.total is None else f" of {page.total}"
    print(f"\n{len(page.value)} item(s){total}")
    if page.has_more:
        print(f"Next link: {page.next_link}")


def token_refresh() -> int:
    """Refresh the access token and show token info."""

    async def action(session):
        info = session.token_info()
        print("=" * 60)
        print("REFRESHED ACCESS TOKEN")
        print("=" * 60)
        print(f"Status     : {info['status']}")
        print(f"Token      : {info.get('access_token', '')}")
        print(f"Scopes     : {', '.join(info.get('scopes', []))}")
        print(f"Expires in : {info.get('expires_in', 'unknown')}")

    return _run(action)


def calendars_list(max_results: int, next_link: str | None) -> int:
    """List calendars."""

    async def action(session):
        page = await session.calendars().list(max_results=max_results, next_link=next_link)
        for calendar in page.value:
            owner = calendar.owner.address if calendar.owner else ""
            print(f"{calendar.id}  {calendar.name}  {owner}")
        _print_paging(page)

    return _run(action)


def events_list(calendar_id: str, days: int, max_results: int, next_link: str | None) -> int:
    """List events in the next ``days`` days."""
    start = datetime.now(timezone.utc)
    end = start + timedelta(days=days)

    async def action(session):
        page = await session.events().list(
            calendar_id,
            start=start,
            end=end,
            max_results=max_results,
            next_link=next_link,
        )
        for event in page.value:
            when = event.start.date_time if event.start else "?"
            print(f"{when}  {event.subject or '(no subject)'}")
        _print_paging(page)

    return _run(action)


def folders_list(max_results: int, next_link: str | None) -> int:
    """List mail folders."""

    async def action(session):
        page = await session.folders().list(max_results=max_results, next_link=next_link)
        for folder in page.value:
            print(f"{folder.display_name:<30} unread={folder.unread_item_count or 0}  {folder.id}")
        _print_paging(page)

    return _run(action)


def messages_list(folder_id: str, days: int, max_results: int, next_link: str | None) -> int:
    """List messages received in the last ``days`` days."""
    end = datetime.now(timezone.utc)
    start = end - timedelta(days=days)

    async def action(session):
        page = await session.messages().list(
            folder_id,
            start=start,
            end=end,
            max_results=max_results,
            next_link=next_link,
        )
        for message in page.value:
            sender = ""
            if message.from_ and message.from_.email_address:
                sender = message.from_.email_address.address or ""
            print(f"{message.received_on or '?'}  {sender:<30} {message.subject or ''}")
        _print_paging(page)

    return _run(action)


def _add_paging_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--max", type=int, default=10, help="Page size (default: 10)")
    parser.add_argument("--next-link", type=str, default=None, help="Continue from a next link")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="outlook-client",
        description="Microsoft Graph mail and calendar client",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    subparsers.add_parser("status", help="Show credential status")

    token_parser = subparsers.add_parser("token", help="Access token management")
    token_subparsers = token_parser.add_subparsers(dest="token_command", help="Command")
    token_subparsers.add_parser("refresh", help="Refresh access token")

    calendars_parser = subparsers.add_parser("calendars", help="Calendars")
    calendars_subparsers = calendars_parser.add_subparsers(dest="sub_command", help="Command")
    _add_paging_args(calendars_subparsers.add_parser("list", help="List calendars"))

    events_parser = subparsers.add_parser("events", help="Calendar events")
    events_subparsers = events_parser.add_subparsers(dest="sub_command", help="Command")
    events_list_parser = events_subparsers.add_parser("list", help="List upcoming events")
    events_list_parser.add_argument(
        "--calendar", type=str, default="primary", help="Calendar ID (default: primary)"
    )
    events_list_parser.add_argument(
        "--days", type=int, default=7, help="Days ahead to include (default: 7)"
    )
    _add_paging_args(events_list_parser)

    folders_parser = subparsers.add_parser("folders", help="Mail folders")
    folders_subparsers = folders_parser.add_subparsers(dest="sub_command", help="Command")
    _add_paging_args(folders_subparsers.add_parser("list", help="List mail folders"))

    messages_parser = subparsers.add_parser("messages", help="Mail messages")
    messages_subparsers = messages_parser.add_subparsers(dest="sub_command", help="Command")
    messages_list_parser = messages_subparsers.add_parser("list", help="List recent messages")
    messages_list_parser.add_argument(
        "--folder", type=str, default="inbox", help="Folder ID or name (default: inbox)"
    )
    messages_list_parser.add_argument(
        "--days", type=int, default=7, help="Days back to include (default: 7)"
    )
    _add_paging_args(messages_list_parser)

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "status":
        return cmd_status()

    if args.command == "token":
        if args.token_command == "refresh":
            return token_refresh()
        token_parser.print_help()
        return 0

    if getattr(args, "sub_command", None) != "list":
        subparsers.choices[args.command].print_help()
        return 0

    if args.command == "calendars":
        return calendars_list(args.max, args.next_link)
    if args.command == "events":
        return events_list(args.calendar, args.days, args.max, args.next_link)
    if args.command == "folders":
        return folders_list(args.max, args.next_link)
    if args.command == "messages":
        return messages_list(args.folder, args.days, args.max, args.next_link)

    return 0


if __name__ == "__main__":
    sys.exit(main())
