"""Command-line entry for notion_calendar.

Loads settings, picks a user (the first listed one unless ``--user`` is
given) and writes that user's calendar to stdout or a file.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from .calendar import NotionCalendar
from .config import load_settings
from .exceptions import NotionCalendarError
from .logging_config import DEFAULT_LOG_LEVEL, init_logging
from .models import CalendarFormat

logger = logging.getLogger("notion_calendar")


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the notion-calendar CLI."""
    parser = argparse.ArgumentParser(
        prog="notion-calendar",
        description="Create a calendar for a Notion user from a Notion events database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  notion-calendar                           # ICS calendar for the first user
  notion-calendar --format org --user ID    # org-mode outline for a given user
  notion-calendar --list-users              # show users visible to the token
  notion-calendar --prod-id=-//acme//cal//EN  # PRODIDs start with "-", so use "="
        """,
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in CalendarFormat],
        default=CalendarFormat.ICAL.value,
        help="Output format (default: ical)",
    )
    parser.add_argument("--user", metavar="USER_ID", help="Notion user id (default: first user)")
    parser.add_argument(
        "--list-users", action="store_true", help="List users and exit without rendering"
    )
    parser.add_argument("--config", metavar="PATH", help="YAML config file")
    parser.add_argument(
        "--prod-id",
        metavar="PRODID",
        help="PRODID for the ICS output; pass as --prod-id=-//org//product//EN",
    )
    parser.add_argument("--output", metavar="PATH", help="Write the calendar to a file")
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        default=None,
        help="Skip pages without a valid event time instead of failing",
    )
    parser.add_argument("--debug", action="store_true", help="Force DEBUG logging")
    return parser


async def _run(args: argparse.Namespace) -> int:
    settings = load_settings(
        args.config,
        ical_prod_id=args.prod_id,
        skip_invalid_events=args.skip_invalid,
    )
    init_logging("DEBUG" if args.debug else settings.log_level)

    async with NotionCalendar(settings) as calendar:
        users = await calendar.list_users()
        logger.debug("Users: %s", [(u.id, u.name) for u in users])

        if args.list_users:
            for user in users:
                print(f"{user.id}\t{user.name or ''}\t{user.email or ''}")
            return 0

        if args.user:
            user_id = args.user
        elif users:
            user_id = users[0].id
        else:
            logger.error("No users available to the integration")
            return 1

        output = await calendar.calendar_for_user(user_id, CalendarFormat(args.format))

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        logger.info("Wrote calendar for %s to %s", user_id, args.output)
    else:
        sys.stdout.write(output)
        if not output.endswith("\n"):
            sys.stdout.write("\n")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Run the notion-calendar CLI and return the process exit code."""
    parser = _create_parser()
    args = parser.parse_args(argv)
    # Settings are not loaded yet; their level is applied in _run
    init_logging(DEFAULT_LOG_LEVEL)

    try:
        return asyncio.run(_run(args))
    except NotionCalendarError as e:
        logger.error("%s", e.message)
        return 1


if __name__ == "__main__":
    sys.exit(main())
