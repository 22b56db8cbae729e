"""Query orchestration: fetch a user's upcoming events and render a calendar."""

import logging
from collections.abc import AsyncIterator
from typing import Any, Optional, Union

from .config import NotionCalendarSettings
from .models import CalendarFormat, Event
from .normalizer import normalize_pages
from .notion_client import NotionClient, parse_notion_id
from .notion_models import NotionPage, NotionUser
from .renderers import render_ics, render_outline

logger = logging.getLogger(__name__)


def build_event_filter(
    user_id: str, attendees_property: str = "Attendees", time_property: str = "Event time"
) -> dict[str, Any]:
    """Database filter: user is an attendee AND the event falls in the next year."""
    return {
        "and": [
            {"property": attendees_property, "people": {"contains": user_id}},
            {"property": time_property, "date": {"next_year": {}}},
        ]
    }


class NotionCalendar:
    """Builds calendars for workspace users from a Notion events database."""

    def __init__(self, settings: NotionCalendarSettings, client: Optional[NotionClient] = None):
        """Initialize the calendar.

        Args:
            settings: Application settings
            client: Optional preconfigured API client

        Raises:
            InvalidIdentifierError: If the configured database id is malformed
        """
        self.settings = settings
        self.db_id = parse_notion_id(settings.db_id)
        self.client = client or NotionClient(
            api_token=settings.api_token.get_secret_value(),
            base_url=settings.api_base_url,
            api_version=settings.api_version,
            timeout=settings.request_timeout,
            max_retries=settings.max_retries,
            retry_backoff_factor=settings.retry_backoff_factor,
        )

    async def __aenter__(self) -> "NotionCalendar":
        await self.client.__aenter__()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.client.__aexit__(exc_type, exc_val, exc_tb)

    async def iter_event_pages(self, user_id: str) -> AsyncIterator[NotionPage]:
        """Yield every matching page, following the cursor until no more remain."""
        query_filter = build_event_filter(
            parse_notion_id(user_id),
            self.settings.attendees_property,
            self.settings.time_property,
        )
        cursor: Optional[str] = None
        request_count = 0

        while True:
            result = await self.client.query_database(
                self.db_id,
                filter=query_filter,
                start_cursor=cursor,
                page_size=self.settings.page_size,
            )
            request_count += 1
            logger.debug(
                "Query page %d returned %d results (has_more=%s)",
                request_count,
                len(result.results),
                result.has_more,
            )
            for page in result.results:
                yield page

            if not result.has_more or not result.next_cursor:
                break
            cursor = result.next_cursor

    async def future_events_for_user(self, user_id: str) -> list[Event]:
        """Upcoming-year events the user attends, in query order."""
        pages = [page async for page in self.iter_event_pages(user_id)]
        events = normalize_pages(
            pages,
            time_property=self.settings.time_property,
            skip_invalid=self.settings.skip_invalid_events,
        )
        logger.info("Found %d events for user %s", len(events), user_id)
        return events

    async def list_users(self) -> list[NotionUser]:
        """All users visible to the integration."""
        users: list[NotionUser] = []
        cursor: Optional[str] = None
        while True:
            result = await self.client.list_users(start_cursor=cursor)
            users.extend(result.results)
            if not result.has_more or not result.next_cursor:
                break
            cursor = result.next_cursor

        logger.debug("Listed %d users", len(users))
        return users

    async def calendar_for_user(
        self, user_id: str, format: Union[CalendarFormat, str] = CalendarFormat.ICAL
    ) -> str:
        """Render the user's upcoming events in the requested format.

        Raises:
            ValueError: If ``format`` is not a known CalendarFormat
        """
        calendar_format = CalendarFormat(format)
        events = await self.future_events_for_user(user_id)
        if calendar_format is CalendarFormat.ICAL:
            return render_ics(events, self.settings.ical_prod_id)
        return render_outline(events)
