"""Conversion of raw Notion pages into calendar events."""

import logging
from collections.abc import Iterable
from datetime import date, datetime

from .exceptions import InvalidTemporalValueError, MissingTimePropertyError
from .models import DEFAULT_TITLE, CalendarDate, Event, TemporalValue, Timestamp
from .notion_models import NotionPage

logger = logging.getLogger(__name__)

DEFAULT_TIME_PROPERTY = "Event time"


def parse_temporal(text: str) -> TemporalValue:
    """Parse a Notion date string into a CalendarDate or a UTC Timestamp.

    Args:
        text: ``YYYY-MM-DD`` or an ISO-8601 date-time such as
            ``2024-01-01T09:00:00.000+00:00``

    Raises:
        InvalidTemporalValueError: If the text is neither form
    """
    value = text.strip()
    try:
        if "T" not in value:
            return CalendarDate(value=date.fromisoformat(value))
        # fromisoformat() only accepts "Z" from Python 3.11 on
        if value[-1] in ("Z", "z"):
            value = value[:-1] + "+00:00"
        return Timestamp(value=datetime.fromisoformat(value))
    except ValueError as e:
        raise InvalidTemporalValueError(f"Invalid Notion date value: {text!r}", text) from e


def normalize(page: NotionPage, time_property: str = DEFAULT_TIME_PROPERTY) -> Event:
    """Build an Event from a Notion page.

    Args:
        page: Page returned by a database query
        time_property: Name of the date property holding the event time

    Returns:
        Event with start/end copied from the date property

    Raises:
        MissingTimePropertyError: If the property is absent, not a date,
            or has a null value
    """
    prop = page.properties.get(time_property)
    if prop is None or prop.type != "date" or prop.date is None:
        raise MissingTimePropertyError(
            f"Page {page.id} has no {time_property!r} value", page_id=page.id
        )

    title = page.title()
    end = parse_temporal(prop.date.end) if prop.date.end is not None else None

    return Event(
        id=str(page.id),
        title=DEFAULT_TITLE if title is None else title,
        last_modified=page.last_edited_time,
        start=parse_temporal(prop.date.start),
        end=end,
    )


def normalize_pages(
    pages: Iterable[NotionPage],
    time_property: str = DEFAULT_TIME_PROPERTY,
    skip_invalid: bool = False,
) -> list[Event]:
    """Normalize pages in order.

    Fails on the first page without a usable event time unless
    ``skip_invalid`` is set, in which case pages with a missing or
    unparseable time are logged and left out.
    """
    events = []
    for page in pages:
        try:
            events.append(normalize(page, time_property))
        except (MissingTimePropertyError, InvalidTemporalValueError) as e:
            if not skip_invalid:
                raise
            logger.warning("Skipping page %s: %s", page.id, e.message)
    return events
