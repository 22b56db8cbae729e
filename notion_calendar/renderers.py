"""Calendar renderers: iCalendar and org-mode outline output."""

import logging
from collections.abc import Iterable
from datetime import datetime, time, timezone

from icalendar import Calendar, Event as ICalEvent
from icalendar.prop import vText

from .formatting import format_ics_value, format_org_timestamp, notion_link
from .models import CalendarDate, Event, TemporalValue

logger = logging.getLogger(__name__)

ICAL_VERSION = "2.0"


def _as_utc_datetime(value: TemporalValue) -> datetime:
    if isinstance(value, CalendarDate):
        return datetime.combine(value.value, time.min, tzinfo=timezone.utc)
    return value.value


def _to_ical_event(event: Event) -> ICalEvent:
    ical_event = ICalEvent()
    ical_event.add("uid", event.id)
    ical_event.add("dtstamp", event.last_modified)

    if event.is_all_day:
        ical_event.add("dtstart", event.start.value)
        if event.end is not None:
            ical_event.add("dtend", event.end.calendar_date())
    else:
        ical_event.add("dtstart", event.start.value)
        if event.end is not None:
            ical_event.add("dtend", _as_utc_datetime(event.end))
        else:
            ical_event["DTEND"] = vText("")

    ical_event.add("summary", event.title)
    ical_event.add("description", notion_link(event.title, event.id))
    return ical_event


def render_ics(events: Iterable[Event], product_id: str) -> str:
    """Render events as an iCalendar document.

    Events are emitted in input order. Date starts become all-day
    (``VALUE=DATE``) entries; timestamp starts are emitted in UTC.

    Args:
        events: Events to render
        product_id: Value of the calendar PRODID property

    Returns:
        Serialized VCALENDAR text with CRLF line endings
    """
    cal = Calendar()
    cal.add("version", ICAL_VERSION)
    cal.add("prodid", product_id)
    cal.add("calscale", "GREGORIAN")

    count = 0
    for event in events:
        logger.debug(
            "Rendering ICS event %s start=%s end=%s",
            event.id,
            format_ics_value(event.start),
            format_ics_value(event.end) if event.end is not None else "",
        )
        cal.add_component(_to_ical_event(event))
        count += 1

    logger.debug("Rendered %d events to ICS", count)
    return cal.to_ical().decode("utf-8")


def render_org_event(event: Event) -> str:
    """Render one event as an org-mode heading block."""
    return "\n".join(
        [
            f"* {event.title}",
            f"  :PROPERTIES:\n  :ID: {event.id}\n  :END:",
            f"  {format_org_timestamp(event.start, event.end)}",
            f"  {notion_link(event.title, event.id)}",
        ]
    )


def render_outline(events: Iterable[Event]) -> str:
    """Render events as org-mode blocks separated by a blank line."""
    return "\n\n".join(render_org_event(event) for event in events)
