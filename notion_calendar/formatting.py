"""Text formatting of temporal values for the ICS and org-mode renderers."""

from datetime import date, datetime
from typing import Optional

from .models import CalendarDate, TemporalValue, Timestamp

NOTION_BASE_URL = "https://www.notion.so"

ICS_DATE_FORMAT = "%Y%m%d"
ICS_DATETIME_FORMAT = "%Y%m%dT%H%M%SZ"

# Fixed English names so output does not depend on the process locale
_DAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def format_ics_value(value: TemporalValue) -> str:
    """Return the iCalendar text of a date (``YYYYMMDD``) or UTC timestamp."""
    if isinstance(value, CalendarDate):
        return value.value.strftime(ICS_DATE_FORMAT)
    return value.value.strftime(ICS_DATETIME_FORMAT)


def _org_day(d: date) -> str:
    return f"{d.isoformat()} {_DAY_NAMES[d.weekday()]}"


def _org_date(d: date) -> str:
    return f"<{_org_day(d)}>"


def _org_datetime(dt: datetime) -> str:
    return f"<{_org_day(dt.date())} {dt:%H:%M}>"


def _org_single(value: TemporalValue) -> str:
    if isinstance(value, CalendarDate):
        return _org_date(value.value)
    return _org_datetime(value.value)


def format_org_timestamp(start: TemporalValue, end: Optional[TemporalValue] = None) -> str:
    """Return the org-mode timestamp for an event's start and optional end.

    Same-day ranges collapse to one timestamp. When only one side carries a
    time, the other side's date or time is dropped rather than merged.
    Two timestamps on the same day use the compact ``<... HH:MM-HH:MM>`` form.
    """
    if end is None:
        return _org_single(start)

    same_day = start.calendar_date() == end.calendar_date()

    if isinstance(start, Timestamp) and isinstance(end, Timestamp):
        if same_day:
            return f"<{_org_day(start.value.date())} {start.value:%H:%M}-{end.value:%H:%M}>"
        return f"{_org_datetime(start.value)}--{_org_datetime(end.value)}"

    if same_day:
        return _org_single(start)
    return f"{_org_single(start)}--{_org_single(end)}"


def notion_link(title: str, page_id: str) -> str:
    """Deep link to a Notion page built from its title and id."""
    return f"{NOTION_BASE_URL}/{title.replace(' ', '-')}-{page_id.replace('-', '')}"
