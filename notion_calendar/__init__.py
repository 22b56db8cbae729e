"""notion_calendar - iCalendar and org-mode calendars from a Notion database."""

__version__ = "0.1.0"

from .calendar import NotionCalendar, build_event_filter
from .config import NotionCalendarSettings, load_settings
from .exceptions import (
    InvalidConfigurationError,
    InvalidIdentifierError,
    InvalidTemporalValueError,
    MissingTimePropertyError,
    NotionAPIError,
    NotionAuthError,
    NotionCalendarError,
    NotionNetworkError,
    NotionRateLimitError,
)
from .formatting import format_ics_value, format_org_timestamp, notion_link
from .models import CalendarDate, CalendarFormat, Event, TemporalValue, Timestamp
from .normalizer import normalize, normalize_pages, parse_temporal
from .renderers import render_ics, render_outline

__all__ = [
    "CalendarDate",
    "CalendarFormat",
    "Event",
    "InvalidConfigurationError",
    "InvalidIdentifierError",
    "InvalidTemporalValueError",
    "MissingTimePropertyError",
    "NotionAPIError",
    "NotionAuthError",
    "NotionCalendar",
    "NotionCalendarError",
    "NotionCalendarSettings",
    "NotionNetworkError",
    "NotionRateLimitError",
    "TemporalValue",
    "Timestamp",
    "build_event_filter",
    "format_ics_value",
    "format_org_timestamp",
    "load_settings",
    "normalize",
    "normalize_pages",
    "notion_link",
    "parse_temporal",
    "render_ics",
    "render_outline",
]
