"""Data models for calendar events built from Notion pages."""

from datetime import date, datetime, timezone
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TITLE = "No Title"


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware datetime in UTC.

    Naive datetimes are taken to already be UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


class CalendarFormat(str, Enum):
    """Output formats supported by the calendar renderers."""

    ICAL = "ical"
    ORG = "org"


class CalendarDate(BaseModel):
    """A calendar day without time-of-day or timezone."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["date"] = "date"
    value: date

    def calendar_date(self) -> date:
        return self.value


class Timestamp(BaseModel):
    """An absolute point in time, always held in UTC."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["timestamp"] = "timestamp"
    value: datetime

    @field_validator("value")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    def calendar_date(self) -> date:
        """Date portion of the UTC instant."""
        return self.value.date()


TemporalValue = Annotated[Union[CalendarDate, Timestamp], Field(discriminator="kind")]


class Event(BaseModel):
    """Calendar event derived from a single Notion page.

    ``start`` and ``end`` are independent: either may be a ``CalendarDate``
    or a ``Timestamp``. No ordering between them is enforced.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Notion page identifier")
    title: str = Field(default=DEFAULT_TITLE, description="Display title")
    last_modified: datetime = Field(..., description="Last edit time of the source page")
    start: TemporalValue
    end: Optional[TemporalValue] = None

    @field_validator("last_modified")
    @classmethod
    def last_modified_to_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @property
    def is_all_day(self) -> bool:
        """True when the event starts on a bare calendar date."""
        return isinstance(self.start, CalendarDate)
