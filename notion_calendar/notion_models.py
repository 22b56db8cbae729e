"""Pydantic models for the subset of the Notion REST API payloads we consume.

Only the fields the calendar needs are declared; everything else in a
payload is kept as extra data so unknown property types never fail parsing.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class NotionRichText(BaseModel):
    """A single rich-text fragment."""

    model_config = ConfigDict(extra="allow")

    type: Optional[str] = None
    plain_text: str = ""


class NotionDate(BaseModel):
    """Value of a ``date`` property.

    ``start`` and ``end`` are either ``YYYY-MM-DD`` or ISO-8601 date-times.
    """

    model_config = ConfigDict(extra="allow")

    start: str
    end: Optional[str] = None
    time_zone: Optional[str] = None


class NotionProperty(BaseModel):
    """A page property value of any type."""

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    type: str
    title: Optional[list[NotionRichText]] = None
    date: Optional[NotionDate] = None


class NotionPage(BaseModel):
    """A database row as returned by the query endpoint."""

    model_config = ConfigDict(extra="allow")

    object: str = "page"
    id: str
    last_edited_time: datetime
    properties: dict[str, NotionProperty] = Field(default_factory=dict)

    def title(self) -> Optional[str]:
        """Plain text of the first title property, or None if the page has none."""
        for prop in self.properties.values():
            if prop.type == "title":
                return "".join(fragment.plain_text for fragment in prop.title or [])
        return None


class NotionPerson(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: Optional[str] = None


class NotionUser(BaseModel):
    """A workspace member or bot."""

    model_config = ConfigDict(extra="allow")

    object: str = "user"
    id: str
    type: Optional[str] = None
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    person: Optional[NotionPerson] = None

    @property
    def email(self) -> Optional[str]:
        return self.person.email if self.person else None


class PageList(BaseModel):
    """One page of database query results."""

    model_config = ConfigDict(extra="allow")

    results: list[NotionPage] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None


class UserList(BaseModel):
    """One page of the users listing."""

    model_config = ConfigDict(extra="allow")

    results: list[NotionUser] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: Optional[str] = None
