"""Unit tests for the ICS and org-mode value formatters."""

from datetime import datetime, timedelta, timezone

import pytest

from notion_calendar.formatting import format_ics_value, format_org_timestamp, notion_link
from notion_calendar.models import Timestamp
from tests.fixtures.notion_payloads import day, ts

pytestmark = pytest.mark.unit


class TestFormatIcsValue:
    """Tests for iCalendar value strings."""

    def test_timestamp(self):
        """Timestamps use the UTC basic format with a Z suffix."""
        assert format_ics_value(ts(2023, 11, 15, 11, 0, 0)) == "20231115T110000Z"

    def test_timestamp_with_offset_is_rendered_in_utc(self):
        """A non-UTC instant is shifted to UTC before formatting."""
        value = Timestamp(value=datetime(2023, 11, 15, 6, 0, tzinfo=timezone(timedelta(hours=-5))))
        assert format_ics_value(value) == "20231115T110000Z"

    def test_date(self):
        assert format_ics_value(day(2024, 1, 1)) == "20240101"


class TestOrgTimestampWithoutEnd:
    def test_date_start(self):
        assert format_org_timestamp(day(2024, 1, 1)) == "<2024-01-01 Mon>"

    def test_timestamp_start(self):
        assert format_org_timestamp(ts(2024, 1, 1, 9, 0)) == "<2024-01-01 Mon 09:00>"


class TestOrgTimestampDateDate:
    def test_same_day_collapses(self):
        assert format_org_timestamp(day(2024, 1, 1), day(2024, 1, 1)) == "<2024-01-01 Mon>"

    def test_range(self):
        result = format_org_timestamp(day(2024, 1, 1), day(2024, 1, 3))
        assert result == "<2024-01-01 Mon>--<2024-01-03 Wed>"

    def test_end_before_start_renders_literally(self):
        """No ordering is enforced between start and end."""
        result = format_org_timestamp(day(2024, 1, 3), day(2024, 1, 1))
        assert result == "<2024-01-03 Wed>--<2024-01-01 Mon>"


class TestOrgTimestampTimestampStartDateEnd:
    def test_same_day_keeps_start_time_only(self):
        """The end date is informational and dropped on the same day."""
        result = format_org_timestamp(ts(2024, 1, 1, 9, 0), day(2024, 1, 1))
        assert result == "<2024-01-01 Mon 09:00>"

    def test_different_day(self):
        result = format_org_timestamp(ts(2024, 1, 1, 9, 0), day(2024, 1, 2))
        assert result == "<2024-01-01 Mon 09:00>--<2024-01-02 Tue>"


class TestOrgTimestampDateStartTimestampEnd:
    def test_same_day_drops_end_time(self):
        result = format_org_timestamp(day(2024, 1, 1), ts(2024, 1, 1, 23, 0))
        assert result == "<2024-01-01 Mon>"

    def test_different_day(self):
        result = format_org_timestamp(day(2024, 1, 1), ts(2024, 1, 2, 10, 0))
        assert result == "<2024-01-01 Mon>--<2024-01-02 Tue 10:00>"

    def test_same_day_uses_utc_date_of_end(self):
        """An end at 01:00+02:00 on Jan 2 is 23:00 UTC on Jan 1."""
        end = Timestamp(value=datetime(2024, 1, 2, 1, 0, tzinfo=timezone(timedelta(hours=2))))
        assert format_org_timestamp(day(2024, 1, 1), end) == "<2024-01-01 Mon>"


class TestOrgTimestampTimestampTimestamp:
    def test_same_day_compact_form(self):
        result = format_org_timestamp(ts(2024, 1, 1, 9, 0), ts(2024, 1, 1, 17, 30))
        assert result == "<2024-01-01 Mon 09:00-17:30>"

    def test_cross_day(self):
        result = format_org_timestamp(ts(2024, 1, 1, 9, 0), ts(2024, 1, 2, 10, 0))
        assert result == "<2024-01-01 Mon 09:00>--<2024-01-02 Tue 10:00>"

    def test_same_day_end_before_start(self):
        result = format_org_timestamp(ts(2024, 1, 1, 17, 0), ts(2024, 1, 1, 9, 0))
        assert result == "<2024-01-01 Mon 17:00-09:00>"

    def test_seconds_are_not_shown(self):
        result = format_org_timestamp(ts(2024, 1, 6, 9, 5, 59), ts(2024, 1, 6, 9, 45, 1))
        assert result == "<2024-01-06 Sat 09:05-09:45>"

    @pytest.mark.parametrize(
        "dom,name",
        [(1, "Mon"), (2, "Tue"), (3, "Wed"), (4, "Thu"), (5, "Fri"), (6, "Sat"), (7, "Sun")],
    )
    def test_day_names(self, dom, name):
        assert format_org_timestamp(day(2024, 1, dom)) == f"<2024-01-0{dom} {name}>"


class TestNotionLink:
    def test_spaces_and_hyphens(self):
        assert notion_link("Team Sync", "abc-123-def") == "https://www.notion.so/Team-Sync-abc123def"

    def test_other_characters_are_not_escaped(self):
        link = notion_link("Q&A: Roadmap?", "1-2")
        assert link == "https://www.notion.so/Q&A:-Roadmap?-12"

    def test_empty_title(self):
        assert notion_link("", "a-b") == "https://www.notion.so/-ab"
