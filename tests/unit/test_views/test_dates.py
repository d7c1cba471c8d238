"""
Unit tests for calendar date math.
"""

from datetime import date, datetime

import pytest

from bizplanner.views.dates import (
    add_months,
    classify_date,
    date_label,
    date_range,
    is_overdue,
    month_grid,
    parse_date,
    start_of_week,
    week_days,
    weekday_headers,
)


class TestParseDate:

    @pytest.mark.parametrize("value,expected", [
        ("2026-10-14", date(2026, 10, 14)),
        ("2026-10-14T23:59:00", date(2026, 10, 14)),
        (datetime(2026, 10, 14, 8), date(2026, 10, 14)),
        (date(2026, 10, 14), date(2026, 10, 14)),
        ("", None),
        (None, None),
        ("not-a-date", None),
    ])
    def test_parse(self, value, expected):
        assert parse_date(value) == expected


class TestWeeks:
    """Week boundaries honor the week-start preference."""

    def test_monday_start(self, today):
        assert start_of_week(today) == date(2026, 10, 12)
        days = week_days(today, "monday")
        assert (days[0], days[-1]) == (date(2026, 10, 12), date(2026, 10, 18))

    def test_sunday_start(self, today):
        days = week_days(today, "sunday")
        assert (days[0], days[-1]) == (date(2026, 10, 11), date(2026, 10, 17))

    def test_week_start_day_is_its_own_start(self):
        assert start_of_week(date(2026, 10, 11), "sunday") == date(2026, 10, 11)

    def test_headers(self):
        assert weekday_headers("monday")[0] == "Mon"
        assert weekday_headers("sunday") == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class TestMonthGrid:
    """October 2026 starts on a Thursday and ends on a Saturday."""

    def test_monday_start_grid(self, today):
        grid = month_grid(today, "monday")

        assert grid[0] == date(2026, 9, 28)
        assert grid[-1] == date(2026, 11, 1)
        assert len(grid) % 7 == 0

    def test_sunday_start_grid(self, today):
        grid = month_grid(today, "sunday")

        assert grid[0] == date(2026, 9, 27)
        assert grid[-1] == date(2026, 10, 31)
        assert len(grid) == 35

    def test_grid_is_contiguous(self, today):
        grid = month_grid(today)
        assert all((b - a).days == 1 for a, b in zip(grid, grid[1:]))

    def test_add_months_clamps_day(self):
        assert add_months(date(2026, 1, 31), 1) == date(2026, 2, 28)


class TestClassification:

    @pytest.mark.parametrize("value,expected", [
        ("2026-10-14", "today"),
        ("2026-10-15", "tomorrow"),
        ("2026-10-13", "overdue"),
        ("2026-12-01", "upcoming"),
        (None, None),
    ])
    def test_classify(self, value, expected, today):
        assert classify_date(value, today) == expected

    def test_labels(self, today):
        assert date_label("2026-10-14", today) == "Today"
        assert date_label("2026-10-15", today) == "Tomorrow"
        assert date_label("2026-10-01", today) == "Overdue"
        assert date_label("2026-10-20", today) == "Oct 20"
        assert date_label("2026-10-20", today, with_weekday=True) == "Tue, Oct 20"

    def test_overdue_is_strictly_past(self, today):
        assert not is_overdue({"due_date": "2026-10-14", "status": "pending"}, today)
        assert is_overdue({"due_date": "2026-10-13", "status": "pending"}, today)

    def test_completed_task_is_never_overdue(self, today):
        assert not is_overdue({"due_date": "2026-10-01", "status": "completed"}, today)


class TestDateRange:

    def test_week(self, today):
        assert date_range("week", today) == (date(2026, 10, 12), date(2026, 10, 18))

    def test_month(self, today):
        assert date_range("month", today) == (date(2026, 10, 1), date(2026, 10, 31))

    def test_trailing_four_weeks(self, today):
        assert date_range("quarter", today) == (date(2026, 9, 16), date(2026, 10, 14))
