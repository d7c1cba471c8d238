"""
Unit tests for the CalendarPage.
"""

from datetime import date

import pytest

from bizplanner.pages import CalendarPage
from bizplanner.views.branding import BrandingSettings


@pytest.fixture
def page(client, cache, page_kwargs):
    return CalendarPage(client, cache, **page_kwargs)


class TestGrid:

    @pytest.mark.asyncio
    async def test_cells_follow_week_start_setting(self, page, client):
        await client.settings.create({"week_starts_on": "sunday"})
        await client.events.create({"title": "Board meeting", "date": "2026-10-14"})
        await page.load()

        cells = page.month_cells()

        assert page.weekday_headers()[0] == "Sun"
        assert cells[0]["date"] == date(2026, 9, 27)
        assert not cells[0]["in_month"]
        today_cell = next(c for c in cells if c["is_today"])
        assert [e["title"] for e in today_cell["events"]] == ["Board meeting"]

    @pytest.mark.asyncio
    async def test_explicit_branding_wins(self, client, cache, page_kwargs):
        page = CalendarPage(client, cache, branding=BrandingSettings(week_starts_on="sunday"),
                            **page_kwargs)
        await page.load()
        assert page.month_cells()[0]["date"] == date(2026, 9, 27)

    def test_navigation(self, page):
        assert page.next_month() == date(2026, 11, 14)
        assert page.previous_month() == date(2026, 10, 14)
        page.previous_month()
        assert page.go_to_today() == date(2026, 10, 14)

    @pytest.mark.asyncio
    async def test_selected_events(self, page, client):
        await client.events.create({"title": "Standup", "date": "2026-10-16"})
        await page.load()

        assert page.selected_events() == []
        page.select_date(date(2026, 10, 16))

        assert [e["title"] for e in page.selected_events()] == ["Standup"]


class TestEventColor:

    @pytest.mark.asyncio
    async def test_create_takes_type_color(self, page):
        await page.load()
        page.open_create(day=date(2026, 10, 20), title="Deadline", event_type="deadline")

        await page.submit()

        assert page.events[0]["date"] == "2026-10-20"
        assert page.events[0]["color"] == "#ef4444"

    @pytest.mark.asyncio
    async def test_edit_keeps_existing_color(self, page, client):
        await client.events.create({"title": "Sync", "date": "2026-10-20",
                                    "event_type": "meeting", "color": "#3b82f6"})
        await page.load()
        page.open_edit(page.events[0])
        page.form.update(event_type="holiday")

        await page.submit()

        assert page.events[0]["event_type"] == "holiday"
        assert page.events[0]["color"] == "#3b82f6"

    @pytest.mark.asyncio
    async def test_date_is_required(self, page, client):
        await page.load()
        page.open_create(title="Undated", date="")

        result = await page.submit()

        assert not result.success
        assert "date" in result.data["fields"]
        assert await client.events.list() == []
