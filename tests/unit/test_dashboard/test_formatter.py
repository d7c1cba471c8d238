"""
Unit tests for the Rich formatter.
"""

from datetime import date, datetime

import pytest
from rich.console import Console

from bizplanner.dashboard.aggregator import DashboardAggregator, DashboardData
from bizplanner.dashboard.formatter import DashboardFormatter
from bizplanner.views.branding import BrandingSettings


@pytest.fixture
def console():
    return Console(record=True, width=120)


@pytest.fixture
def formatter(console, today):
    return DashboardFormatter(console=console, today=today)


@pytest.mark.asyncio
async def test_render_dashboard(formatter, console, client, today):
    await client.settings.create({"company_name": "Acme Corp"})
    await client.tasks.create({"title": "Sign contract", "due_date": "2026-10-14",
                               "priority": "urgent-important"})
    await client.goals.create({"title": "Open office", "progress": 60, "status": "in-progress"})
    data = await DashboardAggregator(client, today=today).aggregate(now=datetime(2026, 10, 14, 10))

    formatter.render_dashboard(data)
    output = console.export_text()

    assert "Acme Corp" in output
    assert "Sign contract" in output
    assert "Open office" in output
    assert "No upcoming events this week" in output
    assert "Priority Overview" in output


@pytest.mark.asyncio
async def test_render_progress(formatter, console, client, today):
    await client.tasks.create({"title": "T", "status": "completed"})
    report = await DashboardAggregator(client, today=today).progress("week")

    formatter.render_progress(report)
    output = console.export_text()

    assert "Progress (week)" in output
    assert "100%" in output
    assert "Urgent & Important" in output


def test_event_table_lists_rows(formatter, console):
    table = formatter.format_event_table([
        {"title": "Offsite", "date": "2026-10-16", "event_type": "company-event",
         "start_time": "09:00"},
    ])

    console.print(table)

    assert "Offsite" in console.export_text()


def test_header_falls_back_to_product_name(formatter, console):
    data = DashboardData(
        generated_at=datetime(2026, 10, 14, 22), date=date(2026, 10, 14),
        greeting="Good Night!", summary="", branding=BrandingSettings(),
        today_tasks=[], today_events=[], upcoming_events=[], active_goals=[],
    )

    console.print(formatter.format_header(data))

    assert "Business Planner" in console.export_text()
