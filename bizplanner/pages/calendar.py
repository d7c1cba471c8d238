"""
Calendar page: month grid with per-day events.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from ..core.models import EVENT_TYPE_COLORS
from ..views import dates, filters
from ..views.forms import FormMode
from .base_page import BasePage


class CalendarPage(BasePage):
    """
    View state:
        current_month: any day inside the displayed month
        selected_date: day whose events are listed, or None
    """

    entity = "Event"
    required_fields = ("title", "date")

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "calendar", **kwargs)
        self.events: List[Dict[str, Any]] = []
        self.current_month = self.today
        self.selected_date: Optional[date] = None

    async def load(self) -> None:
        await self.load_branding()
        self.events = await self.fetch("Event")

    @property
    def week_starts_on(self) -> str:
        return self.branding.week_starts_on

    def next_month(self) -> date:
        self.current_month = dates.add_months(self.current_month, 1)
        return self.current_month

    def previous_month(self) -> date:
        self.current_month = dates.add_months(self.current_month, -1)
        return self.current_month

    def go_to_today(self) -> date:
        self.current_month = self.today
        return self.current_month

    def select_date(self, day: Optional[date]) -> None:
        self.selected_date = day

    def weekday_headers(self) -> List[str]:
        return dates.weekday_headers(self.week_starts_on)

    def events_for_date(self, day: date) -> List[Dict[str, Any]]:
        return filters.filter_by_date(self.events, day, "date")

    def selected_events(self) -> List[Dict[str, Any]]:
        return self.events_for_date(self.selected_date) if self.selected_date else []

    def month_cells(self) -> List[Dict[str, Any]]:
        """One cell per grid day, rows of seven starting on the configured weekday."""
        return [
            {
                "date": day,
                "in_month": (day.year, day.month) == (self.current_month.year,
                                                      self.current_month.month),
                "is_today": day == self.today,
                "is_selected": day == self.selected_date,
                "events": self.events_for_date(day),
            }
            for day in dates.month_grid(self.current_month, self.week_starts_on)
        ]

    def open_create(self, day: Optional[date] = None, **overrides: Any) -> Dict[str, Any]:
        if day is not None:
            overrides.setdefault("date", day.isoformat())
        return super().open_create(**overrides)

    def prepare_payload(self, payload: Dict[str, Any], mode: FormMode) -> Dict[str, Any]:
        # Color follows the event type only when the event is created
        if mode == FormMode.CREATE and not payload.get("color"):
            payload["color"] = EVENT_TYPE_COLORS.get(payload.get("event_type"), "")
        return payload
