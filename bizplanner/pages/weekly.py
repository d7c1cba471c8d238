"""
Weekly planner page: seven day columns of tasks and events.
"""

from datetime import date
from typing import Any, Dict, List

from ..views import aggregates, dates, filters
from .base_page import ActionResult, BasePage


class WeeklyPlannerPage(BasePage):
    """
    View state:
        current_week: any day inside the displayed week
    """

    entity = "Task"
    required_fields = ("title",)

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "weekly", **kwargs)
        self.tasks: List[Dict[str, Any]] = []
        self.events: List[Dict[str, Any]] = []
        self.current_week = self.today

    async def load(self) -> None:
        await self.load_branding()
        self.tasks = await self.fetch("Task")
        self.events = await self.fetch("Event")

    def days(self) -> List[date]:
        return dates.week_days(self.current_week, self.branding.week_starts_on)

    def next_week(self) -> date:
        self.current_week = dates.add_weeks(self.current_week, 1)
        return self.current_week

    def previous_week(self) -> date:
        self.current_week = dates.add_weeks(self.current_week, -1)
        return self.current_week

    def this_week(self) -> date:
        self.current_week = self.today
        return self.current_week

    def header(self) -> str:
        """e.g. 'Oct 13 - Oct 19, 2026'"""
        days = self.days()
        return f"{dates.format_day(days[0])} - {dates.format_day(days[-1])}, {days[-1].year}"

    def items_for(self, day: date) -> Dict[str, List[Dict[str, Any]]]:
        return filters.items_for_day(self.tasks, self.events, day)

    def columns(self) -> List[Dict[str, Any]]:
        return [
            {"date": day, "is_today": day == self.today, **self.items_for(day)}
            for day in self.days()
        ]

    def summary(self) -> Dict[str, int]:
        return aggregates.week_summary(self.tasks, self.events, self.days())

    def open_create(self, day: date = None, **overrides: Any) -> Dict[str, Any]:
        if day is not None:
            overrides.setdefault("due_date", day.isoformat())
        return super().open_create(**overrides)

    async def toggle_complete(self, task: Dict[str, Any]) -> ActionResult:
        status = "pending" if task.get("status") == "completed" else "completed"
        return await self.update_fields(task["id"], {"status": status})
