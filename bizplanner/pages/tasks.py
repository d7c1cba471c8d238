"""
Tasks page: tabbed task list with an Eisenhower-matrix view.
"""

from typing import Any, Dict, List, Optional

from ..views import dates, filters
from .base_page import ActionResult, BasePage

TABS = ("all", "pending", "completed", "today")


class TasksPage(BasePage):
    """
    View state:
        tab: all / pending / completed / today
        priority_filter: "all" or one priority key
    """

    entity = "Task"
    required_fields = ("title",)

    def __init__(self, client, cache, **kwargs):
        super().__init__(client, cache, "tasks", **kwargs)
        self.tasks: List[Dict[str, Any]] = []
        self.tab = "all"
        self.priority_filter = "all"

    async def load(self) -> None:
        await self.load_branding()
        self.tasks = await self.fetch("Task")

    def set_tab(self, tab: str) -> None:
        if tab not in TABS:
            raise ValueError(f"Unknown tab: {tab}")
        self.tab = tab

    def visible_tasks(self) -> List[Dict[str, Any]]:
        tasks = filters.filter_tasks_by_tab(self.tasks, self.tab, self.today)
        return filters.filter_by_priority(tasks, self.priority_filter)

    def quadrants(self) -> Dict[str, List[Dict[str, Any]]]:
        """Visible, not yet completed tasks grouped by Eisenhower quadrant."""
        open_tasks = [t for t in self.visible_tasks() if t.get("status") != "completed"]
        return filters.group_by_priority(open_tasks)

    def tab_counts(self) -> Dict[str, int]:
        return {tab: len(filters.filter_tasks_by_tab(self.tasks, tab, self.today)) for tab in TABS}

    def date_label(self, task: Dict[str, Any]) -> Optional[str]:
        return dates.date_label(task.get("due_date"), self.today)

    def is_overdue(self, task: Dict[str, Any]) -> bool:
        return dates.is_overdue(task, self.today)

    async def toggle_complete(self, task: Dict[str, Any]) -> ActionResult:
        status = "pending" if task.get("status") == "completed" else "completed"
        return await self.update_fields(task["id"], {"status": status})
