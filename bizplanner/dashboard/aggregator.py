"""
Data aggregation module for the Business Planner dashboard and progress views.

Collects tasks, goals, events and the settings row through the collection
cache and combines them into DashboardData / ProgressReport structures for
display. Everything here is read-only.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

from ..core.models import TASK_PRIORITIES
from ..data.cache import CollectionCache
from ..data.client import PlannerClient, get_entity_spec
from ..views import aggregates, dates, filters
from ..views.branding import BrandingSettings, resolve_branding

Rows = List[Dict[str, Any]]

UPCOMING_LIMIT = 5
REPORT_RANGES = ("week", "month", "quarter")


@dataclass
class DashboardStats:
    """Headline numbers for the dashboard cards."""
    pending_tasks: int = 0
    completed_tasks: int = 0
    active_goals: int = 0
    average_goal_progress: int = 0
    completion_rate: int = 0


@dataclass
class DashboardData:
    """Complete dashboard data structure."""
    generated_at: datetime
    date: date
    greeting: str
    summary: str
    branding: BrandingSettings

    today_tasks: Rows
    today_events: Rows
    upcoming_events: Rows
    active_goals: Rows

    stats: DashboardStats = field(default_factory=DashboardStats)
    priority_overview: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["generated_at"] = self.generated_at.isoformat()
        data["date"] = self.date.isoformat()
        return data


@dataclass
class ProgressReport:
    """Analytics for the progress view over one reporting window."""
    range_name: str
    start: date
    end: date
    tasks: Dict[str, int]
    tasks_by_priority: Rows
    goals: Dict[str, int]
    goals_by_category: Rows
    weekly: Rows
    productivity_score: int
    total_events: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["start"] = self.start.isoformat()
        data["end"] = self.end.isoformat()
        return data


class DashboardAggregator:
    """
    Central data aggregation for the dashboard and progress pages.

    Reads collections through the shared CollectionCache so the numbers here
    always match what the other pages show.
    """

    def __init__(self, client: PlannerClient, cache: Optional[CollectionCache] = None,
                 today: Optional[date] = None):
        """
        Initialize aggregator.

        Args:
            client: Data-access client
            cache: Collection cache (creates a private one if not provided)
            today: Fixed "today" for date math (defaults to the real date)
        """
        self.client = client
        self.cache = cache if cache is not None else CollectionCache()
        self._today = today

    @property
    def today(self) -> date:
        return self._today if self._today is not None else date.today()

    def _get_greeting(self, now: datetime) -> str:
        """
        Generate appropriate greeting based on time of day.

        Args:
            now: Current datetime

        Returns:
            Greeting string
        """
        hour = now.hour

        if hour < 12:
            return "Good Morning!"
        elif hour < 17:
            return "Good Afternoon!"
        elif hour < 21:
            return "Good Evening!"
        else:
            return "Good Night!"

    async def _fetch(self, entity: str) -> Rows:
        spec = get_entity_spec(entity)
        return await self.cache.fetch(spec.cache_key, self.client.entity(spec.name).list)

    async def _collections(self) -> Tuple[Rows, Rows, Rows, BrandingSettings]:
        tasks = await self._fetch("Task")
        goals = await self._fetch("Goal")
        events = await self._fetch("Event")
        settings_rows = await self._fetch("PlannerSettings")
        branding = resolve_branding(settings_rows[0] if settings_rows else {})
        return tasks, goals, events, branding

    def get_today_tasks(self, tasks: Rows) -> Rows:
        """Tasks due today that are not completed."""
        return [t for t in filters.filter_by_date(tasks, self.today)
                if t.get("status") != "completed"]

    def get_upcoming_events(self, events: Rows) -> Rows:
        """
        Events from today through the end of the (Monday-start) week, soonest
        first, at most UPCOMING_LIMIT.
        """
        week_end = dates.end_of_week(self.today, "monday")
        upcoming = filters.filter_by_date_range(events, self.today, week_end, "date")
        return filters.sort_by_date(upcoming, "date")[:UPCOMING_LIMIT]

    def get_priority_overview(self, tasks: Rows) -> Dict[str, int]:
        """Pending tasks per Eisenhower quadrant."""
        return aggregates.count_by(filters.filter_pending(tasks), "priority", TASK_PRIORITIES)

    async def aggregate(self, now: Optional[datetime] = None) -> DashboardData:
        """
        Aggregate all data for the dashboard.

        Args:
            now: Current datetime, used for the greeting (defaults to now)

        Returns:
            Complete DashboardData structure
        """
        if now is None:
            now = datetime.now()

        tasks, goals, events, branding = await self._collections()

        today_tasks = self.get_today_tasks(tasks)
        today_events = filters.filter_by_date(events, self.today, "date")
        active = aggregates.active_goals(goals)

        stats = DashboardStats(
            pending_tasks=len(filters.filter_pending(tasks)),
            completed_tasks=len(filters.filter_by_status(tasks, "completed")),
            active_goals=len(active),
            average_goal_progress=aggregates.average_goal_progress(goals),
            completion_rate=aggregates.completion_rate(tasks),
        )

        return DashboardData(
            generated_at=now,
            date=self.today,
            greeting=self._get_greeting(now),
            summary=(f"You have {len(today_tasks)} tasks and {len(today_events)} "
                     f"events scheduled for today."),
            branding=branding,
            today_tasks=today_tasks,
            today_events=today_events,
            upcoming_events=self.get_upcoming_events(events),
            active_goals=active,
            stats=stats,
            priority_overview=self.get_priority_overview(tasks),
        )

    async def progress(self, range_name: str = "week") -> ProgressReport:
        """
        Build the progress report.

        Args:
            range_name: "week", "month" or "quarter" (trailing four weeks)

        Raises:
            ValueError: unknown range name
        """
        if range_name not in REPORT_RANGES:
            raise ValueError(f"Unknown range: {range_name}")

        tasks, goals, events, _ = await self._collections()
        start, end = dates.date_range(range_name, self.today, "monday")

        completed_goals = len(filters.filter_by_status(goals, "completed"))
        return ProgressReport(
            range_name=range_name,
            start=start,
            end=end,
            tasks=aggregates.task_stats(tasks),
            tasks_by_priority=aggregates.tasks_by_priority(tasks),
            goals={
                "total": len(goals),
                "active": len(aggregates.active_goals(goals)),
                "completed": completed_goals,
                "average_progress": aggregates.average_goal_progress(goals),
            },
            goals_by_category=aggregates.goals_by_category(goals),
            weekly=aggregates.weekly_buckets(tasks, self.today, "monday"),
            productivity_score=aggregates.productivity_score(tasks, goals),
            total_events=len(events),
        )
