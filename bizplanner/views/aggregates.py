"""
Counts and percentages for the dashboard, weekly planner and progress views.

Percentages are whole numbers rounded half-up and are 0 (never NaN or a
ZeroDivisionError) when there is nothing to divide by.
"""

import math
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from ..core.models import GOAL_CATEGORIES, TASK_PRIORITIES
from .dates import WEEKDAY_NAMES, same_day, week_days
from .filters import filter_by_status, filter_pending, items_for_day

Rows = List[Dict[str, Any]]

HIGH_PRIORITIES = ("urgent-important", "important")


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(100 * part / total)


def completion_rate(tasks: Rows) -> int:
    """Completed tasks as a percentage of all tasks."""
    return percentage(len(filter_by_status(tasks, "completed")), len(tasks))


def active_goals(goals: Rows) -> Rows:
    return [g for g in goals if g.get("status") != "completed"]


def average_goal_progress(goals: Rows) -> int:
    """Mean progress over goals that are not completed; 0 with none."""
    active = active_goals(goals)
    if not active:
        return 0
    return round_half_up(sum(g.get("progress") or 0 for g in active) / len(active))


def count_by(rows: Rows, field: str, values: Iterable[str]) -> Dict[str, int]:
    """Occurrences of each of ``values`` in ``field`` (zero-filled)."""
    return {value: sum(1 for r in rows if r.get(field) == value) for value in values}


def tasks_by_priority(tasks: Rows) -> List[Dict[str, Any]]:
    """Chart series: one {name, value} point per Eisenhower quadrant."""
    counts = count_by(tasks, "priority", TASK_PRIORITIES)
    return [
        {"name": TASK_PRIORITIES[key]["label"], "value": count}
        for key, count in counts.items()
    ]


def goals_by_category(goals: Rows) -> List[Dict[str, Any]]:
    counts = count_by(goals, "category", GOAL_CATEGORIES)
    return [{"name": GOAL_CATEGORIES[key], "value": count} for key, count in counts.items()]


def weekly_buckets(tasks: Rows, today: Optional[date] = None,
                   week_starts_on: Optional[str] = "monday") -> List[Dict[str, Any]]:
    """
    Per-day activity for the week containing ``today``.

    ``completed`` counts completed tasks last touched (updated_at) that day,
    ``created`` counts tasks created that day.
    """
    today = today if today is not None else date.today()
    buckets = []
    for day in week_days(today, week_starts_on):
        touched = [t for t in tasks if same_day(t.get("updated_at"), day)]
        buckets.append({
            "day": WEEKDAY_NAMES[day.weekday()],
            "date": day.isoformat(),
            "completed": len(filter_by_status(touched, "completed")),
            "created": sum(1 for t in tasks if same_day(t.get("created_at"), day)),
        })
    return buckets


def week_summary(tasks: Rows, events: Rows, days: List[date]) -> Dict[str, int]:
    """Totals across the given days (weekly planner footer)."""
    summary = {"total_tasks": 0, "completed": 0, "events": 0, "high_priority": 0}
    for day in days:
        items = items_for_day(tasks, events, day)
        summary["total_tasks"] += len(items["tasks"])
        summary["completed"] += len(filter_by_status(items["tasks"], "completed"))
        summary["events"] += len(items["events"])
        summary["high_priority"] += sum(
            1 for t in items["tasks"] if t.get("priority") in HIGH_PRIORITIES
        )
    return summary


def productivity_score(tasks: Rows, goals: Rows) -> int:
    """Blend of completion rate, goal progress and completed volume, capped at 100."""
    completed = len(filter_by_status(tasks, "completed"))
    score = (completion_rate(tasks) * 0.4
             + average_goal_progress(goals) * 0.4
             + min(completed, 20))
    return min(100, round_half_up(score))


def task_stats(tasks: Rows) -> Dict[str, int]:
    return {
        "total": len(tasks),
        "completed": len(filter_by_status(tasks, "completed")),
        "pending": len(filter_pending(tasks)),
        "completion_rate": completion_rate(tasks),
    }
