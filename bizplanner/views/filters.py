"""
Pure filtering, grouping and sorting over fetched collections.

All functions take a list of row dicts plus filter state and return a new
list; the input is never mutated and nothing here is persisted.
"""

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.models import TASK_PRIORITIES
from .dates import in_range, is_today, parse_date, same_day

Rows = List[Dict[str, Any]]

ALL = "all"
PENDING_STATUSES = ("pending", "in-progress")


def filter_by_status(rows: Rows, statuses: Iterable[str]) -> Rows:
    wanted = {statuses} if isinstance(statuses, str) else set(statuses)
    return [row for row in rows if row.get("status") in wanted]


def filter_pending(rows: Rows) -> Rows:
    """Tasks still open: pending or in progress."""
    return filter_by_status(rows, PENDING_STATUSES)


def filter_by_date(rows: Rows, day: date, field: str = "due_date") -> Rows:
    """Rows whose ``field`` falls on the given calendar day."""
    return [row for row in rows if same_day(row.get(field), day)]


def filter_by_date_range(rows: Rows, start: date, end: date, field: str = "date") -> Rows:
    return [row for row in rows if in_range(row.get(field), start, end)]


def _matches(value: Any, query: str) -> bool:
    if value is None:
        return False
    if isinstance(value, (list, tuple)):
        return any(_matches(item, query) for item in value)
    return query in str(value).lower()


def search(rows: Rows, query: Optional[str], fields: Sequence[str]) -> Rows:
    """
    Case-insensitive substring match across several fields.

    List-valued fields (tags) match when any element matches. An empty query
    keeps every row.
    """
    if not query:
        return list(rows)
    needle = query.lower()
    return [row for row in rows if any(_matches(row.get(f), needle) for f in fields)]


def filter_by_category(rows: Rows, category: Optional[str]) -> Rows:
    """Rows in ``category``; "all" or None keeps everything."""
    if not category or category == ALL:
        return list(rows)
    return [row for row in rows if row.get("category") == category]


def filter_by_flag(rows: Rows, flag: str, value: bool = True) -> Rows:
    """Rows whose boolean ``flag`` (is_pinned, is_favorite) equals ``value``."""
    return [row for row in rows if bool(row.get(flag)) == value]


def filter_tasks_by_tab(tasks: Rows, tab: str, today: Optional[date] = None) -> Rows:
    """Task list tabs: all, pending, completed, today."""
    if tab == "pending":
        return filter_pending(tasks)
    if tab == "completed":
        return filter_by_status(tasks, "completed")
    if tab == "today":
        return [t for t in tasks if is_today(t.get("due_date"), today)]
    return list(tasks)


def filter_by_priority(tasks: Rows, priority: Optional[str]) -> Rows:
    if not priority or priority == ALL:
        return list(tasks)
    return [t for t in tasks if t.get("priority") == priority]


def group_by_priority(tasks: Rows) -> Dict[str, Rows]:
    """Eisenhower matrix quadrants, in quadrant order, each possibly empty."""
    return {
        priority: [t for t in tasks if t.get("priority") == priority]
        for priority in TASK_PRIORITIES
    }


def _created_key(row: Dict[str, Any]) -> str:
    return str(row.get("created_at") or "")


def sort_notes(notes: Rows) -> Rows:
    """Pinned first, then newest first."""
    newest_first = sorted(notes, key=_created_key, reverse=True)
    return sorted(newest_first, key=lambda n: not n.get("is_pinned"))


def sort_contacts(contacts: Rows) -> Rows:
    """Favorites first, then alphabetical by name."""
    return sorted(
        contacts,
        key=lambda c: (not c.get("is_favorite"), (c.get("name") or "").casefold()),
    )


def sort_by_date(rows: Rows, field: str = "date") -> Rows:
    """Ascending by calendar date; undated rows last."""
    return sorted(rows, key=lambda r: (parse_date(r.get(field)) is None,
                                       parse_date(r.get(field)) or date.min))


def items_for_day(tasks: Rows, events: Rows, day: date) -> Dict[str, Rows]:
    """Tasks due on and events held on ``day``."""
    return {
        "tasks": filter_by_date(tasks, day, "due_date"),
        "events": filter_by_date(events, day, "date"),
    }
