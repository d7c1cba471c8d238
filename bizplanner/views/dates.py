"""
Calendar date math for the calendar, weekly planner, dashboard and
progress views.

Everything here is a pure, timezone-naive function over calendar dates:
ISO strings are reduced to their ``YYYY-MM-DD`` part and "today" is always
an argument (defaulting to ``date.today()``) so results are reproducible.
"""

from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from dateutil.relativedelta import relativedelta

WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

TODAY = "today"
TOMORROW = "tomorrow"
OVERDUE = "overdue"
UPCOMING = "upcoming"


def parse_date(value: Any) -> Optional[date]:
    """Calendar date of an ISO date/datetime string (or date object); None if absent or invalid."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        return None


def _today(today: Optional[date]) -> date:
    return today if today is not None else date.today()


def same_day(value: Any, day: date) -> bool:
    parsed = parse_date(value)
    return parsed is not None and parsed == day


def week_start_index(week_starts_on: Optional[str]) -> int:
    """Python weekday number of the first column: Sunday (6) or Monday (0)."""
    return 6 if week_starts_on == "sunday" else 0


def start_of_week(day: date, week_starts_on: Optional[str] = "monday") -> date:
    offset = (day.weekday() - week_start_index(week_starts_on)) % 7
    return day - timedelta(days=offset)


def end_of_week(day: date, week_starts_on: Optional[str] = "monday") -> date:
    return start_of_week(day, week_starts_on) + timedelta(days=6)


def days_between(start: date, end: date) -> List[date]:
    """Every day from start to end inclusive."""
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def week_days(day: date, week_starts_on: Optional[str] = "monday") -> List[date]:
    """The seven days of the week containing ``day``."""
    start = start_of_week(day, week_starts_on)
    return days_between(start, start + timedelta(days=6))


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    return start_of_month(day) + relativedelta(months=1) - timedelta(days=1)


def month_grid(day: date, week_starts_on: Optional[str] = "monday") -> List[date]:
    """
    Days shown by a month view: the whole month padded with days from the
    adjacent months so it fills complete 7-column rows.
    """
    first = start_of_week(start_of_month(day), week_starts_on)
    last = end_of_week(end_of_month(day), week_starts_on)
    return days_between(first, last)


def weekday_headers(week_starts_on: Optional[str] = "monday") -> List[str]:
    start = week_start_index(week_starts_on)
    return WEEKDAY_NAMES[start:] + WEEKDAY_NAMES[:start]


def add_months(day: date, months: int) -> date:
    return day + relativedelta(months=months)


def add_weeks(day: date, weeks: int) -> date:
    return day + timedelta(weeks=weeks)


def is_today(value: Any, today: Optional[date] = None) -> bool:
    return same_day(value, _today(today))


def is_tomorrow(value: Any, today: Optional[date] = None) -> bool:
    return same_day(value, _today(today) + timedelta(days=1))


def is_past(value: Any, today: Optional[date] = None) -> bool:
    """Strictly before today."""
    parsed = parse_date(value)
    return parsed is not None and parsed < _today(today)


def classify_date(value: Any, today: Optional[date] = None) -> Optional[str]:
    """today / tomorrow / overdue / upcoming, or None without a date."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    today = _today(today)
    if parsed == today:
        return TODAY
    if is_tomorrow(parsed, today):
        return TOMORROW
    if parsed < today:
        return OVERDUE
    return UPCOMING


def format_day(day: date, with_weekday: bool = False) -> str:
    """'Oct 5', or 'Mon, Oct 5' with the weekday."""
    text = f"{day.strftime('%b')} {day.day}"
    if with_weekday:
        text = f"{WEEKDAY_NAMES[day.weekday()]}, {text}"
    return text


def date_label(value: Any, today: Optional[date] = None,
               with_weekday: bool = False) -> Optional[str]:
    """
    Short label for a due/event date: "Today", "Tomorrow", "Overdue", or the
    formatted day. Event lists pass ``with_weekday`` and never show
    "Overdue" since they only list upcoming dates.
    """
    parsed = parse_date(value)
    if parsed is None:
        return None
    kind = classify_date(parsed, today)
    if kind == TODAY:
        return "Today"
    if kind == TOMORROW:
        return "Tomorrow"
    if kind == OVERDUE and not with_weekday:
        return "Overdue"
    return format_day(parsed, with_weekday=with_weekday)


def is_overdue(task: Dict[str, Any], today: Optional[date] = None) -> bool:
    """Due before today and not completed."""
    return is_past(task.get("due_date"), today) and task.get("status") != "completed"


def in_range(value: Any, start: date, end: date) -> bool:
    parsed = parse_date(value)
    return parsed is not None and start <= parsed <= end


def date_range(range_name: str, today: Optional[date] = None,
               week_starts_on: Optional[str] = "monday") -> Tuple[date, date]:
    """
    Reporting window for the progress view.

    Args:
        range_name: "week" (current week), "month" (current month) or anything
            else for the trailing four weeks ending today
    """
    today = _today(today)
    if range_name == "week":
        return start_of_week(today, week_starts_on), end_of_week(today, week_starts_on)
    if range_name == "month":
        return start_of_month(today), end_of_month(today)
    return today - timedelta(weeks=4), today
