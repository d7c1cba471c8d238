"""
Rich formatter module for the Business Planner terminal shell.

Handles all Rich-based CLI formatting for the dashboard, the progress
report and the entity listings.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from ..core.models import EVENT_TYPE_LABELS, GOAL_STATUSES, TASK_PRIORITIES
from ..views import dates
from .aggregator import DashboardData, DashboardStats, ProgressReport

Rows = List[Dict[str, Any]]

# Status icons for tasks
STATUS_ICONS = {
    "pending": "[dim]○[/dim]",
    "in-progress": "[yellow]◐[/yellow]",
    "completed": "[green]✓[/green]",
    "cancelled": "[red]✗[/red]",
}

# Priority colors
PRIORITY_COLORS = {
    "urgent-important": "red bold",
    "important": "yellow",
    "urgent": "magenta",
    "normal": "dim",
}

MAX_TITLE = 40


def _truncate(text: Optional[str], width: int = MAX_TITLE) -> str:
    text = text or ""
    return text[:width] + "..." if len(text) > width else text


class DashboardFormatter:
    """
    Rich-based formatter for the planner views.

    Border colors follow the resolved branding where a panel represents the
    company (header) and fixed semantic colors elsewhere.
    """

    def __init__(self, console: Optional[Console] = None, today: Optional[date] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
            today: Fixed "today" for due-date labels
        """
        self.console = console or Console()
        self.today = today

    def _format_priority(self, priority: Optional[str]) -> str:
        """Format priority as colored badge."""
        color = PRIORITY_COLORS.get(priority, "white")
        label = TASK_PRIORITIES.get(priority, {}).get("label", priority or "")
        return f"[{color}]{label}[/{color}]"

    def _format_due_date(self, task: Dict[str, Any]) -> str:
        """Format due date with color based on urgency."""
        label = dates.date_label(task.get("due_date"), self.today)
        if label is None:
            return "[dim]---[/dim]"
        if dates.is_overdue(task, self.today):
            return f"[red bold]{label}[/red bold]"
        if label in ("Today", "Tomorrow"):
            return f"[yellow]{label}[/yellow]"
        return f"[dim]{label}[/dim]"

    def format_header(self, data: DashboardData) -> Panel:
        """
        Create header panel with company, date and greeting.

        Args:
            data: Dashboard data

        Returns:
            Rich Panel with header content
        """
        content = Text()
        content.append(f"{data.greeting}\n", style="bold")
        content.append(f"{data.date.strftime('%A, %B %d, %Y')}\n", style="dim")
        content.append(data.summary)
        if data.branding.slogan:
            content.append(f"\n{data.branding.slogan}", style="italic")

        return Panel(
            content,
            title=f"[bold]{data.branding.company_name or 'Business Planner'}[/bold]",
            title_align="center",
            border_style=data.branding.primary_color,
            padding=(0, 2),
        )

    def format_task_table(self, tasks: Rows, show_header: bool = True) -> Table:
        table = Table(show_header=show_header, box=box.SIMPLE if show_header else None,
                      padding=(0, 1), expand=True)
        table.add_column("", width=2)
        table.add_column("ID", width=5)
        table.add_column("Title", ratio=1)
        table.add_column("Due", width=12, justify="right")
        table.add_column("Priority", width=20, justify="right")

        for task in tasks:
            table.add_row(
                STATUS_ICONS.get(task.get("status"), "○"),
                f"[dim]#{task.get('id')}[/dim]",
                _truncate(task.get("title")),
                self._format_due_date(task),
                self._format_priority(task.get("priority")),
            )
        return table

    def format_event_table(self, events: Rows, show_header: bool = True) -> Table:
        table = Table(show_header=show_header, box=box.SIMPLE if show_header else None,
                      padding=(0, 1), expand=True)
        table.add_column("ID", width=5)
        table.add_column("When", width=16)
        table.add_column("Title", ratio=1)
        table.add_column("Type", width=10)

        for event in events:
            day = dates.parse_date(event.get("date"))
            when = dates.format_day(day, with_weekday=True) if day else "---"
            if event.get("start_time"):
                when = f"{when} {event['start_time']}"
            color = event.get("color") or "white"
            table.add_row(
                f"[dim]#{event.get('id')}[/dim]",
                when,
                f"[{color}]●[/{color}] {_truncate(event.get('title'))}",
                EVENT_TYPE_LABELS.get(event.get("event_type"), event.get("event_type") or ""),
            )
        return table

    def format_goal_table(self, goals: Rows) -> Table:
        table = Table(box=box.SIMPLE, padding=(0, 1), expand=True)
        table.add_column("ID", width=5)
        table.add_column("Title", ratio=1)
        table.add_column("Status", width=12)
        table.add_column("Progress", width=24)

        for goal in goals:
            progress = goal.get("progress") or 0
            filled = progress // 5
            bar = f"[green]{'█' * filled}[/green][dim]{'░' * (20 - filled)}[/dim]"
            milestones = goal.get("milestones") or []
            title = _truncate(goal.get("title"))
            if milestones:
                done = sum(1 for m in milestones if m.get("completed"))
                title = f"{title} [dim]({done}/{len(milestones)})[/dim]"
            table.add_row(
                f"[dim]#{goal.get('id')}[/dim]",
                title,
                GOAL_STATUSES.get(goal.get("status"), goal.get("status") or ""),
                f"{bar} {progress}%",
            )
        return table

    def format_priority_overview(self, overview: Dict[str, int]) -> Table:
        """Pending-task counts, one column per Eisenhower quadrant."""
        table = Table.grid(padding=(0, 4), expand=True)
        for _ in overview:
            table.add_column(justify="center")
        cells = []
        for key, count in overview.items():
            color = PRIORITY_COLORS.get(key, "white")
            label = TASK_PRIORITIES[key]["label"]
            cells.append(f"[{color}]{label}[/{color}]\n[bold]{count}[/bold] [dim]tasks[/dim]")
        table.add_row(*cells)
        return table

    def format_stats_bar(self, stats: DashboardStats) -> str:
        """
        Create bottom stats bar.

        Args:
            stats: Dashboard statistics

        Returns:
            Formatted stats string
        """
        parts = [
            f"[white]○ {stats.pending_tasks} pending[/white]",
            f"[green]✓ {stats.completed_tasks} done[/green]",
            f"[blue]◎ {stats.active_goals} active goals[/blue]",
            f"[dim]{stats.average_goal_progress}% avg goal progress[/dim]",
        ]
        return " │ ".join(parts)

    def render_dashboard(self, data: DashboardData) -> None:
        """
        Render the complete dashboard to console.

        Args:
            data: Complete dashboard data
        """
        accent = data.branding.accent_color

        self.console.print(self.format_header(data))
        self.console.print()

        if data.today_tasks:
            self.console.print(Panel(self.format_task_table(data.today_tasks, show_header=False),
                                     title=f"[bold]Today's Tasks ({len(data.today_tasks)})[/bold]",
                                     border_style=accent, padding=(0, 1)))
        else:
            self.console.print(Panel(Text("No tasks due today", style="dim", justify="center"),
                                     title="[bold]Today's Tasks[/bold]", border_style=accent))
        self.console.print()

        if data.upcoming_events:
            self.console.print(Panel(self.format_event_table(data.upcoming_events, show_header=False),
                                     title="[bold]Upcoming Events[/bold]",
                                     border_style="blue", padding=(0, 1)))
        else:
            self.console.print(Panel(Text("No upcoming events this week", style="dim", justify="center"),
                                     title="[bold]Upcoming Events[/bold]", border_style="blue"))
        self.console.print()

        if data.active_goals:
            self.console.print(Panel(self.format_goal_table(data.active_goals[:5]),
                                     title="[bold]Active Goals[/bold]", border_style="green"))
            self.console.print()

        if data.priority_overview:
            self.console.print(Panel(self.format_priority_overview(data.priority_overview),
                                     title="[bold]Priority Overview[/bold]", border_style=accent))
            self.console.print()

        self.console.print("─" * 60)
        self.console.print(self.format_stats_bar(data.stats), justify="center")
        self.console.print("─" * 60)

    def render_progress(self, report: ProgressReport) -> None:
        """Render the progress report: headline numbers, breakdowns, weekly activity."""
        period = f"{dates.format_day(report.start)} - {dates.format_day(report.end)}, {report.end.year}"
        headline = Table.grid(padding=(0, 4))
        for _ in range(4):
            headline.add_column(justify="center")
        headline.add_row(
            f"[bold]{report.tasks['completion_rate']}%[/bold]\n[dim]completion[/dim]",
            f"[bold]{report.tasks['completed']}/{report.tasks['total']}[/bold]\n[dim]tasks done[/dim]",
            f"[bold]{report.goals['average_progress']}%[/bold]\n[dim]goal progress[/dim]",
            f"[bold]{report.productivity_score}[/bold]\n[dim]productivity[/dim]",
        )
        self.console.print(Panel(headline, title=f"[bold]Progress ({report.range_name})[/bold]",
                                 subtitle=period, border_style="blue"))

        breakdown = Table(box=box.SIMPLE, expand=True)
        breakdown.add_column("Tasks by priority")
        breakdown.add_column("Count", justify="right")
        breakdown.add_column("Goals by category")
        breakdown.add_column("Count", justify="right")
        rows = max(len(report.tasks_by_priority), len(report.goals_by_category))
        for i in range(rows):
            task_point = report.tasks_by_priority[i] if i < len(report.tasks_by_priority) else None
            goal_point = report.goals_by_category[i] if i < len(report.goals_by_category) else None
            breakdown.add_row(
                task_point["name"] if task_point else "",
                str(task_point["value"]) if task_point else "",
                goal_point["name"] if goal_point else "",
                str(goal_point["value"]) if goal_point else "",
            )
        self.console.print(breakdown)

        weekly = Table(title="This week", box=box.SIMPLE, expand=True)
        weekly.add_column("Day")
        weekly.add_column("Created", justify="right")
        weekly.add_column("Completed", justify="right")
        for bucket in report.weekly:
            weekly.add_row(bucket["day"], str(bucket["created"]), str(bucket["completed"]))
        self.console.print(weekly)
        self.console.print(f"[dim]{report.total_events} events on the calendar[/dim]")
