#!/usr/bin/env python3
"""
Business Planner - Command Line Interface
Terminal shell over the planner pages: tasks, goals, calendar, notes,
contacts, dashboard, progress and settings
"""

import asyncio
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional

import typer
from dateutil import parser as date_parser
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bizplanner.core import Config, DataAccessError, SQLiteDatabase, get_database
from bizplanner.core.models import CONTACT_CATEGORIES, EVENT_TYPE_COLORS, NOTE_CATEGORIES, NOTE_COLORS
from bizplanner.core.schema import init_schema
from bizplanner.dashboard import DashboardAggregator, DashboardFormatter
from bizplanner.data import CollectionCache, FileStorage, PlannerClient
from bizplanner.pages import (
    ActionResult,
    CalendarPage,
    ContactsPage,
    GoalsPage,
    NotesPage,
    SettingsPage,
    TasksPage,
)
from bizplanner.views import Notifier
from bizplanner.views.branding import THEME_PRESETS

# Initialize CLI app and console
app = typer.Typer(help="Business Planner - calendar, tasks, goals, notes and contacts")

console = Console()

PAGES = {
    "task": TasksPage,
    "goal": GoalsPage,
    "event": CalendarPage,
    "note": NotesPage,
    "contact": ContactsPage,
}

# Lazy-loaded shared state (initialized on first use)
_client: Optional[PlannerClient] = None
_cache: Optional[CollectionCache] = None
_notifier: Optional[Notifier] = None


def get_client() -> PlannerClient:
    """
    Get or initialize the PlannerClient.

    Deferred so that `init-db` and `--help` work before a database exists.
    """
    global _client, _cache, _notifier
    if _client is None:
        config = Config()
        logging.basicConfig(
            level=getattr(logging, str(config.get("log_level", "WARNING")).upper(), logging.WARNING),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        _client = PlannerClient(get_database(config), FileStorage.from_config(config))
        _cache = CollectionCache()
        _notifier = Notifier()
    return _client


def make_page(page_class, **kwargs):
    client = get_client()
    return page_class(client, _cache, notifier=_notifier, **kwargs)


def run(coro):
    """Run a page coroutine, turning data-access failures into a clean exit."""
    try:
        return asyncio.run(coro)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        console.print("Run 'planner init-db' to create the database.")
        raise typer.Exit(1)
    except DataAccessError as e:
        console.print(f"[red]Error: {e.message}[/red]")
        raise typer.Exit(1)


def report(result: ActionResult) -> None:
    """Print an ActionResult; failures exit non-zero."""
    if result.success:
        console.print(f"[green]✓[/green] {result.message}")
    else:
        console.print(f"[red]✗[/red] {result.message}")
        raise typer.Exit(1)


def parse_relative_date(date_str: str) -> Optional[date]:
    """
    Parse date strings like 'today', 'tomorrow', 'monday' or '2026-03-14'
    Returns date object or None
    """
    date_str = date_str.lower().strip()
    today = date.today()

    if date_str in ['today', 'td']:
        return today
    elif date_str in ['tomorrow', 'tmr', 'tom']:
        return today + timedelta(days=1)
    elif date_str in ['yesterday', 'yday']:
        return today - timedelta(days=1)

    # Days of week
    days = ['monday', 'tuesday', 'wednesday', 'thursday', 'friday', 'saturday', 'sunday']
    if date_str in days:
        days_ahead = days.index(date_str) - today.weekday()
        if days_ahead <= 0:  # Target day already happened this week
            days_ahead += 7
        return today + timedelta(days=days_ahead)

    try:
        # Missing parts default to the first of the current month
        return date_parser.parse(date_str, default=datetime(today.year, today.month, 1)).date()
    except (ValueError, OverflowError):
        return None


def require_date(value: str) -> str:
    parsed = parse_relative_date(value)
    if parsed is None:
        console.print(f"[red]Could not parse date: {value}[/red]")
        raise typer.Exit(1)
    return parsed.isoformat()


def find_record(rows, record_id: int, label: str):
    for row in rows:
        if row.get("id") == record_id:
            return row
    console.print(f"[red]{label} #{record_id} not found[/red]")
    raise typer.Exit(1)


# =============================================================================
# Tasks
# =============================================================================

@app.command()
def tasks(
    tab: str = typer.Option("all", "--tab", "-t", help="all, pending, completed or today"),
    priority: str = typer.Option("all", "--priority", "-p", help="Filter by priority"),
    matrix: bool = typer.Option(False, "--matrix", "-m", help="Group by Eisenhower quadrant"),
):
    """
    List tasks

    Examples:
      planner tasks --tab pending
      planner tasks --matrix
    """
    page = make_page(TasksPage)

    async def _show():
        await page.load()
        try:
            page.set_tab(tab)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
        page.priority_filter = priority

    run(_show())
    formatter = DashboardFormatter(console, today=page.today)

    if matrix:
        for key, group in page.quadrants().items():
            console.print(Panel(formatter.format_task_table(group, show_header=False),
                                title=f"[bold]{key}[/bold] ({len(group)})"))
        return

    counts = page.tab_counts()
    console.print(" │ ".join(f"{name}: {count}" for name, count in counts.items()))
    visible = page.visible_tasks()
    if not visible:
        console.print("[dim]No tasks[/dim]")
        return
    console.print(formatter.format_task_table(visible))


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    due: Optional[str] = typer.Option(None, "--due", "-d", help="Due date (today, tomorrow, monday, 2026-03-14)"),
    priority: str = typer.Option("normal", "--priority", "-p",
                                 help="urgent-important, important, urgent or normal"),
    category: str = typer.Option("", "--category", "-c", help="Free-text category"),
    description: str = typer.Option("", "--desc", help="Task description"),
):
    """
    Add a new task

    Examples:
      planner add "Call the bank"
      planner add "Review proposal" --due tomorrow --priority urgent-important
    """
    page = make_page(TasksPage)
    fields = {"title": title, "priority": priority, "category": category, "description": description}
    if due:
        fields["due_date"] = require_date(due)

    page.open_create(**fields)
    result = run(page.submit())
    report(result)
    record = (result.data or {}).get("record") or {}
    if record.get("due_date"):
        console.print(f"  Due: {record['due_date']}")


@app.command()
def done(task_id: int = typer.Argument(..., help="Task ID to toggle")):
    """
    Toggle a task between completed and pending

    Example:
      planner done 5
    """
    page = make_page(TasksPage)

    async def _toggle():
        await page.load()
        task = find_record(page.tasks, task_id, "Task")
        return await page.toggle_complete(task)

    report(run(_toggle()))


@app.command()
def delete(
    entity: str = typer.Argument(..., help="task, goal, event, note or contact"),
    record_id: int = typer.Argument(..., help="ID to delete"),
):
    """
    Delete a record

    Example:
      planner delete note 12
    """
    page_class = PAGES.get(entity.lower())
    if page_class is None:
        console.print(f"[red]Unknown entity: {entity}[/red]")
        raise typer.Exit(1)
    page = make_page(page_class)
    report(run(page.delete({"id": record_id})))


# =============================================================================
# Goals
# =============================================================================

@app.command()
def goals(
    category: str = typer.Option("all", "--category", "-c", help="personal, professional or project"),
    new: Optional[str] = typer.Option(None, "--new", help="Create a goal with this title"),
    milestone: Optional[List[str]] = typer.Option(None, "--milestone", help="Milestone for --new (repeatable)"),
):
    """
    List goals, or create one with --new

    Examples:
      planner goals --category professional
      planner goals --new "Launch" --milestone Design --milestone Build
    """
    page = make_page(GoalsPage)

    if new:
        page.open_create(title=new, category=category if category != "all" else "personal")
        for title in milestone or []:
            page.add_form_milestone(title)
        report(run(page.submit()))
        return

    run(page.load())
    page.tab = category
    visible = page.visible_goals()
    if not visible:
        console.print("[dim]No goals[/dim]")
        return
    console.print(DashboardFormatter(console).format_goal_table(visible))
    for goal, message in page.divergent_goals():
        console.print(f"[yellow]⚠ #{goal.get('id')} {goal.get('title')}: {message}[/yellow]")


@app.command("milestone")
def toggle_milestone(
    goal_id: int = typer.Argument(..., help="Goal ID"),
    index: int = typer.Argument(..., help="Milestone number (1-based)"),
):
    """
    Toggle one milestone of a goal; progress and status follow

    Example:
      planner milestone 3 1
    """
    page = make_page(GoalsPage)

    async def _toggle():
        await page.load()
        goal = find_record(page.goals, goal_id, "Goal")
        return await page.toggle_goal_milestone(goal, index - 1)

    result = run(_toggle())
    report(result)
    record = (result.data or {}).get("record") or {}
    if record:
        console.print(f"  Progress: {record.get('progress')}%  Status: {record.get('status')}")


# =============================================================================
# Calendar, notes, contacts
# =============================================================================

@app.command()
def events(
    month: Optional[str] = typer.Option(None, "--month", help="Any date inside the month to show"),
    add_title: Optional[str] = typer.Option(None, "--add", help="Create an event with this title"),
    on: Optional[str] = typer.Option(None, "--on", help="Event date for --add"),
    event_type: str = typer.Option("meeting", "--type", help=", ".join(EVENT_TYPE_COLORS)),
    start: str = typer.Option("", "--start", help="Start time (HH:MM)"),
):
    """
    Show a month of events, or create one with --add

    Examples:
      planner events --month 2026-11
      planner events --add "Board meeting" --on friday --start 10:00
    """
    page = make_page(CalendarPage)

    if add_title:
        if not on:
            console.print("[red]--on is required with --add[/red]")
            raise typer.Exit(1)
        page.open_create(title=add_title, date=require_date(on), event_type=event_type, start_time=start)
        report(run(page.submit()))
        return

    run(page.load())
    if month:
        page.current_month = date.fromisoformat(require_date(month))

    shown = [event for cell in page.month_cells() if cell["in_month"] for event in cell["events"]]
    console.print(f"[bold]{page.current_month.strftime('%B %Y')}[/bold]")
    if not shown:
        console.print("[dim]No events this month[/dim]")
        return
    console.print(DashboardFormatter(console).format_event_table(shown))


@app.command()
def notes(
    search: str = typer.Option("", "--search", "-s", help="Search title, content and tags"),
    category: str = typer.Option("all", "--category", "-c", help=", ".join(NOTE_CATEGORIES)),
    pin: Optional[int] = typer.Option(None, "--pin", help="Toggle pin on a note ID"),
    new: Optional[str] = typer.Option(None, "--new", help="Create a note with this title"),
    content: str = typer.Option("", "--content", help="Markdown content for --new"),
    tag: Optional[List[str]] = typer.Option(None, "--tag", help="Tag for --new (repeatable)"),
    color: str = typer.Option("Default", "--color", help=", ".join(name for name, _ in NOTE_COLORS)),
):
    """
    List notes (pinned first), or create one with --new

    Examples:
      planner notes --search roadmap
      planner notes --pin 4
      planner notes --new "Retro" --tag team --color Yellow
    """
    page = make_page(NotesPage)

    if new:
        page.open_create(title=new, content=content,
                         category=category if category != "all" else "general")
        for name in tag or []:
            page.add_form_tag(name)
        try:
            page.set_form_color(color)
        except KeyError as e:
            console.print(f"[red]{e.args[0]}[/red]")
            raise typer.Exit(1)
        report(run(page.submit()))
        return

    async def _pin():
        await page.load()
        return await page.toggle_pin(find_record(page.notes, pin, "Note"))

    if pin is not None:
        report(run(_pin()))
        return

    run(page.load())
    page.tab = category
    page.search_query = search

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", min_width=30)
    table.add_column("Category", width=10)
    table.add_column("Tags")
    table.add_column("Color", width=8)
    for note in page.visible_notes():
        title = f"📌 {note['title']}" if note.get("is_pinned") else note.get("title", "")
        table.add_row(str(note.get("id")), title, note.get("category") or "",
                      ", ".join(note.get("tags") or []), page.swatch_name(note))
    console.print(table)


@app.command()
def contacts(
    search: str = typer.Option("", "--search", "-s", help="Search name, company, email and phone"),
    category: str = typer.Option("all", "--category", "-c",
                                 help="favorites or one of: " + ", ".join(CONTACT_CATEGORIES)),
    favorite: Optional[int] = typer.Option(None, "--favorite", help="Toggle favorite on a contact ID"),
):
    """
    List contacts (favorites first)

    Examples:
      planner contacts --search acme.com
      planner contacts --category favorites
    """
    page = make_page(ContactsPage)

    async def _favorite():
        await page.load()
        return await page.toggle_favorite(find_record(page.contacts, favorite, "Contact"))

    if favorite is not None:
        report(run(_favorite()))
        return

    run(page.load())
    page.tab = category
    page.search_query = search

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("", width=3)
    table.add_column("Name", min_width=20)
    table.add_column("Company")
    table.add_column("Email")
    table.add_column("Phone")
    for contact in page.visible_contacts():
        star = "[yellow]★[/yellow]" if contact.get("is_favorite") else page.initials(contact)
        table.add_row(str(contact.get("id")), star, contact.get("name") or "",
                      contact.get("company") or "", contact.get("email") or "",
                      contact.get("phone") or "")
    console.print(table)


# =============================================================================
# Dashboard, progress, settings
# =============================================================================

@app.command()
def dashboard():
    """
    Show today's dashboard

    Displays your day at a glance:
    - Tasks due today and today's events
    - Upcoming events this week
    - Active goals
    - Progress stats
    """
    client = get_client()
    aggregator = DashboardAggregator(client, _cache)
    data = run(aggregator.aggregate())
    DashboardFormatter(console).render_dashboard(data)


@app.command()
def progress(
    range_name: str = typer.Option("week", "--range", "-r", help="week, month or quarter"),
):
    """Show progress analytics"""
    aggregator = DashboardAggregator(get_client(), _cache)
    try:
        report_data = run(aggregator.progress(range_name))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    DashboardFormatter(console).render_progress(report_data)


@app.command()
def settings(
    company: Optional[str] = typer.Option(None, "--company", help="Company name"),
    slogan: Optional[str] = typer.Option(None, "--slogan", help="Company slogan"),
    preset: Optional[str] = typer.Option(None, "--preset",
                                         help=", ".join(p["name"] for p in THEME_PRESETS)),
    week_starts_on: Optional[str] = typer.Option(None, "--week-starts-on", help="sunday or monday"),
    time_format: Optional[str] = typer.Option(None, "--time-format", help="12h or 24h"),
):
    """
    Show or change branding and preferences

    Examples:
      planner settings
      planner settings --company "Acme" --preset "Forest Green"
    """
    page = make_page(SettingsPage)
    run(page.load())

    changes = {
        key: value for key, value in {
            "company_name": company,
            "slogan": slogan,
            "week_starts_on": week_starts_on,
            "time_format": time_format,
        }.items() if value is not None
    }
    if preset and page.apply_preset(preset) is None:
        console.print(f"[red]Unknown preset: {preset}[/red]")
        raise typer.Exit(1)

    if changes or preset:
        page.form.update(**changes)
        report(run(page.save()))

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value")
    for key, value in page.branding.to_dict().items():
        table.add_row(key, str(value))
    console.print(Panel(table, title="[bold]Settings[/bold]", border_style=page.branding.primary_color))


@app.command("init-db")
def init_db():
    """Create the planner tables (SQLite, or PostgreSQL when DATABASE_URL is set)"""
    config = Config()
    if config.get_database_url():
        db = get_database(config)
    else:
        db = SQLiteDatabase(config.get_database_path(), create=True)
    init_schema(db)
    console.print(f"[green]✓[/green] Database ready ({db.dialect})")


if __name__ == "__main__":
    app()
