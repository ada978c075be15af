"""Typer CLI for daybook."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from daybook.config import load_config, setup_logging
from daybook.models import NotePatch, Task, TaskFilters, TaskPatch, TaskPriority, TaskStatus
from daybook.stores import RecordNotFoundError
from daybook.tools import UnknownToolError, build_tools, dispatch
from daybook.workspace import Workspace

app = typer.Typer(
    name="daybook",
    help="Tasks, notes, expenses, events and reminders from the command line.",
    no_args_is_help=True,
)
console = Console()

PRIORITY_STYLE = {
    TaskPriority.HIGH: "red",
    TaskPriority.MEDIUM: "yellow",
    TaskPriority.LOW: "green",
}


def _get_workspace() -> Workspace:
    config = load_config()
    setup_logging(config.log_level)
    return Workspace(config)


def _fail(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)


def _parse_enum(enum_cls, value: str | None, label: str):
    if value is None:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        valid = ", ".join(m.value for m in enum_cls)
        _fail(f"Invalid {label} '{value}'. Use: {valid}")


def _print_tasks(tasks: list[Task], title: str | None = None) -> None:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Priority")
    table.add_column("Status")
    table.add_column("Due")
    table.add_column("Assignee")
    table.add_column("Tags", style="dim")
    for t in tasks:
        style = PRIORITY_STYLE[t.priority]
        table.add_row(
            str(t.id),
            t.title,
            f"[{style}]{t.priority.value}[/{style}]",
            t.status.value,
            t.due_date or "",
            t.assignee or "",
            ", ".join(t.tags),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


@app.command()
def add(
    title: str,
    due: Annotated[Optional[str], typer.Option("--due", "-d", help="Due date: YYYY-MM-DD, today, tomorrow, next week")] = None,
    priority: Annotated[str, typer.Option("--priority", "-p", help="low, medium or high")] = "medium",
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a", help="Person responsible")] = None,
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-t", help="Tag (repeatable)")] = None,
    description: Annotated[Optional[str], typer.Option(help="Longer description")] = None,
) -> None:
    """Add a new task."""
    prio = _parse_enum(TaskPriority, priority, "priority")
    ws = _get_workspace()
    task = ws.tasks.create(
        title,
        description=description,
        due_date=due,
        priority=prio,
        assignee=assignee,
        tags=tags,
    )
    due_text = f" due {task.due_date}" if task.due_date else ""
    console.print(f"[green]Added '{title}' as task {task.id}{due_text}[/green]")


@app.command("list")
def list_tasks(
    status_filter: Annotated[Optional[str], typer.Option("--status", "-s", help="pending, in_progress or completed")] = None,
    priority: Annotated[Optional[str], typer.Option("--priority", "-p", help="low, medium or high")] = None,
    due_before: Annotated[Optional[str], typer.Option("--due-before", help="Only tasks due on or before this date")] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-t", help="Match any of these tags")] = None,
) -> None:
    """List tasks, highest priority first."""
    filters = TaskFilters(
        status=_parse_enum(TaskStatus, status_filter, "status"),
        priority=_parse_enum(TaskPriority, priority, "priority"),
        due_before=due_before,
        assignee=assignee,
        tags=tags,
    )
    tasks = _get_workspace().tasks.list(filters)
    if not tasks:
        console.print("No tasks found.")
        return
    _print_tasks(tasks)


@app.command()
def done(task_id: int) -> None:
    """Mark a task as completed."""
    try:
        task = _get_workspace().tasks.complete(task_id)
    except RecordNotFoundError as exc:
        _fail(str(exc))
    console.print(f"[green]Completed task {task.id}: {task.title}[/green]")


@app.command()
def update(
    task_id: int,
    title: Annotated[Optional[str], typer.Option(help="New title")] = None,
    due: Annotated[Optional[str], typer.Option("--due", "-d", help="New due date")] = None,
    priority: Annotated[Optional[str], typer.Option("--priority", "-p")] = None,
    status_value: Annotated[Optional[str], typer.Option("--status", "-s")] = None,
    assignee: Annotated[Optional[str], typer.Option("--assignee", "-a")] = None,
    description: Annotated[Optional[str], typer.Option(help="New description")] = None,
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-t", help="Replacement tags (repeatable)")] = None,
) -> None:
    """Update fields of an existing task. Only provided fields are changed."""
    patch = TaskPatch(
        title=title,
        description=description,
        due_date=due,
        priority=_parse_enum(TaskPriority, priority, "priority"),
        status=_parse_enum(TaskStatus, status_value, "status"),
        assignee=assignee,
        tags=tags,
    )
    try:
        task = _get_workspace().tasks.update(task_id, patch)
    except RecordNotFoundError as exc:
        _fail(str(exc))
    console.print(f"[green]Updated task {task.id}.[/green]")


@app.command()
def agenda(date: Annotated[Optional[str], typer.Argument(help="Date to view (default today)")] = None) -> None:
    """Show tasks due on a date, overdue tasks, and what's coming up."""
    result = _get_workspace().tasks.daily_agenda(date)
    console.print(f"[bold]Agenda for {result.date}[/bold]")
    if result.overdue:
        _print_tasks(result.overdue, title="Overdue")
    if result.tasks:
        _print_tasks(result.tasks, title="Due")
    else:
        console.print("Nothing due.")
    if result.upcoming:
        _print_tasks(result.upcoming, title="Upcoming")


@app.command()
def today() -> None:
    """Today's events and tasks."""
    ws = _get_workspace()
    events = ws.events.today_events()
    if events:
        table = Table(title="Events")
        table.add_column("Time", style="cyan")
        table.add_column("Title")
        table.add_column("Location", style="dim")
        for e in events:
            table.add_row(e.start_time[11:16], e.title, e.location or "")
        console.print(table)
    else:
        console.print("No events today.")

    tasks = ws.tasks.daily_agenda().tasks
    if tasks:
        _print_tasks(tasks, title="Due today")
    else:
        console.print("No tasks due today.")


@app.command()
def summary(date: Annotated[Optional[str], typer.Argument(help="Date (default today)")] = None) -> None:
    """Print the daily digest."""
    console.print(_get_workspace().daily_summary(date))


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


@app.command()
def note(
    title: str,
    content: str,
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-t")] = None,
) -> None:
    """Create a note."""
    created = _get_workspace().notes.create(title, content, tags=tags)
    console.print(f"[green]Added note {created.id}: {created.title}[/green]")


@app.command()
def notes(
    query: Annotated[str, typer.Argument(help="Text to search for")] = "",
    tags: Annotated[Optional[list[str]], typer.Option("--tag", "-t")] = None,
) -> None:
    """Search notes (case-insensitive). With no query, lists every note."""
    found = _get_workspace().notes.search(query, tags)
    if not found:
        console.print("No matching notes.")
        return
    table = Table()
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Content")
    table.add_column("Tags", style="dim")
    table.add_column("Updated", style="dim")
    for n in found:
        table.add_row(str(n.id), n.title, n.content, ", ".join(n.tags), (n.updated_at or "")[:16])
    console.print(table)


@app.command("tag-note")
def tag_note(note_id: int, tags: Annotated[list[str], typer.Argument(help="New tags")]) -> None:
    """Replace the tags on a note."""
    try:
        updated = _get_workspace().notes.update(note_id, NotePatch(tags=tags))
    except RecordNotFoundError as exc:
        _fail(str(exc))
    console.print(f"[green]Note {updated.id} tagged: {', '.join(updated.tags)}[/green]")


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


@app.command()
def expense(
    amount: float,
    category: str,
    description: str,
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="YYYY-MM-DD or today")] = None,
    method: Annotated[Optional[str], typer.Option("--method", "-m", help="Payment method")] = None,
) -> None:
    """Log an expense."""
    logged = _get_workspace().expenses.log(amount, category, description, date=date, payment_method=method)
    console.print(f"[green]Logged expense {logged.id}: ${logged.amount:.2f} for {logged.category} on {logged.date}[/green]")


@app.command()
def expenses(
    start: Annotated[Optional[str], typer.Option("--from", help="First date to include")] = None,
    end: Annotated[Optional[str], typer.Option("--to", help="Last date to include")] = None,
    category: Annotated[Optional[str], typer.Option("--category", "-c")] = None,
) -> None:
    """Expense totals by category."""
    result = _get_workspace().expenses.summarize(start, end, category)
    if not result.expenses:
        console.print("No expenses found.")
        return
    table = Table(title="Expenses by category")
    table.add_column("Category")
    table.add_column("Amount", justify="right")
    for cat, amount in sorted(result.by_category.items()):
        table.add_row(cat, f"${amount:.2f}")
    table.add_row("[bold]Total[/bold]", f"[bold]${result.total:.2f}[/bold]")
    console.print(table)


@app.command()
def categories() -> None:
    """List expense categories in use."""
    for cat in _get_workspace().expenses.list_categories():
        console.print(cat)


# ---------------------------------------------------------------------------
# Events & reminders
# ---------------------------------------------------------------------------


@app.command()
def event(
    title: str,
    start: Annotated[str, typer.Argument(help="Start, e.g. 2025-10-06T14:00")],
    end: Annotated[Optional[str], typer.Option("--end", "-e")] = None,
    location: Annotated[Optional[str], typer.Option("--location", "-l")] = None,
    attendees: Annotated[Optional[list[str]], typer.Option("--attendee")] = None,
    description: Annotated[Optional[str], typer.Option()] = None,
) -> None:
    """Schedule a calendar event."""
    created = _get_workspace().events.create(
        title,
        start,
        description=description,
        end_time=end,
        location=location,
        attendees=attendees,
    )
    console.print(f"[green]Scheduled event {created.id}: {created.title} at {created.start_time}[/green]")


@app.command()
def events(days: Annotated[int, typer.Option("--days", help="Days to look ahead")] = 7) -> None:
    """List upcoming events."""
    found = _get_workspace().events.list_upcoming(days)
    if not found:
        console.print(f"No events in the next {days} days.")
        return
    table = Table()
    table.add_column("ID", style="cyan")
    table.add_column("Start")
    table.add_column("Title")
    table.add_column("Location", style="dim")
    for e in found:
        table.add_row(str(e.id), e.start_time[:16].replace("T", " "), e.title, e.location or "")
    console.print(table)


@app.command()
def remind(message: str, at: Annotated[str, typer.Argument(help="When, e.g. 2025-10-06T09:00")]) -> None:
    """Set a reminder."""
    created = _get_workspace().reminders.create(message, at)
    console.print(f"[green]Reminder {created.id} set for {created.remind_at}[/green]")


@app.command()
def reminders() -> None:
    """Show active reminders that are due."""
    due = _get_workspace().reminders.list_due()
    if not due:
        console.print("Nothing needs attention.")
        return
    for r in due:
        console.print(f"[yellow]{r.remind_at[:16].replace('T', ' ')}[/yellow]  {r.message}")


# ---------------------------------------------------------------------------
# Data & integration
# ---------------------------------------------------------------------------


@app.command("export")
def export_data(
    kind: Annotated[str, typer.Argument(help="tasks, notes, expenses, events, reminders or all")] = "all",
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write to a file instead of stdout")] = None,
) -> None:
    """Export raw records as JSON."""
    try:
        data = _get_workspace().export_all(kind)
    except ValueError as exc:
        _fail(str(exc))
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Exported {kind} to {output}[/green]")
    else:
        typer.echo(text)


@app.command()
def call(
    tool: str,
    arguments: Annotated[str, typer.Argument(help="JSON object of tool arguments")] = "{}",
) -> None:
    """Invoke a tool by name, exactly as an MCP client would."""
    try:
        args = json.loads(arguments)
    except json.JSONDecodeError as exc:
        _fail(f"Arguments must be a JSON object: {exc}")
    if not isinstance(args, dict):
        _fail("Arguments must be a JSON object.")

    tools = build_tools(_get_workspace())
    try:
        result = dispatch(tools, tool, args)
    except (UnknownToolError, RecordNotFoundError) as exc:
        _fail(str(exc))
    except (TypeError, ValueError) as exc:
        _fail(f"Error: {exc}")

    if isinstance(result, str):
        typer.echo(result)
    else:
        typer.echo(json.dumps(result, indent=2, ensure_ascii=False))


@app.command()
def serve() -> None:
    """Run the MCP server over stdio."""
    from daybook.mcp_server import main

    main()
