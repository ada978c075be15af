"""Named tool operations over a workspace.

Each tool is a plain function with a typed signature and a docstring so it
can be registered on an MCP server (which derives the input schema from
them) or called directly through ``dispatch``.
"""

from __future__ import annotations

from typing import Any, Callable, Literal

from daybook.models import NotePatch, TaskFilters, TaskPatch, TaskPriority, TaskStatus
from daybook.workspace import Workspace

Priority = Literal["low", "medium", "high"]
Status = Literal["pending", "in_progress", "completed"]
DataType = Literal["tasks", "notes", "expenses", "events", "reminders", "all"]


class UnknownToolError(LookupError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


def build_tools(workspace: Workspace) -> dict[str, Callable[..., Any]]:
    """Return a dict of tool_name -> callable bound to ``workspace``."""

    # -- Tasks -------------------------------------------------------------

    def create_task(
        title: str,
        description: str | None = None,
        due_date: str | None = None,
        priority: Priority = "medium",
        assignee: str | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Create a new task with due date, priority, and assignee.

        Args:
            title: Task title
            description: Optional detailed description
            due_date: YYYY-MM-DD, 'today', 'tomorrow' or 'next week'
            priority: Task priority level
            assignee: Person responsible
            tags: Tags for categorization
        """
        task = workspace.tasks.create(
            title,
            description=description,
            due_date=due_date,
            priority=priority,
            assignee=assignee,
            tags=tags,
        )
        return task.to_dict()

    def list_tasks(
        status: Status | None = None,
        priority: Priority | None = None,
        due_before: str | None = None,
        assignee: str | None = None,
        tags: list[str] | None = None,
    ) -> list[dict]:
        """List tasks, highest priority first, with optional filters (all must match).

        Args:
            status: Only tasks with this status
            priority: Only tasks with this priority
            due_before: Only tasks due on or before this date
            assignee: Only tasks assigned to this person
            tags: Only tasks sharing at least one of these tags
        """
        filters = TaskFilters(
            status=TaskStatus(status) if status else None,
            priority=TaskPriority(priority) if priority else None,
            due_before=due_before,
            assignee=assignee,
            tags=tags,
        )
        return [t.to_dict() for t in workspace.tasks.list(filters)]

    def complete_task(task_id: int) -> dict:
        """Mark a task as completed.

        Args:
            task_id: ID of the task to complete
        """
        return workspace.tasks.complete(task_id).to_dict()

    def update_task(
        task_id: int,
        title: str | None = None,
        description: str | None = None,
        due_date: str | None = None,
        priority: Priority | None = None,
        status: Status | None = None,
        assignee: str | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Update task details like title, due date, priority, or status. Only provided fields change.

        Args:
            task_id: ID of the task to update
            title: New title
            description: New description
            due_date: New due date (YYYY-MM-DD, 'today', 'tomorrow', 'next week')
            priority: New priority
            status: New status
            assignee: New assignee
            tags: Replacement tag list
        """
        patch = TaskPatch(
            title=title,
            description=description,
            due_date=due_date,
            priority=TaskPriority(priority) if priority else None,
            status=TaskStatus(status) if status else None,
            assignee=assignee,
            tags=tags,
        )
        return workspace.tasks.update(task_id, patch).to_dict()

    def get_daily_agenda(date: str | None = None) -> dict:
        """Get the task agenda for a date: due tasks, overdue items, and up to five upcoming tasks.

        Args:
            date: Date to view (defaults to today)
        """
        return workspace.tasks.daily_agenda(date).to_dict()

    # -- Calendar & reminders ----------------------------------------------

    def schedule_event(
        title: str,
        start_time: str,
        description: str | None = None,
        end_time: str | None = None,
        location: str | None = None,
        attendees: list[str] | None = None,
    ) -> dict:
        """Add a calendar event with start time, optional end time, location, and attendees.

        Args:
            title: Event title
            start_time: ISO datetime, e.g. 2025-10-06T14:00:00
            description: Optional description
            end_time: ISO datetime
            location: Where the event happens
            attendees: People attending
        """
        event = workspace.events.create(
            title,
            start_time,
            description=description,
            end_time=end_time,
            location=location,
            attendees=attendees,
        )
        return event.to_dict()

    def list_upcoming_events(days: int = 7) -> list[dict]:
        """List calendar events starting in the next N days.

        Args:
            days: Number of days to look ahead (default: 7)
        """
        return [e.to_dict() for e in workspace.events.list_upcoming(days or 7)]

    def get_today_schedule() -> dict:
        """Get today's events and the tasks due today."""
        return workspace.today_schedule()

    def set_reminder(message: str, remind_at: str) -> dict:
        """Set a reminder for a specific time.

        Args:
            message: Reminder text
            remind_at: ISO datetime
        """
        return workspace.reminders.create(message, remind_at).to_dict()

    def create_alert(message: str, trigger_time: str) -> dict:
        """Create a custom alert for an important deadline or threshold.

        Args:
            message: Alert text
            trigger_time: ISO datetime
        """
        return workspace.reminders.create(message, trigger_time).to_dict()

    def list_alerts() -> list[dict]:
        """List active alerts and reminders whose time has passed."""
        return [r.to_dict() for r in workspace.reminders.list_due()]

    # -- Notes -------------------------------------------------------------

    def create_note(title: str, content: str, tags: list[str] | None = None) -> dict:
        """Create a new note with optional tags.

        Args:
            title: Note title
            content: Note body
            tags: Tags for organization
        """
        return workspace.notes.create(title, content, tags=tags).to_dict()

    def search_notes(query: str, tags: list[str] | None = None) -> list[dict]:
        """Search notes by keyword in title or content (case-insensitive), optionally filtered by tags.

        Args:
            query: Text to look for
            tags: Only notes sharing at least one of these tags
        """
        return [n.to_dict() for n in workspace.notes.search(query, tags)]

    def tag_note(note_id: int, tags: list[str]) -> dict:
        """Replace the tags on an existing note.

        Args:
            note_id: ID of the note
            tags: New tag list
        """
        return workspace.notes.update(note_id, NotePatch(tags=tags)).to_dict()

    def update_note(
        note_id: int,
        title: str | None = None,
        content: str | None = None,
        tags: list[str] | None = None,
    ) -> dict:
        """Update a note's title, content or tags. Only provided fields change.

        Args:
            note_id: ID of the note
            title: New title
            content: New content
            tags: Replacement tag list
        """
        patch = NotePatch(title=title, content=content, tags=tags)
        return workspace.notes.update(note_id, patch).to_dict()

    # -- Expenses ----------------------------------------------------------

    def log_expense(
        amount: float,
        category: str,
        description: str,
        date: str | None = None,
        payment_method: str | None = None,
    ) -> dict:
        """Record an expense with amount, category, and description.

        Args:
            amount: Amount spent
            category: Expense category (e.g. "Software")
            description: What it was for
            date: YYYY-MM-DD or 'today' (defaults to today)
            payment_method: How it was paid
        """
        expense = workspace.expenses.log(
            amount,
            category,
            description,
            date=date,
            payment_method=payment_method,
        )
        return expense.to_dict()

    def get_expense_summary(
        start_date: str | None = None,
        end_date: str | None = None,
        category: str | None = None,
    ) -> dict:
        """Get expense totals and breakdown by category for an inclusive date range.

        Args:
            start_date: First date to include
            end_date: Last date to include
            category: Only this category
        """
        return workspace.expenses.summarize(start_date, end_date, category).to_dict()

    def categorize_expenses() -> list[str]:
        """List all unique expense categories used so far."""
        return workspace.expenses.list_categories()

    # -- Reports -----------------------------------------------------------

    def generate_daily_summary(date: str | None = None) -> str:
        """Generate an end-of-day summary with tasks, events, and expenses.

        Args:
            date: Date for the summary (defaults to today)
        """
        return workspace.daily_summary(date)

    def export_data(data_type: DataType) -> dict | list:
        """Export raw records for backup or analysis.

        Args:
            data_type: Which collection to export, or "all"
        """
        return workspace.export_all(data_type)

    return {
        "create_task": create_task,
        "list_tasks": list_tasks,
        "complete_task": complete_task,
        "update_task": update_task,
        "get_daily_agenda": get_daily_agenda,
        "schedule_event": schedule_event,
        "list_upcoming_events": list_upcoming_events,
        "set_reminder": set_reminder,
        "get_today_schedule": get_today_schedule,
        "create_note": create_note,
        "search_notes": search_notes,
        "tag_note": tag_note,
        "update_note": update_note,
        "log_expense": log_expense,
        "get_expense_summary": get_expense_summary,
        "categorize_expenses": categorize_expenses,
        "generate_daily_summary": generate_daily_summary,
        "export_data": export_data,
        "create_alert": create_alert,
        "list_alerts": list_alerts,
    }


def dispatch(tools: dict[str, Callable[..., Any]], name: str, arguments: dict | None = None) -> Any:
    """Invoke a tool by name. Raises UnknownToolError for names not in ``tools``."""
    tool = tools.get(name)
    if tool is None:
        raise UnknownToolError(name)
    return tool(**(arguments or {}))
