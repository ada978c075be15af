"""Cross-collection views: today's schedule, the daily digest, bulk export.

Everything here reads; nothing writes.
"""

from __future__ import annotations

from daybook.persistence import COLLECTIONS, JsonStore
from daybook.stores import EventStore, ExpenseStore, TaskStore


def today_schedule(tasks: TaskStore, events: EventStore) -> dict:
    """Today's events and the tasks due today."""
    return {
        "events": [e.to_dict() for e in events.today_events()],
        "tasks": [t.to_dict() for t in tasks.daily_agenda().tasks],
    }


def daily_summary(
    tasks: TaskStore,
    expenses: ExpenseStore,
    events: EventStore,
    date: str | None = None,
) -> str:
    """Render the end-of-day digest for a date (default today)."""
    agenda = tasks.daily_agenda(date)
    target = agenda.date
    spent = expenses.summarize(start_date=target, end_date=target)
    event_count = len(events.events_on(target))
    completed = tasks.completed_on(target)

    summary = f"📊 Daily Summary for {target}\n\n"
    summary += f"📋 Tasks: {len(agenda.tasks)} due today"
    if agenda.overdue:
        summary += f" ({len(agenda.overdue)} overdue)"
    summary += "\n"
    summary += f"📅 Events: {event_count}\n"
    summary += f"💰 Expenses: ${spent.total:.2f}\n"
    summary += f"✅ Completed: {len(completed)} tasks\n"
    return summary


def export_all(store: JsonStore, kind: str) -> list[dict] | dict[str, list[dict]]:
    """Raw records for one collection, or every collection for kind='all'."""
    if kind == "all":
        return {name: store.load(name) for name in COLLECTIONS}
    if kind not in COLLECTIONS:
        valid = ", ".join((*COLLECTIONS, "all"))
        raise ValueError(f"Unknown data type '{kind}'. Valid: {valid}")
    return store.load(kind)
