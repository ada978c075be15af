"""Process-scoped bundle of persistence, record stores and aggregate views."""

from __future__ import annotations

from datetime import datetime

from daybook import aggregation
from daybook.config import DaybookConfig
from daybook.persistence import JsonStore
from daybook.stores import (
    Clock,
    EventStore,
    ExpenseStore,
    NoteStore,
    ReminderStore,
    TaskStore,
)


class Workspace:
    """Everything one process needs, built from an explicit config."""

    def __init__(self, config: DaybookConfig, clock: Clock = datetime.now):
        self.config = config
        self.store = JsonStore(config.data_dir)
        self.tasks = TaskStore(self.store, clock)
        self.notes = NoteStore(self.store, clock)
        self.expenses = ExpenseStore(self.store, clock)
        self.events = EventStore(self.store, clock)
        self.reminders = ReminderStore(self.store, clock)

    def today_schedule(self) -> dict:
        return aggregation.today_schedule(self.tasks, self.events)

    def daily_summary(self, date: str | None = None) -> str:
        return aggregation.daily_summary(self.tasks, self.expenses, self.events, date)

    def export_all(self, kind: str) -> list[dict] | dict[str, list[dict]]:
        return aggregation.export_all(self.store, kind)
