"""Record stores: create/list/update/query over one collection each.

Every operation loads the whole collection, mutates it in memory and writes
it back. Records are plain dataclasses from ``daybook.models``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from functools import cmp_to_key
from typing import Callable, ClassVar, Generic, TypeVar

from daybook.dates import (
    falls_on,
    normalize_date,
    parse_timestamp,
    timestamp_to_datetime,
)
from daybook.models import (
    PRIORITY_ORDER,
    Agenda,
    CalendarEvent,
    Expense,
    ExpenseSummary,
    Note,
    NotePatch,
    Reminder,
    ReminderStatus,
    Task,
    TaskFilters,
    TaskPatch,
    TaskPriority,
    TaskStatus,
)
from daybook.persistence import JsonStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
R = TypeVar("R")

UPCOMING_LIMIT = 5


class RecordNotFoundError(LookupError):
    """Raised when an id is absent from its collection."""

    def __init__(self, kind: str, record_id: int):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class RecordStore(Generic[R]):
    """Shared load/save/id plumbing for one collection."""

    collection: ClassVar[str]
    kind: ClassVar[str]

    def __init__(self, store: JsonStore, clock: Clock = datetime.now):
        self.store = store
        self.clock = clock

    def _from_dict(self, d: dict) -> R:
        raise NotImplementedError

    def load(self) -> list[R]:
        return [self._from_dict(d) for d in self.store.load(self.collection)]

    def save(self, records: list[R]) -> None:
        self.store.save(self.collection, [r.to_dict() for r in records])

    def _next_id(self, records: list[R]) -> int:
        return max((r.id for r in records), default=0) + 1

    def _append(self, records: list[R], record: R) -> R:
        records.append(record)
        self.save(records)
        logger.debug("Created %s %d", self.kind.lower(), record.id)
        return record

    def _find(self, records: list[R], record_id: int) -> R:
        for r in records:
            if r.id == record_id:
                return r
        raise RecordNotFoundError(self.kind, record_id)

    def get(self, record_id: int) -> R:
        return self._find(self.load(), record_id)

    def _now(self) -> str:
        return self.clock().isoformat()

    def _today(self) -> str:
        return self.clock().date().isoformat()

    def _normalize(self, value: str) -> str:
        return normalize_date(value, self.clock())


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


def _compare_tasks(a: Task, b: Task) -> int:
    diff = PRIORITY_ORDER[a.priority] - PRIORITY_ORDER[b.priority]
    if diff:
        return diff
    # Tasks without a due date compare equal to everything at the same priority.
    if a.due_date and b.due_date:
        return (a.due_date > b.due_date) - (a.due_date < b.due_date)
    return 0


class TaskStore(RecordStore[Task]):
    collection = "tasks"
    kind = "Task"

    def _from_dict(self, d: dict) -> Task:
        return Task.from_dict(d)

    def create(
        self,
        title: str,
        description: str | None = None,
        due_date: str | None = None,
        priority: TaskPriority | str = TaskPriority.MEDIUM,
        assignee: str | None = None,
        tags: list[str] | None = None,
    ) -> Task:
        tasks = self.load()
        task = Task(
            id=self._next_id(tasks),
            title=title,
            description=description,
            status=TaskStatus.PENDING,
            priority=TaskPriority(priority or TaskPriority.MEDIUM),
            due_date=self._normalize(due_date) if due_date else None,
            assignee=assignee,
            tags=list(tags or []),
            created_at=self._now(),
        )
        return self._append(tasks, task)

    def list(self, filters: TaskFilters | None = None) -> list[Task]:
        """Filtered tasks, highest priority first, then earliest due date."""
        tasks = self.load()

        if filters:
            if filters.status:
                tasks = [t for t in tasks if t.status == filters.status]
            if filters.priority:
                tasks = [t for t in tasks if t.priority == filters.priority]
            if filters.due_before:
                cutoff = self._normalize(filters.due_before)
                tasks = [t for t in tasks if t.due_date and t.due_date <= cutoff]
            if filters.assignee:
                tasks = [t for t in tasks if t.assignee == filters.assignee]
            if filters.tags:
                wanted = set(filters.tags)
                tasks = [t for t in tasks if wanted.intersection(t.tags)]

        return sorted(tasks, key=cmp_to_key(_compare_tasks))

    def complete(self, task_id: int) -> Task:
        tasks = self.load()
        task = self._find(tasks, task_id)
        task.status = TaskStatus.COMPLETED
        task.completed_at = self._now()
        self.save(tasks)
        logger.debug("Completed task %d", task_id)
        return task

    def update(self, task_id: int, patch: TaskPatch) -> Task:
        tasks = self.load()
        task = self._find(tasks, task_id)

        if patch.title is not None:
            task.title = patch.title
        if patch.description is not None:
            task.description = patch.description
        if patch.due_date:
            task.due_date = self._normalize(patch.due_date)
        if patch.priority is not None:
            task.priority = TaskPriority(patch.priority)
        if patch.assignee is not None:
            task.assignee = patch.assignee
        if patch.tags is not None:
            task.tags = list(patch.tags)
        if patch.status is not None:
            new_status = TaskStatus(patch.status)
            if new_status == TaskStatus.COMPLETED and task.status != TaskStatus.COMPLETED:
                task.completed_at = self._now()
            elif new_status != TaskStatus.COMPLETED:
                task.completed_at = None
            task.status = new_status

        self.save(tasks)
        logger.debug("Updated task %d", task_id)
        return task

    def daily_agenda(self, date: str | None = None) -> Agenda:
        """Open tasks due on, before, and after the target date."""
        target = self._normalize(date) if date else self._today()
        open_tasks = [
            t for t in self.load() if t.status != TaskStatus.COMPLETED and t.due_date
        ]
        return Agenda(
            date=target,
            tasks=[t for t in open_tasks if t.due_date == target],
            overdue=[t for t in open_tasks if t.due_date < target],
            upcoming=[t for t in open_tasks if t.due_date > target][:UPCOMING_LIMIT],
        )

    def completed_on(self, date: str) -> list[Task]:
        return [t for t in self.load() if falls_on(t.completed_at, date)]


# ---------------------------------------------------------------------------
# Notes
# ---------------------------------------------------------------------------


class NoteStore(RecordStore[Note]):
    collection = "notes"
    kind = "Note"

    def _from_dict(self, d: dict) -> Note:
        return Note.from_dict(d)

    def create(self, title: str, content: str, tags: list[str] | None = None) -> Note:
        notes = self.load()
        now = self._now()
        note = Note(
            id=self._next_id(notes),
            title=title,
            content=content,
            tags=list(tags or []),
            created_at=now,
            updated_at=now,
        )
        return self._append(notes, note)

    def search(self, query: str, tags: list[str] | None = None) -> list[Note]:
        """Case-insensitive match on title or content, newest first."""
        q = query.lower()
        notes = [n for n in self.load() if q in n.title.lower() or q in n.content.lower()]
        if tags:
            wanted = set(tags)
            notes = [n for n in notes if wanted.intersection(n.tags)]
        return sorted(
            notes,
            key=lambda n: timestamp_to_datetime(n.updated_at) or datetime.min,
            reverse=True,
        )

    def update(self, note_id: int, patch: NotePatch) -> Note:
        notes = self.load()
        note = self._find(notes, note_id)
        if patch.title is not None:
            note.title = patch.title
        if patch.content is not None:
            note.content = patch.content
        if patch.tags is not None:
            note.tags = list(patch.tags)
        note.updated_at = self._now()
        self.save(notes)
        logger.debug("Updated note %d", note_id)
        return note


# ---------------------------------------------------------------------------
# Expenses
# ---------------------------------------------------------------------------


class ExpenseStore(RecordStore[Expense]):
    collection = "expenses"
    kind = "Expense"

    def _from_dict(self, d: dict) -> Expense:
        return Expense.from_dict(d)

    def log(
        self,
        amount: float,
        category: str,
        description: str,
        date: str | None = None,
        payment_method: str | None = None,
    ) -> Expense:
        expenses = self.load()
        expense = Expense(
            id=self._next_id(expenses),
            amount=amount,
            category=category,
            description=description,
            date=self._normalize(date) if date else self._today(),
            payment_method=payment_method,
            created_at=self._now(),
        )
        return self._append(expenses, expense)

    def summarize(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        category: str | None = None,
    ) -> ExpenseSummary:
        expenses = self.load()
        if start_date:
            start = self._normalize(start_date)
            expenses = [e for e in expenses if e.date >= start]
        if end_date:
            end = self._normalize(end_date)
            expenses = [e for e in expenses if e.date <= end]
        if category:
            expenses = [e for e in expenses if e.category == category]

        by_category: dict[str, float] = {}
        for e in expenses:
            by_category[e.category] = by_category.get(e.category, 0) + e.amount

        return ExpenseSummary(
            total=sum(e.amount for e in expenses),
            by_category=by_category,
            expenses=expenses,
        )

    def list_categories(self) -> list[str]:
        return sorted({e.category for e in self.load()})


# ---------------------------------------------------------------------------
# Calendar events
# ---------------------------------------------------------------------------


def _start_of(event: CalendarEvent) -> datetime:
    return timestamp_to_datetime(event.start_time) or datetime.min


class EventStore(RecordStore[CalendarEvent]):
    collection = "events"
    kind = "Event"

    def _from_dict(self, d: dict) -> CalendarEvent:
        return CalendarEvent.from_dict(d)

    def create(
        self,
        title: str,
        start_time: str,
        description: str | None = None,
        end_time: str | None = None,
        location: str | None = None,
        attendees: list[str] | None = None,
    ) -> CalendarEvent:
        events = self.load()
        event = CalendarEvent(
            id=self._next_id(events),
            title=title,
            description=description,
            start_time=parse_timestamp(start_time),
            end_time=parse_timestamp(end_time) if end_time else None,
            location=location,
            attendees=attendees,
            created_at=self._now(),
        )
        return self._append(events, event)

    def list_upcoming(self, days: int = 7) -> list[CalendarEvent]:
        """Events starting between now and ``days`` days from now."""
        now = self.clock()
        horizon = now + timedelta(days=days)
        upcoming = []
        for e in self.load():
            start = timestamp_to_datetime(e.start_time)
            if start is not None and now <= start <= horizon:
                upcoming.append(e)
        return sorted(upcoming, key=_start_of)

    def events_on(self, date: str) -> list[CalendarEvent]:
        return sorted((e for e in self.load() if falls_on(e.start_time, date)), key=_start_of)

    def today_events(self) -> list[CalendarEvent]:
        return self.events_on(self._today())


# ---------------------------------------------------------------------------
# Reminders
# ---------------------------------------------------------------------------


class ReminderStore(RecordStore[Reminder]):
    collection = "reminders"
    kind = "Reminder"

    def _from_dict(self, d: dict) -> Reminder:
        return Reminder.from_dict(d)

    def create(self, message: str, remind_at: str) -> Reminder:
        reminders = self.load()
        reminder = Reminder(
            id=self._next_id(reminders),
            message=message,
            remind_at=parse_timestamp(remind_at),
            status=ReminderStatus.ACTIVE,
            created_at=self._now(),
        )
        return self._append(reminders, reminder)

    def list_due(self) -> list[Reminder]:
        """Active reminders whose time has come, oldest first. Status is left as-is."""
        now = self.clock()
        due = []
        for r in self.load():
            at = timestamp_to_datetime(r.remind_at)
            if r.status == ReminderStatus.ACTIVE and at is not None and at <= now:
                due.append((at, r))
        return [r for _, r in sorted(due, key=lambda pair: pair[0])]
