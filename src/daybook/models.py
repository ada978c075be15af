"""Record models and status definitions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field, fields


class TaskStatus(enum.StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(enum.StrEnum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class ReminderStatus(enum.StrEnum):
    ACTIVE = "active"
    TRIGGERED = "triggered"
    DISMISSED = "dismissed"


# Sort rank for task listings: high first.
PRIORITY_ORDER = {TaskPriority.HIGH: 0, TaskPriority.MEDIUM: 1, TaskPriority.LOW: 2}


def _drop_none(d: dict) -> dict:
    return {k: v for k, v in d.items() if v is not None}


def _unknown_keys(cls, d: dict) -> dict:
    """Keys of a stored record that the model does not declare."""
    known = {f.name for f in fields(cls)} - {"extra"}
    return {k: v for k, v in d.items() if k not in known}


def _merge_extra(d: dict, extra: dict) -> dict:
    out = _drop_none(d)
    for k, v in extra.items():
        out.setdefault(k, v)
    return out


@dataclass
class Task:
    """A to-do item with an optional due date.

    ``extra`` holds keys found in the stored record that the model does not
    declare, so hand-edited fields survive a load/save cycle.
    """

    id: int
    title: str
    created_at: str | None = None
    description: str | None = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: str | None = None  # canonical YYYY-MM-DD
    assignee: str | None = None
    tags: list[str] = field(default_factory=list)
    completed_at: str | None = None
    extra: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return _merge_extra({
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
            "priority": self.priority.value,
            "due_date": self.due_date,
            "assignee": self.assignee,
            "tags": self.tags,
            "created_at": self.created_at,
            "completed_at": self.completed_at,
        }, self.extra)

    @classmethod
    def from_dict(cls, d: dict) -> Task:
        return cls(
            id=d["id"],
            title=d["title"],
            created_at=d.get("created_at"),
            description=d.get("description"),
            status=TaskStatus(d.get("status", "pending")),
            priority=TaskPriority(d.get("priority", "medium")),
            due_date=d.get("due_date"),
            assignee=d.get("assignee"),
            tags=d.get("tags") or [],
            completed_at=d.get("completed_at"),
            extra=_unknown_keys(cls, d),
        )


@dataclass
class Note:
    id: int
    title: str
    content: str
    created_at: str | None = None
    updated_at: str | None = None
    tags: list[str] = field(default_factory=list)
    extra: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return _merge_extra({
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": self.tags,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }, self.extra)

    @classmethod
    def from_dict(cls, d: dict) -> Note:
        return cls(
            id=d["id"],
            title=d["title"],
            content=d.get("content", ""),
            created_at=d.get("created_at"),
            updated_at=d.get("updated_at"),
            tags=d.get("tags") or [],
            extra=_unknown_keys(cls, d),
        )


@dataclass
class Expense:
    """A logged expense. Amount is not validated; refunds may be negative."""

    id: int
    amount: float
    category: str
    description: str
    date: str  # canonical YYYY-MM-DD
    created_at: str | None = None
    payment_method: str | None = None
    extra: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return _merge_extra({
            "id": self.id,
            "amount": self.amount,
            "category": self.category,
            "description": self.description,
            "date": self.date,
            "payment_method": self.payment_method,
            "created_at": self.created_at,
        }, self.extra)

    @classmethod
    def from_dict(cls, d: dict) -> Expense:
        return cls(
            id=d["id"],
            amount=d.get("amount", 0),
            category=d.get("category", ""),
            description=d.get("description", ""),
            date=d.get("date", ""),
            created_at=d.get("created_at"),
            payment_method=d.get("payment_method"),
            extra=_unknown_keys(cls, d),
        )


@dataclass
class CalendarEvent:
    id: int
    title: str
    start_time: str  # full timestamp
    created_at: str | None = None
    description: str | None = None
    end_time: str | None = None
    location: str | None = None
    attendees: list[str] | None = None
    extra: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return _merge_extra({
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "location": self.location,
            "attendees": self.attendees,
            "created_at": self.created_at,
        }, self.extra)

    @classmethod
    def from_dict(cls, d: dict) -> CalendarEvent:
        return cls(
            id=d["id"],
            title=d["title"],
            start_time=d.get("start_time", ""),
            created_at=d.get("created_at"),
            description=d.get("description"),
            end_time=d.get("end_time"),
            location=d.get("location"),
            attendees=d.get("attendees"),
            extra=_unknown_keys(cls, d),
        )


@dataclass
class Reminder:
    id: int
    message: str
    remind_at: str  # full timestamp
    created_at: str | None = None
    status: ReminderStatus = ReminderStatus.ACTIVE
    extra: dict = field(default_factory=dict, repr=False)

    def to_dict(self) -> dict:
        return _merge_extra({
            "id": self.id,
            "message": self.message,
            "remind_at": self.remind_at,
            "status": self.status.value,
            "created_at": self.created_at,
        }, self.extra)

    @classmethod
    def from_dict(cls, d: dict) -> Reminder:
        return cls(
            id=d["id"],
            message=d.get("message", ""),
            remind_at=d.get("remind_at", ""),
            created_at=d.get("created_at"),
            status=ReminderStatus(d.get("status", "active")),
            extra=_unknown_keys(cls, d),
        )


@dataclass
class TaskPatch:
    """Partial update for a task. Fields left as None are not touched."""

    title: str | None = None
    description: str | None = None
    due_date: str | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assignee: str | None = None
    tags: list[str] | None = None


@dataclass
class NotePatch:
    """Partial update for a note. Fields left as None are not touched."""

    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None


@dataclass
class TaskFilters:
    """Conjunctive filters for listing tasks."""

    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_before: str | None = None
    assignee: str | None = None
    tags: list[str] | None = None


@dataclass
class Agenda:
    """Open tasks bucketed relative to a reference date."""

    date: str
    tasks: list[Task] = field(default_factory=list)  # due on the date
    overdue: list[Task] = field(default_factory=list)
    upcoming: list[Task] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "tasks": [t.to_dict() for t in self.tasks],
            "overdue": [t.to_dict() for t in self.overdue],
            "upcoming": [t.to_dict() for t in self.upcoming],
        }


@dataclass
class ExpenseSummary:
    total: float
    by_category: dict[str, float]
    expenses: list[Expense]

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "by_category": self.by_category,
            "expenses": [e.to_dict() for e in self.expenses],
        }
