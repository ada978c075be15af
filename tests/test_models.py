from daybook.models import (
    CalendarEvent,
    Expense,
    Note,
    Reminder,
    ReminderStatus,
    Task,
    TaskPriority,
    TaskStatus,
)


def test_task_serialization():
    t = Task(
        id=1,
        title="Ship release",
        created_at="2025-10-06T10:30:00",
        status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.HIGH,
        due_date="2025-10-07",
        tags=["urgent", "release"],
    )
    d = t.to_dict()
    assert d["status"] == "in_progress"
    assert d["priority"] == "high"
    assert d["tags"] == ["urgent", "release"]

    t2 = Task.from_dict(d)
    assert t2 == t


def test_task_omits_unset_optional_fields():
    d = Task(id=1, title="Plain", created_at="2025-10-06T10:30:00").to_dict()
    assert "description" not in d
    assert "due_date" not in d
    assert "completed_at" not in d
    assert d["tags"] == []
    assert d["status"] == "pending"
    assert d["priority"] == "medium"


def test_task_from_minimal_dict_uses_defaults():
    t = Task.from_dict({"id": 3, "title": "Hand edited"})
    assert t.status == TaskStatus.PENDING
    assert t.priority == TaskPriority.MEDIUM
    assert t.tags == []


def test_note_expense_event_reminder_roundtrip():
    note = Note(1, "Demo", "draft", "2025-10-06T10:00:00", "2025-10-06T11:00:00", ["vip"])
    assert Note.from_dict(note.to_dict()) == note

    expense = Expense(2, 45.99, "Office Supplies", "Paper", "2025-10-06", "2025-10-06T10:00:00", "card")
    assert Expense.from_dict(expense.to_dict()) == expense

    event = CalendarEvent(3, "Standup", "2025-10-06T09:00:00", "2025-10-05T12:00:00", attendees=["ana"])
    assert CalendarEvent.from_dict(event.to_dict()) == event
    assert "location" not in event.to_dict()

    reminder = Reminder(4, "Call supplier", "2025-10-06T09:00:00", "2025-10-05T12:00:00")
    d = reminder.to_dict()
    assert d["status"] == "active"
    assert Reminder.from_dict(d).status == ReminderStatus.ACTIVE


def test_unknown_keys_survive_roundtrip():
    stored = {"id": 5, "title": "Imported", "source": "csv", "meta": {"row": 12}}
    d = Task.from_dict(stored).to_dict()
    assert d["source"] == "csv"
    assert d["meta"] == {"row": 12}
    assert "created_at" not in d

    note = Note.from_dict({"id": 1, "title": "N", "content": "c", "pinned": True})
    assert note.to_dict()["pinned"] is True
    assert "updated_at" not in note.to_dict()
