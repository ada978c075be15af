import pytest

from daybook.persistence import COLLECTIONS


def test_today_schedule(workspace):
    workspace.events.create("standup", "2025-10-06T09:00:00")
    workspace.events.create("tomorrow", "2025-10-07T09:00:00")
    workspace.tasks.create("due today", due_date="today")
    workspace.tasks.create("overdue", due_date="2025-10-01")

    schedule = workspace.today_schedule()
    assert [e["title"] for e in schedule["events"]] == ["standup"]
    assert [t["title"] for t in schedule["tasks"]] == ["due today"]


def test_daily_summary_format(workspace, clock):
    workspace.tasks.create("due a", due_date="today")
    workspace.tasks.create("due b", due_date="today")
    workspace.tasks.create("late", due_date="2025-10-01")
    done = workspace.tasks.create("done")
    workspace.tasks.complete(done.id)
    workspace.events.create("standup", "2025-10-06T09:00:00")
    workspace.expenses.log(45.99, "Office Supplies", "Paper", date="today")
    workspace.expenses.log(125.00, "Software", "IDE", date="today")
    workspace.expenses.log(99, "Travel", "Train", date="2025-10-05")

    assert workspace.daily_summary() == (
        "📊 Daily Summary for 2025-10-06\n"
        "\n"
        "📋 Tasks: 2 due today (1 overdue)\n"
        "📅 Events: 1\n"
        "💰 Expenses: $170.99\n"
        "✅ Completed: 1 tasks\n"
    )


def test_daily_summary_omits_zero_overdue(workspace):
    summary = workspace.daily_summary("2025-10-05")
    assert summary.splitlines()[0] == "📊 Daily Summary for 2025-10-05"
    assert "📋 Tasks: 0 due today\n" in summary
    assert "overdue" not in summary
    assert "💰 Expenses: $0.00" in summary


def test_daily_summary_counts_completions_on_target_date(workspace, clock):
    task = workspace.tasks.create("yesterday's work")
    clock.advance(days=-1)
    workspace.tasks.complete(task.id)
    clock.advance(days=1)
    assert "✅ Completed: 0 tasks" in workspace.daily_summary()
    assert "✅ Completed: 1 tasks" in workspace.daily_summary("2025-10-05")


def test_export_single_collection(workspace):
    workspace.notes.create("a", "b")
    exported = workspace.export_all("notes")
    assert exported == workspace.store.load("notes")
    assert exported[0]["title"] == "a"


def test_export_all(workspace):
    workspace.tasks.create("t")
    workspace.reminders.create("r", "2025-10-06T09:00:00")
    exported = workspace.export_all("all")
    assert set(exported) == set(COLLECTIONS)
    assert len(exported["tasks"]) == 1
    assert len(exported["reminders"]) == 1
    assert exported["expenses"] == []


def test_export_unknown_kind(workspace):
    with pytest.raises(ValueError, match="Unknown data type"):
        workspace.export_all("../secrets")
