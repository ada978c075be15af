import json

import pytest
from typer.testing import CliRunner

from daybook.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DAYBOOK_DATA_DIR", str(tmp_path / "data"))
    return tmp_path / "data"


def test_add_list_done():
    result = runner.invoke(app, ["add", "Call supplier", "--due", "2030-01-15", "-p", "high", "-t", "ops"])
    assert result.exit_code == 0, result.stdout
    assert "task 1" in result.stdout
    runner.invoke(app, ["add", "Tidy desk", "-p", "low"])

    result = runner.invoke(app, ["list"])
    assert result.exit_code == 0
    assert "Call supplier" in result.stdout
    assert result.stdout.index("Call supplier") < result.stdout.index("Tidy desk")

    result = runner.invoke(app, ["done", "1"])
    assert result.exit_code == 0
    assert "Completed task 1" in result.stdout

    result = runner.invoke(app, ["list", "--status", "pending"])
    assert "Tidy desk" in result.stdout
    assert "Call supplier" not in result.stdout


def test_done_missing_task_fails():
    result = runner.invoke(app, ["done", "7"])
    assert result.exit_code == 1
    assert "Task 7 not found" in result.stdout


def test_invalid_priority_fails():
    result = runner.invoke(app, ["add", "x", "-p", "urgent"])
    assert result.exit_code == 1
    assert "Invalid priority" in result.stdout


def test_update_normalizes_due_date(data_dir):
    runner.invoke(app, ["add", "Report"])
    result = runner.invoke(app, ["update", "1", "--due", "2030-02-01", "--status", "in_progress"])
    assert result.exit_code == 0, result.stdout
    stored = json.loads((data_dir / "tasks.json").read_text())
    assert stored[0]["due_date"] == "2030-02-01"
    assert stored[0]["status"] == "in_progress"


def test_update_replaces_tags(data_dir):
    runner.invoke(app, ["add", "Report", "--tag", "draft"])
    result = runner.invoke(app, ["update", "1", "--tag", "urgent", "-t", "q4"])
    assert result.exit_code == 0, result.stdout
    stored = json.loads((data_dir / "tasks.json").read_text())
    assert stored[0]["tags"] == ["urgent", "q4"]


def test_update_without_tags_keeps_them(data_dir):
    runner.invoke(app, ["add", "Report", "--tag", "draft"])
    runner.invoke(app, ["update", "1", "--title", "Final report"])
    stored = json.loads((data_dir / "tasks.json").read_text())
    assert stored[0]["tags"] == ["draft"]
    assert stored[0]["title"] == "Final report"


def test_expenses_summary():
    runner.invoke(app, ["expense", "45.99", "Office Supplies", "Paper", "--date", "2030-01-02"])
    runner.invoke(app, ["expense", "125", "Software", "IDE", "--date", "2030-01-02"])
    result = runner.invoke(app, ["expenses"])
    assert result.exit_code == 0
    assert "$170.99" in result.stdout

    result = runner.invoke(app, ["categories"])
    assert result.stdout.split() == ["Office", "Supplies", "Software"]


def test_notes_search():
    runner.invoke(app, ["note", "Demo", "draft plan", "-t", "vip"])
    result = runner.invoke(app, ["notes", "DRAFT"])
    assert result.exit_code == 0
    assert "Demo" in result.stdout
    result = runner.invoke(app, ["notes", "xyz"])
    assert "No matching notes." in result.stdout


def test_summary_prints_digest():
    result = runner.invoke(app, ["summary", "2030-01-02"])
    assert result.exit_code == 0
    assert "Daily Summary for 2030-01-02" in result.stdout


def test_export(tmp_path):
    runner.invoke(app, ["add", "Exported"])
    result = runner.invoke(app, ["export", "tasks"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)[0]["title"] == "Exported"

    out = tmp_path / "backup.json"
    result = runner.invoke(app, ["export", "all", "-o", str(out)])
    assert result.exit_code == 0
    assert set(json.loads(out.read_text())) == {"tasks", "notes", "expenses", "events", "reminders"}

    result = runner.invoke(app, ["export", "secrets"])
    assert result.exit_code == 1


def test_call_dispatches_tools():
    result = runner.invoke(app, ["call", "create_note", '{"title": "Via call", "content": "body"}'])
    assert result.exit_code == 0, result.stdout
    assert json.loads(result.stdout)["id"] == 1

    result = runner.invoke(app, ["call", "frobnicate"])
    assert result.exit_code == 1
    assert "Unknown tool: frobnicate" in result.stdout

    result = runner.invoke(app, ["call", "create_note", "[1, 2]"])
    assert result.exit_code == 1
