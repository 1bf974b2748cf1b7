"""CLI smoke tests driven through tasks_app.main()."""

import json
from pathlib import Path

import pytest

import config
from interface.tasks_app import build_parser, main


@pytest.fixture
def store(tmp_path, monkeypatch) -> Path:
    monkeypatch.setenv("TASKFLOW_CONFIG", str(tmp_path / "config.yaml"))
    path = tmp_path / "tasks.json"
    monkeypatch.setenv("TASKFLOW_TASKS_FILE", str(path))
    return path


def _json(capsys):
    return json.loads(capsys.readouterr().out)


def _add(capsys, *argv):
    assert main(["--json", "add", *argv]) == 0
    return _json(capsys)["payload"]["task"]


def test_parser_lists_every_command():
    parser = build_parser()
    args = parser.parse_args(["add", "x", "--priority", "high"])
    assert args.priority == "HIGH"
    samples = [
        ["list", "--trash"], ["show", "abc"], ["edit", "abc", "--title", "t"], ["done", "a", "b"],
        ["rm", "a"], ["clone", "a"], ["restore", "a"], ["purge"], ["summary"], ["remind", "--missed"],
        ["export", "out.csv"], ["import", "in.xml"], ["config", "log_level", "debug"], ["shell"],
    ]
    for argv in samples:
        parsed = parser.parse_args(argv)
        assert parsed.command == argv[0]
        assert callable(parsed.func)


def test_no_command_prints_help(store, capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_add_persists(store, capsys):
    task = _add(capsys, "Buy milk", "--due", "2024-06-01 10:00", "--tags", "home, errand", "-c", "Home")
    assert task["dueDateTime"] == "2024-06-01T10:00:00"
    assert task["tags"] == ["home", "errand"]
    saved = json.loads(store.read_text(encoding="utf-8"))
    assert [t["title"] for t in saved] == ["Buy milk"]


def test_add_keeps_unparsed_due_text(store, capsys):
    task = _add(capsys, "Plan", "--due", "after vacation")
    assert task["dueDateTime"] is None
    assert task["dueDateString"] == "after vacation"


def test_add_with_default_reminder(store, capsys):
    config.set_reminder_lead_minutes(15)
    task = _add(capsys, "Call", "--due", "2024-06-01 10:00", "--remind-default")
    assert task["reminderTime"] == "2024-06-01T09:45:00"


def test_list_filters_and_text_output(store, capsys):
    _add(capsys, "Alpha", "--priority", "low")
    _add(capsys, "Beta", "--priority", "high")
    assert main(["list", "--sort", "priority"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("ID")
    assert "Beta" in lines[1] and "Alpha" in lines[2]
    assert main(["--json", "list", "--search", "alp"]) == 0
    assert [t["title"] for t in _json(capsys)["payload"]["tasks"]] == ["Alpha"]


def test_done_rm_restore_purge(store, capsys):
    first = _add(capsys, "First")["id"]
    second = _add(capsys, "Second")["id"]
    assert main(["done", first[:8]]) == 0
    assert main(["rm", first, second]) == 0
    assert main(["restore", second]) == 0
    capsys.readouterr()
    assert main(["--json", "purge"]) == 0
    assert _json(capsys)["payload"]["ids"] == [first]
    saved = json.loads(store.read_text(encoding="utf-8"))
    assert [(t["id"], t["status"]) for t in saved] == [(second, "PENDING")]


def test_edit_keeps_unspecified_fields(store, capsys):
    task_id = _add(capsys, "Old", "-d", "keep me", "--due", "2024-06-01")["id"]
    assert main(["--json", "edit", task_id, "--title", "New"]) == 0
    edited = _json(capsys)["payload"]["task"]
    assert edited["title"] == "New"
    assert edited["description"] == "keep me"
    assert edited["dueDateTime"] == "2024-06-01T00:00:00"


def test_clone(store, capsys):
    task_id = _add(capsys, "Report")["id"]
    assert main(["--json", "clone", task_id]) == 0
    assert _json(capsys)["payload"]["task"]["title"] == "Report (Copy)"


def test_unknown_id_reports_error(store, capsys):
    assert main(["done", "nope"]) == 1
    assert "Task not found: nope" in capsys.readouterr().err
    assert main(["--json", "show", "nope"]) == 1
    body = _json(capsys)
    assert body["status"] == "ERROR"


def test_corrupt_store_reports_error(store, capsys):
    store.write_text("{broken", encoding="utf-8")
    assert main(["list"]) == 1
    assert "not valid JSON" in capsys.readouterr().err


def test_export_import(store, tmp_path, capsys):
    _add(capsys, "Shared")
    out = tmp_path / "export.csv"
    assert main(["export", str(out)]) == 0
    assert main(["--json", "import", str(out)]) == 0
    capsys.readouterr()
    assert main(["--json", "import", str(out)]) == 0
    assert _json(capsys)["payload"] == {"count": 0, "skipped": 1}

    other = tmp_path / "other.json"
    assert main(["--file", str(other), "import", str(out)]) == 0
    assert len(json.loads(other.read_text(encoding="utf-8"))) == 1


def test_summary_and_remind(store, capsys):
    _add(capsys, "Late", "--due", "2000-01-01", "--remind", "2000-01-01 00:00")
    assert main(["--json", "summary"]) == 0
    payload = _json(capsys)["payload"]
    assert len(payload["overdue"]) == 1
    assert payload["counts"]["PENDING"] == 1
    assert main(["remind"]) == 0
    assert "Reminder: Late is due soon!" in capsys.readouterr().out


def test_config_get_set(store, capsys):
    assert main(["config", "sort_strategy", "title"]) == 0
    assert capsys.readouterr().out.strip() == "sort_strategy = title"
    assert config.get_sort_strategy() == "title"
    assert main(["config", "sort_strategy", "bogus"]) == 1
    assert main(["config", "reminder_lead_minutes", "soon"]) == 1


def test_version(store, capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out.strip()
