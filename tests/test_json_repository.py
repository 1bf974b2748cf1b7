import json
from datetime import datetime
from pathlib import Path

import pytest

from core import Priority, Recurrence, StorageError, Task, TaskStatus
from infrastructure.json_repository import JsonTaskRepository
from infrastructure.task_codec import parse_due_text, parse_timestamp, task_from_dict, task_to_dict


def _sample_task() -> Task:
    task = Task.create_full(
        "task-1",
        "Repository roundtrip sample",
        "with a description",
        datetime(2024, 6, 1, 9, 30),
        Priority.HIGH,
        TaskStatus.COMPLETED,
        ["work", "q2"],
        datetime(2024, 6, 1, 9, 0),
    )
    task.due_text = "2024-06-01 09:30"
    task.category = "Work"
    task.dependencies = ["task-0"]
    task.recurrence = Recurrence.WEEKLY
    return task


def test_roundtrip(tmp_path: Path):
    repo = JsonTaskRepository(tmp_path / "store" / "tasks.json")
    original = _sample_task()
    repo.save([original])
    (loaded,) = repo.load()
    assert loaded.id == original.id
    assert loaded.snapshot() == original.snapshot()
    assert loaded.tags == original.tags
    assert loaded.category == "Work"
    assert loaded.dependencies == ["task-0"]
    assert loaded.recurrence is Recurrence.WEEKLY
    assert loaded.reminder_time == original.reminder_time
    assert loaded.due_text == original.due_text


def test_saved_file_uses_camel_case_keys(tmp_path: Path):
    path = tmp_path / "tasks.json"
    JsonTaskRepository(path).save([_sample_task()])
    (raw,) = json.loads(path.read_text(encoding="utf-8"))
    assert raw["dueDateTime"] == "2024-06-01T09:30:00"
    assert raw["recurrenceType"] == "WEEKLY"
    assert raw["status"] == "COMPLETED"
    assert "createdAt" in raw and "updatedAt" in raw


def test_missing_or_empty_file_loads_empty(tmp_path: Path):
    assert JsonTaskRepository(tmp_path / "nope.json").load() == []
    empty = tmp_path / "empty.json"
    empty.write_text("  \n", encoding="utf-8")
    assert JsonTaskRepository(empty).load() == []


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        '{"id": "x"}',
        '[{"id": "x", "title": "", "priority": "LOW", "status": "PENDING"}]',
        '[{"id": "x", "title": "t", "priority": "URGENT", "status": "PENDING"}]',
        '[{"id": "x", "title": "t", "priority": "LOW", "status": "PENDING", "dueDateTime": "garbage"}]',
    ],
)
def test_malformed_store_raises_storage_error(tmp_path: Path, content):
    path = tmp_path / "tasks.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(StorageError):
        JsonTaskRepository(path).load()


def test_timestamps_are_not_restored(tmp_path: Path):
    data = task_to_dict(_sample_task())
    data["createdAt"] = "2000-01-01T00:00:00"
    task = task_from_dict(data)
    assert task.created_at.year != 2000


def test_unknown_recurrence_falls_back_to_none(caplog):
    data = task_to_dict(_sample_task())
    data["recurrenceType"] = "YEARLY"
    with caplog.at_level("WARNING", logger="taskflow.storage"):
        task = task_from_dict(data)
    assert task.recurrence is Recurrence.NONE
    assert "YEARLY" in caplog.text


def test_save_replaces_atomically(tmp_path: Path):
    path = tmp_path / "tasks.json"
    repo = JsonTaskRepository(path)
    repo.save([_sample_task()])
    repo.save([])
    assert json.loads(path.read_text(encoding="utf-8")) == []
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.json"]


def test_parse_helpers():
    assert parse_timestamp("") is None
    assert parse_timestamp("2024-06-01T09:30:00") == datetime(2024, 6, 1, 9, 30)
    assert parse_due_text("2024-06-01") == datetime(2024, 6, 1)
    assert parse_due_text("2024-06-01 14:15") == datetime(2024, 6, 1, 14, 15)
    assert parse_due_text("next friday") is None
    assert parse_due_text(None) is None


def test_failed_replace_removes_temp_file(tmp_path: Path, monkeypatch):
    path = tmp_path / "tasks.json"

    def fail_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("infrastructure.json_repository.os.replace", fail_replace)
    with pytest.raises(StorageError):
        JsonTaskRepository(path).save([_sample_task()])
    assert list(tmp_path.iterdir()) == []
