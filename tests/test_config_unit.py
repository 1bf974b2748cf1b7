"""Unit tests for the YAML-backed user configuration."""

from pathlib import Path

import pytest
import yaml

import config


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    path = tmp_path / "taskflow.yaml"
    monkeypatch.setenv("TASKFLOW_CONFIG", str(path))
    monkeypatch.delenv("TASKFLOW_TASKS_FILE", raising=False)
    return path


def test_defaults_without_file():
    assert config.get_tasks_file() == config.DEFAULT_TASKS_FILE
    assert config.get_sort_strategy() == "due_date"
    assert config.get_reminder_lead_minutes() == 30
    assert config.get_log_level() == "WARNING"


def test_set_and_get_persist_to_yaml(isolated_config: Path, tmp_path: Path):
    config.set_sort_strategy("priority")
    config.set_reminder_lead_minutes("15")
    config.set_tasks_file(str(tmp_path / "mine.json"))
    data = yaml.safe_load(isolated_config.read_text(encoding="utf-8"))
    assert data == {
        "sort_strategy": "priority",
        "reminder_lead_minutes": 15,
        "tasks_file": str(tmp_path / "mine.json"),
    }
    assert config.get_all()["sort_strategy"] == "priority"
    assert config.get_reminder_lead_minutes() == 15


def test_empty_value_removes_key_and_file(isolated_config: Path):
    config.set_log_level("debug")
    assert config.get_log_level() == "DEBUG"
    config.set_log_level("")
    assert not isolated_config.exists()
    assert config.get_log_level() == "WARNING"


def test_env_overrides_tasks_file(monkeypatch, tmp_path: Path):
    config.set_tasks_file("/somewhere/else.json")
    monkeypatch.setenv("TASKFLOW_TASKS_FILE", str(tmp_path / "env.json"))
    assert config.get_tasks_file() == tmp_path / "env.json"


def test_corrupt_yaml_falls_back_to_defaults(isolated_config: Path):
    isolated_config.write_text("sort_strategy: [unclosed", encoding="utf-8")
    assert config.get_sort_strategy() == "due_date"


def test_invalid_lead_minutes(isolated_config: Path):
    isolated_config.write_text("reminder_lead_minutes: soon\n", encoding="utf-8")
    assert config.get_reminder_lead_minutes() == 30
    isolated_config.write_text("reminder_lead_minutes: -4\n", encoding="utf-8")
    assert config.get_reminder_lead_minutes() == 30
    with pytest.raises(ValueError):
        config.set_reminder_lead_minutes("soon")


def test_setters_cover_every_key():
    assert set(config.SETTERS) == set(config.CONFIG_KEYS) == set(config.get_all())
