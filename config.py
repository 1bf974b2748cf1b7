from __future__ import annotations

import os
import yaml
from pathlib import Path
from typing import Dict, Any

USER_CONFIG_PATH = Path.home() / ".taskflow_config.yaml"

DEFAULT_TASKS_FILE = Path.home() / ".taskflow" / "tasks.json"
DEFAULT_SORT_STRATEGY = "due_date"
DEFAULT_REMINDER_LEAD_MINUTES = 30
DEFAULT_LOG_LEVEL = "WARNING"

CONFIG_KEYS = ("tasks_file", "sort_strategy", "reminder_lead_minutes", "log_level")


def _config_path() -> Path:
    env_path = os.environ.get("TASKFLOW_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return USER_CONFIG_PATH


def _load_config() -> Dict[str, Any]:
    path = _config_path()
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _save_config(data: Dict[str, Any]) -> None:
    path = _config_path()
    if not data:
        if path.exists():
            path.unlink()
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data, allow_unicode=True, sort_keys=True), encoding="utf-8")


def _set_value(key: str, value: Any) -> None:
    data = _load_config()
    if isinstance(value, str):
        value = value.strip()
    if value in (None, ""):
        data.pop(key, None)
    else:
        data[key] = value
    _save_config(data)


def get_tasks_file() -> Path:
    env_file = os.environ.get("TASKFLOW_TASKS_FILE")
    if env_file:
        return Path(env_file).expanduser()
    raw = str(_load_config().get("tasks_file", "") or "").strip()
    return Path(raw).expanduser() if raw else DEFAULT_TASKS_FILE


def set_tasks_file(value: str) -> None:
    _set_value("tasks_file", value)


def get_sort_strategy() -> str:
    return str(_load_config().get("sort_strategy", "") or "").strip() or DEFAULT_SORT_STRATEGY


def set_sort_strategy(value: str) -> None:
    _set_value("sort_strategy", value)


def get_reminder_lead_minutes() -> int:
    raw = _load_config().get("reminder_lead_minutes", DEFAULT_REMINDER_LEAD_MINUTES)
    try:
        minutes = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_REMINDER_LEAD_MINUTES
    return minutes if minutes >= 0 else DEFAULT_REMINDER_LEAD_MINUTES


def set_reminder_lead_minutes(value: int) -> None:
    _set_value("reminder_lead_minutes", int(value))


def get_log_level() -> str:
    return str(_load_config().get("log_level", "") or "").strip().upper() or DEFAULT_LOG_LEVEL


def set_log_level(value: str) -> None:
    _set_value("log_level", (value or "").upper())


def get_all() -> Dict[str, Any]:
    """Effective configuration (defaults filled in)."""
    return {
        "tasks_file": str(get_tasks_file()),
        "sort_strategy": get_sort_strategy(),
        "reminder_lead_minutes": get_reminder_lead_minutes(),
        "log_level": get_log_level(),
    }


SETTERS = {
    "tasks_file": set_tasks_file,
    "sort_strategy": set_sort_strategy,
    "reminder_lead_minutes": set_reminder_lead_minutes,
    "log_level": set_log_level,
}
