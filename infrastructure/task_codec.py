"""Task <-> plain dict conversion for every storage format.

Timestamps are written as ``YYYY-MM-DDTHH:MM:SS`` (seconds precision). On
load, ``createdAt``/``updatedAt`` are ignored: reconstructed tasks are stamped
with the load time.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from core import Priority, Recurrence, Task, TaskStatus, ValidationError

logger = logging.getLogger("taskflow.storage")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
DUE_INPUT_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d", TIMESTAMP_FORMAT)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.strftime(TIMESTAMP_FORMAT) if value is not None else None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp. Empty/None -> None; malformed raises ValueError."""
    if not value:
        return None
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        return datetime.fromisoformat(value)


def parse_due_text(text: Optional[str]) -> Optional[datetime]:
    """Best-effort parse of a user-entered due date.

    Unparsable input yields None; callers keep the raw text as ``due_text``.
    """
    raw = (text or "").strip()
    if not raw:
        return None
    for fmt in DUE_INPUT_FORMATS:
        try:
            return datetime.strptime(raw, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def task_to_dict(task: Task) -> Dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description or "",
        "dueDateTime": format_timestamp(task.due),
        "dueDateString": task.due_text or None,
        "priority": task.priority.name,
        "status": task.status.name,
        "tags": task.tags,
        "category": task.category or None,
        "dependencies": task.dependencies,
        "recurrenceType": task.recurrence.name,
        "createdAt": format_timestamp(task.created_at),
        "updatedAt": format_timestamp(task.updated_at),
        "reminderTime": format_timestamp(task.reminder_time),
    }


def _recurrence(raw: Optional[str], task_id: str) -> Recurrence:
    if not raw:
        return Recurrence.NONE
    try:
        return Recurrence.from_string(raw)
    except ValidationError:
        logger.warning("Unknown recurrence %r for task %s, using NONE", raw, task_id)
        return Recurrence.NONE


def task_from_dict(data: Dict[str, Any]) -> Task:
    """Rebuild a task. Raises ValidationError/ValueError on malformed required fields."""
    task_id = data.get("id")
    task = Task.create_full(
        task_id,
        data.get("title"),
        data.get("description") or None,
        parse_timestamp(data.get("dueDateTime")),
        Priority.from_string(data.get("priority") or ""),
        TaskStatus.from_string(data.get("status") or ""),
        [str(t) for t in data.get("tags") or []],
        parse_timestamp(data.get("reminderTime")),
    )
    if data.get("dueDateString"):
        task.due_text = data["dueDateString"]
    if data.get("category"):
        task.category = data["category"]
    if data.get("dependencies"):
        task.dependencies = [str(d) for d in data["dependencies"]]
    if data.get("recurrenceType"):
        task.recurrence = _recurrence(data.get("recurrenceType"), str(task_id))
    return task


__all__ = [
    "TIMESTAMP_FORMAT",
    "format_timestamp",
    "parse_timestamp",
    "parse_due_text",
    "task_to_dict",
    "task_from_dict",
]
