"""Reminder scanning over the model's read-only view.

The scanner never mutates tasks; it only remembers which reminders it has
already reported so a periodic check does not repeat them.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Set

from core import Task, TaskModel, TaskStatus

logger = logging.getLogger("taskflow.reminders")

CHECK_INTERVAL_SECONDS = 30


def _reminder_key(task: Task) -> str:
    return f"{task.id}_{task.reminder_time.isoformat()}"


def _is_pending_reminder(task: Task, now: datetime) -> bool:
    if task.reminder_time is None:
        return False
    if task.status in (TaskStatus.COMPLETED, TaskStatus.TRASHED):
        return False
    return task.reminder_time <= now


def default_reminder_time(due: Optional[datetime], lead_minutes: int) -> Optional[datetime]:
    """Reminder ``lead_minutes`` before ``due`` (None when there is no due date)."""
    if due is None:
        return None
    return due - timedelta(minutes=max(0, int(lead_minutes)))


class ReminderScanner:
    def __init__(self, model: TaskModel):
        self._model = model
        self._shown: Set[str] = set()

    def due_reminders(self, now: Optional[datetime] = None) -> List[Task]:
        """Reminders that came due and were not reported before; marks them reported."""
        now = now or datetime.now()
        fresh: List[Task] = []
        for task in self._model.query():
            if not _is_pending_reminder(task, now):
                continue
            key = _reminder_key(task)
            if key in self._shown:
                continue
            self._shown.add(key)
            fresh.append(task)
        if fresh:
            logger.info("%d reminder(s) due", len(fresh))
        return fresh

    def missed_reminders(self, now: Optional[datetime] = None) -> List[Task]:
        """Every open task whose reminder time has passed, reported or not."""
        now = now or datetime.now()
        return [t for t in self._model.query() if _is_pending_reminder(t, now)]

    def reset(self) -> None:
        self._shown.clear()


def format_reminder(task: Task) -> str:
    message = f"Reminder: {task.title} is due soon!"
    if task.due is not None:
        message += f" (Due: {task.due.strftime('%Y-%m-%d %H:%M')})"
    return message


__all__ = [
    "ReminderScanner",
    "default_reminder_time",
    "format_reminder",
    "CHECK_INTERVAL_SECONDS",
]
