"""Due-date summaries (today / this week / overdue) and status counts."""

from datetime import date, timedelta
from typing import Dict, Iterable, List

from core import Task, TaskStatus

WEEK_DAYS = 7


def _open(task: Task) -> bool:
    return task.status not in (TaskStatus.COMPLETED, TaskStatus.TRASHED)


def due_today(tasks: Iterable[Task], today: date) -> List[Task]:
    return [t for t in tasks if _open(t) and t.due is not None and t.due.date() == today]


def due_this_week(tasks: Iterable[Task], today: date) -> List[Task]:
    """Open tasks due after today, up to and including ``today + 7``."""
    week_end = today + timedelta(days=WEEK_DAYS)
    return [
        t for t in tasks
        if _open(t) and t.due is not None and today < t.due.date() <= week_end
    ]


def is_overdue(task: Task, today: date) -> bool:
    return task.due is not None and task.due.date() < today


def overdue(tasks: Iterable[Task], today: date) -> List[Task]:
    return [t for t in tasks if _open(t) and is_overdue(t, today)]


def status_counts(tasks: Iterable[Task]) -> Dict[str, int]:
    counts = {status.name: 0 for status in TaskStatus}
    for task in tasks:
        counts[task.status.name] += 1
    return counts
