"""List filters applied on top of the model's sorted view."""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from core import Priority, Task, TaskStatus


@dataclass
class TaskFilter:
    """Combined search/filter criteria. Empty criteria match everything.

    Trashed tasks are hidden unless ``trash_view`` is set, in which case only
    trashed tasks are shown.
    """

    search: str = ""
    category: Optional[str] = None
    priority: Optional[Priority] = None
    tag: Optional[str] = None
    due_on: Optional[date] = None
    status: Optional[TaskStatus] = None
    trash_view: bool = False

    def matches(self, task: Task) -> bool:
        if self.trash_view:
            if task.status is not TaskStatus.TRASHED:
                return False
        elif task.status is TaskStatus.TRASHED:
            return False
        if self.status is not None and task.status is not self.status:
            return False
        query = (self.search or "").strip().lower()
        if query:
            haystack = f"{task.title} {task.description or ''}".lower()
            if query not in haystack:
                return False
        if self.category and (task.category or "") != self.category:
            return False
        if self.priority is not None and task.priority is not self.priority:
            return False
        if self.tag and self.tag not in task.tags:
            return False
        if self.due_on is not None:
            if task.due is None or task.due.date() != self.due_on:
                return False
        return True

    def apply(self, tasks: Iterable[Task]) -> List[Task]:
        return [t for t in tasks if self.matches(t)]


def categories(tasks: Iterable[Task]) -> List[str]:
    """Distinct non-empty categories, alphabetical."""
    return sorted({t.category for t in tasks if t.category}, key=str.casefold)


def tags(tasks: Iterable[Task]) -> List[str]:
    seen = set()
    for task in tasks:
        seen.update(tag for tag in task.tags if tag)
    return sorted(seen, key=str.casefold)


__all__ = ["TaskFilter", "categories", "tags"]
