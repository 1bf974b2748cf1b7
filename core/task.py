"""Task entity with touch semantics and snapshot/restore for undo.

Every mutation goes through a setter, and every setter touches ``updated_at``.
``EditSnapshot`` captures only the five core fields (title, description, due,
priority, status); due text, category, tags, dependencies, recurrence and
reminder time are intentionally left out and survive a ``restore()`` untouched.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from .errors import ValidationError, require, require_id, require_title
from .status import Priority, Recurrence, TaskStatus


def _now() -> datetime:
    return datetime.now()


@dataclass(frozen=True)
class EditSnapshot:
    title: str
    description: Optional[str]
    due: Optional[datetime]
    priority: Priority
    status: TaskStatus


class Task:
    """A single tracked task. Identity is assigned once and never changes."""

    def __init__(
        self,
        task_id: str,
        title: str,
        description: Optional[str],
        due: Optional[datetime],
        priority: Priority,
        status: TaskStatus,
        tags: Optional[Iterable[str]] = None,
        reminder_time: Optional[datetime] = None,
    ):
        self._id = require_id(task_id)
        self._title = require_title(title)
        self._priority = require(priority, "Priority")
        self._status = require(status, "Status")
        self._description = description
        self._due = due
        self._due_text: Optional[str] = None
        self._tags: List[str] = list(tags or [])
        self._category: Optional[str] = None
        self._dependencies: List[str] = []
        self._recurrence = Recurrence.NONE
        self._reminder_time = reminder_time
        stamp = _now()
        self._created_at = stamp
        self._updated_at = stamp

    # ------------------------------------------------------------------ factories

    @classmethod
    def create(
        cls,
        title: str,
        description: Optional[str] = None,
        due: Optional[datetime] = None,
        priority: Optional[Priority] = Priority.MEDIUM,
    ) -> "Task":
        """New PENDING task with a fresh id; created_at == updated_at."""
        return cls(str(uuid.uuid4()), title, description, due, priority, TaskStatus.PENDING)

    @classmethod
    def create_full(
        cls,
        task_id: str,
        title: str,
        description: Optional[str],
        due: Optional[datetime],
        priority: Priority,
        status: TaskStatus,
        tags: Optional[Iterable[str]] = None,
        reminder_time: Optional[datetime] = None,
    ) -> "Task":
        """Rebuild a task from storage. Timestamps are stamped to now, not restored."""
        return cls(task_id, title, description, due, priority, status, tags, reminder_time)

    @classmethod
    def create_recurring(
        cls,
        title: str,
        description: Optional[str],
        first_due: Optional[datetime],
        priority: Priority,
        tags: Optional[Iterable[str]] = None,
        recurrence: Recurrence = Recurrence.WEEKLY,
    ) -> "Task":
        task = cls.create(title, description, first_due, priority)
        task.tags = list(tags or [])
        task.recurrence = recurrence
        return task

    # ------------------------------------------------------------------ identity / timestamps

    @property
    def id(self) -> str:
        return self._id

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def _touch(self) -> None:
        # Strictly monotonic even when the clock does not advance between calls.
        stamp = _now()
        if stamp <= self._updated_at:
            stamp = self._updated_at + timedelta(microseconds=1)
        self._updated_at = stamp

    # ------------------------------------------------------------------ core fields

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = require_title(value)
        self._touch()

    @property
    def description(self) -> Optional[str]:
        return self._description

    @description.setter
    def description(self, value: Optional[str]) -> None:
        self._description = value
        self._touch()

    @property
    def due(self) -> Optional[datetime]:
        return self._due

    @due.setter
    def due(self, value: Optional[datetime]) -> None:
        self._due = value
        self._touch()

    @property
    def due_text(self) -> Optional[str]:
        """Raw user-entered due date, kept for display even when it did not parse."""
        return self._due_text

    @due_text.setter
    def due_text(self, value: Optional[str]) -> None:
        self._due_text = value
        self._touch()

    @property
    def priority(self) -> Priority:
        return self._priority

    @priority.setter
    def priority(self, value: Priority) -> None:
        self._priority = require(value, "Priority")
        self._touch()

    @property
    def status(self) -> TaskStatus:
        return self._status

    @status.setter
    def status(self, value: TaskStatus) -> None:
        self._status = require(value, "Status")
        self._touch()

    # ------------------------------------------------------------------ secondary fields

    @property
    def tags(self) -> List[str]:
        return list(self._tags)

    @tags.setter
    def tags(self, value: Optional[Iterable[str]]) -> None:
        self._tags = list(value or [])
        self._touch()

    @property
    def category(self) -> Optional[str]:
        return self._category

    @category.setter
    def category(self, value: Optional[str]) -> None:
        self._category = value
        self._touch()

    @property
    def recurrence(self) -> Recurrence:
        return self._recurrence

    @recurrence.setter
    def recurrence(self, value: Optional[Recurrence]) -> None:
        self._recurrence = value if value is not None else Recurrence.NONE
        self._touch()

    @property
    def reminder_time(self) -> Optional[datetime]:
        return self._reminder_time

    @reminder_time.setter
    def reminder_time(self, value: Optional[datetime]) -> None:
        self._reminder_time = value
        self._touch()

    @property
    def dependencies(self) -> List[str]:
        return list(self._dependencies)

    @dependencies.setter
    def dependencies(self, value: Optional[Iterable[str]]) -> None:
        self._dependencies = list(value or [])
        self._touch()

    def add_dependency(self, task_id: str) -> None:
        require_id(task_id, "Task ID")
        if task_id not in self._dependencies:
            self._dependencies.append(task_id)
            self._touch()

    def remove_dependency(self, task_id: Optional[str]) -> None:
        if task_id in self._dependencies:
            self._dependencies.remove(task_id)
            self._touch()

    # ------------------------------------------------------------------ snapshot / restore

    def snapshot(self) -> EditSnapshot:
        return EditSnapshot(
            title=self._title,
            description=self._description,
            due=self._due,
            priority=self._priority,
            status=self._status,
        )

    def restore(self, snapshot: Optional[EditSnapshot]) -> None:
        """Overwrite the five core fields from ``snapshot`` (due text is left as is)."""
        if snapshot is None:
            raise ValidationError("Snapshot must be non-null")
        self._title = snapshot.title
        self._description = snapshot.description
        self._due = snapshot.due
        self._priority = snapshot.priority
        self._status = snapshot.status
        self._touch()

    def __repr__(self) -> str:
        return f"Task(id={self._id!r}, title={self._title!r}, status={self._status.name})"

    def __str__(self) -> str:
        return self._title


__all__ = ["Task", "EditSnapshot"]
