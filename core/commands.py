"""Reversible operations executed through ``CommandHistory``.

Commands hold the very ``Task`` instance the model owns, never a copy.
``execute()`` and ``undo()`` never raise on a missing target: when the task no
longer resolves they do nothing and leave their captured state unset, so the
matching inverse is a no-op as well.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .errors import require, require_id, require_title
from .status import Recurrence, TaskStatus
from .task import EditSnapshot, Task
from .task_model import TaskModel


class Command(Protocol):
    @property
    def description(self) -> str:
        ...

    def execute(self) -> None:
        ...

    def undo(self) -> None:
        ...


class AddTaskCommand:
    def __init__(self, model: TaskModel, task: Task):
        self._model = require(model, "Model")
        self._task = require(task, "Task")

    @property
    def description(self) -> str:
        return f"Add '{self._task.title}'"

    @property
    def task(self) -> Task:
        return self._task

    def execute(self) -> None:
        self._model.add_task(self._task)

    def undo(self) -> None:
        self._model.delete_task(self._task.id)


class CompleteTaskCommand:
    def __init__(self, model: TaskModel, task_id: str):
        self._model = require(model, "Model")
        self._task_id = require_id(task_id)
        self._previous_status: Optional[TaskStatus] = None

    @property
    def description(self) -> str:
        return "Complete task"

    def execute(self) -> None:
        task = self._model.find_by_id(self._task_id)
        if task is None:
            return
        self._previous_status = task.status
        self._model.mark_completed(self._task_id)

    def undo(self) -> None:
        if self._previous_status is None:
            return
        task = self._model.find_by_id(self._task_id)
        if task is None:
            return
        task.status = self._previous_status
        self._model.notify_listeners()


class DeleteTaskCommand:
    """Move to trash. Undo always reopens as PENDING, whatever the status was before."""

    def __init__(self, model: TaskModel, task_id: str):
        self._model = require(model, "Model")
        self._task_id = require_id(task_id)
        self._backup: Optional[Task] = None

    @property
    def description(self) -> str:
        return "Move task to trash"

    def execute(self) -> None:
        task = self._model.find_by_id(self._task_id)
        if task is None:
            return
        self._backup = task
        self._model.move_to_trash(self._task_id)

    def undo(self) -> None:
        if self._backup is None:
            return
        self._backup.status = TaskStatus.PENDING
        self._model.notify_listeners()


class EditTaskCommand:
    """Overwrite title/description/due/due text; category and recurrence only when given.

    Undo restores the five-field snapshot plus the separately captured category
    and recurrence. Tags, dependencies, reminder time and due text are not
    reverted.
    """

    def __init__(
        self,
        model: TaskModel,
        task_id: str,
        new_title: str,
        new_description: Optional[str],
        new_due: Optional[datetime],
        new_due_text: Optional[str],
        new_category: Optional[str] = None,
        new_recurrence: Optional[Recurrence] = None,
    ):
        self._model = require(model, "Model")
        self._task_id = require_id(task_id)
        self._new_title = require_title(new_title)
        self._new_description = new_description
        self._new_due = new_due
        self._new_due_text = new_due_text
        self._new_category = new_category
        self._new_recurrence = new_recurrence

        self._old_snapshot: Optional[EditSnapshot] = None
        self._old_category: Optional[str] = None
        self._old_recurrence: Recurrence = Recurrence.NONE

    @property
    def description(self) -> str:
        return f"Edit '{self._new_title}'"

    def execute(self) -> None:
        task = self._model.find_by_id(self._task_id)
        if task is None:
            return
        self._old_snapshot = task.snapshot()
        self._old_category = task.category
        self._old_recurrence = task.recurrence
        task.title = self._new_title
        task.description = self._new_description
        task.due = self._new_due
        task.due_text = self._new_due_text
        if self._new_category is not None:
            task.category = self._new_category
        if self._new_recurrence is not None:
            task.recurrence = self._new_recurrence
        self._model.notify_listeners()

    def undo(self) -> None:
        if self._old_snapshot is None:
            return
        task = self._model.find_by_id(self._task_id)
        if task is None:
            return
        task.restore(self._old_snapshot)
        task.category = self._old_category
        task.recurrence = self._old_recurrence
        self._model.notify_listeners()


__all__ = [
    "Command",
    "AddTaskCommand",
    "CompleteTaskCommand",
    "DeleteTaskCommand",
    "EditTaskCommand",
]
