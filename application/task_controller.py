"""Application gateway between user interfaces and the task model.

Every user-initiated change is wrapped in a reversible command and submitted
through the shared ``CommandHistory``. Only restore-from-trash, emptying the
trash and sort changes touch the model directly; those are not undoable.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, List, Optional

from core import (
    AddTaskCommand,
    CommandHistory,
    CompleteTaskCommand,
    DeleteTaskCommand,
    EditTaskCommand,
    Priority,
    Recurrence,
    Task,
    TaskModel,
    TaskNotFoundError,
    TaskStatus,
    strategy_for_name,
)
from core.errors import ValidationError, require, require_id, require_title

logger = logging.getLogger("taskflow.controller")

CLONE_SUFFIX = " (Copy)"


class TaskController:
    def __init__(self, model: TaskModel, history: CommandHistory):
        self.model = require(model, "TaskModel")
        self.history = require(history, "CommandHistory")

    # ------------------------------------------------------------------ undoable

    def add_task(
        self,
        title: str,
        description: Optional[str] = None,
        due: Optional[datetime] = None,
        priority: Priority = Priority.MEDIUM,
        due_text: Optional[str] = None,
        category: Optional[str] = None,
        recurrence: Optional[Recurrence] = Recurrence.NONE,
        tags: Optional[Iterable[str]] = None,
        reminder_time: Optional[datetime] = None,
        dependencies: Optional[Iterable[str]] = None,
    ) -> str:
        """Create a task and add it through the history. Returns the new id."""
        require_title(title)
        require(priority, "Priority")
        task = Task.create(title, description, due, priority)
        if due_text:
            task.due_text = due_text
        if category:
            task.category = category
        if recurrence is not None and recurrence is not Recurrence.NONE:
            task.recurrence = recurrence
        if tags:
            task.tags = [t for t in tags if t]
        if reminder_time is not None:
            task.reminder_time = reminder_time
        for dep in dependencies or []:
            task.add_dependency(dep)
        self.history.run(AddTaskCommand(self.model, task))
        return task.id

    def edit_task(
        self,
        task_id: str,
        title: str,
        description: Optional[str],
        due: Optional[datetime],
        due_text: Optional[str],
        category: Optional[str] = None,
        recurrence: Optional[Recurrence] = None,
    ) -> None:
        require_id(task_id)
        require_title(title)
        self.history.run(
            EditTaskCommand(self.model, task_id, title, description, due, due_text, category, recurrence)
        )

    def complete_task(self, task_id: str) -> None:
        require_id(task_id)
        self.history.run(CompleteTaskCommand(self.model, task_id))

    def delete_task(self, task_id: str) -> None:
        """Move to trash (undoable). Permanent removal is ``empty_trash``."""
        require_id(task_id)
        self.history.run(DeleteTaskCommand(self.model, task_id))

    def clone_task(self, task_id: str) -> str:
        require_id(task_id, "Task ID")
        original = self.model.find_by_id(task_id)
        if original is None:
            raise TaskNotFoundError(task_id)
        cloned = Task.create(
            original.title + CLONE_SUFFIX,
            original.description,
            original.due,
            original.priority,
        )
        cloned.due_text = original.due_text
        cloned.category = original.category
        cloned.tags = original.tags
        cloned.recurrence = original.recurrence
        self.history.run(AddTaskCommand(self.model, cloned))
        return cloned.id

    def bulk_complete(self, task_ids: Optional[Iterable[str]]) -> None:
        for task_id in task_ids or []:
            if task_id and task_id.strip():
                self.complete_task(task_id)

    def bulk_delete(self, task_ids: Optional[Iterable[str]]) -> None:
        for task_id in task_ids or []:
            if task_id and task_id.strip():
                self.delete_task(task_id)

    def undo(self) -> None:
        self.history.undo()

    def redo(self) -> None:
        self.history.redo()

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # ------------------------------------------------------------------ direct (not undoable)

    def restore_from_trash(self, task_id: str) -> None:
        self.model.reopen_task(task_id)

    def empty_trash(self) -> List[str]:
        """Permanently delete every trashed task. Returns the removed ids."""
        removed = [t.id for t in self.model.query_by_status(TaskStatus.TRASHED)]
        for task_id in removed:
            self.model.delete_task(task_id)
        if removed:
            logger.info("emptied trash: %d task(s)", len(removed))
        return removed

    def set_sort(self, name: str) -> None:
        self.model.set_sort_strategy(strategy_for_name(name))

    def resolve_id(self, reference: str) -> str:
        """Expand a unique id prefix (as typed in the CLI) to the full task id."""
        ref = require_id(reference).strip()
        if self.model.find_by_id(ref) is not None:
            return ref
        matches = [t.id for t in self.model.all_tasks() if t.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise TaskNotFoundError(ref)
        raise ValidationError(f"Ambiguous task id prefix {ref!r}: {len(matches)} matches")


__all__ = ["TaskController", "CLONE_SUFFIX"]
