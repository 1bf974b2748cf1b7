"""Authoritative task collection with observer notification."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .errors import require, require_id
from .sort_strategies import SortByDueDate, SortStrategy
from .status import TaskStatus
from .task import Task

logger = logging.getLogger("taskflow.model")

ModelListener = Callable[[], None]


class TaskModel:
    """Sole owner of the task list.

    All mutations notify listeners synchronously, in registration order.
    ``query()`` never hands out the live list.
    """

    def __init__(self, sort_strategy: Optional[SortStrategy] = None):
        self._tasks: List[Task] = []
        self._listeners: List[ModelListener] = []
        self._sort_strategy: SortStrategy = sort_strategy or SortByDueDate()

    # ------------------------------------------------------------------ listeners

    def add_listener(self, listener: ModelListener) -> None:
        self._listeners.append(require(listener, "Listener"))

    def remove_listener(self, listener: ModelListener) -> None:
        require(listener, "Listener")
        if listener in self._listeners:
            self._listeners.remove(listener)

    def notify_listeners(self) -> None:
        """Announce an in-place change made to a task this model owns."""
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            # Removed earlier in this round: skip.
            if listener not in self._listeners:
                continue
            listener()

    # ------------------------------------------------------------------ sorting

    @property
    def sort_strategy(self) -> SortStrategy:
        return self._sort_strategy

    def set_sort_strategy(self, strategy: SortStrategy) -> None:
        self._sort_strategy = require(strategy, "Strategy")
        logger.debug("sort strategy -> %s", getattr(strategy, "name", strategy))
        self._notify()

    # ------------------------------------------------------------------ queries

    def query(self) -> List[Task]:
        return self._sort_strategy.sort(list(self._tasks))

    def query_by_status(self, status: TaskStatus) -> List[Task]:
        require(status, "Status")
        return [t for t in self._tasks if t.status is status]

    def all_tasks(self, sorted: bool = False) -> List[Task]:
        """Enumerate tasks for saving: raw insertion order, or the current sorted view."""
        return self.query() if sorted else list(self._tasks)

    def find_by_id(self, task_id: str) -> Optional[Task]:
        require_id(task_id)
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def __len__(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------ mutations

    def add_task(self, task: Task) -> None:
        self._tasks.append(require(task, "Task"))
        logger.debug("added %s", task.id)
        self._notify()

    def append_loaded(self, tasks: Iterable[Task]) -> None:
        """Bulk append from storage. Not undoable; one notification for the batch."""
        loaded = [require(t, "Task") for t in tasks]
        self._tasks.extend(loaded)
        logger.debug("loaded %d tasks", len(loaded))
        self._notify()

    def delete_task(self, task_id: str) -> None:
        """Permanent removal. Listeners are notified even when nothing matched."""
        require_id(task_id)
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        if len(self._tasks) != before:
            logger.debug("deleted %s", task_id)
        self._notify()

    def _set_status(self, task_id: str, status: TaskStatus) -> None:
        task = self.find_by_id(task_id)
        if task is not None:
            task.status = status
            logger.debug("%s -> %s", task_id, status.name)
        self._notify()

    def move_to_trash(self, task_id: str) -> None:
        self._set_status(task_id, TaskStatus.TRASHED)

    def mark_completed(self, task_id: str) -> None:
        self._set_status(task_id, TaskStatus.COMPLETED)

    def reopen_task(self, task_id: str) -> None:
        self._set_status(task_id, TaskStatus.PENDING)


__all__ = ["TaskModel", "ModelListener"]
