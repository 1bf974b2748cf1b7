"""Pluggable orderings over tasks.

Every strategy sorts a copy, is stable, and puts tasks whose sort field is
absent after all tasks that have it.
"""

from typing import Dict, Iterable, List, Protocol

from .errors import ValidationError
from .status import Priority
from .task import Task


# HIGH first. Independent of the enum declaration order.
PRIORITY_RANK: Dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class SortStrategy(Protocol):
    name: str
    label: str

    def sort(self, tasks: Iterable[Task]) -> List[Task]:
        ...


def _nulls_last(value, key):
    return (1, None) if value is None else (0, key(value))


class SortByDueDate:
    name = "due_date"
    label = "Sort by Due Date"

    def sort(self, tasks: Iterable[Task]) -> List[Task]:
        return sorted(tasks, key=lambda t: _nulls_last(t.due, lambda d: d))


class SortByPriority:
    name = "priority"
    label = "Sort by Priority"

    def sort(self, tasks: Iterable[Task]) -> List[Task]:
        return sorted(tasks, key=lambda t: _nulls_last(t.priority, PRIORITY_RANK.__getitem__))


class SortByCreationTime:
    """Newest first."""

    name = "created"
    label = "Sort by Creation Time"

    def sort(self, tasks: Iterable[Task]) -> List[Task]:
        items = list(tasks)
        with_created = [t for t in items if t.created_at is not None]
        without = [t for t in items if t.created_at is None]
        return sorted(with_created, key=lambda t: t.created_at, reverse=True) + without


class SortAlphabetically:
    name = "title"
    label = "Sort Alphabetically"

    def sort(self, tasks: Iterable[Task]) -> List[Task]:
        return sorted(tasks, key=lambda t: _nulls_last(t.title, str.casefold))


SORT_STRATEGIES: Dict[str, type] = {
    SortByDueDate.name: SortByDueDate,
    SortByPriority.name: SortByPriority,
    SortByCreationTime.name: SortByCreationTime,
    SortAlphabetically.name: SortAlphabetically,
}


def strategy_for_name(name: str) -> SortStrategy:
    """Instantiate a strategy by its short name (``due_date``, ``priority``, ``created``, ``title``)."""
    key = (name or "").strip().lower().replace("-", "_")
    try:
        return SORT_STRATEGIES[key]()
    except KeyError:
        raise ValidationError(
            f"Unknown sort strategy: {name!r} (expected one of {', '.join(SORT_STRATEGIES)})"
        ) from None


__all__ = [
    "SortStrategy",
    "SortByDueDate",
    "SortByPriority",
    "SortByCreationTime",
    "SortAlphabetically",
    "SORT_STRATEGIES",
    "PRIORITY_RANK",
    "strategy_for_name",
]
