from .errors import StorageError, TaskNotFoundError, ValidationError
from .status import Priority, Recurrence, TaskStatus
from .task import EditSnapshot, Task
from .sort_strategies import (
    SORT_STRATEGIES,
    SortAlphabetically,
    SortByCreationTime,
    SortByDueDate,
    SortByPriority,
    SortStrategy,
    strategy_for_name,
)
from .task_model import ModelListener, TaskModel
from .commands import (
    AddTaskCommand,
    Command,
    CompleteTaskCommand,
    DeleteTaskCommand,
    EditTaskCommand,
)
from .command_history import CommandHistory

__all__ = [
    "ValidationError",
    "TaskNotFoundError",
    "StorageError",
    "Priority",
    "Recurrence",
    "TaskStatus",
    "Task",
    "EditSnapshot",
    # Sorting
    "SortStrategy",
    "SortByDueDate",
    "SortByPriority",
    "SortByCreationTime",
    "SortAlphabetically",
    "SORT_STRATEGIES",
    "strategy_for_name",
    # Model
    "TaskModel",
    "ModelListener",
    # Commands
    "Command",
    "AddTaskCommand",
    "CompleteTaskCommand",
    "DeleteTaskCommand",
    "EditTaskCommand",
    "CommandHistory",
]
