from typing import List, Protocol, Sequence

from core import Task


class TaskRepository(Protocol):
    def load(self) -> List[Task]:
        ...

    def save(self, tasks: Sequence[Task]) -> None:
        ...
