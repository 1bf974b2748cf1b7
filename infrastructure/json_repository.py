import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Sequence

import jsonschema

from application.ports import TaskRepository
from core import StorageError, Task, ValidationError
from infrastructure.task_codec import task_from_dict, task_to_dict

logger = logging.getLogger("taskflow.storage")

_NULLABLE_STRING = {"type": ["string", "null"]}

TASKS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["id", "title", "priority", "status"],
        "properties": {
            "id": {"type": "string", "minLength": 1},
            "title": {"type": "string", "minLength": 1},
            "description": _NULLABLE_STRING,
            "dueDateTime": _NULLABLE_STRING,
            "dueDateString": _NULLABLE_STRING,
            "priority": {"type": "string"},
            "status": {"type": "string"},
            "tags": {"type": ["array", "null"], "items": {"type": "string"}},
            "category": _NULLABLE_STRING,
            "dependencies": {"type": ["array", "null"], "items": {"type": "string"}},
            "recurrenceType": _NULLABLE_STRING,
            "createdAt": _NULLABLE_STRING,
            "updatedAt": _NULLABLE_STRING,
            "reminderTime": _NULLABLE_STRING,
        },
    },
}


class JsonTaskRepository(TaskRepository):
    """Tasks stored as one pretty-printed JSON array."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> List[Task]:
        """Missing or empty file -> []. Anything malformed raises StorageError."""
        if not self.path.exists():
            return []
        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not content.strip():
            return []
        try:
            data = json.loads(content)
            jsonschema.validate(instance=data, schema=TASKS_SCHEMA)
        except json.JSONDecodeError as exc:
            raise StorageError(f"{self.path} is not valid JSON: {exc}") from exc
        except jsonschema.ValidationError as exc:
            raise StorageError(f"{self.path} does not match the task schema: {exc.message}") from exc
        tasks: List[Task] = []
        for index, raw in enumerate(data):
            try:
                tasks.append(task_from_dict(raw))
            except (ValidationError, ValueError) as exc:
                raise StorageError(f"{self.path}: task #{index} is invalid: {exc}") from exc
        logger.debug("loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        payload = json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".tasks-", suffix=".json", dir=self.path.parent)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
        logger.debug("saved %d tasks to %s", len(tasks), self.path)
