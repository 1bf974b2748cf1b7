"""Error types shared by every layer."""


class ValidationError(ValueError):
    """Malformed input at an API boundary (blank ids, missing entities, empty titles)."""


class TaskNotFoundError(ValidationError):
    """Raised only by operations that require the task to exist (e.g. clone)."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


class StorageError(Exception):
    """Loading or saving tasks failed (I/O, malformed JSON, schema violation)."""


def require_id(value, what: str = "ID") -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{what} must be non-null and non-blank")
    return value


def require_title(title) -> str:
    if title is None or not str(title).strip():
        raise ValidationError("Title must be non-null and non-blank")
    return title


def require(value, what: str):
    if value is None:
        raise ValidationError(f"{what} must be non-null")
    return value


__all__ = ["ValidationError", "TaskNotFoundError", "StorageError", "require_id", "require_title", "require"]
