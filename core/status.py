from enum import Enum

from .errors import ValidationError


class _NamedEnum(Enum):
    @classmethod
    def from_string(cls, value: str):
        """Resolve enum member by name (case-insensitive, spaces → underscores)."""
        token = (value or "").strip().upper().replace(" ", "_").replace("-", "_")
        try:
            return cls[token]
        except KeyError:
            raise ValidationError(f"Invalid {cls.__name__.lower()}: {value!r}") from None

    @classmethod
    def names(cls):
        return [member.name for member in cls]


class Priority(_NamedEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskStatus(_NamedEnum):
    PENDING = "pending"
    COMPLETED = "completed"
    TRASHED = "trashed"


class Recurrence(_NamedEnum):
    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


__all__ = ["Priority", "TaskStatus", "Recurrence"]
