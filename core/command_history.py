"""Undo/redo engine.

Two stacks: ``executed`` (most recent last) and ``undone``. ``run()`` is the
only way a command enters the history; any new run discards the whole redo
stack. One instance is shared by every component that issues undoable
mutations and is passed in explicitly rather than looked up globally.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .commands import Command
from .errors import require

logger = logging.getLogger("taskflow.history")


class CommandHistory:
    def __init__(self, max_size: Optional[int] = None):
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be positive")
        self._executed: List[Command] = []
        self._undone: List[Command] = []
        self.max_size = max_size

    def run(self, command: Command) -> None:
        """Execute ``command``, record it, and invalidate redo history."""
        require(command, "Command")
        command.execute()
        self._executed.append(command)
        self._undone.clear()
        if self.max_size is not None and len(self._executed) > self.max_size:
            del self._executed[: len(self._executed) - self.max_size]
        logger.debug("run: %s", _label(command))

    def undo(self) -> None:
        if not self._executed:
            return
        command = self._executed.pop()
        command.undo()
        self._undone.append(command)
        logger.debug("undo: %s", _label(command))

    def redo(self) -> None:
        if not self._undone:
            return
        command = self._undone.pop()
        command.execute()
        self._executed.append(command)
        logger.debug("redo: %s", _label(command))

    def can_undo(self) -> bool:
        return bool(self._executed)

    def can_redo(self) -> bool:
        return bool(self._undone)

    def undo_description(self) -> Optional[str]:
        """Label of the command ``undo()`` would reverse (for menus), or None."""
        return _label(self._executed[-1]) if self._executed else None

    def redo_description(self) -> Optional[str]:
        return _label(self._undone[-1]) if self._undone else None

    def executed_descriptions(self) -> List[str]:
        """Oldest first."""
        return [_label(cmd) for cmd in self._executed]

    def clear(self) -> None:
        self._executed.clear()
        self._undone.clear()


def _label(command: Command) -> str:
    return getattr(command, "description", None) or type(command).__name__


__all__ = ["CommandHistory"]
