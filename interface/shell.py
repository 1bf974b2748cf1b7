"""Interactive shell: one long-lived model and history, so undo/redo works across lines."""

from __future__ import annotations

import argparse
import logging
import shlex
import time
from typing import List, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import InMemoryHistory

from application.reminders import CHECK_INTERVAL_SECONDS, format_reminder
from core import StorageError, ValidationError
from interface.cli_commands import CliContext

logger = logging.getLogger("taskflow.cli")

BUILTINS = ("undo", "redo", "history", "help", "quit", "exit")
SHELL_HELP = """\
Shell commands:
  undo            reverse the last change
  redo            re-apply the last undone change
  history         list changes that can be undone (oldest first)
  help            this text; any CLI subcommand also accepts --help
  quit / exit     leave the shell
Any CLI subcommand works as a line, e.g.  add "Buy milk" --due 2024-06-01"""


class ShellSession:
    def __init__(self, ctx: CliContext, parser: argparse.ArgumentParser):
        self.ctx = ctx
        self.parser = parser
        self._last_reminder_check: Optional[float] = None

    @property
    def out(self):
        return self.ctx.out

    def completions(self) -> List[str]:
        words = list(BUILTINS)
        for action in self.parser._actions:
            if isinstance(action, argparse._SubParsersAction):
                words.extend(action.choices)
        return sorted(set(words))

    # ------------------------------------------------------------------ dispatch

    def handle(self, line: str) -> bool:
        """Run one input line. Returns False when the shell should exit."""
        line = (line or "").strip()
        if not line:
            return True
        try:
            argv = shlex.split(line)
        except ValueError as exc:
            self.out(f"Error: {exc}")
            return True
        head = argv[0].lower()
        if head in ("quit", "exit"):
            return False
        if head == "help":
            self.out(SHELL_HELP)
            return True
        try:
            if head == "undo":
                self._undo()
            elif head == "redo":
                self._redo()
            elif head == "history":
                self._history()
            else:
                self._run_cli(argv)
        except (ValidationError, StorageError) as exc:
            self.out(f"Error: {exc}")
        return True

    def _run_cli(self, argv: List[str]) -> None:
        try:
            args = self.parser.parse_args(argv)
        except SystemExit:
            # argparse already printed usage or help
            return
        if args.command == "shell":
            self.out("Already in the shell")
            return
        if not getattr(args, "func", None):
            self.out(SHELL_HELP)
            return
        args.func(args, self.ctx)

    def _undo(self) -> None:
        label = self.ctx.controller.history.undo_description()
        if label is None:
            self.out("Nothing to undo")
            return
        self.ctx.controller.undo()
        self.ctx.save()
        self.out(f"Undone: {label}")

    def _redo(self) -> None:
        label = self.ctx.controller.history.redo_description()
        if label is None:
            self.out("Nothing to redo")
            return
        self.ctx.controller.redo()
        self.ctx.save()
        self.out(f"Redone: {label}")

    def _history(self) -> None:
        labels = self.ctx.controller.history.executed_descriptions()
        if not labels:
            self.out("No changes yet")
            return
        for index, label in enumerate(labels, start=1):
            self.out(f"{index:>3}. {label}")

    # ------------------------------------------------------------------ reminders

    def check_reminders(self, now: Optional[float] = None, force: bool = False) -> int:
        """Print reminders that came due; throttled to CHECK_INTERVAL_SECONDS."""
        now = time.monotonic() if now is None else now
        if not force and self._last_reminder_check is not None:
            if now - self._last_reminder_check < CHECK_INTERVAL_SECONDS:
                return 0
        self._last_reminder_check = now
        due = self.ctx.reminders.due_reminders()
        for task in due:
            self.out(format_reminder(task))
        return len(due)

    # ------------------------------------------------------------------ loop

    def run(self) -> int:
        session: PromptSession = PromptSession(
            history=InMemoryHistory(),
            completer=WordCompleter(self.completions(), ignore_case=True),
        )
        self.out(f"{len(self.ctx.model)} task(s) loaded. Type 'help' for commands.")
        self.check_reminders(force=True)
        while True:
            try:
                line = session.prompt("taskflow> ")
            except KeyboardInterrupt:
                continue
            except EOFError:
                break
            if not self.handle(line):
                break
            self.check_reminders()
        logger.debug("shell closed")
        return 0


__all__ = ["ShellSession", "SHELL_HELP", "BUILTINS"]
