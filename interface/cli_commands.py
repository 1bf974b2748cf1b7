"""Command handlers shared by the one-shot CLI and the interactive shell.

Each handler takes the parsed ``args`` and a ``CliContext`` and returns an
exit code. Handlers that change tasks call ``ctx.save()`` before returning.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import config
from application.filters import TaskFilter
from application.ports import TaskRepository
from application.reminders import ReminderScanner, default_reminder_time, format_reminder
from application.summary import due_this_week, due_today, overdue, status_counts
from application.task_controller import TaskController
from core import (
    CommandHistory,
    Priority,
    Recurrence,
    Task,
    TaskModel,
    TaskStatus,
    ValidationError,
    strategy_for_name,
)
from infrastructure.export_import import export_tasks, import_tasks
from infrastructure.json_repository import JsonTaskRepository
from infrastructure.task_codec import parse_due_text, task_to_dict
from interface.cli_io import emit, structured_response
from interface.display import render_table, render_task

logger = logging.getLogger("taskflow.cli")

Printer = Callable[[str], None]


@dataclass
class CliContext:
    repository: TaskRepository
    controller: TaskController
    reminders: ReminderScanner
    out: Printer = print

    @property
    def model(self) -> TaskModel:
        return self.controller.model

    def save(self) -> None:
        self.repository.save(self.model.all_tasks())


def load_context(
    tasks_file: Optional[Path] = None,
    sort_name: Optional[str] = None,
    history: Optional[CommandHistory] = None,
    out: Printer = print,
) -> CliContext:
    """Build model + history + controller and load persisted tasks (not undoable)."""
    repository = JsonTaskRepository(tasks_file or config.get_tasks_file())
    model = TaskModel(strategy_for_name(sort_name or config.get_sort_strategy()))
    model.append_loaded(repository.load())
    controller = TaskController(model, history or CommandHistory())
    return CliContext(repository=repository, controller=controller, reminders=ReminderScanner(model), out=out)


# ---------------------------------------------------------------------- parsing helpers


def _split_csv(raw: Optional[str]) -> List[str]:
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


def _parse_when(raw: Optional[str], what: str) -> Optional[datetime]:
    """Strict date parse (unlike due dates, raw text is not kept as a fallback)."""
    if not raw:
        return None
    parsed = parse_due_text(raw)
    if parsed is None:
        raise ValidationError(f"Cannot parse {what}: {raw!r} (use YYYY-MM-DD HH:MM)")
    return parsed


def _emit(ctx: CliContext, args, command: str, message: str, payload: Optional[Dict[str, Any]] = None,
          lines: Optional[List[str]] = None) -> int:
    return emit(args, command, message, payload=payload, lines=lines, out=ctx.out)


def _task_ref(ctx: CliContext, args) -> str:
    return ctx.controller.resolve_id(args.task_id)


# ---------------------------------------------------------------------- read-only


def cmd_list(args, ctx: CliContext) -> int:
    strategy = strategy_for_name(args.sort) if getattr(args, "sort", None) else ctx.model.sort_strategy
    due_on = _parse_when(getattr(args, "due_on", None), "date")
    task_filter = TaskFilter(
        search=getattr(args, "search", "") or "",
        category=getattr(args, "category", None),
        priority=Priority.from_string(args.priority) if getattr(args, "priority", None) else None,
        tag=getattr(args, "tag", None),
        due_on=due_on.date() if due_on else None,
        status=TaskStatus.from_string(args.status) if getattr(args, "status", None) else None,
        trash_view=bool(getattr(args, "trash", False)),
    )
    tasks = task_filter.apply(strategy.sort(ctx.model.all_tasks()))
    return _emit(
        ctx,
        args,
        "list",
        f"{len(tasks)} task(s)",
        payload={"tasks": [task_to_dict(t) for t in tasks], "sort": strategy.name},
        lines=render_table(tasks) if tasks else ["No tasks"],
    )


def cmd_show(args, ctx: CliContext) -> int:
    task = ctx.model.find_by_id(_task_ref(ctx, args))
    return _emit(ctx, args, "show", task.title, payload={"task": task_to_dict(task)}, lines=render_task(task))


def cmd_summary(args, ctx: CliContext) -> int:
    today = date.today()
    tasks = ctx.model.query()
    today_tasks = due_today(tasks, today)
    week_tasks = due_this_week(tasks, today)
    late = overdue(tasks, today)
    counts = status_counts(tasks)
    lines = [
        "Counts: " + ", ".join(f"{name.lower()}={count}" for name, count in counts.items()),
        f"Due today ({len(today_tasks)}):",
        *(f"  - {t.title}" for t in today_tasks),
        f"Due this week ({len(week_tasks)}):",
        *(f"  - {t.title}" for t in week_tasks),
        f"Overdue ({len(late)}):",
        *(f"  ! {t.title}" for t in late),
    ]
    payload = {
        "counts": counts,
        "today": [t.id for t in today_tasks],
        "week": [t.id for t in week_tasks],
        "overdue": [t.id for t in late],
    }
    return _emit(ctx, args, "summary", "summary", payload=payload, lines=lines)


def cmd_remind(args, ctx: CliContext) -> int:
    now = datetime.now()
    tasks = ctx.reminders.missed_reminders(now) if getattr(args, "missed", False) else ctx.reminders.due_reminders(now)
    lines = [format_reminder(t) for t in tasks] or ["No reminders"]
    return _emit(ctx, args, "remind", f"{len(tasks)} reminder(s)",
                 payload={"tasks": [t.id for t in tasks]}, lines=lines)


# ---------------------------------------------------------------------- undoable mutations


def cmd_add(args, ctx: CliContext) -> int:
    due_text = getattr(args, "due", None)
    due = parse_due_text(due_text)
    reminder = _parse_when(getattr(args, "remind", None), "reminder time")
    if reminder is None and getattr(args, "remind_default", False):
        reminder = default_reminder_time(due, config.get_reminder_lead_minutes())
    dependencies = [ctx.controller.resolve_id(dep) for dep in _split_csv(getattr(args, "depends_on", None))]
    task_id = ctx.controller.add_task(
        args.title,
        description=getattr(args, "description", None),
        due=due,
        priority=Priority.from_string(getattr(args, "priority", None) or "MEDIUM"),
        due_text=due_text,
        category=getattr(args, "category", None),
        recurrence=Recurrence.from_string(args.recurrence) if getattr(args, "recurrence", None) else Recurrence.NONE,
        tags=_split_csv(getattr(args, "tags", None)),
        reminder_time=reminder,
        dependencies=dependencies,
    )
    task = ctx.model.find_by_id(task_id)
    ctx.save()
    return _emit(ctx, args, "add", f"Added {task_id[:8]}  {task.title}", payload={"task": task_to_dict(task)})


def cmd_edit(args, ctx: CliContext) -> int:
    task_id = _task_ref(ctx, args)
    current = ctx.model.find_by_id(task_id)
    if getattr(args, "due", None) is not None:
        due_text = args.due or None
        due = parse_due_text(due_text)
    else:
        due_text, due = current.due_text, current.due
    ctx.controller.edit_task(
        task_id,
        args.title if getattr(args, "title", None) is not None else current.title,
        args.description if getattr(args, "description", None) is not None else current.description,
        due,
        due_text,
        category=getattr(args, "category", None),
        recurrence=Recurrence.from_string(args.recurrence) if getattr(args, "recurrence", None) else None,
    )
    ctx.save()
    return _emit(ctx, args, "edit", f"Edited {task_id[:8]}  {current.title}", payload={"task": task_to_dict(current)})


def cmd_done(args, ctx: CliContext) -> int:
    ids = [ctx.controller.resolve_id(ref) for ref in args.task_ids]
    ctx.controller.bulk_complete(ids)
    ctx.save()
    return _emit(ctx, args, "done", f"Completed {len(ids)} task(s)", payload={"ids": ids})


def cmd_rm(args, ctx: CliContext) -> int:
    ids = [ctx.controller.resolve_id(ref) for ref in args.task_ids]
    ctx.controller.bulk_delete(ids)
    ctx.save()
    return _emit(ctx, args, "rm", f"Moved {len(ids)} task(s) to trash", payload={"ids": ids})


def cmd_clone(args, ctx: CliContext) -> int:
    new_id = ctx.controller.clone_task(_task_ref(ctx, args))
    ctx.save()
    clone = ctx.model.find_by_id(new_id)
    return _emit(ctx, args, "clone", f"Cloned as {new_id[:8]}  {clone.title}", payload={"task": task_to_dict(clone)})


# ---------------------------------------------------------------------- direct (not undoable)


def cmd_restore(args, ctx: CliContext) -> int:
    task_id = _task_ref(ctx, args)
    ctx.controller.restore_from_trash(task_id)
    ctx.save()
    return _emit(ctx, args, "restore", f"Restored {task_id[:8]}", payload={"id": task_id})


def cmd_purge(args, ctx: CliContext) -> int:
    removed = ctx.controller.empty_trash()
    ctx.save()
    return _emit(ctx, args, "purge", f"Permanently deleted {len(removed)} task(s)", payload={"ids": removed})


def cmd_export(args, ctx: CliContext) -> int:
    tasks = ctx.model.all_tasks(sorted=True)
    export_tasks(tasks, Path(args.path))
    return _emit(ctx, args, "export", f"Exported {len(tasks)} task(s) to {args.path}", payload={"count": len(tasks)})


def cmd_import(args, ctx: CliContext) -> int:
    imported = import_tasks(Path(args.path))
    existing = {t.id for t in ctx.model.all_tasks()}
    fresh: List[Task] = [t for t in imported if t.id not in existing]
    skipped = len(imported) - len(fresh)
    if skipped:
        logger.warning("import: %d task(s) already present, skipped", skipped)
    ctx.model.append_loaded(fresh)
    ctx.save()
    return _emit(ctx, args, "import", f"Imported {len(fresh)} task(s)",
                 payload={"count": len(fresh), "skipped": skipped})


def cmd_config(args, ctx: Optional[CliContext] = None) -> int:
    key = getattr(args, "key", None)
    value = getattr(args, "value", None)
    if key and value is not None:
        if key == "sort_strategy":
            strategy_for_name(value)
        try:
            config.SETTERS[key](value)
        except ValueError as exc:
            raise ValidationError(f"Invalid value for {key}: {value!r}") from exc
    settings = config.get_all()
    if key:
        shown = {key: settings[key]}
    else:
        shown = settings
    if getattr(args, "json", False):
        return structured_response("config", message="config", payload=shown)
    out = ctx.out if ctx is not None else print
    for name, val in shown.items():
        out(f"{name} = {val}")
    return 0


__all__ = [
    "CliContext",
    "load_context",
    "cmd_list",
    "cmd_show",
    "cmd_summary",
    "cmd_remind",
    "cmd_add",
    "cmd_edit",
    "cmd_done",
    "cmd_rm",
    "cmd_clone",
    "cmd_restore",
    "cmd_purge",
    "cmd_export",
    "cmd_import",
    "cmd_config",
]
