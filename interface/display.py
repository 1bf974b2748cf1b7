"""Plain-text rendering of task lists with proper Unicode width handling."""

import shutil
from datetime import date
from typing import Iterable, List, Optional

from wcwidth import wcwidth

from application.summary import is_overdue
from core import Task, TaskStatus

STATUS_ICONS = {
    TaskStatus.PENDING: "○",
    TaskStatus.COMPLETED: "✓",
    TaskStatus.TRASHED: "✗",
}
ID_WIDTH = 8
PRIORITY_WIDTH = 6
DUE_WIDTH = 16
CATEGORY_WIDTH = 12
TITLE_MIN = 16
SEP = "  "


def display_width(text: str) -> int:
    """Visual width of text accounting for wide/narrow characters."""
    width = 0
    for ch in text:
        w = wcwidth(ch)
        if w is None:
            w = 0
        width += max(0, w)
    return width


def trim_display(text: str, width: int) -> str:
    """Trim text so visible width doesn't exceed ``width`` (adds … when cut)."""
    if display_width(text) <= width:
        return text
    acc = []
    used = 0
    limit = max(0, width - 1)
    for ch in text:
        w = max(0, wcwidth(ch) or 0)
        if used + w > limit:
            break
        acc.append(ch)
        used += w
    return "".join(acc) + ("…" if width > 0 else "")


def pad_display(text: str, width: int) -> str:
    """Trim and pad with spaces to exact visible width."""
    trimmed = trim_display(text, width)
    return trimmed + " " * max(0, width - display_width(trimmed))


def due_label(task: Task) -> str:
    if task.due is not None:
        return task.due.strftime("%Y-%m-%d %H:%M")
    return task.due_text or ""


def render_table(tasks: Iterable[Task], width: Optional[int] = None, today: Optional[date] = None) -> List[str]:
    """One header line plus one line per task. Overdue open tasks get a ``!`` marker."""
    width = width or shutil.get_terminal_size((100, 24)).columns
    today = today or date.today()
    fixed = ID_WIDTH + 2 + PRIORITY_WIDTH + DUE_WIDTH + 1 + CATEGORY_WIDTH + len(SEP) * 5
    title_w = max(TITLE_MIN, width - fixed)

    header = SEP.join([
        pad_display("ID", ID_WIDTH),
        pad_display("", 1),
        pad_display("PRIO", PRIORITY_WIDTH),
        pad_display("DUE", DUE_WIDTH + 1),
        pad_display("TITLE", title_w),
        pad_display("CATEGORY", CATEGORY_WIDTH),
    ]).rstrip()
    lines = [header]
    for task in tasks:
        overdue = task.status is TaskStatus.PENDING and is_overdue(task, today)
        lines.append(SEP.join([
            pad_display(task.id[:ID_WIDTH], ID_WIDTH),
            STATUS_ICONS.get(task.status, "?"),
            pad_display(task.priority.name, PRIORITY_WIDTH),
            pad_display(due_label(task) + ("!" if overdue else ""), DUE_WIDTH + 1),
            pad_display(task.title, title_w),
            pad_display(task.category or "", CATEGORY_WIDTH),
        ]).rstrip())
    return lines


def render_task(task: Task) -> List[str]:
    """Multi-line detail view."""
    lines = [
        f"{task.title}",
        f"  id:          {task.id}",
        f"  status:      {task.status.name}",
        f"  priority:    {task.priority.name}",
        f"  due:         {due_label(task) or '-'}",
        f"  category:    {task.category or '-'}",
        f"  tags:        {', '.join(task.tags) or '-'}",
        f"  depends on:  {', '.join(task.dependencies) or '-'}",
        f"  recurrence:  {task.recurrence.name}",
        f"  reminder:    {task.reminder_time.strftime('%Y-%m-%d %H:%M') if task.reminder_time else '-'}",
        f"  created:     {task.created_at:%Y-%m-%d %H:%M:%S}",
        f"  updated:     {task.updated_at:%Y-%m-%d %H:%M:%S}",
    ]
    if task.description:
        lines.append("")
        lines.extend(f"  {line}" for line in task.description.splitlines())
    return lines


__all__ = ["display_width", "trim_display", "pad_display", "render_table", "render_task", "due_label"]
