"""Export/import of task lists as JSON, CSV or XML (format picked by file suffix)."""

import csv
import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Callable, Dict, List, Sequence

from core import Priority, StorageError, Task, TaskStatus, ValidationError
from infrastructure.json_repository import JsonTaskRepository
from infrastructure.task_codec import format_timestamp, parse_timestamp, task_from_dict, task_to_dict

logger = logging.getLogger("taskflow.storage")

CSV_HEADER = [
    "ID",
    "Title",
    "Description",
    "Due Date",
    "Due Date String",
    "Priority",
    "Status",
    "Category",
    "Tags",
    "Reminder Time",
    "Created At",
    "Updated At",
    "Dependencies",
]
LIST_SEPARATOR = ";"
# Rows need at least ID, Title, Description, Due Date, Due Date String, Priority.
MIN_CSV_COLUMNS = 6


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in (raw or "").split(LIST_SEPARATOR) if item.strip()]


# ---------------------------------------------------------------------- JSON


def export_json(tasks: Sequence[Task], path: Path) -> None:
    JsonTaskRepository(path).save(tasks)


def import_json(path: Path) -> List[Task]:
    return JsonTaskRepository(path).load()


# ---------------------------------------------------------------------- CSV


def export_csv(tasks: Sequence[Task], path: Path) -> None:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as handle:
            writer = csv.writer(handle)
            writer.writerow(CSV_HEADER)
            for task in tasks:
                writer.writerow([
                    task.id,
                    task.title,
                    task.description or "",
                    format_timestamp(task.due) or "",
                    task.due_text or "",
                    task.priority.name,
                    task.status.name,
                    task.category or "",
                    LIST_SEPARATOR.join(task.tags),
                    format_timestamp(task.reminder_time) or "",
                    format_timestamp(task.created_at) or "",
                    format_timestamp(task.updated_at) or "",
                    LIST_SEPARATOR.join(task.dependencies),
                ])
    except OSError as exc:
        raise StorageError(f"Cannot write {path}: {exc}") from exc


def _task_from_row(row: List[str]) -> Task:
    def cell(index: int) -> str:
        return row[index] if len(row) > index else ""

    task = Task.create_full(
        cell(0),
        cell(1),
        cell(2) or None,
        parse_timestamp(cell(3)),
        Priority.from_string(cell(5) or "LOW"),
        TaskStatus.from_string(cell(6) or "PENDING"),
        _split_list(cell(8)),
        parse_timestamp(cell(9)),
    )
    if cell(4):
        task.due_text = cell(4)
    if cell(7):
        task.category = cell(7)
    if cell(12):
        task.dependencies = _split_list(cell(12))
    return task


def import_csv(path: Path) -> List[Task]:
    """Read tasks from CSV. The header row is skipped; invalid rows are logged and skipped."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            rows = list(csv.reader(handle))
    except OSError as exc:
        raise StorageError(f"Cannot read {path}: {exc}") from exc

    tasks: List[Task] = []
    for line_no, row in enumerate(rows[1:], start=2):
        if not any(cell.strip() for cell in row):
            continue
        if len(row) < MIN_CSV_COLUMNS:
            logger.warning("%s:%d: too few columns, skipped", path, line_no)
            continue
        try:
            tasks.append(_task_from_row(row))
        except (ValidationError, ValueError) as exc:
            logger.warning("%s:%d: %s, skipped", path, line_no, exc)
    return tasks


# ---------------------------------------------------------------------- XML

_XML_SCALARS = ("id", "title", "description", "dueDateTime", "dueDateString", "priority",
                "status", "category", "recurrenceType", "reminderTime")


def export_xml(tasks: Sequence[Task], path: Path) -> None:
    root = ET.Element("tasks")
    for task in tasks:
        data = task_to_dict(task)
        node = ET.SubElement(root, "task")
        for key in _XML_SCALARS:
            value = data.get(key)
            if value is None and key not in ("id", "title", "description"):
                continue
            ET.SubElement(node, key).text = value or ""
        tags_node = ET.SubElement(node, "tags")
        for tag in data["tags"]:
            ET.SubElement(tags_node, "tag").text = tag
        deps_node = ET.SubElement(node, "dependencies")
        for dep in data["dependencies"]:
            ET.SubElement(deps_node, "dependency").text = dep
    ET.indent(root, space="  ")
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        ET.ElementTree(root).write(path, encoding="UTF-8", xml_declaration=True)
    except OSError as exc:
        raise StorageError(f"Cannot write {path}: {exc}") from exc


def import_xml(path: Path) -> List[Task]:
    path = Path(path)
    try:
        root = ET.parse(path).getroot()
    except (OSError, ET.ParseError) as exc:
        raise StorageError(f"Cannot read {path}: {exc}") from exc
    tasks: List[Task] = []
    for index, node in enumerate(root.findall("task")):
        data: Dict[str, object] = {key: node.findtext(key) for key in _XML_SCALARS}
        data["tags"] = [el.text or "" for el in node.findall("tags/tag")]
        data["dependencies"] = [el.text or "" for el in node.findall("dependencies/dependency")]
        try:
            tasks.append(task_from_dict(data))
        except (ValidationError, ValueError) as exc:
            logger.warning("%s: task #%d: %s, skipped", path, index, exc)
    return tasks


# ---------------------------------------------------------------------- dispatch

EXPORTERS: Dict[str, Callable[[Sequence[Task], Path], None]] = {
    ".json": export_json,
    ".csv": export_csv,
    ".xml": export_xml,
}
IMPORTERS: Dict[str, Callable[[Path], List[Task]]] = {
    ".json": import_json,
    ".csv": import_csv,
    ".xml": import_xml,
}


def _format_for(path: Path, table: Dict[str, Callable]) -> Callable:
    suffix = Path(path).suffix.lower()
    try:
        return table[suffix]
    except KeyError:
        raise ValidationError(
            f"Unsupported file type {suffix or '(none)'!r}; use one of {', '.join(table)}"
        ) from None


def export_tasks(tasks: Sequence[Task], path: Path) -> None:
    _format_for(path, EXPORTERS)(tasks, Path(path))


def import_tasks(path: Path) -> List[Task]:
    return _format_for(path, IMPORTERS)(Path(path))


__all__ = [
    "CSV_HEADER",
    "export_csv",
    "export_json",
    "export_tasks",
    "export_xml",
    "import_csv",
    "import_json",
    "import_tasks",
    "import_xml",
]
