from datetime import date, datetime

from core import Priority, Task, TaskStatus
from interface.display import display_width, pad_display, render_table, render_task, trim_display

TODAY = date(2024, 6, 10)


def test_wide_characters_count_double():
    assert display_width("abc") == 3
    assert display_width("日本") == 4


def test_trim_and_pad():
    assert trim_display("hello world", 6) == "hello…"
    assert trim_display("short", 10) == "short"
    assert display_width(pad_display("日本語テキスト", 7)) == 7
    assert pad_display("ab", 4) == "ab  "


def test_render_table_marks_overdue_and_status():
    late = Task.create_full("aaaaaaaa-1", "Pay rent", None, datetime(2024, 6, 1), Priority.HIGH, TaskStatus.PENDING)
    done = Task.create_full("bbbbbbbb-2", "Done thing", None, datetime(2024, 6, 1), Priority.LOW,
                            TaskStatus.COMPLETED)
    lines = render_table([late, done], width=100, today=TODAY)
    assert lines[0].startswith("ID")
    assert "aaaaaaaa" in lines[1] and "○" in lines[1] and "2024-06-01 00:00!" in lines[1]
    assert "✓" in lines[2] and "!" not in lines[2]


def test_render_table_shows_raw_due_text():
    task = Task.create("Someday task")
    task.due_text = "after vacation"
    assert "after vacation" in render_table([task], width=100, today=TODAY)[1]


def test_render_task_details():
    task = Task.create("Read", "chapter 1\nchapter 2")
    task.tags = ["books"]
    lines = render_task(task)
    assert lines[0] == "Read"
    assert any("books" in line for line in lines)
    assert lines[-1] == "  chapter 2"
