from datetime import datetime, timedelta

from application.reminders import ReminderScanner, default_reminder_time, format_reminder
from core import Task, TaskModel, TaskStatus

NOW = datetime(2024, 6, 10, 12, 0)


def _model(*tasks):
    model = TaskModel()
    model.append_loaded(tasks)
    return model


def _reminded(title, minutes_ago, status=TaskStatus.PENDING):
    task = Task.create(title, due=NOW + timedelta(hours=1))
    task.reminder_time = NOW - timedelta(minutes=minutes_ago)
    task.status = status
    return task


def test_due_reminders_reported_once():
    task = _reminded("call mom", 1)
    scanner = ReminderScanner(_model(task))
    assert scanner.due_reminders(NOW) == [task]
    assert scanner.due_reminders(NOW) == []


def test_future_and_closed_reminders_ignored():
    future = _reminded("later", -10)
    done = _reminded("done", 5, TaskStatus.COMPLETED)
    trashed = _reminded("trash", 5, TaskStatus.TRASHED)
    plain = Task.create("no reminder")
    scanner = ReminderScanner(_model(future, done, trashed, plain))
    assert scanner.due_reminders(NOW) == []


def test_rescheduled_reminder_fires_again():
    task = _reminded("call mom", 5)
    scanner = ReminderScanner(_model(task))
    scanner.due_reminders(NOW)
    task.reminder_time = NOW - timedelta(minutes=1)
    assert scanner.due_reminders(NOW) == [task]


def test_missed_reminders_ignore_shown_state():
    task = _reminded("call mom", 5)
    scanner = ReminderScanner(_model(task))
    scanner.due_reminders(NOW)
    assert scanner.missed_reminders(NOW) == [task]


def test_reset_forgets_shown():
    task = _reminded("call mom", 5)
    scanner = ReminderScanner(_model(task))
    scanner.due_reminders(NOW)
    scanner.reset()
    assert scanner.due_reminders(NOW) == [task]


def test_default_reminder_time():
    due = datetime(2024, 6, 10, 9, 0)
    assert default_reminder_time(due, 30) == datetime(2024, 6, 10, 8, 30)
    assert default_reminder_time(due, -5) == due
    assert default_reminder_time(None, 30) is None


def test_format_reminder():
    task = Task.create("Dentist", due=datetime(2024, 6, 10, 9, 0))
    assert format_reminder(task) == "Reminder: Dentist is due soon! (Due: 2024-06-10 09:00)"
    assert format_reminder(Task.create("Call")) == "Reminder: Call is due soon!"


def test_missed_reminders_include_exactly_now():
    task = _reminded("on the dot", 0)
    scanner = ReminderScanner(_model(task))
    assert scanner.missed_reminders(NOW) == [task]
