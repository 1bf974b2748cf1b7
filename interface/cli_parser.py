"""CLI parser construction for the taskflow CLI and shell."""

import argparse
from typing import Any

import config
from core import SORT_STRATEGIES, Priority, Recurrence, TaskStatus


def build_parser(commands: Any, prog: str = "taskflow") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="taskflow: personal task tracker with undo/redo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--file", "-f", dest="tasks_file", help="task store (JSON); default from config")
    parser.add_argument("--json", action="store_true", help="structured JSON output")
    parser.add_argument("--verbose", "-v", action="store_true", help="debug logging to stderr")

    def add_id_arg(sp):
        sp.add_argument("task_id", help="task id or unique id prefix")
        return sp

    def add_ids_arg(sp):
        sp.add_argument("task_ids", nargs="+", metavar="task_id", help="task ids or unique id prefixes")
        return sp

    sub = parser.add_subparsers(dest="command", help="Commands")

    # list
    lp = sub.add_parser("list", help="List tasks")
    lp.add_argument("--status", type=str.upper, choices=TaskStatus.names())
    lp.add_argument("--sort", choices=list(SORT_STRATEGIES))
    lp.add_argument("--search", "-s", help="substring match on title/description")
    lp.add_argument("--category", "-c")
    lp.add_argument("--priority", type=str.upper, choices=Priority.names())
    lp.add_argument("--tag", "-t")
    lp.add_argument("--due-on", help="only tasks due on this day (YYYY-MM-DD)")
    lp.add_argument("--trash", action="store_true", help="show the trash instead of open tasks")
    lp.set_defaults(func=commands.cmd_list)

    # show
    sp = sub.add_parser("show", help="Show one task")
    add_id_arg(sp)
    sp.set_defaults(func=commands.cmd_show)

    # add
    ap = sub.add_parser("add", help="Add a task")
    ap.add_argument("title")
    ap.add_argument("--description", "-d")
    ap.add_argument("--due", help="due date (YYYY-MM-DD [HH:MM]); other text is kept verbatim")
    ap.add_argument("--priority", "-p", type=str.upper, default="MEDIUM", choices=Priority.names())
    ap.add_argument("--category", "-c")
    ap.add_argument("--recurrence", "-r", type=str.upper, choices=Recurrence.names())
    ap.add_argument("--tags", "-t", help="comma-separated tags")
    ap.add_argument("--depends-on", help="comma-separated task ids")
    ap.add_argument("--remind", help="reminder time (YYYY-MM-DD HH:MM)")
    ap.add_argument(
        "--remind-default",
        action="store_true",
        help="remind reminder_lead_minutes (see config) before the due date",
    )
    ap.set_defaults(func=commands.cmd_add)

    # edit
    ep = sub.add_parser("edit", help="Edit a task (unset fields keep their value)")
    add_id_arg(ep)
    ep.add_argument("--title")
    ep.add_argument("--description", "-d")
    ep.add_argument("--due", help="new due date; empty string clears it")
    ep.add_argument("--category", "-c")
    ep.add_argument("--recurrence", "-r", type=str.upper, choices=Recurrence.names())
    ep.set_defaults(func=commands.cmd_edit)

    # done / rm / clone / restore
    dp = sub.add_parser("done", help="Mark tasks completed")
    add_ids_arg(dp)
    dp.set_defaults(func=commands.cmd_done)

    rp = sub.add_parser("rm", help="Move tasks to trash")
    add_ids_arg(rp)
    rp.set_defaults(func=commands.cmd_rm)

    clp = sub.add_parser("clone", help="Duplicate a task")
    add_id_arg(clp)
    clp.set_defaults(func=commands.cmd_clone)

    rsp = sub.add_parser("restore", help="Restore a task from trash (not undoable)")
    add_id_arg(rsp)
    rsp.set_defaults(func=commands.cmd_restore)

    pp = sub.add_parser("purge", help="Permanently delete everything in the trash (not undoable)")
    pp.set_defaults(func=commands.cmd_purge)

    # reports
    smp = sub.add_parser("summary", help="Due today / this week / overdue")
    smp.set_defaults(func=commands.cmd_summary)

    rmp = sub.add_parser("remind", help="Show reminders that came due")
    rmp.add_argument("--missed", action="store_true", help="include reminders already shown")
    rmp.set_defaults(func=commands.cmd_remind)

    # export / import
    xp = sub.add_parser("export", help="Export tasks (.json, .csv or .xml)")
    xp.add_argument("path")
    xp.set_defaults(func=commands.cmd_export)

    ip = sub.add_parser("import", help="Import tasks (.json, .csv or .xml)")
    ip.add_argument("path")
    ip.set_defaults(func=commands.cmd_import)

    # config
    cfp = sub.add_parser("config", help="Show or change settings")
    cfp.add_argument("key", nargs="?", choices=list(config.CONFIG_KEYS))
    cfp.add_argument("value", nargs="?")
    cfp.set_defaults(func=commands.cmd_config, needs_store=False)

    # shell
    shp = sub.add_parser("shell", help="Interactive shell with undo/redo")
    shp.set_defaults(func=commands.cmd_shell)

    sub.add_parser("help", help="Show help")

    return parser


__all__ = ["build_parser"]
