#!/usr/bin/env python3
"""
taskflow: personal task tracker (CLI + interactive shell).

Thin facade: parser construction lives in cli_parser, handlers in
cli_commands, the interactive loop in shell.
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from typing import List, Optional

import config
from core import StorageError, ValidationError
from interface.cli_commands import (
    CliContext,
    cmd_add,
    cmd_clone,
    cmd_config,
    cmd_done,
    cmd_edit,
    cmd_export,
    cmd_import,
    cmd_list,
    cmd_purge,
    cmd_remind,
    cmd_restore,
    cmd_rm,
    cmd_show,
    cmd_summary,
    load_context,
)
from interface.cli_io import report_error
from interface.cli_parser import build_parser as build_cli_parser
from interface.shell import ShellSession

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, verbose: bool = False) -> None:
    """Log to stderr so stdout stays clean for --json output."""
    name = "DEBUG" if verbose else (level or config.get_log_level())
    logging.basicConfig(
        level=getattr(logging, str(name).upper(), logging.WARNING),
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def cmd_shell(args, ctx: CliContext) -> int:
    return ShellSession(ctx, build_parser()).run()


def build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = build_cli_parser(commands=sys.modules[__name__])
    parser.add_argument("--version", action="store_true", help="Show version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose)
    if getattr(args, "version", False):
        try:
            print(pkg_version("taskflow"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if not getattr(args, "command", None):
        parser.print_help()
        return 1
    if args.command == "help":
        parser.print_help()
        return 0
    try:
        if not getattr(args, "needs_store", True):
            return args.func(args)
        ctx = load_context(args.tasks_file)
        return args.func(args, ctx)
    except (ValidationError, StorageError) as exc:
        logging.getLogger("taskflow.cli").debug("%s failed", args.command, exc_info=True)
        return report_error(args, exc)


__all__ = [
    "main",
    "build_parser",
    "setup_logging",
    "cmd_add",
    "cmd_clone",
    "cmd_config",
    "cmd_done",
    "cmd_edit",
    "cmd_export",
    "cmd_import",
    "cmd_list",
    "cmd_purge",
    "cmd_remind",
    "cmd_restore",
    "cmd_rm",
    "cmd_shell",
    "cmd_show",
    "cmd_summary",
]


if __name__ == "__main__":
    sys.exit(main())
