"""Output helpers: one JSON envelope for ``--json`` runs, plain lines otherwise."""

import json
import sys
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, Optional

Printer = Callable[[str], None]


def iso_timestamp() -> str:
    """UTC timestamp for structured CLI output."""
    return datetime.now(timezone.utc).isoformat()


def structured_response(
    command: str,
    *,
    status: str = "OK",
    message: str = "",
    payload: Optional[Dict] = None,
    exit_code: int = 0,
) -> int:
    """Print the JSON envelope ``{command, status, message, timestamp, payload}``."""
    body: Dict[str, object] = {
        "command": command,
        "status": status,
        "message": message,
        "timestamp": iso_timestamp(),
        "payload": payload or {},
    }
    print(json.dumps(body, ensure_ascii=False, indent=2, default=str))
    return exit_code


def structured_error(command: str, message: str, *, payload: Optional[Dict] = None) -> int:
    return structured_response(command, status="ERROR", message=message, payload=payload, exit_code=1)


def emit(
    args,
    command: str,
    message: str,
    *,
    payload: Optional[Dict] = None,
    lines: Optional[Iterable[str]] = None,
    out: Printer = print,
) -> int:
    """Successful result: the envelope under ``--json``, else ``lines`` (or just ``message``)."""
    if getattr(args, "json", False):
        return structured_response(command, message=message, payload=payload)
    for line in lines if lines is not None else [message]:
        out(line)
    return 0


def report_error(args, exc: Exception) -> int:
    """Failed command: JSON error envelope on stdout, or ``Error: ...`` on stderr. Exit code 1."""
    command = getattr(args, "command", None) or "taskflow"
    if getattr(args, "json", False):
        return structured_error(command, str(exc), payload={"error": type(exc).__name__})
    print(f"Error: {exc}", file=sys.stderr)
    return 1


__all__ = ["iso_timestamp", "structured_response", "structured_error", "emit", "report_error"]
