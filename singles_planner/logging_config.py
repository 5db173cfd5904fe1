"""
Logging setup for the CLI and the API.

The CLI logs through rich so records line up with its tables; the API can
emit one JSON object per line for log shippers.
"""

import json
import logging
import sys
from datetime import datetime, timezone

from rich.console import Console
from rich.logging import RichHandler


class JSONFormatter(logging.Formatter):
    """Structured JSON log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = {
                "type": type(record.exc_info[1]).__name__,
                "message": str(record.exc_info[1]),
            }
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", fmt: str = "rich") -> None:
    """
    Configure the root logger once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING...)
        fmt: "rich" for a stderr RichHandler, "json" for JSON lines on stdout
    """
    root = logging.getLogger()
    if root.handlers:
        return

    if fmt == "json":
        handler: logging.Handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True), show_path=False, rich_tracebacks=True
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
