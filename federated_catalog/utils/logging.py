"""Log output setup for the fedcat CLI and per-command log context."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_FORMATS = ["text", "json"]

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Renders each record as one JSON object per line.

    Context attached by a CommandLogAdapter is merged into the top level of
    the object, so a record logged while running DESCRIBE carries
    ``"command": "DescribeTableAdapter"``.
    """

    def format(self, record: logging.LogRecord) -> str:
        document: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "command_context", None)
        if context:
            document.update(context)
        if record.exc_info:
            document["exception"] = self.formatException(record.exc_info)
        return json.dumps(document, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    """Formatter for one of LOG_FORMATS."""
    if log_format == "json":
        return JsonFormatter()
    if log_format == "text":
        return logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    raise ValueError(f"Unknown log format: {log_format}")


def setup_logging(
    level: str = "WARNING",
    log_format: str = "text",
    log_file: Optional[str] = None,
) -> None:
    """Send log records to stderr, and to a file when one is given.

    Stdout is left to command results.

    Args:
        level: One of LOG_LEVELS
        log_format: One of LOG_FORMATS
        log_file: Path appended to in addition to stderr
    """
    formatter = build_formatter(log_format)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=getattr(logging, level.upper()), handlers=handlers, force=True)


class CommandLogAdapter(logging.LoggerAdapter):
    """Attaches the running command's context to every record."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.setdefault("extra", {})
        extra["command_context"] = self.extra
        return msg, kwargs


def get_contextual_logger(name: str, context: Dict[str, Any]) -> CommandLogAdapter:
    """Logger whose records carry context, e.g. ``{"command": "ShowTablesAdapter"}``."""
    return CommandLogAdapter(logging.getLogger(name), context)
