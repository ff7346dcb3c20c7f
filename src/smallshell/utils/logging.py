"""Logging setup for smallshell."""

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

# Module-level logger
logger = logging.getLogger("smallshell")

# Attributes every LogRecord has; anything else came in through ``extra``
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """JSON formatter for machine-readable logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Fields passed via ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRS:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data["module"] = record.module
        log_data["function"] = record.funcName
        log_data["line"] = record.lineno

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "WARNING",
    log_file: Path | None = None,
    json_format: bool = False,
    use_color: bool = True,
) -> logging.Logger:
    """Configure logging for smallshell.

    Console logs go to stderr so they never mix with command output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file path for logging.
        json_format: Use JSON format for console logs.
        use_color: Use colors in console output.

    Returns:
        Configured logger instance.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    logger.setLevel(numeric_level)
    logger.handlers.clear()

    console_handler: logging.Handler
    if json_format:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler = RichHandler(
            console=Console(stderr=True, no_color=not use_color),
            show_time=False,
            show_path=False,
            rich_tracebacks=True,
        )
    console_handler.setLevel(numeric_level)
    logger.addHandler(console_handler)

    # File handler (always JSON for parsing)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    # Don't propagate to root logger
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a child logger for a module.

    Args:
        name: Module name (e.g., 'smallshell.shell.repl').

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
