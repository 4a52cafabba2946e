"""
Timestamp Microservice - Structured JSON Logging

Provides JSON-formatted logging for consistent API log output.
Logs to the console and, optionally, to a rotating file under LOGS_DIR
(e.g. logs/api.log when started through run_server.py --log-file).
"""

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

# Default log directory
LOGS_DIR = Path(os.getenv("LOGS_DIR", "logs"))

# LogRecord attributes that are never treated as `extra` context
RESERVED_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """Formatter that renders each record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string with timestamp, level, logger, message, and extra fields
        """
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "extra": {
                key: value for key, value in record.__dict__.items() if key not in RESERVED_ATTRS
            },
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


# Track whether logging has been set up
_logging_configured = False


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_console: bool = True,
) -> None:
    """
    Configure the root logger for JSON output.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR).
               Falls back to the LOG_LEVEL environment variable, then INFO.
        log_file: Optional file name created inside LOGS_DIR (e.g. "api.log")
        enable_console: Whether to also log to stderr (default: True)

    Raises:
        ValueError: If the level name is not a logging level
    """
    global _logging_configured

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(console_handler)

    # Rotating, 10 MB per file, 5 backups
    if log_file:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            LOGS_DIR / log_file, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8"
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger, configuring JSON logging on first use.

    Args:
        name: Name for the logger (typically __name__)
    """
    if not _logging_configured:
        setup_logging()

    return logging.getLogger(name)
