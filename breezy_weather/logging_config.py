"""Structured logging for Breezy Weather.

Every record is written as one JSON object to ``logs/breezy.log`` (rotated
at 10MB, 5 backups) and as a plain line to stdout. Context fields passed
through :func:`log_with_context` become top-level JSON keys.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

LOG_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "breezy.log"

JSON_FIELDS = "%(asctime)s %(name)s %(levelname)s %(message)s %(module)s %(lineno)d"
CONSOLE_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Loggers that would duplicate the upstream request logs from the httpx event hooks
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def _json_file_handler(log_dir: Path) -> logging.Handler:
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_NAME,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(
        jsonlogger.JsonFormatter(JSON_FIELDS, rename_fields={"levelname": "level", "asctime": "time"})
    )
    handler.setLevel(logging.DEBUG)
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    handler.setLevel(level)
    return handler


def setup_logging(log_level: str = "INFO", log_dir: Path | None = None) -> logging.Logger:
    """Install the JSON file handler and the console handler on the root logger.

    Args:
        log_level: Console and root level name (DEBUG ... CRITICAL)
        log_dir: Directory for the JSON log file (defaults to ./logs)

    Returns:
        The root logger
    """
    level = logging.getLevelName(log_level.upper())
    target_dir = log_dir or LOG_DIR
    target_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(_json_file_handler(target_dir))
    root_logger.addHandler(_console_handler(level))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **extra_fields: Any,
) -> None:
    """Log ``message`` with structured context.

    Field names must not clash with ``LogRecord`` attributes (``name``,
    ``message``, ``module``...); use e.g. ``city=`` instead.

    Args:
        logger: Logger instance
        level: Level name, case-insensitive (debug, info, warning, error, critical)
        message: Log message
        **extra_fields: Extra JSON fields (city, status_code, event_type, ...)
    """
    logger.log(logging.getLevelName(level.upper()), message, extra=extra_fields)
