"""
Logging configuration for the resolver and its command-line front end.
Console output is opt-in; the library itself only creates namespaced loggers.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional

ROOT_LOGGER_NAME = "uiauto_breadcrumb"

# Module-level logger cache
_loggers: Dict[str, logging.Logger] = {}
_initialized: bool = False


class BreadcrumbLogFormatter(logging.Formatter):
    """Formatter with millisecond timestamps and optional thread name."""

    def __init__(self, include_thread: bool = False):
        self.include_thread = include_thread
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
        level = record.levelname.ljust(8)
        name = record.name

        if self.include_thread:
            thread = record.threadName[:12].ljust(12)
            prefix = f"[{timestamp}] [{level}] [{thread}] {name}: "
        else:
            prefix = f"[{timestamp}] [{level}] {name}: "

        message = record.getMessage()

        if record.exc_info:
            message += "\n" + self.formatException(record.exc_info)

        return prefix + message


def setup_logging(
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
    log_file: Optional[Path] = None,
) -> None:
    """
    Attach console (stderr) and optional file handlers to the package logger.

    Args:
        console_level: Logging level for console output
        file_level: Logging level for file output
        log_file: Optional path to a log file
    """
    global _initialized

    if _initialized:
        return

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(min(console_level, file_level) if log_file else console_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(BreadcrumbLogFormatter(include_thread=False))
    root_logger.addHandler(console_handler)

    if log_file is not None:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
            file_handler.setLevel(file_level)
            file_handler.setFormatter(BreadcrumbLogFormatter(include_thread=True))
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not create log file: {e}")

    _initialized = True
    root_logger.debug("Logging initialized")


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger under the package namespace
    """
    if name not in _loggers:
        if name.startswith(ROOT_LOGGER_NAME):
            _loggers[name] = logging.getLogger(name)
        else:
            _loggers[name] = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")

    return _loggers[name]
