"""
Central logging configuration.
Creates file and console handlers with support for TRACE/INFO/WARNING/ERROR levels.
"""
from __future__ import annotations

import functools
import logging
import os
import time
from typing import Any, Callable, Optional, TypeVar

from inventory.core.config import settings

F = TypeVar("F", bound=Callable[..., Any])

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def trace(self: logging.Logger, message: str, *args, **kwargs) -> None:
    """Emit a TRACE-level message on the logger instance."""
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = trace  # type: ignore[attr-defined]


class LogLevelFilter(logging.Filter):
    """Filter log records to an allowed set of levels."""

    def __init__(self, allowed_levels: set[int]) -> None:
        super().__init__()
        self._allowed_levels = allowed_levels

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno in self._allowed_levels


_LEVEL_NAMES = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_allowed_levels(raw: Optional[str]) -> set[int]:
    """Parse a comma separated list of level names into numeric values."""
    default_levels = {TRACE_LEVEL, logging.INFO, logging.WARNING, logging.ERROR}
    if not raw:
        return default_levels

    levels: set[int] = set()
    for level_name in raw.split(","):
        normalized = level_name.strip().upper()
        if normalized in _LEVEL_NAMES:
            levels.add(_LEVEL_NAMES[normalized])
    return levels or default_levels


def resolve_level(level_name: Optional[str]) -> int:
    """Resolve the configured log level string to its numeric value."""
    if not level_name:
        return logging.INFO
    return _LEVEL_NAMES.get(level_name.strip().upper(), logging.INFO)


def configure_logging(log_file_path: Optional[str] = None) -> None:
    """Configure root logger with console + file handlers."""
    log_file_path = log_file_path or settings.LOG_FILE_PATH
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    root_logger = logging.getLogger()
    root_logger.setLevel(resolve_level(settings.LOG_LEVEL))
    root_logger.handlers.clear()

    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    )
    level_filter = LogLevelFilter(parse_allowed_levels(settings.LOG_LEVELS))

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(level_filter)

    file_handler = logging.FileHandler(log_file_path)
    file_handler.setFormatter(formatter)
    file_handler.addFilter(level_filter)

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)


def log_db_timing(func: F) -> F:
    """
    Decorator to log the execution time of store operations.
    Logs the qualified function name, the arguments (excluding 'self'
    and the connection) and the duration in milliseconds.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)

        # args[0] is the store, args[1] the sqlite connection
        arg_parts = [str(arg) for arg in args[2:]]
        arg_parts.extend(f"{key}={value}" for key, value in kwargs.items())
        args_str = ", ".join(arg_parts)

        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                "DB_OP | %s | duration=%.3fms | args=(%s) | error=%s",
                func.__qualname__,
                elapsed_ms,
                args_str,
                exc,
            )
            raise
        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.trace(
            "DB_OP | %s | duration=%.3fms | args=(%s)",
            func.__qualname__,
            elapsed_ms,
            args_str,
        )
        return result
    return wrapper  # type: ignore[return-value]
