"""Logging helpers for the sheetbind package."""

# Module responsibilities:
# - Centralize logging configuration with a stream handler and an optional rotating file handler.
# - Provide get_logger() that configures the package logger once and hands out child loggers.

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path
from typing import Optional

LOG_DIR_ENV = "SHEETBIND_LOG_DIR"
LOG_FILE_NAME = "sheetbind.log"
_LOG_CONFIGURED = False


def _resolve_log_dir(log_dir: Optional[Path] = None) -> Optional[Path]:
    """Resolve the log directory from the argument or environment, ensuring existence."""

    target = log_dir
    if target is None and os.environ.get(LOG_DIR_ENV):
        target = Path(os.environ[LOG_DIR_ENV]).expanduser()
    if target is None:
        return None
    target.mkdir(parents=True, exist_ok=True)
    return target


def _configure_logging(log_dir: Optional[Path] = None) -> None:
    """Configure the package logger once with console and optional file handlers."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    package_logger = logging.getLogger("sheetbind")
    package_logger.setLevel(logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.WARNING)
    package_logger.addHandler(console_handler)

    directory = _resolve_log_dir(log_dir)
    if directory is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            directory / LOG_FILE_NAME, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.INFO)
        package_logger.addHandler(file_handler)

    package_logger.propagate = False
    _LOG_CONFIGURED = True


def set_level(level: str | int) -> None:
    """Adjust the package logger and its console handler, e.g. from a CLI flag."""

    _configure_logging()
    package_logger = logging.getLogger("sheetbind")
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        if not isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(level)


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the ``sheetbind`` namespace.
        log_dir: Optional directory for a rotating log file; falls back to
            ``$SHEETBIND_LOG_DIR`` and to console-only logging when neither is set.

    Returns:
        Logger scoped under ``sheetbind``.
    """

    _configure_logging(log_dir)
    return logging.getLogger(f"sheetbind.{name}")


def reset_logging() -> None:
    """Drop configured handlers so the next get_logger() reconfigures. Used by tests."""
    global _LOG_CONFIGURED
    package_logger = logging.getLogger("sheetbind")
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    _LOG_CONFIGURED = False
