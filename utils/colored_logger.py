"""
Simple colored logging utility that matches uvicorn's format.
Provides consistent spacing and per-component coloring.

Hook processes write their log lines to stderr (hosts may parse a hook's
stdout) or, when LOG_FILE is set, only to that file.
"""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from utils.constants import DateTimeConstants


def _level_from_env() -> int:
    name = os.getenv("AGENTCRAFT_LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


class ColoredFormatter(logging.Formatter):
    """Custom formatter that matches uvicorn's spacing and adds colors."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # cyan
        "INFO": "\033[32m",  # green
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",  # red
        "CRITICAL": "\033[35m",  # magenta
    }
    RESET = "\033[0m"

    def format(self, record):
        """
        Format log record with colors matching uvicorn style.

        Args:
            record: LogRecord instance to format

        Returns:
            Formatted log message with ANSI color codes
        """
        # Match uvicorn's format: "INFO:     component:message"
        level_color = self.COLORS.get(record.levelname, "")
        return (
            f"{level_color}{record.levelname}:{self.RESET}     "
            f"{record.name}:{record.getMessage()}"
        )


class PlainFormatter(logging.Formatter):
    """Plain formatter for file logging (no colors)."""

    def format(self, record):
        timestamp = datetime.fromtimestamp(record.created).strftime(
            DateTimeConstants.ISO_DATETIME_FORMAT
        )
        # Format: timestamp LEVEL component:message
        return f"{timestamp} {record.levelname:8} {record.name}:{record.getMessage()}"


def setup_logger(name: str) -> logging.Logger:
    """
    Set up a logger that defers to the root handlers and level.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def setup_file_logging(log_file: str) -> str:
    """
    Send log records to a file, in addition to any console handler.

    Args:
        log_file: Path of the log file (parent directories are created)

    Returns:
        Absolute path to the log file
    """
    log_path = Path(log_file).expanduser()
    log_path.parent.mkdir(parents=True, exist_ok=True)
    resolved = str(log_path.absolute())

    root_logger = logging.getLogger()
    for handler in root_logger.handlers:
        if (
            isinstance(handler, logging.FileHandler)
            and handler.baseFilename == resolved
        ):
            # Already setup, don't add duplicate
            return resolved

    file_handler = logging.FileHandler(resolved, mode="a")  # Append mode
    file_handler.setFormatter(PlainFormatter())
    root_logger.addHandler(file_handler)
    return resolved


def configure_root_logging(stream=None, log_file: Optional[str] = None) -> None:
    """
    Configure root logging to match uvicorn style.

    Args:
        stream: Console stream (default: stderr)
        log_file: File-only mode when set (default: LOG_FILE env var)

    The level is read from AGENTCRAFT_LOG_LEVEL on every call; call this after
    importing config so values from .env and config.yaml apply.
    """
    log_file = log_file or os.getenv("LOG_FILE")
    root_logger = logging.getLogger()

    # Only configure if not already done
    if not any(isinstance(h.formatter, ColoredFormatter) for h in root_logger.handlers):
        if log_file:
            setup_file_logging(log_file)
        else:
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(ColoredFormatter())
            root_logger.addHandler(handler)

    root_logger.setLevel(_level_from_env())
