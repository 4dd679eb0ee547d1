"""
exproto Logging

Centralized logging configuration using loguru.
All sinks write to stderr or a file; stdout is reserved for prototypes.
"""

import sys
import traceback
from pathlib import Path
from typing import Optional

from loguru import logger


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


# Global exception handler to ensure all errors are logged
def _global_exception_handler(exc_type, exc_value, exc_tb):
    """Handle uncaught exceptions globally."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return

    error_msg = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
    logger.error(f"Uncaught exception:\n{error_msg}")


# Remove default handler; sinks are added by setup_logging()
logger.remove()


def install_exception_hook():
    """Route uncaught exceptions through loguru (CLI use only)."""
    sys.excepthook = _global_exception_handler


def setup_console_only(level: str = "WARNING"):
    """
    Setup console-only logging.

    Args:
        level: Log level
    """
    logger.remove()

    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
    )


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None, file_level: str = "DEBUG") -> Optional[Path]:
    """
    Initialize logging for one extraction run.

    Args:
        level: Log level for console output
        log_file: Optional path of a log file to append to
        file_level: Log level for file output

    Returns:
        Path to the log file, or None when logging to console only
    """
    setup_console_only(level)

    if not log_file:
        return None

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logger.add(
        log_path,
        level=file_level,
        format=FILE_FORMAT,
        rotation="10 MB",
        encoding="utf-8",
        mode="a",
    )

    logger.debug(f"Logging initialized: {log_path}")
    return log_path
