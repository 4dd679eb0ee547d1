"""
exproto Core Module

Contains configuration, exceptions and logging setup.
"""

from .config import Config, DEFAULT_CPP_COMMAND, OUTPUT_FORMATS, LOG_LEVELS
from .exceptions import ExprotoError, InputOpenError, OutputOpenError, PreprocessorError
from .logging import (
    logger,
    setup_logging,
    setup_console_only,
    install_exception_hook,
)

__all__ = [
    # Config
    "Config",
    "DEFAULT_CPP_COMMAND",
    "OUTPUT_FORMATS",
    "LOG_LEVELS",
    # Exceptions
    "ExprotoError",
    "InputOpenError",
    "OutputOpenError",
    "PreprocessorError",
    # Logging
    "logger",
    "setup_logging",
    "setup_console_only",
    "install_exception_hook",
]
