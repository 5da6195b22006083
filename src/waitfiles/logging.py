"""Logging configuration for waitfiles.

Uses Python's standard logging module with support for:
- File logging via config or WAITFILES_LOG environment variable
- Verbosity levels: error(0), warning(1), info(2), verbose(3), trace(4)
- WAITFILES_LOG_LEVEL / WAITFILES_VERBOSE environment overrides
- Structured format with timestamps and level names on stderr
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from waitfiles.config.schema import LoggingConfig

# Custom log levels
TRACE = 5
VERBOSE = 15

logging.addLevelName(TRACE, "TRACE")
logging.addLevelName(VERBOSE, "VERBOSE")

# Module-level logger
logger = logging.getLogger("waitfiles")

DEFAULT_VERBOSITY = 2

_initialized = False
_handlers: list[logging.Handler] = []

# Map string level names to logging constants
_LEVEL_MAP = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "VERBOSE": VERBOSE,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# Map --verbose=N to log levels (0=errors only, 4=everything)
_VERBOSITY_MAP = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: VERBOSE,
    4: TRACE,
}


class _LowercaseLevelFormatter(logging.Formatter):
    """Formatter that emits lowercase level names."""

    def format(self, record: logging.LogRecord) -> str:
        record.levelname = record.levelname.lower()
        return super().format(record)


def level_for_verbosity(verbose: int) -> int:
    """Map a verbosity count to a logging level, clamping out-of-range values."""
    if verbose <= 0:
        return logging.ERROR
    return _VERBOSITY_MAP.get(verbose, TRACE)


def level_for_name(name: str) -> int:
    """Map a level name such as "debug" to a logging level (INFO if unknown)."""
    return _LEVEL_MAP.get(name.upper(), logging.INFO)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Initialize logging based on configuration.

    Call this once at startup. Subsequent calls are no-ops.

    Verbosity levels (--verbose / config.logging.verbose):
        0 = error    - errors only
        1 = warning  - errors + warnings
        2 = info     - normal operation (default)
        3 = verbose  - detailed diagnostics
        4 = trace    - everything

    Args:
        config: Optional LoggingConfig with level, verbose, and file settings.
    """
    global _initialized
    if _initialized:
        return
    _initialized = True

    # verbose (int) takes precedence over level (str)
    log_level = logging.INFO
    if config:
        if config.verbose is not None:
            log_level = level_for_verbosity(config.verbose)
        elif config.level:
            log_level = level_for_name(config.level)

    logger.setLevel(log_level)

    # Format: HH:MM:SS level: message
    formatter = _LowercaseLevelFormatter(
        "%(asctime)s %(levelname)s: %(message)s", datefmt="%H:%M:%S"
    )

    _add_stderr_handler(formatter, log_level)

    log_path = config.file if config and config.file else os.environ.get("WAITFILES_LOG")
    if log_path:
        log_path = os.path.expanduser(log_path)
        try:
            file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
        except OSError as e:
            logger.warning("Failed to open log file %s: %s", log_path, e)
        else:
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            _install(file_handler)


def _install(handler: logging.Handler) -> None:
    logger.addHandler(handler)
    _handlers.append(handler)


def _add_stderr_handler(formatter: logging.Formatter, level: int = logging.DEBUG) -> None:
    """Add a stderr handler to the logger."""
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(level)
    stderr_handler.setFormatter(formatter)
    _install(stderr_handler)


def reset_logging() -> None:
    """Remove installed handlers so setup_logging() can run again.

    Useful for testing.
    """
    global _initialized
    for handler in _handlers:
        logger.removeHandler(handler)
        handler.close()
    _handlers.clear()
    logger.setLevel(logging.NOTSET)
    _initialized = False


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Optional name for a child logger (e.g., "waiter", "coordinator").
              If None, returns the root waitfiles logger.

    Returns:
        A configured logger instance.
    """
    if name:
        return logger.getChild(name)
    return logger
