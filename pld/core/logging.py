"""Logging utilities for pld modules."""

import logging
import os

LOG_LEVEL_ENV = "PLD_LOG_LEVEL"
PACKAGE_LOGGER = "pld"


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers and
      setup_logging() has not configured the package logger

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    # Only set default level if root logger has no handlers
    # (i.e., basicConfig hasn't been called yet)
    root_logger = logging.getLogger()
    package_level = logging.getLogger(PACKAGE_LOGGER).level
    if package_level != logging.NOTSET:
        logger.setLevel(package_level)
    elif not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def level_from_env(default: int = logging.WARNING) -> int:
    """Resolve the log level named by PLD_LOG_LEVEL (e.g. "debug", "INFO")."""
    value = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not value:
        return default
    level = logging.getLevelName(value)
    return level if isinstance(level, int) else default
