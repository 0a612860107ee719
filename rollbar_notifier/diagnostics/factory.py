# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Factory for diagnostics loggers."""

import os

from .logger import Logger
from .silent_logger import SilentLogger
from .stream_logger import StreamLogger


def _default(value: str | None, env_var: str, fallback: str) -> str:
    """Pick an explicit value, then the env var, then the fallback."""
    return value or os.getenv(env_var) or fallback


def create_logger(
    logger_type: str | None = None,
    level: str | None = None,
    name: str | None = None,
) -> Logger:
    """Create a diagnostics logger.

    Args:
        logger_type: "stream" or "silent". Defaults to LOG_TYPE env or "stream".
        level: DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL env or "INFO".
        name: Logger name. Defaults to LOG_NAME env or "rollbar".

    Returns:
        Logger instance

    Raises:
        ValueError: If logger_type is not recognized

    Example:
        >>> logger = create_logger(logger_type="silent")
        >>> logger.error("buffer full, dropping report")
    """
    logger_type = _default(logger_type, "LOG_TYPE", "stream").lower()
    level = _default(level, "LOG_LEVEL", "INFO").upper()
    name = _default(name, "LOG_NAME", "rollbar")

    if logger_type == "stream":
        return StreamLogger(level=level, name=name)
    elif logger_type == "silent":
        return SilentLogger(level=level, name=name)
    else:
        raise ValueError(f"Unknown logger_type: {logger_type}. Must be one of: stream, silent")
