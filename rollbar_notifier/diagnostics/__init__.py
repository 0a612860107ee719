# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Diagnostics logging for the notifier.

Delivery failures never reach the caller; they are written here instead.

Example:
    >>> from rollbar_notifier.diagnostics import create_logger
    >>> logger = create_logger(logger_type="stream", level="WARNING")
    >>> logger.error("POST failed", error="connection refused")
"""

from .factory import create_logger
from .logger import Logger
from .silent_logger import SilentLogger
from .stream_logger import StreamLogger

__all__ = [
    "Logger",
    "SilentLogger",
    "StreamLogger",
    "create_logger",
]
