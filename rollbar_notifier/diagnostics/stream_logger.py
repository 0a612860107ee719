# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Logger writing structured JSON lines to an operator-facing stream."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, TextIO

from .logger import Logger

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class StreamLogger(Logger):
    """Writes one JSON object per line to a text stream (stderr by default).

    Entries at or above the level are also emitted through the stdlib logger
    of the same name so host applications and test harnesses (caplog) can
    capture them.
    """

    def __init__(self, level: str = "INFO", name: str | None = None, stream: TextIO | None = None):
        """Initialize stream logger.

        Args:
            level: Minimum level written to the stream
            name: Logger name, also used for the stdlib logger
            stream: Destination; resolved to sys.stderr at write time when None
        """
        self.level = level.upper()
        self.name = name or "rollbar"
        self._stream = stream

        if self.level not in LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {list(LEVELS)}")

        self._stdlib_logger = logging.getLogger(self.name)

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        if LEVELS[level] < LEVELS[self.level]:
            return

        exc_info = kwargs.pop("exc_info", None)

        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }
        if kwargs:
            entry["extra"] = kwargs
        try:
            line = json.dumps(entry, default=str)
        except (TypeError, ValueError) as e:
            line = f"{level}: {message} (JSON serialization failed: {e})"
        print(line, file=self.stream, flush=True)

        extra = {"extra": kwargs} if kwargs else None
        self._stdlib_logger.log(LEVELS[level], message, exc_info=exc_info, extra=extra)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)
