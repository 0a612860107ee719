# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""In-memory logger for tests."""

import threading
from typing import Any

from .logger import Logger


class SilentLogger(Logger):
    """Logger that records entries in memory without any output.

    The delivery worker logs from its own thread, so appends and reads are
    guarded by a lock.
    """

    def __init__(self, level: str = "INFO", name: str | None = None):
        self.level = level.upper()
        self.name = name or "rollbar"
        self.logs: list[dict[str, Any]] = []
        self._lock = threading.Lock()

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        entry: dict[str, Any] = {"level": level, "message": message}
        if kwargs:
            entry["extra"] = kwargs
        with self._lock:
            self.logs.append(entry)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def clear_logs(self) -> None:
        """Clear all stored log entries."""
        with self._lock:
            self.logs.clear()

    def get_logs(self, level: str | None = None) -> list[dict[str, Any]]:
        """Return a snapshot of stored entries, optionally filtered by level."""
        with self._lock:
            logs = list(self.logs)
        if level is None:
            return logs
        return [log for log in logs if log["level"] == level]

    def has_log(self, message: str, level: str | None = None) -> bool:
        """Check whether any stored entry contains ``message`` (substring match)."""
        return any(message in log["message"] for log in self.get_logs(level))
