# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Shared fixtures for rollbar_notifier tests."""

from __future__ import annotations

import json
import threading
from typing import Any

import pytest

from rollbar_notifier.config import NotifierConfig
from rollbar_notifier.diagnostics import SilentLogger
from rollbar_notifier.transport import Transport


class RecordingTransport(Transport):
    """Transport that records decoded payloads instead of sending them.

    Set ``gate`` to hold every POST until the event is set, or ``error`` to
    make every POST raise.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.gate: threading.Event | None = None
        self.error: BaseException | None = None
        self.started = threading.Event()
        self._lock = threading.Lock()
        self._in_flight = 0
        self.max_in_flight = 0

    def post(self, url: str, body: bytes) -> None:
        with self._lock:
            self._in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self._in_flight)
        try:
            self.started.set()
            if self.gate is not None:
                self.gate.wait(timeout=5)
            with self._lock:
                self.calls.append((url, json.loads(body.decode("utf-8"))))
            if self.error is not None:
                raise self.error
        finally:
            with self._lock:
                self._in_flight -= 1

    @property
    def payloads(self) -> list[dict[str, Any]]:
        with self._lock:
            return [payload for _, payload in self.calls]


@pytest.fixture
def transport() -> RecordingTransport:
    """Create a recording transport."""
    return RecordingTransport()


@pytest.fixture
def silent_logger() -> SilentLogger:
    """Create an in-memory diagnostics logger."""
    return SilentLogger(level="DEBUG", name="rollbar-test")


@pytest.fixture
def config() -> NotifierConfig:
    """Create a notifier config with a token and a small buffer."""
    return NotifierConfig(
        access_token="test-token",
        environment="test",
        endpoint="https://rollbar.example/api/1/item/",
        buffer=10,
    )
