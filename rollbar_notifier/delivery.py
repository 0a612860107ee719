# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Bounded delivery queue with a single background worker."""

import json
import queue
import threading

import requests

from .config import NotifierConfig
from .diagnostics import Logger, create_logger
from .errors import HTTPStatusError
from .report import Report
from .transport import HTTPTransport, Transport


class DrainBarrier:
    """Counter of reports that are queued or being delivered.

    ``wait()`` blocks until the count drops to zero. It does not take a
    snapshot: reports added while waiting are waited for too.
    """

    def __init__(self) -> None:
        self._pending = 0
        self._cond = threading.Condition()

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending

    def add(self) -> None:
        with self._cond:
            self._pending += 1

    def done(self) -> None:
        with self._cond:
            if self._pending <= 0:
                raise ValueError("DrainBarrier.done() called more times than add()")
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until nothing is pending.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely

        Returns:
            True if drained, False if the timeout expired first
        """
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout=timeout)


class DeliveryQueue:
    """FIFO of reports drained by one daemon worker thread.

    ``enqueue`` never blocks: when the buffer is full the report is dropped.
    The worker makes exactly one delivery attempt per report and keeps running
    for the life of the process; there is no stop.

    Usage example:
        delivery = DeliveryQueue(config)
        delivery.start()
        delivery.enqueue(report)
        delivery.barrier.wait()
    """

    def __init__(
        self,
        config: NotifierConfig,
        transport: Transport | None = None,
        logger: Logger | None = None,
    ):
        """Initialize the delivery queue (idle until start() is called).

        Args:
            config: Notifier settings; ``buffer`` fixes the capacity
            transport: Transport used for POSTs (HTTPTransport by default)
            logger: Diagnostics logger (stderr stream logger by default)
        """
        self.config = config
        self.capacity = config.buffer
        self.transport = transport or HTTPTransport(timeout_seconds=config.timeout_seconds)
        self.logger = logger or create_logger()
        self.barrier = DrainBarrier()

        self._queue: "queue.Queue[Report]" = queue.Queue(maxsize=self.capacity)
        self._enqueue_lock = threading.Lock()
        self._start_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def pending(self) -> int:
        """Reports accepted but not yet attempted."""
        return self.barrier.pending

    def is_running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        """Start the worker thread. Calling it again has no effect."""
        with self._start_lock:
            if self._thread is not None:
                return
            self._thread = threading.Thread(target=self._run_loop, name="rollbar-delivery", daemon=True)
            self._thread.start()

    def enqueue(self, report: Report) -> bool:
        """Queue a report for delivery without blocking.

        Returns:
            True if accepted; False if the buffer was full and the report dropped
        """
        # Only the worker removes items, so a non-full check under this lock
        # guarantees the put below succeeds.
        with self._enqueue_lock:
            if self._queue.full():
                self.logger.error("buffer full, dropping report", capacity=self.capacity)
                return False
            self.barrier.add()
            self._queue.put_nowait(report)
        return True

    def _run_loop(self) -> None:
        while True:
            report = self._queue.get()
            try:
                self.deliver(report)
            except Exception as e:
                self.logger.error("unexpected delivery failure", error=str(e), exc_info=True)
            finally:
                self.barrier.done()

    def deliver(self, report: Report) -> bool:
        """Make a single delivery attempt for one report.

        Every failure is logged and the report discarded.

        Returns:
            True if the endpoint accepted the report
        """
        if not self.config.access_token:
            self.logger.error("empty token")
            return False

        try:
            body = json.dumps(report.to_payload(), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            self.logger.error(f"failed to encode payload: {e}")
            return False

        try:
            self.transport.post(self.config.endpoint, body)
        except HTTPStatusError as e:
            self.logger.error(f"received response: {e.status_code}", status_code=e.status_code)
            return False
        except requests.RequestException as e:
            self.logger.error(f"POST failed: {e}")
            return False

        return True
