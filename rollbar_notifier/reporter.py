# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Error reporter interface and its Rollbar and in-memory implementations."""

from abc import ABC, abstractmethod
from typing import Any

from .config import NotifierConfig
from .delivery import DeliveryQueue
from .diagnostics import Logger, create_logger
from .errors import classify_error, error_class
from .report import HTTPRequest, Level, ReportBuilder, coerce_level, title_of
from .transport import Transport


class ErrorReporter(ABC):
    """Abstract base class for error reporting.

    Lets host code emit errors and messages without knowing which backend
    receives them.
    """

    @abstractmethod
    def report(self, error: Exception, context: dict[str, Any] | None = None) -> None:
        """Report an exception with optional context.

        Args:
            error: The exception to report
            context: Optional dictionary with additional context (user_id, request_id, etc.)
        """

    @abstractmethod
    def capture_message(
        self,
        message: str,
        level: str = "error",
        context: dict[str, Any] | None = None,
    ) -> None:
        """Capture a message without an exception.

        Args:
            message: The message to capture
            level: Severity level (debug, info, warning, error, critical)
            context: Optional dictionary with additional context
        """


class RollbarErrorReporter(ErrorReporter):
    """Reports errors and messages to Rollbar asynchronously.

    Every reporting call builds the report on the calling thread, hands it to
    the delivery queue and returns at once. Nothing raised while building or
    delivering reaches the caller; problems go to the diagnostics logger.

    Example:
        reporter = RollbarErrorReporter(NotifierConfig(access_token="..."))
        try:
            handle()
        except Exception as exc:
            reporter.report_error("error", exc)
        reporter.wait_until_drained()
    """

    def __init__(
        self,
        config: NotifierConfig,
        transport: Transport | None = None,
        logger: Logger | None = None,
    ):
        """Initialize the reporter and start its delivery worker.

        Args:
            config: Notifier settings
            transport: Optional transport (HTTPTransport by default)
            logger: Optional diagnostics logger
        """
        self.config = config
        self.logger = logger or create_logger()
        self.builder = ReportBuilder(config)
        self.delivery = DeliveryQueue(config, transport=transport, logger=self.logger)
        self.delivery.start()

    @property
    def pending(self) -> int:
        """Reports accepted but not yet attempted."""
        return self.delivery.pending

    def report_error(
        self,
        level: Level | str,
        error: Any,
        skip: int = 0,
        custom: dict[str, Any] | None = None,
    ) -> bool:
        """Queue an error report with the caller's stack trace.

        Args:
            level: Severity level
            error: The error to report
            skip: Extra stack frames to drop above the caller
            custom: Optional additional data

        Returns:
            True if the report was queued
        """
        level = self._resolve_level(level)
        try:
            report = self.builder.build_error_report(level, error, skip=skip + 1, custom=custom)
        except Exception as e:
            self.logger.error(f"failed to build error report: {e}", exc_info=True)
            return False
        return self.delivery.enqueue(report)

    def report_error_with_request(
        self,
        level: Level | str,
        error: Any,
        request: HTTPRequest,
        skip: int = 0,
        custom: dict[str, Any] | None = None,
    ) -> bool:
        """Queue an error report that includes redacted request details."""
        level = self._resolve_level(level)
        try:
            report = self.builder.build_request_error_report(
                level, error, request, skip=skip + 1, custom=custom
            )
        except Exception as e:
            self.logger.error(f"failed to build error report: {e}", exc_info=True)
            return False
        return self.delivery.enqueue(report)

    def report_message(
        self,
        level: Level | str,
        text: str,
        custom: dict[str, Any] | None = None,
    ) -> bool:
        """Queue a plain message report."""
        level = self._resolve_level(level)
        try:
            report = self.builder.build_message_report(level, text, custom=custom)
        except Exception as e:
            self.logger.error(f"failed to build message report: {e}", exc_info=True)
            return False
        return self.delivery.enqueue(report)

    def wait_until_drained(self, timeout: float | None = None) -> bool:
        """Block until every queued report has had its delivery attempt.

        Returns:
            True if drained, False if ``timeout`` expired first
        """
        return self.delivery.barrier.wait(timeout)

    def report(self, error: Exception, context: dict[str, Any] | None = None) -> None:
        self.report_error(Level.ERROR, error, skip=1, custom=context)

    def capture_message(
        self,
        message: str,
        level: str = "error",
        context: dict[str, Any] | None = None,
    ) -> None:
        self.report_message(level, message, custom=context)

    def _resolve_level(self, level: Level | str) -> Level:
        try:
            return coerce_level(level)
        except ValueError:
            self.logger.warning(f"unknown level {level!r}, reporting as error")
            return Level.ERROR


class SilentErrorReporter(ErrorReporter):
    """Error reporter that keeps what it would have sent in memory.

    Entries carry the resolved Level, the title and, for errors, the class
    label Rollbar would group by. No delivery worker is started, which makes
    it useful in host application tests.
    """

    def __init__(self) -> None:
        self.reported_errors: list[dict[str, Any]] = []
        self.captured_messages: list[dict[str, Any]] = []

    def report(self, error: Exception, context: dict[str, Any] | None = None) -> None:
        reported = classify_error(error)
        self.reported_errors.append({
            "level": Level.ERROR,
            "title": title_of(reported.message),
            "exception_class": error_class(reported),
            "exception_message": reported.message,
            "custom": dict(context or {}),
        })

    def capture_message(
        self,
        message: str,
        level: str = "error",
        context: dict[str, Any] | None = None,
    ) -> None:
        try:
            resolved = coerce_level(level)
        except ValueError:
            resolved = Level.ERROR
        self.captured_messages.append({
            "level": resolved,
            "title": title_of(str(message)),
            "body": str(message),
            "custom": dict(context or {}),
        })

    def has_errors(self) -> bool:
        return bool(self.reported_errors)

    def clear(self) -> None:
        """Forget everything recorded so far."""
        self.reported_errors.clear()
        self.captured_messages.clear()
