# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Asynchronous error and message reporting to Rollbar.

Reports are built on the calling thread and delivered by a single background
worker, so reporting never blocks and never raises into application code.

Example:
    >>> from rollbar_notifier import NotifierConfig, create_error_reporter
    >>> reporter = create_error_reporter(config=NotifierConfig(access_token="..."))
    >>> reporter.report_message("info", "deploy finished")
    >>> reporter.wait_until_drained()
"""

from typing import Any

from .config import NotifierConfig
from .delivery import DeliveryQueue, DrainBarrier
from .errors import GenericError, HTTPStatusError, TypedError
from .report import NOTIFIER_NAME, NOTIFIER_VERSION, HTTPRequest, Level, Report, ReportBuilder
from .reporter import ErrorReporter, RollbarErrorReporter, SilentErrorReporter

__version__ = NOTIFIER_VERSION


def create_error_reporter(
    reporter_type: str = "rollbar",
    config: NotifierConfig | None = None,
    **kwargs: Any,
) -> ErrorReporter:
    """Create an error reporter based on type.

    Args:
        reporter_type: Type of reporter ("rollbar", "silent")
        config: Notifier settings for the rollbar reporter; read from the
            environment when omitted
        **kwargs: Passed to RollbarErrorReporter (transport, logger)

    Returns:
        ErrorReporter instance

    Raises:
        ValueError: If reporter_type is unknown
    """
    if reporter_type == "rollbar":
        return RollbarErrorReporter(config or NotifierConfig.from_env(), **kwargs)
    elif reporter_type == "silent":
        return SilentErrorReporter()
    else:
        raise ValueError(f"Unknown reporter type: {reporter_type}")


__all__ = [
    "__version__",
    "NOTIFIER_NAME",
    # Configuration
    "NotifierConfig",
    # Reporting
    "ErrorReporter",
    "RollbarErrorReporter",
    "SilentErrorReporter",
    "create_error_reporter",
    # Building blocks
    "DeliveryQueue",
    "DrainBarrier",
    "GenericError",
    "HTTPRequest",
    "HTTPStatusError",
    "Level",
    "Report",
    "ReportBuilder",
    "TypedError",
]
