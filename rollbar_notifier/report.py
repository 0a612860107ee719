# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Report construction: metadata envelope, error/message bodies and request context."""

import socket
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping
from urllib.parse import parse_qs, urlencode, urlsplit

from .config import NotifierConfig
from .errors import ReportedError, classify_error, error_class
from .fingerprint import fingerprint
from .redaction import compile_filter, filter_params, flatten_values
from .stack import Frame, build_stack

NOTIFIER_NAME = "rollbar-notifier"
NOTIFIER_VERSION = "0.2.0"
LANGUAGE = "python"

# build_stack, _trace_body and the public build_* method sit between the
# walker and whoever called the builder.
_INTERNAL_FRAMES = 3


class Level(str, Enum):
    """Severity levels accepted by Rollbar."""
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    DEBUG = "debug"


def coerce_level(level: "Level | str") -> Level:
    """Return the Level for a level name (case-insensitive).

    Raises:
        ValueError: If the name is not one of the known levels
    """
    if isinstance(level, Level):
        return level
    return Level(str(level).strip().lower())


def title_of(text: str) -> str:
    """Return ``text`` up to, but not including, its first newline."""
    return text.split("\n", 1)[0]


@dataclass(frozen=True)
class HTTPRequest:
    """The parts of an incoming HTTP request attached to error reports.

    Header and form values may be single strings or sequences of strings.
    """
    url: str
    method: str = "GET"
    headers: Mapping[str, Any] = field(default_factory=dict)
    form: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RequestContext:
    """Request details as sent to Rollbar, already redacted."""
    url: str
    method: str
    headers: dict[str, Any]
    query_string: str
    get: dict[str, Any]
    post: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "method": self.method,
            "headers": self.headers,
            "query_string": self.query_string,
            "GET": self.get,
            "POST": self.post,
        }


@dataclass(frozen=True)
class TraceBody:
    frames: tuple[Frame, ...]
    exception_class: str
    exception_message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "trace": {
                "frames": [frame.to_dict() for frame in self.frames],
                "exception": {
                    "class": self.exception_class,
                    "message": self.exception_message,
                },
            }
        }


@dataclass(frozen=True)
class MessageBody:
    body: str

    def to_dict(self) -> dict[str, Any]:
        return {"message": {"body": self.body}}


@dataclass(frozen=True)
class Report:
    """A fully assembled report, ready for delivery.

    Reports are created once by ReportBuilder and never modified.
    """
    access_token: str
    environment: str
    level: Level
    title: str
    timestamp: int
    platform: str
    host: str
    body: TraceBody | MessageBody
    fingerprint: str | None = None
    request: RequestContext | None = None
    custom: dict[str, Any] | None = None
    language: str = LANGUAGE
    notifier_name: str = NOTIFIER_NAME
    notifier_version: str = NOTIFIER_VERSION

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON document POSTed to the Rollbar item API."""
        data: dict[str, Any] = {
            "environment": self.environment,
            "title": self.title,
            "level": self.level.value,
            "timestamp": self.timestamp,
            "platform": self.platform,
            "language": self.language,
            "server": {"host": self.host},
            "notifier": {"name": self.notifier_name, "version": self.notifier_version},
            "body": self.body.to_dict(),
        }
        if self.fingerprint is not None:
            data["fingerprint"] = self.fingerprint
        if self.request is not None:
            data["request"] = self.request.to_dict()
        if self.custom:
            data["custom"] = dict(self.custom)
        return {"access_token": self.access_token, "data": data}


def _hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return ""


def _query_of(url: str) -> str:
    # urlsplit rejects malformed hosts such as "http://[::1/"
    try:
        return urlsplit(str(url)).query
    except ValueError:
        return ""


class ReportBuilder:
    """Builds Report objects from errors, messages and requests.

    Usage example:
        builder = ReportBuilder(NotifierConfig(access_token="..."))
        report = builder.build_error_report(Level.ERROR, exc)
    """

    def __init__(self, config: NotifierConfig):
        self.config = config
        self._filter = compile_filter(config.filter_fields)

    def build_error_report(
        self,
        level: "Level | str",
        error: Any,
        skip: int = 0,
        custom: Mapping[str, Any] | None = None,
    ) -> Report:
        """Build an error report with the stack of the calling code.

        Args:
            level: Severity level
            error: Exception, boundary variant or any other value
            skip: Extra frames to drop beyond the caller of this method
            custom: Optional additional data attached to the report
        """
        reported = classify_error(error)
        body, stack_fingerprint = self._trace_body(reported, skip)
        return self._envelope(
            level,
            title_of(reported.message),
            body,
            fingerprint=stack_fingerprint,
            custom=custom,
        )

    def build_request_error_report(
        self,
        level: "Level | str",
        error: Any,
        request: HTTPRequest,
        skip: int = 0,
        custom: Mapping[str, Any] | None = None,
    ) -> Report:
        """Build an error report that also carries redacted request details."""
        reported = classify_error(error)
        body, stack_fingerprint = self._trace_body(reported, skip)
        return self._envelope(
            level,
            title_of(reported.message),
            body,
            fingerprint=stack_fingerprint,
            request=self.request_context(request),
            custom=custom,
        )

    def build_message_report(
        self,
        level: "Level | str",
        message: str,
        custom: Mapping[str, Any] | None = None,
    ) -> Report:
        """Build a plain message report; the body keeps the full text."""
        message = str(message)
        return self._envelope(level, title_of(message), MessageBody(body=message), custom=custom)

    def request_context(self, request: HTTPRequest) -> RequestContext:
        """Extract redacted request details. The request itself is left untouched."""
        query = parse_qs(_query_of(request.url), keep_blank_values=True)
        clean_query = filter_params(query, self._filter)
        clean_form = filter_params(request.form or {}, self._filter)

        return RequestContext(
            url=request.url,
            method=request.method,
            headers=flatten_values(request.headers or {}),
            query_string=urlencode(sorted(clean_query.items()), doseq=True),
            get=flatten_values(clean_query),
            post=flatten_values(clean_form),
        )

    def _trace_body(self, reported: ReportedError, skip: int) -> tuple[TraceBody, str]:
        stack = build_stack(_INTERNAL_FRAMES + max(skip, 0))
        body = TraceBody(
            frames=tuple(stack),
            exception_class=error_class(reported),
            exception_message=reported.message,
        )
        return body, fingerprint(stack)

    def _envelope(
        self,
        level: "Level | str",
        title: str,
        body: TraceBody | MessageBody,
        *,
        fingerprint: str | None = None,
        request: RequestContext | None = None,
        custom: Mapping[str, Any] | None = None,
    ) -> Report:
        try:
            resolved_level = coerce_level(level)
        except ValueError:
            resolved_level = Level.ERROR

        return Report(
            access_token=self.config.access_token,
            environment=self.config.environment,
            level=resolved_level,
            title=title,
            timestamp=int(time.time()),
            platform=sys.platform,
            host=_hostname(),
            body=body,
            fingerprint=fingerprint,
            request=request,
            custom=dict(custom) if custom else None,
        )
