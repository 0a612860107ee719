# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""End-to-end tests for the reporter facade."""

import json
import os
import sys
import threading
from unittest.mock import patch

import pytest

from rollbar_notifier import (
    ErrorReporter,
    HTTPRequest,
    Level,
    NotifierConfig,
    RollbarErrorReporter,
    SilentErrorReporter,
    create_error_reporter,
)
from rollbar_notifier.fingerprint import checksum_hex
from rollbar_notifier.redaction import FILTERED


@pytest.fixture
def reporter(config, transport, silent_logger):
    """Create a reporter wired to the recording transport."""
    return RollbarErrorReporter(config, transport=transport, logger=silent_logger)


def _report_from_helper(reporter, skip):
    return reporter.report_error("error", ValueError("bad"), skip=skip)


class TestRollbarErrorReporter:
    """Tests for RollbarErrorReporter."""

    def test_worker_started(self, reporter):
        """Test that the delivery worker runs from construction."""
        assert reporter.delivery.is_running()
        assert isinstance(reporter, ErrorReporter)

    def test_report_message(self, reporter, transport):
        """Test the end-to-end message flow."""
        assert reporter.report_message("info", "hello\nworld") is True
        assert reporter.wait_until_drained(timeout=5)

        data = transport.payloads[0]["data"]
        assert data["title"] == "hello"
        assert data["body"] == {"message": {"body": "hello\nworld"}}
        assert data["level"] == "info"
        assert '"level": "info"' in json.dumps(transport.payloads[0])

    def test_report_error(self, reporter, transport):
        """Test that error reports carry the caller's frame first."""
        expected_line = sys._getframe().f_lineno + 1
        reporter.report_error("critical", RuntimeError("db down\ndetails"))
        assert reporter.wait_until_drained(timeout=5)

        data = transport.payloads[0]["data"]
        frame = data["body"]["trace"]["frames"][0]
        assert frame["method"].endswith("test_report_error")
        assert frame["lineno"] == expected_line
        assert data["title"] == "db down"
        assert data["level"] == "critical"
        assert data["body"]["trace"]["exception"] == {"class": "RuntimeError", "message": "db down\ndetails"}
        assert len(data["fingerprint"]) == 8

    def test_report_error_skip(self, reporter, transport):
        """Test that skip drops frames above the caller."""
        _report_from_helper(reporter, skip=0)
        _report_from_helper(reporter, skip=1)
        assert reporter.wait_until_drained(timeout=5)

        first, second = [p["data"]["body"]["trace"]["frames"][0]["method"] for p in transport.payloads]
        assert first.endswith("_report_from_helper")
        assert second.endswith("test_report_error_skip")

    def test_report_error_with_request(self, reporter, transport):
        """Test that request details are redacted and attached."""
        request = HTTPRequest(
            url="https://app.example/reset?secret=s&page=2",
            method="POST",
            headers={"User-Agent": "pytest"},
            form={"new_password": ["x"], "email": ["a@example.com"]},
        )

        reporter.report_error_with_request("error", ValueError("reset failed"), request)
        assert reporter.wait_until_drained(timeout=5)

        data = transport.payloads[0]["data"]
        assert data["request"]["GET"] == {"secret": FILTERED, "page": "2"}
        assert data["request"]["POST"] == {"new_password": FILTERED, "email": "a@example.com"}
        assert data["request"]["headers"] == {"User-Agent": "pytest"}
        assert data["body"]["trace"]["frames"][0]["method"].endswith("test_report_error_with_request")

    def test_malformed_request_is_still_reported(self, reporter, transport):
        """Test that a broken request URL does not cost the error report."""
        request = HTTPRequest(url="http://[::1/reset?token=x", form={"age": 5})

        assert reporter.report_error_with_request("error", ValueError("boom"), request) is True
        assert reporter.wait_until_drained(timeout=5)

        data = transport.payloads[0]["data"]
        assert data["body"]["trace"]["exception"]["message"] == "boom"
        assert data["request"]["query_string"] == ""
        assert data["request"]["POST"] == {"age": "5"}

    def test_unknown_level(self, reporter, transport, silent_logger):
        """Test that an unknown level is logged and reported as error."""
        reporter.report_message("fatal", "m")
        assert reporter.wait_until_drained(timeout=5)

        assert transport.payloads[0]["data"]["level"] == "error"
        assert silent_logger.has_log("unknown level", level="WARNING")

    def test_builder_failure_never_raises(self, reporter, silent_logger):
        """Test that build failures are logged instead of raised."""
        with patch.object(reporter.builder, "build_message_report", side_effect=RuntimeError("boom")):
            assert reporter.report_message("info", "m") is False

        assert silent_logger.has_log("failed to build message report")
        assert reporter.pending == 0

    def test_report_interface(self, reporter, transport):
        """Test the shared report() interface with context."""
        reporter.report(KeyError("missing"), context={"request_id": "r-1"})
        assert reporter.wait_until_drained(timeout=5)

        data = transport.payloads[0]["data"]
        assert data["level"] == "error"
        assert data["custom"] == {"request_id": "r-1"}
        assert data["body"]["trace"]["frames"][0]["method"].endswith("test_report_interface")

    def test_capture_message_interface(self, reporter, transport):
        """Test the shared capture_message() interface."""
        reporter.capture_message("cache miss storm", level="warning", context={"hits": 0})
        assert reporter.wait_until_drained(timeout=5)

        data = transport.payloads[0]["data"]
        assert data["level"] == "warning"
        assert data["custom"] == {"hits": 0}

    def test_queue_full_is_silent_to_caller(self, transport, silent_logger):
        """Test that a full queue returns False instead of raising."""
        transport.gate = threading.Event()
        config = NotifierConfig(access_token="t", buffer=1)
        reporter = RollbarErrorReporter(config, transport=transport, logger=silent_logger)

        reporter.report_message("info", "in flight")
        assert transport.started.wait(timeout=5)
        assert reporter.report_message("info", "queued") is True
        assert reporter.report_message("info", "dropped") is False
        assert silent_logger.has_log("buffer full")

        transport.gate.set()
        assert reporter.wait_until_drained(timeout=5)
        assert [p["data"]["title"] for p in transport.payloads] == ["in flight", "queued"]


class TestSilentErrorReporter:
    """Tests for SilentErrorReporter."""

    def test_stores_reports(self):
        """Test in-memory storage of errors and messages."""
        reporter = SilentErrorReporter()
        reporter.report(ValueError("bad\ninput"), context={"k": "v"})
        reporter.capture_message("note", level="INFO")

        assert reporter.has_errors()
        assert reporter.reported_errors[0] == {
            "level": Level.ERROR,
            "title": "bad",
            "exception_class": "ValueError",
            "exception_message": "bad\ninput",
            "custom": {"k": "v"},
        }
        assert reporter.captured_messages[0] == {
            "level": Level.INFO,
            "title": "note",
            "body": "note",
            "custom": {},
        }

        reporter.clear()
        assert not reporter.has_errors()
        assert reporter.captured_messages == []

    def test_labels_match_rollbar_reporter(self):
        """Test generic error labels and the unknown-level fallback."""
        reporter = SilentErrorReporter()
        reporter.report(Exception("timeout"))
        reporter.capture_message("m", level="fatal")

        assert reporter.reported_errors[0]["exception_class"] == "{" + checksum_hex("timeout") + "}"
        assert reporter.captured_messages[0]["level"] is Level.ERROR


class TestCreateErrorReporter:
    """Tests for create_error_reporter."""

    def test_rollbar(self, config, transport, silent_logger):
        """Test creating the Rollbar reporter."""
        reporter = create_error_reporter("rollbar", config=config, transport=transport, logger=silent_logger)

        assert isinstance(reporter, RollbarErrorReporter)
        assert reporter.config is config

    def test_rollbar_from_env(self, transport, silent_logger):
        """Test that config is read from the environment when omitted."""
        with patch.dict(os.environ, {"ROLLBAR_ACCESS_TOKEN": "from-env"}, clear=True):
            reporter = create_error_reporter(transport=transport, logger=silent_logger)

        assert reporter.config.access_token == "from-env"

    def test_silent(self):
        """Test creating the silent reporter."""
        assert isinstance(create_error_reporter("silent"), SilentErrorReporter)

    def test_unknown(self):
        """Test that unknown reporter types are rejected."""
        with pytest.raises(ValueError, match="Unknown reporter type"):
            create_error_reporter("sentry")
