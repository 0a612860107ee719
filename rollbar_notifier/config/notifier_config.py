# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Typed notifier configuration."""

from dataclasses import dataclass

from ..redaction import DEFAULT_FILTER_FIELDS
from .providers import ConfigProvider, EnvConfigProvider

DEFAULT_ENDPOINT = "https://api.rollbar.com/api/1/item/"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_BUFFER = 1000


@dataclass(frozen=True)
class NotifierConfig:
    """Settings shared by the report builder and the delivery queue.

    Build it once at startup and hand it to the reporter; it is never
    modified afterwards.

    Attributes:
        access_token: Rollbar project access token. Reports are discarded at
            delivery time while this is blank.
        environment: Environment every report is filed under
        endpoint: Rollbar item API URL
        buffer: Maximum number of reports waiting for delivery before new
            ones are dropped
        filter_fields: Regular expression matched (case-insensitively)
            against request parameter names whose values must be hidden
        timeout_seconds: Optional timeout for each POST; None waits forever
    """

    access_token: str = ""
    environment: str = DEFAULT_ENVIRONMENT
    endpoint: str = DEFAULT_ENDPOINT
    buffer: int = DEFAULT_BUFFER
    filter_fields: str = DEFAULT_FILTER_FIELDS
    timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        if self.buffer < 1:
            raise ValueError(f"buffer must be at least 1, got {self.buffer}")

    @classmethod
    def from_provider(cls, provider: ConfigProvider) -> "NotifierConfig":
        """Create a NotifierConfig from a configuration provider.

        Keys read: ROLLBAR_ACCESS_TOKEN, ROLLBAR_ENVIRONMENT, ROLLBAR_ENDPOINT,
        ROLLBAR_BUFFER, ROLLBAR_FILTER_FIELDS, ROLLBAR_TIMEOUT_SECONDS.

        Args:
            provider: Source of raw configuration values

        Returns:
            Configured NotifierConfig instance
        """
        return cls(
            access_token=provider.get("ROLLBAR_ACCESS_TOKEN", "") or "",
            environment=provider.get("ROLLBAR_ENVIRONMENT") or DEFAULT_ENVIRONMENT,
            endpoint=provider.get("ROLLBAR_ENDPOINT") or DEFAULT_ENDPOINT,
            buffer=provider.get_int("ROLLBAR_BUFFER", DEFAULT_BUFFER),
            filter_fields=provider.get("ROLLBAR_FILTER_FIELDS") or DEFAULT_FILTER_FIELDS,
            timeout_seconds=provider.get_float("ROLLBAR_TIMEOUT_SECONDS"),
        )

    @classmethod
    def from_env(cls) -> "NotifierConfig":
        """Create a NotifierConfig from environment variables."""
        return cls.from_provider(EnvConfigProvider())
