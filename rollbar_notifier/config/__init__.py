# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Notifier configuration: providers and the typed settings object."""

from .notifier_config import DEFAULT_BUFFER, DEFAULT_ENDPOINT, DEFAULT_ENVIRONMENT, NotifierConfig
from .providers import ConfigProvider, EnvConfigProvider, StaticConfigProvider

__all__ = [
    "ConfigProvider",
    "EnvConfigProvider",
    "StaticConfigProvider",
    "NotifierConfig",
    "DEFAULT_BUFFER",
    "DEFAULT_ENDPOINT",
    "DEFAULT_ENVIRONMENT",
]
