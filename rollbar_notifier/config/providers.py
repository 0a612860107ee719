# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Configuration providers for notifier settings."""

import os
from abc import ABC, abstractmethod
from typing import Any, Mapping

_TRUE_VALUES = ("true", "1", "yes", "on")
_FALSE_VALUES = ("false", "0", "no", "off")


class ConfigProvider(ABC):
    """Abstract base class for configuration providers.

    Subclasses only supply raw lookups; typed accessors fall back to the
    default when a value is missing or cannot be converted.
    """

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """Get a raw configuration value."""
        raise NotImplementedError

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean configuration value."""
        value = self.get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            value_lower = value.strip().lower()
            if value_lower in _TRUE_VALUES:
                return True
            if value_lower in _FALSE_VALUES:
                return False
        return default

    def get_int(self, key: str, default: int = 0) -> int:
        """Get an integer configuration value."""
        value = self.get(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (ValueError, TypeError):
            return default

    def get_float(self, key: str, default: float | None = None) -> float | None:
        """Get a float configuration value; blank strings count as missing."""
        value = self.get(key)
        if value is None or (isinstance(value, str) and not value.strip()):
            return default
        try:
            return float(value)
        except (ValueError, TypeError):
            return default


class EnvConfigProvider(ConfigProvider):
    """Configuration provider that reads from environment variables."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = environ if environ is not None else os.environ

    def get(self, key: str, default: Any = None) -> Any:
        return self._environ.get(key, default)


class StaticConfigProvider(ConfigProvider):
    """Configuration provider with static values (useful for tests)."""

    def __init__(self, config: dict[str, Any] | None = None):
        self._config = config if config is not None else {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._config[key] = value
