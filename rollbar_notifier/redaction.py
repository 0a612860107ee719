# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Filtering of sensitive request parameters before they leave the process."""

import re
from collections.abc import Mapping, Sequence
from typing import Any

FILTERED = "[FILTERED]"

DEFAULT_FILTER_FIELDS = "password|secret|token"


def compile_filter(pattern: "str | re.Pattern[str]") -> "re.Pattern[str]":
    """Compile a sensitive-field pattern, matching case-insensitively.

    Already compiled patterns are returned as they are.
    """
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern, re.IGNORECASE)


def filter_params(
    values: Mapping[str, Sequence[str]],
    pattern: "str | re.Pattern[str]" = DEFAULT_FILTER_FIELDS,
) -> dict[str, list[str]]:
    """Replace the values of sensitive keys with a placeholder.

    Args:
        values: Parameter name to list of values
        pattern: Regular expression searched in each key

    Returns:
        A new mapping; matching keys map to ``["[FILTERED]"]``
    """
    regex = compile_filter(pattern)
    result: dict[str, list[str]] = {}
    for key, value in values.items():
        if regex.search(key):
            result[key] = [FILTERED]
        else:
            result[key] = _as_list(value)
    return result


def flatten_values(values: Mapping[str, Any]) -> dict[str, Any]:
    """Collapse single-element value lists to their only element."""
    result: dict[str, Any] = {}
    for key, value in values.items():
        items = _as_list(value)
        result[key] = items[0] if len(items) == 1 else items
    return result


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        return [value]
    try:
        return list(value)
    except TypeError:
        return [str(value)]
