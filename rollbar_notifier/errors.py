# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Error values as they enter the reporting API, and delivery errors."""

import builtins
from dataclasses import dataclass
from typing import Any, TypeAlias

from .fingerprint import checksum_hex

PANIC_CLASS = "panic"


@dataclass(frozen=True)
class TypedError:
    """An error that carries a stable type identifier.

    An empty ``type_name`` means nothing is known about the type.
    """

    type_name: str
    message: str


@dataclass(frozen=True)
class GenericError:
    """An untyped error that is only a message."""

    message: str


ReportedError: TypeAlias = TypedError | GenericError


class HTTPStatusError(Exception):
    """Raised when the Rollbar API answers with a non-success status."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"rollbar: service returned status: {status_code}")


def type_name(cls: type) -> str:
    """Return a display name for an exception type.

    Builtin exceptions keep their bare name; anything else is qualified with
    its module.
    """
    module = getattr(cls, "__module__", None)
    qualname = getattr(cls, "__qualname__", None) or getattr(cls, "__name__", "")
    if not module or module == builtins.__name__:
        return qualname
    return f"{module}.{qualname}"


def classify_error(error: Any) -> ReportedError:
    """Convert any error value into one of the boundary variants.

    - TypedError / GenericError pass through untouched.
    - A bare ``Exception("...")`` is a generic message wrapper.
    - Any other exception is typed by its class.
    - Anything else (strings, None, arbitrary objects) has no type
      information and ends up labelled ``panic``.
    """
    if isinstance(error, (TypedError, GenericError)):
        return error
    if isinstance(error, BaseException):
        if type(error) is Exception:
            return GenericError(message=str(error))
        return TypedError(type_name=type_name(type(error)), message=str(error))
    message = "" if error is None else str(error)
    return TypedError(type_name="", message=message)


def error_class(error: ReportedError) -> str:
    """Return the exception class label reported to Rollbar.

    Generic errors are labelled with a checksum of their message so identical
    messages group together.
    """
    if isinstance(error, GenericError):
        return "{%s}" % checksum_hex(error.message)
    name = error.type_name.lstrip("*&")
    if not name:
        return PANIC_CLASS
    return name
