# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Stack trace capture with file path normalization."""

import os
import sys
from dataclasses import dataclass
from types import FrameType
from typing import Any

UNKNOWN_FUNCTION = "???"

# Marker of the interpreter's own source tree; the suffix from "pkg/" is kept.
STDLIB_MARKER = "/src/pkg/"

KNOWN_FILE_PATH_PATTERNS = (
    "github.com/",
    "code.google.com/",
    "bitbucket.org/",
    "launchpad.net/",
    "site-packages/",
    "dist-packages/",
)


@dataclass(frozen=True)
class Frame:
    """A single line of executed code in a Stack."""

    filename: str
    method: str
    lineno: int

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation of this frame."""
        return {
            "filename": self.filename,
            "method": self.method,
            "lineno": self.lineno,
        }


Stack = list[Frame]


def build_stack(skip: int) -> Stack:
    """Build a full stack trace for the current execution location.

    Index 0 is this function itself, so ``build_stack(1)`` starts at the
    caller. Frames are returned innermost first.

    Args:
        skip: Number of frames to skip before recording

    Returns:
        List of frames; empty if ``skip`` is deeper than the current stack
    """
    stack: Stack = []

    try:
        frame: FrameType | None = sys._getframe(skip)
    except ValueError:
        return stack

    while frame is not None:
        stack.append(
            Frame(
                filename=shorten_file_path(frame.f_code.co_filename),
                method=function_name(frame),
                lineno=frame.f_lineno or 0,
            )
        )
        frame = frame.f_back

    return stack


def shorten_file_path(path: str) -> str:
    """Remove machine-specific leading directories from a source file path.

    This makes paths shorter in the Rollbar UI and identical regardless of
    the machine the code ran on.

    Examples:
        /usr/local/go/src/pkg/runtime/proc.c -> pkg/runtime/proc.c
        /home/foo/go/src/github.com/stvp/rollbar.go -> github.com/stvp/rollbar.go
    """
    # Last marker wins, and the hosting patterns still apply afterwards, so
    # shortening an already shortened path is a no-op.
    idx = path.rfind(STDLIB_MARKER)
    if idx != -1:
        path = path[idx + len("/src/"):]

    for pattern in KNOWN_FILE_PATH_PATTERNS:
        idx = path.find(pattern)
        if idx != -1:
            return path[idx:]

    return path


def function_name(frame: FrameType | None) -> str:
    """Resolve the qualified function name for a frame.

    Returns ``"???"`` when the frame carries no usable code object.
    """
    code = getattr(frame, "f_code", None)
    if code is None:
        return UNKNOWN_FUNCTION

    qualname = getattr(code, "co_qualname", None) or code.co_name
    if not qualname:
        return UNKNOWN_FUNCTION

    module = frame.f_globals.get("__name__") if frame is not None else None
    name = f"{module}.{qualname}" if module else qualname

    end = name.rfind(os.sep)
    return name[end + 1:]
