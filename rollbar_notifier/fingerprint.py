# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""Stable grouping fingerprints for captured stacks."""

import zlib
from collections.abc import Iterable

from .stack import Frame


def checksum_hex(text: str) -> str:
    """Return the Adler-32 checksum of ``text`` as 8 lowercase hex digits."""
    return "%08x" % zlib.adler32(text.encode("utf-8"))


def fingerprint(stack: Iterable[Frame]) -> str:
    """Derive a fingerprint from the content of a stack.

    Identical frame sequences always give the same fingerprint, whatever the
    process or host. An empty stack hashes the empty string.
    """
    canonical = "".join(f"{frame.filename}{frame.method}{frame.lineno}" for frame in stack)
    return checksum_hex(canonical)
