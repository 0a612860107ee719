# SPDX-License-Identifier: MIT
# Copyright (c) 2025 rollbar-notifier contributors

"""HTTP transport used by the delivery worker."""

from abc import ABC, abstractmethod

import requests

from .errors import HTTPStatusError


class Transport(ABC):
    """Sends one serialized report to the collection endpoint."""

    @abstractmethod
    def post(self, url: str, body: bytes) -> None:
        """POST a JSON document.

        Args:
            url: Endpoint URL
            body: UTF-8 encoded JSON document

        Raises:
            HTTPStatusError: If the endpoint does not answer 200
            Exception: Any transport-level failure
        """
        raise NotImplementedError


class HTTPTransport(Transport):
    """Transport backed by ``requests``. One attempt per call, no retries."""

    def __init__(self, timeout_seconds: float | None = None):
        """Initialize HTTP transport.

        Args:
            timeout_seconds: Request timeout; None means wait indefinitely
        """
        self.timeout_seconds = timeout_seconds

    def post(self, url: str, body: bytes) -> None:
        response = requests.post(
            url,
            data=body,
            headers={"Content-Type": "application/json"},
            timeout=self.timeout_seconds,
        )
        try:
            if response.status_code != 200:
                raise HTTPStatusError(response.status_code)
        finally:
            response.close()
