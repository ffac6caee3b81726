"""Exceptions raised by the application API client.

Every failed call surfaces exactly one of these. Transport failures are
not wrapped: they propagate as the httpx exceptions that caused them.
"""

from typing import Any

import httpx

# Network-level failures (DNS, refused connections, timeouts) are raised
# unmodified by httpx; exported here so callers can catch them by kind.
TransportError = httpx.TransportError


class PterodactylError(Exception):
    """Base class for all client errors."""


class ConfigurationError(PterodactylError):
    """Raised when the client is constructed with invalid settings."""


class UnsupportedOperationError(PterodactylError):
    """Raised by operations the panel no longer supports."""


class ValidationError(PterodactylError):
    """Input rejected before sending, or by the panel with HTTP 422."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ApiError(PterodactylError):
    """The response body carried a structured error payload."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
        messages: list[str] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.messages = messages or []


class HttpError(PterodactylError):
    """The panel answered with an unexpected status code."""

    def __init__(self, message: str, status_code: int, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class NotFoundError(HttpError):
    """The targeted resource does not exist (HTTP 404)."""


class ServiceUnavailableError(HttpError):
    """The panel failed while processing the request (HTTP 503)."""
