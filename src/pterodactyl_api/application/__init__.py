"""Pterodactyl application API package.

Provides the HTTP client for the panel's administrative API together with
the response types and the exceptions it raises.

Exports:
    PterodactylClient: HTTP client with authentication and error handling.
    types: Module containing Pydantic models for API payloads.
    DEFAULT_TIMEOUT: Default HTTP request timeout.
    Exceptions: the classified failures every call may raise.
"""

from . import types
from .client import ACCEPT_HEADER, DEFAULT_TIMEOUT, PterodactylClient
from .errors import (
    ApiError,
    ConfigurationError,
    HttpError,
    NotFoundError,
    PterodactylError,
    ServiceUnavailableError,
    TransportError,
    UnsupportedOperationError,
    ValidationError,
)

__all__ = [
    "ACCEPT_HEADER",
    "DEFAULT_TIMEOUT",
    "ApiError",
    "ConfigurationError",
    "HttpError",
    "NotFoundError",
    "PterodactylClient",
    "PterodactylError",
    "ServiceUnavailableError",
    "TransportError",
    "UnsupportedOperationError",
    "ValidationError",
    "types",
]
