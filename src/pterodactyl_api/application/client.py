"""Pterodactyl application API client.

Provides an HTTP client with bearer-token authentication that classifies
every response into a return value or exactly one exception from
:mod:`.errors`. Each operation runs validate, request, classify and
return in a single pass with an early exit on every failure branch.
"""

import threading
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import httpx
import pydantic
import structlog

from .errors import (
    ApiError,
    ConfigurationError,
    HttpError,
    NotFoundError,
    ServiceUnavailableError,
    UnsupportedOperationError,
    ValidationError,
)
from .types import User, UserCreate, UserUpdate

logger = structlog.get_logger(__name__)

DEFAULT_TIMEOUT = 30.0

# Versioned media type the panel expects on application API requests.
ACCEPT_HEADER = "application/vnd.pterodactyl.v1+json"

USERS_ENDPOINT = "/api/application/users"


def _require_id(value: str | int | None, name: str = "user_id") -> str:
    """Return ``value`` as a URL path segment, rejecting empty identifiers."""
    if value is None or str(value) == "":
        msg = f"{name} cannot be empty"
        raise ValidationError(msg)
    return quote(str(value), safe="")


def _decode_body(response: httpx.Response) -> Any:
    """Decode a response body as JSON.

    Returns None for an empty body and the raw text when the body is not
    JSON, so error classification can still report it.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        logger.warning(
            "Response body is not JSON",
            status_code=response.status_code,
        )
        return response.text


def _error_messages(body: Any) -> list[str]:
    """Collect messages from a panel error payload.

    Recognises a top-level ``error`` value as well as the panel's
    ``errors`` list, whose entries carry ``code`` and ``detail`` keys.
    An empty list means the body carries no error field.
    """
    if not isinstance(body, dict):
        return []

    messages = []
    if error := body.get("error"):
        messages.append(error if isinstance(error, str) else str(error))
    errors = body.get("errors")
    if isinstance(errors, list):
        for error in errors:
            if isinstance(error, dict):
                messages.append(str(error.get("detail") or error.get("code") or error))
            else:
                messages.append(str(error))
    elif errors:
        messages.append(str(errors))
    return messages


def _coerce_id(value: Any) -> int | None:
    """Return a numeric identifier as int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def _raise_for_api_error(response: httpx.Response, body: Any) -> None:
    """Raise ApiError if the body carries an error field, whatever the status."""
    if messages := _error_messages(body):
        for message in messages:
            logger.error(
                "API error response",
                status_code=response.status_code,
                error_message=message,
            )
        msg = f"API returned errors: {'; '.join(messages)}"
        raise ApiError(msg, response.status_code, body=body, messages=messages)


def _expect_status(response: httpx.Response, body: Any, expected: int) -> None:
    """Raise HttpError unless the response has the expected status code."""
    if response.status_code != expected:
        msg = f"Non-{expected} status code {response.status_code}"
        raise HttpError(msg, response.status_code, body=body)


def _parse_user(response: httpx.Response, data: Any) -> User:
    """Validate a user record, reporting malformed payloads as ApiError."""
    try:
        return User.model_validate(data)
    except pydantic.ValidationError as e:
        msg = f"Malformed user record in response: {e}"
        raise ApiError(msg, response.status_code, body=data) from e


class PterodactylClient:
    """HTTP client for the Pterodactyl application API.

    Holds the panel URL and API token, both read-only after construction.
    Every operation issues exactly one request; nothing is retried or
    cached.

    Thread-safe through thread-local storage of httpx.Client instances.
    Can be used as a context manager for automatic cleanup.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the API client.

        Args:
            base_url: Panel URL (e.g., "https://panel.example.com"). Stored
                verbatim; malformed URLs are rejected by httpx at call time.
            token: Application API key sent as a bearer token.
            timeout: Request timeout in seconds (default: 30.0).
            transport: Optional httpx transport, e.g. a MockTransport.

        Raises:
            ConfigurationError: If base_url or token is empty, or timeout is
                not positive.
        """
        if not base_url:
            msg = "base_url cannot be empty"
            raise ConfigurationError(msg)
        if not token:
            msg = "token cannot be empty"
            raise ConfigurationError(msg)
        if timeout <= 0:
            msg = "timeout must be positive"
            raise ConfigurationError(msg)

        self._base_url = base_url
        self._token = token
        self._timeout = timeout
        self._transport = transport

        self._headers = {
            "Authorization": f"Bearer {token}",
            "Accept": ACCEPT_HEADER,
            "Content-Type": "application/json",
        }

        self._local = threading.local()

    @property
    def base_url(self) -> str:
        """Panel URL as passed to the constructor."""
        return self._base_url

    @property
    def token(self) -> str:
        """API token as passed to the constructor."""
        return self._token

    @property
    def client(self) -> httpx.Client:
        """Get or create the thread-local httpx client."""
        if not hasattr(self._local, "client") or self._local.client.is_closed:
            self._local.client = httpx.Client(
                base_url=self._base_url,
                headers=self._headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._local.client

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and cleanup resources."""
        self.close()

    def close(self):
        """Close the thread-local HTTP client if open."""
        if hasattr(self._local, "client") and not self._local.client.is_closed:
            self._local.client.close()

    def _request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
    ) -> tuple[httpx.Response, Any]:
        """Send one request to the panel and decode the response body.

        Status codes are not checked here; callers classify them.

        Args:
            method: HTTP method.
            path: Path below the panel URL (e.g., "/api/application/users").
            payload: Optional JSON body.

        Returns:
            Tuple of (response, decoded body).

        Raises:
            httpx.HTTPError: If the request fails at the transport level.
        """
        start_time = time.time()
        logger.debug("Making API request", method=method, path=path)
        try:
            response = self.client.request(method, path, json=payload)
        except httpx.HTTPError:
            logger.exception(
                "API request failed",
                method=method,
                path=path,
                duration_seconds=round(time.time() - start_time, 3),
            )
            raise

        logger.debug(
            "API request completed",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_seconds=round(time.time() - start_time, 3),
        )
        return response, _decode_body(response)

    # Users

    def list_users(self) -> list[User]:
        """Fetch all users, in the order the panel returns them.

        Raises:
            HttpError: If the status code is not 200.
            ApiError: If the body carries an error payload.
        """
        response, body = self._request("GET", USERS_ENDPOINT)
        _expect_status(response, body, httpx.codes.OK)
        _raise_for_api_error(response, body)

        if not isinstance(body, dict):
            msg = "Expected a JSON object listing users"
            raise ApiError(msg, response.status_code, body=body)
        data = body.get("data")
        if not isinstance(data, list):
            msg = "Expected a 'data' list of users in the response"
            raise ApiError(msg, response.status_code, body=body)
        return [_parse_user(response, item) for item in data]

    def get_user(self, user_id: str | int) -> User | None:
        """Fetch a single user by panel ID.

        Returns:
            The user, or None if the panel has no such user.

        Raises:
            ValidationError: If user_id is empty.
            HttpError: If the status code is neither 200 nor 404.
            ApiError: If the body carries an error payload.
        """
        segment = _require_id(user_id)
        return self._lookup_user(f"{USERS_ENDPOINT}/{segment}")

    def get_user_by_external_id(self, external_id: str) -> User | None:
        """Fetch a single user by the ID an external system assigned.

        Same outcomes as :meth:`get_user`.
        """
        segment = _require_id(external_id, name="external_id")
        return self._lookup_user(f"{USERS_ENDPOINT}/external/{segment}")

    def _lookup_user(self, path: str) -> User | None:
        response, body = self._request("GET", path)
        if response.status_code == httpx.codes.NOT_FOUND:
            logger.debug("User not found", path=path)
            return None
        _expect_status(response, body, httpx.codes.OK)
        _raise_for_api_error(response, body)
        return _parse_user(response, body)

    def create_user(self, user: UserCreate | Mapping[str, Any]) -> int:
        """Create a user and return the ID the panel assigned.

        Args:
            user: A UserCreate, or a mapping with the same keys. email,
                username, first_name and last_name must be non-empty.

        Raises:
            ValidationError: If a required field is missing (before any
                request is sent) or the panel answers 422.
            ServiceUnavailableError: If the panel answers 503.
            ApiError: If the body carries an error payload.
            HttpError: For any other non-2xx status code.
        """
        if isinstance(user, UserCreate):
            draft = user
        else:
            try:
                draft = UserCreate.model_validate(dict(user or {}))
            except pydantic.ValidationError as e:
                problems = [
                    f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                    for err in e.errors()
                ]
                msg = f"Invalid user draft: {'; '.join(problems)}"
                raise ValidationError(msg) from e

        response, body = self._request(
            "POST",
            USERS_ENDPOINT,
            payload=draft.model_dump(exclude_none=True),
        )
        if response.status_code == httpx.codes.UNPROCESSABLE_ENTITY:
            msg = f"Panel rejected user {draft.username!r} as invalid"
            raise ValidationError(msg, status_code=response.status_code, body=body)
        if response.status_code == httpx.codes.SERVICE_UNAVAILABLE:
            msg = "Panel encountered an error while processing the request"
            raise ServiceUnavailableError(msg, response.status_code, body=body)
        _raise_for_api_error(response, body)
        if not response.is_success:
            msg = f"Unexpected status code {response.status_code} creating user"
            raise HttpError(msg, response.status_code, body=body)

        if isinstance(body, dict):
            user_id = body.get("id")
            if user_id is None and isinstance(body.get("attributes"), dict):
                user_id = body["attributes"].get("id")
            if (new_id := _coerce_id(user_id)) is not None:
                logger.info("Created user", user_id=new_id, username=draft.username)
                return new_id

        msg = "Panel response did not include a numeric id for the new user"
        raise ApiError(msg, response.status_code, body=body)

    def update_user(
        self,
        user_id: str | int,
        user: UserUpdate | Mapping[str, Any],
    ) -> User:
        """Update a user and return the record the panel stored.

        Partial updates are passed through without client-side checks.

        Raises:
            ValidationError: If user_id is empty.
            NotFoundError: If the user does not exist.
            HttpError: If the status code is neither 200 nor 404.
            ApiError: If the body carries an error payload.
        """
        segment = _require_id(user_id)
        if isinstance(user, UserUpdate):
            payload = user.model_dump(exclude_none=True)
        else:
            payload = dict(user or {})

        response, body = self._request(
            "PATCH",
            f"{USERS_ENDPOINT}/{segment}",
            payload=payload,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            msg = f"Can't update non-existent user {user_id}"
            raise NotFoundError(msg, response.status_code, body=body)
        _expect_status(response, body, httpx.codes.OK)
        _raise_for_api_error(response, body)
        return _parse_user(response, body)

    def delete_user(self, user_id: str | int) -> None:
        """Delete a user.

        Raises:
            ValidationError: If user_id is empty.
            NotFoundError: If the user does not exist.
            HttpError: If the status code is not 204.
        """
        segment = _require_id(user_id)
        response, body = self._request("DELETE", f"{USERS_ENDPOINT}/{segment}")
        if response.status_code == httpx.codes.NOT_FOUND:
            msg = f"Can't delete non-existent user {user_id}"
            raise NotFoundError(msg, response.status_code, body=body)
        _expect_status(response, body, httpx.codes.NO_CONTENT)
        logger.info("Deleted user", user_id=user_id)

    # Nests

    def get_nests(self):
        """Not available yet; see :class:`.types.Nest` for the record shape."""
        msg = "The nests resource is not supported by this client yet"
        raise NotImplementedError(msg)

    # Legacy

    def get_auth_header(self, url: str, body: str, pubkey: str, privkey: str) -> str:
        """Build an HMAC-signed auth header. Always raises.

        Signed headers were replaced by bearer tokens on current panels.
        The method is kept so older callers fail loudly instead of with an
        AttributeError.

        Raises:
            UnsupportedOperationError: Always.
        """
        msg = (
            "Signed auth headers are no longer supported by the panel; "
            "use an application API token instead"
        )
        raise UnsupportedOperationError(msg)
