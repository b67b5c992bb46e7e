"""Transport protocol and the default httpx-based implementation.

Architecture Overview:
---------------------
Resource clients never talk HTTP themselves. They depend on the narrow
``Transport`` protocol: perform one named request and return a decoded
``Response`` or raise a ``TransportError``. Anything connection related
(authentication headers, retries, rate limiting, pooling) lives behind it.

``HTTPTransport`` is the implementation used in production:
- Async HTTP communication via httpx with lazy client creation
- Bearer token authentication
- tenacity-based retry with exponential backoff for network failures
- Bounded 429 handling honouring the Retry-After header
- Structured error extraction from ``{"error": {"code", "message", "details"}}``

Cancellation:
------------
Every request is a plain await. Cancelling the calling task raises
``asyncio.CancelledError`` at that await; it is never caught here.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..config import APIConfig
from ..constants import DEFAULT_RETRY_AFTER, MAX_RATE_LIMIT_RETRIES
from ..utils.exceptions import (
    AuthenticationError,
    ErrorCode,
    MalformedDataError,
    RateLimitError,
    ResourceConflictError,
    ResourceNotFoundError,
    TransportError,
)
from .schema import ErrorResponse, MetaSchema

logger = structlog.get_logger(__name__)

QueryParams = Sequence[tuple[str, str]]


@dataclass
class Response:
    """A decoded API response."""

    status_code: int
    body: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def meta(self) -> MetaSchema | None:
        """Parsed ``meta`` object, or None when the body carries none."""
        raw = self.body.get("meta")
        if raw is None:
            return None
        try:
            return MetaSchema.model_validate(raw)
        except PydanticValidationError as e:
            raise MalformedDataError(f"Invalid meta in response: {e}", original_error=e) from e


class Transport(Protocol):
    """The single collaborator every resource client depends on."""

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: QueryParams | None = None,
        json: dict[str, Any] | None = None,
    ) -> Response:
        """
        Perform one request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: Path relative to the API base URL, e.g. "/volumes/42"
            params: Query parameters as ordered (key, value) pairs; keys may repeat
            json: JSON request body

        Returns:
            Decoded response

        Raises:
            TransportError: Or one of its subclasses for any failed request
        """
        ...


def _retry_after(response: httpx.Response) -> int:
    # Only delay-seconds is honoured; an HTTP-date falls back to the default
    value = response.headers.get("Retry-After")
    if value is None:
        return DEFAULT_RETRY_AFTER
    try:
        return max(int(value), 0)
    except ValueError:
        logger.debug("Unparseable Retry-After header", value=value)
        return DEFAULT_RETRY_AFTER


class HTTPTransport:
    """
    Transport over httpx.AsyncClient.

    Features:
    - Bearer token authentication
    - Automatic retries with exponential backoff for network errors
    - Rate limit handling
    - Connection pooling
    """

    def __init__(self, config: APIConfig):
        """
        Initialize the transport.

        Args:
            config: API configuration with connection details
        """
        self.config = config
        self.base_url = config.endpoint.rstrip("/")
        self._client: httpx.AsyncClient | None = None  # Lazy-loaded
        self._retry_wait = wait_exponential(multiplier=1, min=2, max=10)

    async def __aenter__(self) -> "HTTPTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client with lazy initialization."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.config.token}",
                    "User-Agent": self.config.user_agent,
                },
                verify=self.config.verify_ssl,
                timeout=self.config.timeout,
                limits=httpx.Limits(
                    max_connections=self.config.max_connections,
                    max_keepalive_connections=self.config.max_keepalive,
                ),
            )
        return self._client

    async def _send(
        self,
        method: str,
        path: str,
        params: QueryParams | None,
        json: dict[str, Any] | None,
    ) -> httpx.Response:
        """Send one request, retrying network failures and timeouts."""
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
            stop=stop_after_attempt(self.config.max_retries),
            wait=self._retry_wait,
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.warning(
                        "Retrying request",
                        method=method,
                        path=path,
                        attempt=attempt.retry_state.attempt_number,
                    )
                return await self.client.request(
                    method, path, params=list(params) if params else None, json=json
                )
        raise AssertionError("unreachable")  # pragma: no cover

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: QueryParams | None = None,
        json: dict[str, Any] | None = None,
        _rate_limit_retries: int = 0,
    ) -> Response:
        """
        Make an authenticated request to the API.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters as (key, value) pairs
            json: JSON body
            _rate_limit_retries: Internal recursion counter. DO NOT USE EXTERNALLY.

        Returns:
            Decoded response

        Raises:
            ResourceNotFoundError: For 404 / not_found
            AuthenticationError: For 401 / unauthorized
            RateLimitError: For 429 after max retries
            ResourceConflictError: For 409 / conflict / uniqueness_error
            TransportError: For every other failure
        """
        logger.debug("Sending request", method=method, path=path)

        try:
            response = await self._send(method, path, params, json)
        except httpx.HTTPError as e:
            logger.error("Request failed", method=method, path=path, error=str(e))
            raise TransportError(
                f"HTTP request failed: {e}", code=ErrorCode.NETWORK_ERROR
            ) from e

        if response.status_code == 429:
            retry_after = _retry_after(response)

            if _rate_limit_retries >= MAX_RATE_LIMIT_RETRIES:
                logger.error("Rate limit retries exhausted", retries=_rate_limit_retries, path=path)
                raise RateLimitError(retry_after)

            logger.warning(
                "Rate limited, waiting before retry",
                retry_after=retry_after,
                attempt=_rate_limit_retries + 1,
                max_retries=MAX_RATE_LIMIT_RETRIES,
                path=path,
            )
            await asyncio.sleep(retry_after)
            return await self.request(
                method,
                path,
                params=params,
                json=json,
                _rate_limit_retries=_rate_limit_retries + 1,
            )

        if response.is_error:
            raise self._error_from_response(response)

        headers = dict(response.headers)
        if response.status_code == 204 or not response.content:
            return Response(status_code=response.status_code, headers=headers)

        try:
            body = response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response: {e}",
                code=ErrorCode.INVALID_RESPONSE,
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise TransportError(
                f"Expected JSON object in response, got {type(body).__name__}",
                code=ErrorCode.INVALID_RESPONSE,
                status_code=response.status_code,
            )

        return Response(status_code=response.status_code, body=body, headers=headers)

    def _error_from_response(self, response: httpx.Response) -> TransportError:
        """Build the exception matching an error response."""
        code: str | None = None
        message = response.text or f"HTTP {response.status_code}"
        details: Any = None
        try:
            parsed = ErrorResponse.model_validate(response.json())
            code = parsed.error.code
            message = parsed.error.get_full_message()
            details = parsed.error.details
        except ValueError:
            # Keep raw text if the body is not a structured error
            pass

        status = response.status_code
        logger.debug("API error", status=status, code=code, message=message)

        if code == ErrorCode.NOT_FOUND or (code is None and status == 404):
            return ResourceNotFoundError(message, details=details)
        if code == ErrorCode.UNAUTHORIZED or (code is None and status == 401):
            return AuthenticationError(message)
        if code in (ErrorCode.CONFLICT, ErrorCode.UNIQUENESS_ERROR) or (
            code is None and status == 409
        ):
            return ResourceConflictError(message, code=code or ErrorCode.CONFLICT, details=details)
        return TransportError(
            message,
            code=code or ErrorCode.SERVICE_ERROR,
            status_code=status,
            details=details,
        )
