"""Custom exceptions for the infracore client.

Exception Hierarchy:
-------------------
ClientError (base)
├── ValidationError            # Local option checks, raised before any request
├── MalformedDataError         # Wire payload cannot be mapped to a domain entity
├── AmbiguousNameError         # Name lookup matched more than one entity
├── ActionFailedError          # Raised by ActionClient.wait_for only
└── TransportError (base for API errors)
    ├── ResourceNotFoundError      # error code "not_found" / HTTP 404
    ├── AuthenticationError        # error code "unauthorized" / HTTP 401
    ├── RateLimitError             # error code "rate_limit_exceeded" / HTTP 429
    └── ResourceConflictError      # error code "conflict" or "uniqueness_error" / HTTP 409

Usage Guidelines:
----------------
1. Get paths (get, get_by_id, get_by_name) translate ResourceNotFoundError into
   None. Every other operation lets it propagate.

2. A failed Action is data, not an exception: the call that triggered it
   succeeded. Inspect ``action.error`` or use ``ActionClient.wait_for``.

3. The client never retries. Retries for network failures and rate limits
   belong to the transport (see ``HTTPTransport``).
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.action import Action


class ErrorCode:
    """Machine-readable error codes returned by the API."""

    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    CONFLICT = "conflict"
    UNIQUENESS_ERROR = "uniqueness_error"
    INVALID_INPUT = "invalid_input"
    PROTECTED = "protected"
    LOCKED = "locked"
    SERVICE_ERROR = "service_error"
    # Produced locally by the HTTP transport
    NETWORK_ERROR = "network_error"
    INVALID_RESPONSE = "invalid_response"


class ClientError(Exception):
    """Base exception for all infracore errors."""

    pass


class ValidationError(ClientError):
    """Raised when create/update options fail local validation."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """
        Initialize ValidationError.

        Args:
            message: Error message.
            field: Optional name of the offending option field.
        """
        super().__init__(message)
        self.field = field


class MalformedDataError(ClientError):
    """Raised when a wire payload cannot be represented as a domain entity."""

    def __init__(self, message: str, original_error: Exception | None = None) -> None:
        super().__init__(message)
        self.original_error = original_error


class AmbiguousNameError(ClientError):
    """Raised when a lookup by name matches more than one entity."""

    def __init__(self, resource_type: str, name: str, count: int) -> None:
        """
        Initialize AmbiguousNameError.

        Args:
            resource_type: Display name of the resource kind.
            name: The name that was looked up.
            count: Number of entities the server returned for the name.
        """
        super().__init__(f"{resource_type} name is ambiguous: {name!r} matched {count} entries")
        self.resource_type = resource_type
        self.name = name
        self.count = count


class ActionFailedError(ClientError):
    """Raised by ActionClient.wait_for when an action finishes with status error."""

    def __init__(self, action: "Action") -> None:
        code = action.error.code if action.error else "unknown"
        message = action.error.message if action.error else "action failed"
        super().__init__(f"Action {action.id} ({action.command}) failed: {message} (Code: {code})")
        self.action = action


class TransportError(ClientError):
    """Base exception for errors reported by the transport or the API."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCode.SERVICE_ERROR,
        status_code: int | None = None,
        details: Any = None,
    ) -> None:
        """
        Initialize TransportError.

        Args:
            message: Human readable error message.
            code: Machine-readable error code.
            status_code: Optional HTTP status code.
            details: Optional structured error details from the API.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details


class ResourceNotFoundError(TransportError):
    """Raised when the API reports that a resource does not exist."""

    def __init__(self, message: str = "Resource not found", details: Any = None) -> None:
        super().__init__(message, code=ErrorCode.NOT_FOUND, status_code=404, details=details)


class AuthenticationError(TransportError):
    """Raised when the API token is missing or rejected."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, code=ErrorCode.UNAUTHORIZED, status_code=401)


class RateLimitError(TransportError):
    """Raised when the API rate limit is hit and retries are exhausted."""

    def __init__(self, retry_after: int) -> None:
        """
        Initialize RateLimitError.

        Args:
            retry_after: Seconds to wait before retrying.
        """
        super().__init__(
            f"Rate limit exceeded, retry after {retry_after}s",
            code=ErrorCode.RATE_LIMIT_EXCEEDED,
            status_code=429,
        )
        self.retry_after = retry_after


class ResourceConflictError(TransportError):
    """Raised when a request conflicts with existing state (409 Conflict)."""

    def __init__(
        self, message: str, code: str = ErrorCode.CONFLICT, details: Any = None
    ) -> None:
        super().__init__(message, code=code, status_code=409, details=details)


def is_error(err: BaseException, code: str) -> bool:
    """Return True if err is a TransportError carrying the given code."""
    return isinstance(err, TransportError) and err.code == code
