"""Utility functions and exceptions."""

from .exceptions import (
    ActionFailedError,
    AmbiguousNameError,
    AuthenticationError,
    ClientError,
    ErrorCode,
    MalformedDataError,
    RateLimitError,
    ResourceConflictError,
    ResourceNotFoundError,
    TransportError,
    ValidationError,
    is_error,
)

__all__ = [
    "ClientError",
    "ValidationError",
    "MalformedDataError",
    "AmbiguousNameError",
    "ActionFailedError",
    "TransportError",
    "ResourceNotFoundError",
    "AuthenticationError",
    "RateLimitError",
    "ResourceConflictError",
    "ErrorCode",
    "is_error",
]
