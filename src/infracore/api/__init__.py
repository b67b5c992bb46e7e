"""Wire layer: endpoints, wire schema and transports."""

from .endpoints import APIEndpoints
from .transport import HTTPTransport, Response, Transport

__all__ = ["APIEndpoints", "HTTPTransport", "Response", "Transport"]
