"""Core components shared by every resource kind.

This package contains the schema mapper, the pagination walker, the
identifier resolver and the generic resource client.
"""

from .pagination import iter_pages
from .resolver import first_by_name, get_by_id_or_name, parse_id
from .resource import ManagedResourceClient, ResourceClient, ResourceKind, parse_model

__all__ = [
    "ManagedResourceClient",
    "ResourceClient",
    "ResourceKind",
    "first_by_name",
    "get_by_id_or_name",
    "iter_pages",
    "parse_id",
    "parse_model",
]
