"""Centralized API endpoint paths.

Single source of truth for every path the clients request, relative to the
API base URL.

Usage:
    from infracore.api.endpoints import APIEndpoints

    APIEndpoints.resource_action("volumes", 42, "resize")
    # Returns: "/volumes/42/actions/resize"
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class APIEndpoints:
    """
    API endpoint constants and builders.

    Collection paths are the path segment of a resource kind; entity and
    action paths are derived from it so every kind follows the same pattern.
    """

    # -------------------------------------------------------------------------
    # Collections
    # -------------------------------------------------------------------------
    ACTIONS: str = "actions"
    FIREWALLS: str = "firewalls"
    VOLUMES: str = "volumes"
    PRIMARY_IPS: str = "primary_ips"

    # -------------------------------------------------------------------------
    # Action verbs
    # -------------------------------------------------------------------------
    SET_RULES: str = "set_rules"
    APPLY_TO_RESOURCES: str = "apply_to_resources"
    REMOVE_FROM_RESOURCES: str = "remove_from_resources"
    ATTACH: str = "attach"
    DETACH: str = "detach"
    RESIZE: str = "resize"
    CHANGE_PROTECTION: str = "change_protection"
    ASSIGN: str = "assign"
    UNASSIGN: str = "unassign"
    CHANGE_DNS_PTR: str = "change_dns_ptr"

    @staticmethod
    def collection(segment: str) -> str:
        """Build ``/<segment>``."""
        return f"/{segment}"

    @staticmethod
    def by_id(segment: str, resource_id: int) -> str:
        """Build ``/<segment>/<id>``."""
        return f"/{segment}/{resource_id}"

    @staticmethod
    def resource_action(segment: str, resource_id: int, verb: str) -> str:
        """Build ``/<segment>/<id>/actions/<verb>``."""
        return f"/{segment}/{resource_id}/actions/{verb}"
