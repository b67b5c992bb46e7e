"""Firewall client."""

from ..api.endpoints import APIEndpoints
from ..api.schema import (
    FirewallActionApplyToResourcesRequest,
    FirewallActionRemoveFromResourcesRequest,
    FirewallCreateResponse,
    FirewallSchema,
)
from ..api.transport import Response
from ..core.mapper import (
    actions_from_schema,
    firewall_create_opts_to_schema,
    firewall_from_schema,
    firewall_resource_to_schema,
    firewall_set_rules_opts_to_schema,
    firewall_update_opts_to_schema,
)
from ..core.resource import ManagedResourceClient, ResourceKind, parse_model
from ..models.action import Action
from ..models.firewall import (
    Firewall,
    FirewallCreateOpts,
    FirewallCreateResult,
    FirewallListOpts,
    FirewallResource,
    FirewallSetRulesOpts,
    FirewallUpdateOpts,
)

FIREWALL_KIND: ResourceKind[Firewall, FirewallSchema] = ResourceKind(
    name="Firewall",
    path=APIEndpoints.FIREWALLS,
    singular_key="firewall",
    plural_key="firewalls",
    schema=FirewallSchema,
    from_schema=firewall_from_schema,
)


class FirewallClient(ManagedResourceClient[Firewall, FirewallSchema, FirewallListOpts]):
    """Client for firewalls."""

    kind = FIREWALL_KIND
    list_opts_class = FirewallListOpts

    async def create(self, opts: FirewallCreateOpts) -> tuple[FirewallCreateResult, Response]:
        """
        Create a firewall.

        Returns:
            The created firewall with one action per resource it was applied to
        """
        response = await self._create(opts, firewall_create_opts_to_schema)
        parsed = parse_model(FirewallCreateResponse, response.body)
        result = FirewallCreateResult(
            firewall=firewall_from_schema(parsed.firewall),
            actions=actions_from_schema(parsed.actions),
        )
        return result, response

    async def update(
        self, firewall: Firewall, opts: FirewallUpdateOpts
    ) -> tuple[Firewall, Response]:
        """Update name and labels. Fields left as None are not sent."""
        return await self._update(firewall, firewall_update_opts_to_schema(opts))

    async def set_rules(
        self, firewall: Firewall, opts: FirewallSetRulesOpts
    ) -> tuple[list[Action], Response]:
        """Replace every rule of the firewall. An empty rule list removes all rules."""
        return await self._actions(
            firewall, APIEndpoints.SET_RULES, firewall_set_rules_opts_to_schema(opts)
        )

    async def apply_resources(
        self, firewall: Firewall, resources: list[FirewallResource]
    ) -> tuple[list[Action], Response]:
        request = FirewallActionApplyToResourcesRequest(
            apply_to=[firewall_resource_to_schema(r) for r in resources]
        )
        return await self._actions(firewall, APIEndpoints.APPLY_TO_RESOURCES, request)

    async def remove_resources(
        self, firewall: Firewall, resources: list[FirewallResource]
    ) -> tuple[list[Action], Response]:
        request = FirewallActionRemoveFromResourcesRequest(
            remove_from=[firewall_resource_to_schema(r) for r in resources]
        )
        return await self._actions(firewall, APIEndpoints.REMOVE_FROM_RESOURCES, request)
