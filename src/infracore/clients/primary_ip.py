"""Primary IP client."""

from ..api.endpoints import APIEndpoints
from ..api.schema import (
    PrimaryIPActionAssignRequest,
    PrimaryIPActionChangeDNSPtrRequest,
    PrimaryIPActionChangeProtectionRequest,
    PrimaryIPCreateResponse,
    PrimaryIPSchema,
)
from ..api.transport import Response
from ..core.mapper import (
    action_from_schema,
    primary_ip_create_opts_to_schema,
    primary_ip_from_schema,
    primary_ip_update_opts_to_schema,
)
from ..core.resource import ManagedResourceClient, ResourceKind, parse_model
from ..models.action import Action
from ..models.primary_ip import (
    PrimaryIP,
    PrimaryIPAssignOpts,
    PrimaryIPChangeDNSPtrOpts,
    PrimaryIPChangeProtectionOpts,
    PrimaryIPCreateOpts,
    PrimaryIPCreateResult,
    PrimaryIPListOpts,
    PrimaryIPUpdateOpts,
)

PRIMARY_IP_KIND: ResourceKind[PrimaryIP, PrimaryIPSchema] = ResourceKind(
    name="PrimaryIP",
    path=APIEndpoints.PRIMARY_IPS,
    singular_key="primary_ip",
    plural_key="primary_ips",
    schema=PrimaryIPSchema,
    from_schema=primary_ip_from_schema,
)


class PrimaryIPClient(ManagedResourceClient[PrimaryIP, PrimaryIPSchema, PrimaryIPListOpts]):
    """Client for Primary IPs."""

    kind = PRIMARY_IP_KIND
    list_opts_class = PrimaryIPListOpts

    async def create(self, opts: PrimaryIPCreateOpts) -> tuple[PrimaryIPCreateResult, Response]:
        """
        Create a Primary IP, either assigned right away or in a datacenter.

        Raises:
            ValidationError: If opts are invalid; nothing is sent in that case
        """
        response = await self._create(opts, primary_ip_create_opts_to_schema)
        parsed = parse_model(PrimaryIPCreateResponse, response.body)
        result = PrimaryIPCreateResult(
            primary_ip=primary_ip_from_schema(parsed.primary_ip),
            action=action_from_schema(parsed.action) if parsed.action else None,
        )
        return result, response

    async def update(
        self, primary_ip: PrimaryIP, opts: PrimaryIPUpdateOpts
    ) -> tuple[PrimaryIP, Response]:
        return await self._update(primary_ip, primary_ip_update_opts_to_schema(opts))

    async def assign(
        self, primary_ip: PrimaryIP, opts: PrimaryIPAssignOpts
    ) -> tuple[Action, Response]:
        request = PrimaryIPActionAssignRequest(
            assignee_id=opts.assignee_id, assignee_type=opts.assignee_type
        )
        return await self._action(primary_ip, APIEndpoints.ASSIGN, request)

    async def unassign(self, primary_ip: PrimaryIP) -> tuple[Action, Response]:
        return await self._action(primary_ip, APIEndpoints.UNASSIGN)

    async def change_dns_ptr(
        self, primary_ip: PrimaryIP, opts: PrimaryIPChangeDNSPtrOpts
    ) -> tuple[Action, Response]:
        """Set the reverse DNS entry of one IP; dns_ptr None resets it to the default."""
        request = PrimaryIPActionChangeDNSPtrRequest(ip=opts.ip, dns_ptr=opts.dns_ptr)
        return await self._action(primary_ip, APIEndpoints.CHANGE_DNS_PTR, request)

    async def change_protection(
        self, primary_ip: PrimaryIP, opts: PrimaryIPChangeProtectionOpts
    ) -> tuple[Action, Response]:
        request = PrimaryIPActionChangeProtectionRequest(delete=opts.delete)
        return await self._action(primary_ip, APIEndpoints.CHANGE_PROTECTION, request)
