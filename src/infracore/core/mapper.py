"""Schema mapper: pure conversion between wire models and domain entities.

Every function here is total and free of I/O. The only failure mode is
``MalformedDataError`` for input that has no domain representation (an IP
range that does not parse, a firewall resource type outside the closed
union). Enum values this client does not know are kept as plain strings.

Presence rules:
- Wire fields that are null or absent map to None in the domain, never to a
  zero value
- ``*_opts_to_schema`` only sets request fields the caller supplied, so
  ``dump_request`` omits everything else
- Sequences keep their order and length
"""

import ipaddress
from enum import Enum
from typing import Any, TypeVar

from ..api import schema
from ..models.action import Action, ActionError, ActionResource, ActionStatus
from ..models.common import Datacenter, Location, Server, enum_value
from ..models.firewall import (
    Firewall,
    FirewallCreateOpts,
    FirewallResource,
    FirewallResourceLabelSelector,
    FirewallResourceServer,
    FirewallResourceType,
    FirewallRule,
    FirewallRuleDirection,
    FirewallRuleProtocol,
    FirewallSetRulesOpts,
    FirewallUpdateOpts,
    IPNetwork,
)
from ..models.primary_ip import (
    PrimaryIP,
    PrimaryIPCreateOpts,
    PrimaryIPDNSPtr,
    PrimaryIPProtection,
    PrimaryIPType,
    PrimaryIPUpdateOpts,
)
from ..models.volume import (
    Volume,
    VolumeAttachOpts,
    VolumeChangeProtectionOpts,
    VolumeCreateOpts,
    VolumeProtection,
    VolumeStatus,
    VolumeUpdateOpts,
)
from ..utils.exceptions import MalformedDataError

E = TypeVar("E", bound=Enum)


def _parse_enum(enum_cls: type[E], value: str) -> E | str:
    # The API adds values over time; an unknown one stays a plain string
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _parse_network(value: str) -> IPNetwork:
    # Host bits are masked, matching how the API normalizes ranges
    try:
        return ipaddress.ip_network(value, strict=False)
    except ValueError as e:
        raise MalformedDataError(f"Invalid IP range: {value!r}", e) from e


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------


def action_from_schema(s: schema.ActionSchema) -> Action:
    return Action(
        id=s.id,
        command=s.command,
        status=_parse_enum(ActionStatus, s.status),
        progress=s.progress,
        started=s.started,
        finished=s.finished,
        resources=[ActionResource(id=r.id, type=r.type) for r in s.resources],
        error=ActionError(code=s.error.code, message=s.error.message) if s.error else None,
    )


def actions_from_schema(items: list[schema.ActionSchema]) -> list[Action]:
    return [action_from_schema(item) for item in items]


def action_to_schema(action: Action) -> schema.ActionSchema:
    return schema.ActionSchema(
        id=action.id,
        command=action.command,
        status=enum_value(action.status),
        progress=action.progress,
        started=action.started,
        finished=action.finished,
        resources=[schema.ActionResourceSchema(id=r.id, type=r.type) for r in action.resources],
        error=(
            schema.ActionErrorSchema(code=action.error.code, message=action.error.message)
            if action.error
            else None
        ),
    )


# -----------------------------------------------------------------------------
# Locations & datacenters
# -----------------------------------------------------------------------------


def location_from_schema(s: schema.LocationSchema) -> Location:
    return Location(
        id=s.id,
        name=s.name,
        description=s.description,
        country=s.country,
        city=s.city,
        latitude=s.latitude,
        longitude=s.longitude,
        network_zone=s.network_zone,
    )


def location_to_schema(location: Location) -> schema.LocationSchema:
    return schema.LocationSchema(
        id=location.id,
        name=location.name,
        description=location.description,
        country=location.country,
        city=location.city,
        latitude=location.latitude,
        longitude=location.longitude,
        network_zone=location.network_zone,
    )


def datacenter_from_schema(s: schema.DatacenterSchema) -> Datacenter:
    return Datacenter(
        id=s.id,
        name=s.name,
        description=s.description,
        location=location_from_schema(s.location),
    )


def datacenter_to_schema(datacenter: Datacenter) -> schema.DatacenterSchema:
    return schema.DatacenterSchema(
        id=datacenter.id,
        name=datacenter.name,
        description=datacenter.description,
        location=location_to_schema(datacenter.location),
    )


# -----------------------------------------------------------------------------
# Firewalls
# -----------------------------------------------------------------------------


def firewall_rule_from_schema(s: schema.FirewallRuleSchema) -> FirewallRule:
    return FirewallRule(
        direction=_parse_enum(FirewallRuleDirection, s.direction),
        protocol=_parse_enum(FirewallRuleProtocol, s.protocol),
        source_ips=[_parse_network(ip) for ip in s.source_ips],
        destination_ips=[_parse_network(ip) for ip in s.destination_ips],
        port=s.port,
        description=s.description,
    )


def firewall_rule_to_schema(rule: FirewallRule) -> schema.FirewallRuleSchema:
    fields: dict[str, Any] = {
        "direction": enum_value(rule.direction),
        "protocol": enum_value(rule.protocol),
    }
    if rule.source_ips:
        fields["source_ips"] = [str(ip) for ip in rule.source_ips]
    if rule.destination_ips:
        fields["destination_ips"] = [str(ip) for ip in rule.destination_ips]
    if rule.port is not None:
        fields["port"] = rule.port
    if rule.description is not None:
        fields["description"] = rule.description
    return schema.FirewallRuleSchema(**fields)


def firewall_resource_from_schema(s: schema.FirewallResourceSchema) -> FirewallResource:
    if s.type == FirewallResourceType.SERVER.value:
        if s.server is None:
            raise MalformedDataError("Firewall resource of type server has no server")
        return FirewallResourceServer(id=s.server.id)
    if s.type == FirewallResourceType.LABEL_SELECTOR.value:
        if s.label_selector is None:
            raise MalformedDataError("Firewall resource of type label_selector has no selector")
        return FirewallResourceLabelSelector(
            selector=s.label_selector.selector,
            applied_to_resources=[
                FirewallResourceServer(id=r.server.id)
                for r in s.applied_to_resources or []
                if r.server is not None
            ],
        )
    raise MalformedDataError(f"Invalid firewall resource type: {s.type!r}")


def firewall_resource_to_schema(resource: FirewallResource) -> schema.FirewallResourceSchema:
    if isinstance(resource, FirewallResourceServer):
        return schema.FirewallResourceSchema(
            type=FirewallResourceType.SERVER.value,
            server=schema.FirewallResourceServerSchema(id=resource.id),
        )
    if isinstance(resource, FirewallResourceLabelSelector):
        fields: dict[str, Any] = {
            "type": FirewallResourceType.LABEL_SELECTOR.value,
            "label_selector": schema.FirewallResourceLabelSelectorSchema(
                selector=resource.selector
            ),
        }
        if resource.applied_to_resources:
            fields["applied_to_resources"] = [
                schema.FirewallAppliedToResourceSchema(
                    type=FirewallResourceType.SERVER.value,
                    server=schema.FirewallResourceServerSchema(id=server.id),
                )
                for server in resource.applied_to_resources
            ]
        return schema.FirewallResourceSchema(**fields)
    raise MalformedDataError(f"Invalid firewall resource: {resource!r}")


def firewall_from_schema(s: schema.FirewallSchema) -> Firewall:
    return Firewall(
        id=s.id,
        name=s.name,
        labels=dict(s.labels),
        created=s.created,
        rules=[firewall_rule_from_schema(rule) for rule in s.rules],
        applied_to=[firewall_resource_from_schema(r) for r in s.applied_to],
    )


def firewall_to_schema(firewall: Firewall) -> schema.FirewallSchema:
    return schema.FirewallSchema(
        id=firewall.id,
        name=firewall.name,
        labels=dict(firewall.labels),
        created=firewall.created,
        rules=[firewall_rule_to_schema(rule) for rule in firewall.rules],
        applied_to=[firewall_resource_to_schema(r) for r in firewall.applied_to],
    )


def firewall_create_opts_to_schema(opts: FirewallCreateOpts) -> schema.FirewallCreateRequest:
    fields: dict[str, Any] = {"name": opts.name}
    if opts.labels is not None:
        fields["labels"] = dict(opts.labels)
    if opts.rules:
        fields["rules"] = [firewall_rule_to_schema(rule) for rule in opts.rules]
    if opts.apply_to:
        fields["apply_to"] = [firewall_resource_to_schema(r) for r in opts.apply_to]
    return schema.FirewallCreateRequest(**fields)


def firewall_update_opts_to_schema(opts: FirewallUpdateOpts) -> schema.FirewallUpdateRequest:
    fields: dict[str, Any] = {}
    if opts.name is not None:
        fields["name"] = opts.name
    if opts.labels is not None:
        fields["labels"] = dict(opts.labels)
    return schema.FirewallUpdateRequest(**fields)


def firewall_set_rules_opts_to_schema(
    opts: FirewallSetRulesOpts,
) -> schema.FirewallActionSetRulesRequest:
    # An empty list is meaningful here: it removes every rule
    return schema.FirewallActionSetRulesRequest(
        rules=[firewall_rule_to_schema(rule) for rule in opts.rules]
    )


# -----------------------------------------------------------------------------
# Volumes
# -----------------------------------------------------------------------------


def volume_from_schema(s: schema.VolumeSchema) -> Volume:
    return Volume(
        id=s.id,
        name=s.name,
        status=_parse_enum(VolumeStatus, s.status),
        server=Server(id=s.server) if s.server is not None else None,
        location=location_from_schema(s.location),
        size=s.size,
        format=s.format,
        protection=VolumeProtection(delete=s.protection.delete),
        labels=dict(s.labels),
        linux_device=s.linux_device,
        created=s.created,
    )


def volume_to_schema(volume: Volume) -> schema.VolumeSchema:
    return schema.VolumeSchema(
        id=volume.id,
        name=volume.name,
        status=enum_value(volume.status),
        server=volume.server.id if volume.server else None,
        location=location_to_schema(volume.location),
        size=volume.size,
        format=volume.format,
        protection=schema.ProtectionSchema(delete=volume.protection.delete),
        labels=dict(volume.labels),
        linux_device=volume.linux_device,
        created=volume.created,
    )


def volume_create_opts_to_schema(opts: VolumeCreateOpts) -> schema.VolumeCreateRequest:
    fields: dict[str, Any] = {"name": opts.name, "size": opts.size}
    if opts.server is not None:
        fields["server"] = opts.server.id
    if opts.location is not None:
        # Referenced by ID when known, by name otherwise
        if opts.location.id:
            fields["location"] = opts.location.id
        elif opts.location.name:
            fields["location"] = opts.location.name
    if opts.labels is not None:
        fields["labels"] = dict(opts.labels)
    if opts.automount is not None:
        fields["automount"] = opts.automount
    if opts.format is not None:
        fields["format"] = opts.format
    return schema.VolumeCreateRequest(**fields)


def volume_update_opts_to_schema(opts: VolumeUpdateOpts) -> schema.VolumeUpdateRequest:
    fields: dict[str, Any] = {}
    if opts.name is not None:
        fields["name"] = opts.name
    if opts.labels is not None:
        fields["labels"] = dict(opts.labels)
    return schema.VolumeUpdateRequest(**fields)


def volume_attach_opts_to_schema(opts: VolumeAttachOpts) -> schema.VolumeActionAttachRequest:
    if opts.server is None:
        raise MalformedDataError("Cannot attach a volume without a server")
    fields: dict[str, Any] = {"server": opts.server.id}
    if opts.automount is not None:
        fields["automount"] = opts.automount
    return schema.VolumeActionAttachRequest(**fields)


def volume_change_protection_opts_to_schema(
    opts: VolumeChangeProtectionOpts,
) -> schema.VolumeActionChangeProtectionRequest:
    if opts.delete is None:
        return schema.VolumeActionChangeProtectionRequest()
    return schema.VolumeActionChangeProtectionRequest(delete=opts.delete)


# -----------------------------------------------------------------------------
# Primary IPs
# -----------------------------------------------------------------------------


def primary_ip_from_schema(s: schema.PrimaryIPSchema) -> PrimaryIP:
    return PrimaryIP(
        id=s.id,
        name=s.name,
        ip=s.ip,
        type=_parse_enum(PrimaryIPType, s.type),
        labels=dict(s.labels),
        protection=PrimaryIPProtection(delete=s.protection.delete),
        dns_ptr=[PrimaryIPDNSPtr(ip=entry.ip, dns_ptr=entry.dns_ptr) for entry in s.dns_ptr],
        assignee_id=s.assignee_id,
        assignee_type=s.assignee_type,
        auto_delete=s.auto_delete,
        blocked=s.blocked,
        created=s.created,
        datacenter=datacenter_from_schema(s.datacenter),
    )


def primary_ip_to_schema(primary_ip: PrimaryIP) -> schema.PrimaryIPSchema:
    return schema.PrimaryIPSchema(
        id=primary_ip.id,
        name=primary_ip.name,
        ip=primary_ip.ip,
        type=enum_value(primary_ip.type),
        labels=dict(primary_ip.labels),
        protection=schema.ProtectionSchema(delete=primary_ip.protection.delete),
        dns_ptr=[
            schema.PrimaryIPDNSPtrSchema(ip=entry.ip, dns_ptr=entry.dns_ptr)
            for entry in primary_ip.dns_ptr
        ],
        assignee_id=primary_ip.assignee_id,
        assignee_type=primary_ip.assignee_type,
        auto_delete=primary_ip.auto_delete,
        blocked=primary_ip.blocked,
        created=primary_ip.created,
        datacenter=datacenter_to_schema(primary_ip.datacenter),
    )


def primary_ip_create_opts_to_schema(
    opts: PrimaryIPCreateOpts,
) -> schema.PrimaryIPCreateRequest:
    if opts.type is None:
        raise MalformedDataError("Cannot create a Primary IP without a type")
    fields: dict[str, Any] = {
        "name": opts.name,
        "type": enum_value(opts.type),
        "assignee_type": opts.assignee_type,
    }
    if opts.assignee_id is not None:
        fields["assignee_id"] = opts.assignee_id
    if opts.datacenter:
        fields["datacenter"] = opts.datacenter
    if opts.labels is not None:
        fields["labels"] = dict(opts.labels)
    if opts.auto_delete is not None:
        fields["auto_delete"] = opts.auto_delete
    return schema.PrimaryIPCreateRequest(**fields)


def primary_ip_update_opts_to_schema(
    opts: PrimaryIPUpdateOpts,
) -> schema.PrimaryIPUpdateRequest:
    fields: dict[str, Any] = {}
    if opts.name is not None:
        fields["name"] = opts.name
    if opts.labels is not None:
        fields["labels"] = dict(opts.labels)
    if opts.auto_delete is not None:
        fields["auto_delete"] = opts.auto_delete
    return schema.PrimaryIPUpdateRequest(**fields)
