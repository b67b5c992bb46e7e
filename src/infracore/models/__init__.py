"""Domain models: immutable entity snapshots and request option objects."""

from .action import Action, ActionError, ActionListOpts, ActionResource, ActionStatus
from .common import Datacenter, ListOpts, Location, NamedListOpts, Server, enum_value
from .firewall import (
    Firewall,
    FirewallCreateOpts,
    FirewallCreateResult,
    FirewallListOpts,
    FirewallResource,
    FirewallResourceLabelSelector,
    FirewallResourceServer,
    FirewallResourceType,
    FirewallRule,
    FirewallRuleDirection,
    FirewallRuleProtocol,
    FirewallSetRulesOpts,
    FirewallUpdateOpts,
)
from .primary_ip import (
    PrimaryIP,
    PrimaryIPAssignOpts,
    PrimaryIPChangeDNSPtrOpts,
    PrimaryIPChangeProtectionOpts,
    PrimaryIPCreateOpts,
    PrimaryIPCreateResult,
    PrimaryIPDNSPtr,
    PrimaryIPListOpts,
    PrimaryIPProtection,
    PrimaryIPType,
    PrimaryIPUpdateOpts,
)
from .volume import (
    VOLUME_FORMAT_EXT4,
    VOLUME_FORMAT_XFS,
    Volume,
    VolumeAttachOpts,
    VolumeChangeProtectionOpts,
    VolumeCreateOpts,
    VolumeCreateResult,
    VolumeListOpts,
    VolumeProtection,
    VolumeStatus,
    VolumeUpdateOpts,
)

__all__ = [
    "Action",
    "ActionError",
    "ActionListOpts",
    "ActionResource",
    "ActionStatus",
    "Datacenter",
    "ListOpts",
    "Location",
    "NamedListOpts",
    "Server",
    "enum_value",
    "Firewall",
    "FirewallCreateOpts",
    "FirewallCreateResult",
    "FirewallListOpts",
    "FirewallResource",
    "FirewallResourceLabelSelector",
    "FirewallResourceServer",
    "FirewallResourceType",
    "FirewallRule",
    "FirewallRuleDirection",
    "FirewallRuleProtocol",
    "FirewallSetRulesOpts",
    "FirewallUpdateOpts",
    "PrimaryIP",
    "PrimaryIPAssignOpts",
    "PrimaryIPChangeDNSPtrOpts",
    "PrimaryIPChangeProtectionOpts",
    "PrimaryIPCreateOpts",
    "PrimaryIPCreateResult",
    "PrimaryIPDNSPtr",
    "PrimaryIPListOpts",
    "PrimaryIPProtection",
    "PrimaryIPType",
    "PrimaryIPUpdateOpts",
    "VOLUME_FORMAT_EXT4",
    "VOLUME_FORMAT_XFS",
    "Volume",
    "VolumeAttachOpts",
    "VolumeChangeProtectionOpts",
    "VolumeCreateOpts",
    "VolumeCreateResult",
    "VolumeListOpts",
    "VolumeProtection",
    "VolumeStatus",
    "VolumeUpdateOpts",
]
