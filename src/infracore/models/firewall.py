"""Firewall models."""

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..utils.exceptions import ValidationError
from .action import Action
from .common import NamedListOpts

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network


class FirewallRuleDirection(str, Enum):
    """Direction of traffic a rule applies to."""

    IN = "in"
    OUT = "out"


class FirewallRuleProtocol(str, Enum):
    TCP = "tcp"
    UDP = "udp"
    ICMP = "icmp"
    ESP = "esp"
    GRE = "gre"


class FirewallResourceType(str, Enum):
    SERVER = "server"
    LABEL_SELECTOR = "label_selector"


@dataclass(frozen=True)
class FirewallRule:
    """
    A firewall rule.

    ``source_ips`` apply to inbound rules and ``destination_ips`` to outbound
    rules. ``port`` is a single port or a range such as ``"80-85"``.
    """

    direction: FirewallRuleDirection | str
    protocol: FirewallRuleProtocol | str
    source_ips: list[IPNetwork] = field(default_factory=list)
    destination_ips: list[IPNetwork] = field(default_factory=list)
    port: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class FirewallResourceServer:
    """Firewall target: a single server."""

    id: int

    @property
    def type(self) -> FirewallResourceType:
        return FirewallResourceType.SERVER


@dataclass(frozen=True)
class FirewallResourceLabelSelector:
    """
    Firewall target: every server matching a label selector.

    ``applied_to_resources`` lists the servers the selector currently matches;
    it is only populated on firewalls read from the API.
    """

    selector: str
    applied_to_resources: list[FirewallResourceServer] = field(default_factory=list)

    @property
    def type(self) -> FirewallResourceType:
        return FirewallResourceType.LABEL_SELECTOR


# Closed union: every consumer handles both variants
FirewallResource = FirewallResourceServer | FirewallResourceLabelSelector


@dataclass(frozen=True)
class Firewall:
    id: int
    name: str
    created: datetime
    labels: dict[str, str] = field(default_factory=dict)
    rules: list[FirewallRule] = field(default_factory=list)
    applied_to: list[FirewallResource] = field(default_factory=list)


@dataclass
class FirewallListOpts(NamedListOpts):
    """Options for listing firewalls."""


@dataclass
class FirewallCreateOpts:
    """Options for creating a firewall."""

    name: str = ""
    labels: dict[str, str] | None = None
    rules: list[FirewallRule] = field(default_factory=list)
    apply_to: list[FirewallResource] = field(default_factory=list)

    def validate(self) -> None:
        """
        Check the options locally.

        Raises:
            ValidationError: If the options cannot produce a valid request
        """
        if not self.name:
            raise ValidationError("missing name", field="name")


@dataclass(frozen=True)
class FirewallCreateResult:
    """Result of creating a firewall: one action per applied resource."""

    firewall: Firewall
    actions: list[Action] = field(default_factory=list)


@dataclass
class FirewallUpdateOpts:
    """
    Options for updating a firewall.

    None means "leave unchanged"; ``labels={}`` removes every label.
    """

    name: str | None = None
    labels: dict[str, str] | None = None


@dataclass
class FirewallSetRulesOpts:
    """Options for replacing the full rule set of a firewall."""

    rules: list[FirewallRule] = field(default_factory=list)
