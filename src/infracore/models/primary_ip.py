"""Primary IP models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..utils.exceptions import ValidationError
from .action import Action
from .common import Datacenter, NamedListOpts

ASSIGNEE_TYPE_SERVER = "server"


class PrimaryIPType(str, Enum):
    IPV4 = "ipv4"
    IPV6 = "ipv6"


@dataclass(frozen=True)
class PrimaryIPProtection:
    delete: bool = False


@dataclass(frozen=True)
class PrimaryIPDNSPtr:
    """Reverse DNS entry for one address of a Primary IP."""

    ip: str
    dns_ptr: str


@dataclass(frozen=True)
class PrimaryIP:
    id: int
    name: str
    ip: str
    type: PrimaryIPType | str
    created: datetime
    datacenter: Datacenter
    labels: dict[str, str] = field(default_factory=dict)
    protection: PrimaryIPProtection = field(default_factory=PrimaryIPProtection)
    dns_ptr: list[PrimaryIPDNSPtr] = field(default_factory=list)
    assignee_id: int | None = None
    assignee_type: str = ASSIGNEE_TYPE_SERVER
    auto_delete: bool = False
    blocked: bool = False


@dataclass
class PrimaryIPListOpts(NamedListOpts):
    """Options for listing Primary IPs."""

    ip: str = ""

    def values(self) -> list[tuple[str, str]]:
        vals = super().values()
        if self.ip:
            vals.append(("ip", self.ip))
        return vals


@dataclass
class PrimaryIPCreateOpts:
    """
    Options for creating a Primary IP.

    Exactly one of ``assignee_id`` (assign right away) or ``datacenter``
    (name of the datacenter to allocate in) must be set.
    """

    name: str = ""
    type: PrimaryIPType | None = None
    assignee_type: str = ASSIGNEE_TYPE_SERVER
    assignee_id: int | None = None
    datacenter: str | None = None
    labels: dict[str, str] | None = None
    auto_delete: bool | None = None

    def validate(self) -> None:
        if not self.name:
            raise ValidationError("missing name", field="name")
        if self.type is None:
            raise ValidationError("missing type", field="type")
        if (self.assignee_id is None) == (not self.datacenter):
            raise ValidationError(
                "exactly one of assignee_id or datacenter must be provided",
                field="assignee_id",
            )


@dataclass(frozen=True)
class PrimaryIPCreateResult:
    primary_ip: PrimaryIP
    action: Action | None = None


@dataclass
class PrimaryIPUpdateOpts:
    """None means "leave unchanged"; ``labels={}`` removes every label."""

    name: str | None = None
    labels: dict[str, str] | None = None
    auto_delete: bool | None = None


@dataclass
class PrimaryIPAssignOpts:
    assignee_id: int
    assignee_type: str = ASSIGNEE_TYPE_SERVER


@dataclass
class PrimaryIPChangeDNSPtrOpts:
    """Set the reverse DNS pointer of ``ip``; ``dns_ptr=None`` resets it."""

    ip: str
    dns_ptr: str | None = None


@dataclass
class PrimaryIPChangeProtectionOpts:
    delete: bool
