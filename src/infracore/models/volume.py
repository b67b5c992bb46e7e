"""Volume models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ..utils.exceptions import ValidationError
from .action import Action
from .common import Location, NamedListOpts, Server

VOLUME_FORMAT_EXT4 = "ext4"
VOLUME_FORMAT_XFS = "xfs"


class VolumeStatus(str, Enum):
    CREATING = "creating"
    AVAILABLE = "available"


@dataclass(frozen=True)
class VolumeProtection:
    delete: bool = False


@dataclass(frozen=True)
class Volume:
    id: int
    name: str
    status: VolumeStatus | str
    location: Location
    size: int
    created: datetime
    server: Server | None = None
    format: str | None = None
    protection: VolumeProtection = field(default_factory=VolumeProtection)
    labels: dict[str, str] = field(default_factory=dict)
    linux_device: str = ""


@dataclass
class VolumeListOpts(NamedListOpts):
    """Options for listing volumes."""

    status: list[VolumeStatus] = field(default_factory=list)

    def values(self) -> list[tuple[str, str]]:
        vals = super().values()
        vals.extend(("status", VolumeStatus(status).value) for status in self.status)
        return vals


@dataclass
class VolumeCreateOpts:
    """
    Options for creating a volume.

    Exactly one of ``server`` (attach right away) or ``location`` must be set.
    """

    name: str = ""
    size: int = 0
    server: Server | None = None
    location: Location | None = None
    labels: dict[str, str] | None = None
    automount: bool | None = None
    format: str | None = None

    def validate(self) -> None:
        """
        Check the options locally. The first failing rule wins.

        Raises:
            ValidationError: If the options cannot produce a valid request
        """
        if not self.name:
            raise ValidationError("missing name", field="name")
        if self.size <= 0:
            raise ValidationError("size must be greater than 0", field="size")
        if (self.server is None) == (self.location is None):
            raise ValidationError(
                "exactly one of server or location must be provided", field="server"
            )
        if self.server is None and self.automount:
            raise ValidationError(
                "server must be provided when automount is true", field="server"
            )


@dataclass(frozen=True)
class VolumeCreateResult:
    volume: Volume
    action: Action | None = None
    next_actions: list[Action] = field(default_factory=list)


@dataclass
class VolumeUpdateOpts:
    """None means "leave unchanged"; ``labels={}`` removes every label."""

    name: str | None = None
    labels: dict[str, str] | None = None


@dataclass
class VolumeAttachOpts:
    server: Server | None = None
    automount: bool | None = None

    def validate(self) -> None:
        if self.server is None:
            raise ValidationError("missing server", field="server")


@dataclass
class VolumeChangeProtectionOpts:
    delete: bool | None = None
