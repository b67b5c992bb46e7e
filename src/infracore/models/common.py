"""Domain models shared by several resource kinds."""

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Server:
    """Reference to a server. Only the ID is required by the API."""

    id: int
    name: str | None = None


@dataclass(frozen=True)
class Location:
    """
    A location.

    As a request value a Location is a reference: either ``id`` or ``name``
    must be set. Locations read from the API carry every attribute.
    """

    id: int = 0
    name: str = ""
    description: str | None = None
    country: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    network_zone: str | None = None


@dataclass(frozen=True)
class Datacenter:
    id: int
    name: str
    location: Location
    description: str | None = None


@dataclass
class ListOpts:
    """
    Options shared by every list endpoint.

    Zero values are not rendered: omission, not the value, means "no filter".
    """

    page: int = 0
    per_page: int = 0
    label_selector: str = ""

    def values(self) -> list[tuple[str, str]]:
        """Render the options as ordered query parameter pairs."""
        vals: list[tuple[str, str]] = []
        if self.page > 0:
            vals.append(("page", str(self.page)))
        if self.per_page > 0:
            vals.append(("per_page", str(self.per_page)))
        if self.label_selector:
            vals.append(("label_selector", self.label_selector))
        return vals


@dataclass
class NamedListOpts(ListOpts):
    """List options with the name filter and sort keys every kind supports."""

    name: str = ""
    sort: list[str] = field(default_factory=list)

    def values(self) -> list[tuple[str, str]]:
        vals = super().values()
        if self.name:
            vals.append(("name", self.name))
        vals.extend(("sort", sort) for sort in self.sort)
        return vals


def enum_value(value: Enum | str) -> str:
    """
    Wire string of an enum field.

    Fields read from the API hold the raw string when the server sends a
    value newer than this client's enum.
    """
    return value.value if isinstance(value, Enum) else value
