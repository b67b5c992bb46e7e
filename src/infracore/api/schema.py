"""Pydantic models for the wire representation of API requests and responses.

These models mirror the JSON bodies exactly. They carry no behaviour beyond
validation; conversion to and from domain entities lives in
``infracore.core.mapper``.

Design Principles:
- Responses: optional fields default to None so absent JSON keys stay absent
- Requests: dumped with ``exclude_unset=True`` so only fields the caller
  supplied are transmitted (a present-but-empty ``labels`` map survives as
  ``{}``, an unset one disappears)
- Unknown response fields are ignored for forward compatibility

Usage:
    body = FirewallUpdateRequest(labels={})
    await transport.request("PUT", path, json=dump_request(body))
    # {"labels": {}}
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

# -----------------------------------------------------------------------------
# Errors & pagination
# -----------------------------------------------------------------------------


class ErrorSchema(BaseModel):
    """Error object returned by the API for non-2xx responses."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field("", description="Human readable error message")
    details: Any = Field(None, description="Structured error details")

    def get_full_message(self) -> str:
        """Return the message with its error code appended."""
        msg = self.message or "Unknown error"
        return f"{msg} (Code: {self.code})"


class ErrorResponse(BaseModel):
    """Envelope of an API error response: ``{"error": {...}}``."""

    error: ErrorSchema


class PaginationSchema(BaseModel):
    """Pagination block of ``meta`` in list responses."""

    page: int | None = None
    per_page: int | None = None
    previous_page: int | None = None
    next_page: int | None = None
    last_page: int | None = None
    total_entries: int | None = None


class MetaSchema(BaseModel):
    """``meta`` object of list responses."""

    pagination: PaginationSchema | None = None


# -----------------------------------------------------------------------------
# Actions
# -----------------------------------------------------------------------------


class ActionResourceSchema(BaseModel):
    id: int
    type: str


class ActionErrorSchema(BaseModel):
    code: str
    message: str


class ActionSchema(BaseModel):
    """An asynchronous server-side operation."""

    id: int
    command: str
    status: str
    progress: int = 0
    started: datetime
    finished: datetime | None = None
    resources: list[ActionResourceSchema] = Field(default_factory=list)
    error: ActionErrorSchema | None = None


class ActionResponse(BaseModel):
    """Response of action endpoints that produce a single action."""

    action: ActionSchema


class ActionsResponse(BaseModel):
    """Response of action endpoints that produce several actions."""

    actions: list[ActionSchema] = Field(default_factory=list)


# -----------------------------------------------------------------------------
# Shared nested objects
# -----------------------------------------------------------------------------


class LocationSchema(BaseModel):
    id: int
    name: str
    description: str | None = None
    country: str | None = None
    city: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    network_zone: str | None = None


class DatacenterSchema(BaseModel):
    id: int
    name: str
    description: str | None = None
    location: LocationSchema


class ProtectionSchema(BaseModel):
    delete: bool = False


# -----------------------------------------------------------------------------
# Firewalls
# -----------------------------------------------------------------------------


class FirewallRuleSchema(BaseModel):
    """A single firewall rule, used in responses and requests."""

    direction: str
    protocol: str
    source_ips: list[str] = Field(default_factory=list)
    destination_ips: list[str] = Field(default_factory=list)
    port: str | None = None
    description: str | None = None


class FirewallResourceServerSchema(BaseModel):
    id: int


class FirewallResourceLabelSelectorSchema(BaseModel):
    selector: str


class FirewallAppliedToResourceSchema(BaseModel):
    """A concrete resource matched by a label selector."""

    type: str
    server: FirewallResourceServerSchema | None = None


class FirewallResourceSchema(BaseModel):
    """Tagged union over ``server`` and ``label_selector`` targets."""

    type: str
    server: FirewallResourceServerSchema | None = None
    label_selector: FirewallResourceLabelSelectorSchema | None = None
    applied_to_resources: list[FirewallAppliedToResourceSchema] | None = None


class FirewallSchema(BaseModel):
    id: int
    name: str
    labels: dict[str, str] = Field(default_factory=dict)
    created: datetime
    rules: list[FirewallRuleSchema] = Field(default_factory=list)
    applied_to: list[FirewallResourceSchema] = Field(default_factory=list)


class FirewallCreateRequest(BaseModel):
    name: str
    labels: dict[str, str] | None = None
    rules: list[FirewallRuleSchema] | None = None
    apply_to: list[FirewallResourceSchema] | None = None


class FirewallCreateResponse(BaseModel):
    firewall: FirewallSchema
    actions: list[ActionSchema] = Field(default_factory=list)


class FirewallUpdateRequest(BaseModel):
    name: str | None = None
    labels: dict[str, str] | None = None


class FirewallActionSetRulesRequest(BaseModel):
    rules: list[FirewallRuleSchema]


class FirewallActionApplyToResourcesRequest(BaseModel):
    apply_to: list[FirewallResourceSchema]


class FirewallActionRemoveFromResourcesRequest(BaseModel):
    remove_from: list[FirewallResourceSchema]


# -----------------------------------------------------------------------------
# Volumes
# -----------------------------------------------------------------------------


class VolumeSchema(BaseModel):
    id: int
    name: str
    status: str
    server: int | None = None
    location: LocationSchema
    size: int
    format: str | None = None
    protection: ProtectionSchema = Field(default_factory=ProtectionSchema)
    labels: dict[str, str] = Field(default_factory=dict)
    linux_device: str = ""
    created: datetime


class VolumeCreateRequest(BaseModel):
    name: str
    size: int
    server: int | None = None
    # Location can be referenced by ID or by name
    location: int | str | None = None
    labels: dict[str, str] | None = None
    automount: bool | None = None
    format: str | None = None


class VolumeCreateResponse(BaseModel):
    volume: VolumeSchema
    action: ActionSchema | None = None
    next_actions: list[ActionSchema] = Field(default_factory=list)


class VolumeUpdateRequest(BaseModel):
    name: str | None = None
    labels: dict[str, str] | None = None


class VolumeActionAttachRequest(BaseModel):
    server: int
    automount: bool | None = None


class VolumeActionDetachRequest(BaseModel):
    pass


class VolumeActionChangeProtectionRequest(BaseModel):
    delete: bool | None = None


class VolumeActionResizeRequest(BaseModel):
    size: int


# -----------------------------------------------------------------------------
# Primary IPs
# -----------------------------------------------------------------------------


class PrimaryIPDNSPtrSchema(BaseModel):
    ip: str
    dns_ptr: str


class PrimaryIPSchema(BaseModel):
    id: int
    name: str
    ip: str
    type: str
    labels: dict[str, str] = Field(default_factory=dict)
    protection: ProtectionSchema = Field(default_factory=ProtectionSchema)
    dns_ptr: list[PrimaryIPDNSPtrSchema] = Field(default_factory=list)
    assignee_id: int | None = None
    assignee_type: str = "server"
    auto_delete: bool = False
    blocked: bool = False
    created: datetime
    datacenter: DatacenterSchema


class PrimaryIPCreateRequest(BaseModel):
    name: str
    type: str
    assignee_type: str
    assignee_id: int | None = None
    labels: dict[str, str] | None = None
    auto_delete: bool | None = None
    datacenter: str | None = None


class PrimaryIPCreateResponse(BaseModel):
    primary_ip: PrimaryIPSchema
    action: ActionSchema | None = None


class PrimaryIPUpdateRequest(BaseModel):
    name: str | None = None
    labels: dict[str, str] | None = None
    auto_delete: bool | None = None


class PrimaryIPActionAssignRequest(BaseModel):
    assignee_id: int
    assignee_type: str


class PrimaryIPActionChangeDNSPtrRequest(BaseModel):
    ip: str
    # Always transmitted: null resets the pointer to its default
    dns_ptr: str | None


class PrimaryIPActionChangeProtectionRequest(BaseModel):
    delete: bool


def dump_request(body: BaseModel) -> dict[str, Any]:
    """Render a request model as JSON-ready data, keeping only explicitly set fields."""
    return body.model_dump(mode="json", exclude_unset=True)
