"""Pytest configuration and shared fixtures.

This module provides reusable fixtures for testing the infracore client.
Fixtures are organized by category:
- Transport fixtures: A recording fake transport with queued responses
- Data fixtures: Factories for API JSON payloads of every resource kind
- Client fixtures: Kind clients wired to the fake transport
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from src.infracore.api.transport import Response
from src.infracore.client import Client

CREATED = "2016-01-30T23:50:00+00:00"

# =============================================================================
# Transport Fixtures
# =============================================================================


@dataclass
class RecordedRequest:
    """One request seen by the fake transport."""

    method: str
    path: str
    params: list[tuple[str, str]] = field(default_factory=list)
    json: dict[str, Any] | None = None


class FakeTransport:
    """
    In-memory transport returning queued responses per (method, path).

    Each queued item is a Response or an exception to raise. The last item
    of a queue is repeated, so a single queued response serves any number of
    identical requests. Unexpected requests fail the test.
    """

    def __init__(self) -> None:
        self.requests: list[RecordedRequest] = []
        self._queues: dict[tuple[str, str], list[Response | BaseException]] = {}

    def add(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        status_code: int = 200,
    ) -> None:
        self._queues.setdefault((method, path), []).append(
            Response(status_code=status_code, body=body or {})
        )

    def add_error(self, method: str, path: str, error: BaseException) -> None:
        self._queues.setdefault((method, path), []).append(error)

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: dict[str, Any] | None = None,
    ) -> Response:
        self.requests.append(RecordedRequest(method, path, list(params or []), json))
        queue = self._queues.get((method, path))
        if not queue:
            raise AssertionError(f"Unexpected request: {method} {path}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, BaseException):
            raise item
        return item

    def calls(self, method: str, path: str) -> list[RecordedRequest]:
        return [r for r in self.requests if r.method == method and r.path == path]


@pytest.fixture
def transport() -> FakeTransport:
    """Create an empty recording transport."""
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> Client:
    """Create a Client over the fake transport with no polling delay."""
    return Client(transport, poll_interval=0)


# =============================================================================
# Data Fixtures
# =============================================================================


def _location(name: str = "fsn1") -> dict[str, Any]:
    return {
        "id": 1,
        "name": name,
        "description": "Falkenstein DC Park 1",
        "country": "DE",
        "city": "Falkenstein",
        "latitude": 50.47612,
        "longitude": 12.370071,
        "network_zone": "eu-central",
    }


@pytest.fixture
def action_json() -> Callable[..., dict[str, Any]]:
    """Factory for action payloads."""

    def make(
        action_id: int = 1,
        command: str = "create",
        status: str = "running",
        error: dict[str, str] | None = None,
        **overrides: Any,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": action_id,
            "command": command,
            "status": status,
            "progress": 100 if status != "running" else 0,
            "started": CREATED,
            "finished": CREATED if status != "running" else None,
            "resources": [{"id": 42, "type": "server"}],
            "error": error,
        }
        data.update(overrides)
        return data

    return make


@pytest.fixture
def firewall_json() -> Callable[..., dict[str, Any]]:
    """Factory for firewall payloads."""

    def make(firewall_id: int = 1, name: str = "fw", **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": firewall_id,
            "name": name,
            "labels": {},
            "created": CREATED,
            "rules": [],
            "applied_to": [],
        }
        data.update(overrides)
        return data

    return make


@pytest.fixture
def volume_json() -> Callable[..., dict[str, Any]]:
    """Factory for volume payloads."""

    def make(volume_id: int = 1, name: str = "db-storage", **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": volume_id,
            "name": name,
            "status": "available",
            "server": None,
            "location": _location(),
            "size": 42,
            "format": "xfs",
            "protection": {"delete": False},
            "labels": {},
            "linux_device": f"/dev/disk/by-id/scsi-0HC_Volume_{volume_id}",
            "created": CREATED,
        }
        data.update(overrides)
        return data

    return make


@pytest.fixture
def primary_ip_json() -> Callable[..., dict[str, Any]]:
    """Factory for Primary IP payloads."""

    def make(primary_ip_id: int = 1, name: str = "my-ip", **overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": primary_ip_id,
            "name": name,
            "ip": "131.232.99.1",
            "type": "ipv4",
            "labels": {},
            "protection": {"delete": False},
            "dns_ptr": [{"ip": "131.232.99.1", "dns_ptr": "server.example.com"}],
            "assignee_id": 17,
            "assignee_type": "server",
            "auto_delete": True,
            "blocked": False,
            "created": CREATED,
            "datacenter": {
                "id": 4,
                "name": "fsn1-dc14",
                "description": "Falkenstein 1 DC 14",
                "location": _location(),
            },
        }
        data.update(overrides)
        return data

    return make


def page_meta(page: int, next_page: int | None, per_page: int = 50) -> dict[str, Any]:
    """Build a list response ``meta`` object."""
    return {
        "pagination": {
            "page": page,
            "per_page": per_page,
            "previous_page": page - 1 if page > 1 else None,
            "next_page": next_page,
            "last_page": None,
            "total_entries": None,
        }
    }


@pytest.fixture
def meta() -> Callable[..., dict[str, Any]]:
    """Factory for pagination meta objects."""
    return page_meta
