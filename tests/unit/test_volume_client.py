"""Tests for the volume client."""

import pytest

from src.infracore.models import (
    Location,
    Server,
    VolumeAttachOpts,
    VolumeChangeProtectionOpts,
    VolumeCreateOpts,
    VolumeUpdateOpts,
)
from src.infracore.utils.exceptions import MalformedDataError, ValidationError


class TestVolumeCreateValidation:
    """Test local validation of VolumeCreateOpts; nothing may be sent."""

    @pytest.mark.parametrize(
        "opts, message",
        [
            (VolumeCreateOpts(size=10, location=Location(name="fsn1")), "missing name"),
            (VolumeCreateOpts(name="v", location=Location(name="fsn1")), "size must be greater than 0"),
            (
                VolumeCreateOpts(name="v", size=-1, location=Location(name="fsn1")),
                "size must be greater than 0",
            ),
            (
                VolumeCreateOpts(name="v", size=10, server=Server(id=1), location=Location(name="fsn1")),
                "exactly one of server or location must be provided",
            ),
            (VolumeCreateOpts(name="v", size=10), "exactly one of server or location must be provided"),
            (
                VolumeCreateOpts(name="v", size=10, location=Location(name="fsn1"), automount=True),
                "server must be provided when automount is true",
            ),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_opts(self, client, transport, opts, message):
        with pytest.raises(ValidationError) as exc_info:
            await client.volume.create(opts)

        assert str(exc_info.value) == message
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_name_is_checked_before_size(self, client, transport):
        """Test the first failing rule wins."""
        with pytest.raises(ValidationError, match="missing name") as exc_info:
            await client.volume.create(VolumeCreateOpts(name="", size=0))

        assert exc_info.value.field == "name"
        assert transport.requests == []


class TestVolumeCreate:
    """Test VolumeClient.create."""

    @pytest.mark.asyncio
    async def test_create_in_location(self, client, transport, volume_json, action_json):
        transport.add(
            "POST",
            "/volumes",
            {
                "volume": volume_json(5, "v", status="creating"),
                "action": action_json(1, "create_volume"),
                "next_actions": [],
            },
            status_code=201,
        )

        result, _ = await client.volume.create(
            VolumeCreateOpts(name="v", size=42, location=Location(name="fsn1"), format="xfs")
        )

        assert result.volume.id == 5
        assert result.action.command == "create_volume"
        assert result.next_actions == []
        assert transport.requests[0].json == {
            "name": "v",
            "size": 42,
            "location": "fsn1",
            "format": "xfs",
        }

    @pytest.mark.asyncio
    async def test_create_attached(self, client, transport, volume_json, action_json):
        transport.add(
            "POST",
            "/volumes",
            {
                "volume": volume_json(5, "v", server=7),
                "action": action_json(1, "create_volume"),
                "next_actions": [action_json(2, "attach_volume")],
            },
        )

        result, _ = await client.volume.create(
            VolumeCreateOpts(name="v", size=10, server=Server(id=7), automount=True)
        )

        assert result.volume.server == Server(id=7)
        assert [a.command for a in result.next_actions] == ["attach_volume"]
        assert transport.requests[0].json == {
            "name": "v",
            "size": 10,
            "server": 7,
            "automount": True,
        }

    @pytest.mark.asyncio
    async def test_create_location_by_id(self, client, transport, volume_json):
        transport.add("POST", "/volumes", {"volume": volume_json()})

        result, _ = await client.volume.create(VolumeCreateOpts(name="v", size=10, location=Location(id=1)))

        assert result.action is None
        assert transport.requests[0].json["location"] == 1


class TestVolumeActions:
    """Test volume update and action operations."""

    @pytest.fixture
    async def volume(self, client, transport, volume_json):
        transport.add("GET", "/volumes/1", {"volume": volume_json()})
        volume, _ = await client.volume.get_by_id(1)
        return volume

    @pytest.mark.asyncio
    async def test_update(self, client, transport, volume_json, volume):
        transport.add("PUT", "/volumes/1", {"volume": volume_json(name="renamed")})

        updated, _ = await client.volume.update(volume, VolumeUpdateOpts(name="renamed"))

        assert updated.name == "renamed"
        assert transport.calls("PUT", "/volumes/1")[0].json == {"name": "renamed"}

    @pytest.mark.asyncio
    async def test_attach(self, client, transport, action_json, volume):
        transport.add("POST", "/volumes/1/actions/attach", {"action": action_json(3, "attach_volume")})

        action, _ = await client.volume.attach(volume, Server(id=9))

        assert action.id == 3
        assert transport.calls("POST", "/volumes/1/actions/attach")[0].json == {"server": 9}

    @pytest.mark.asyncio
    async def test_attach_with_automount(self, client, transport, action_json, volume):
        transport.add("POST", "/volumes/1/actions/attach", {"action": action_json(3, "attach_volume")})

        await client.volume.attach_with_opts(volume, VolumeAttachOpts(server=Server(id=9), automount=False))

        assert transport.calls("POST", "/volumes/1/actions/attach")[0].json == {
            "server": 9,
            "automount": False,
        }

    @pytest.mark.asyncio
    async def test_attach_without_server(self, client, transport, volume):
        with pytest.raises(ValidationError, match="missing server"):
            await client.volume.attach_with_opts(volume, VolumeAttachOpts(automount=True))

        assert transport.calls("POST", "/volumes/1/actions/attach") == []

    @pytest.mark.asyncio
    async def test_detach(self, client, transport, action_json, volume):
        transport.add("POST", "/volumes/1/actions/detach", {"action": action_json(4, "detach_volume")})

        action, _ = await client.volume.detach(volume)

        assert action.command == "detach_volume"
        assert transport.calls("POST", "/volumes/1/actions/detach")[0].json == {}

    @pytest.mark.asyncio
    async def test_resize(self, client, transport, action_json, volume):
        transport.add("POST", "/volumes/1/actions/resize", {"action": action_json(5, "resize_volume")})

        await client.volume.resize(volume, 100)

        assert transport.calls("POST", "/volumes/1/actions/resize")[0].json == {"size": 100}

    @pytest.mark.parametrize("size", [0, -10])
    @pytest.mark.asyncio
    async def test_resize_invalid_size(self, client, transport, volume, size):
        with pytest.raises(ValidationError, match="size must be greater than 0"):
            await client.volume.resize(volume, size)

        assert transport.calls("POST", "/volumes/1/actions/resize") == []

    @pytest.mark.asyncio
    async def test_change_protection(self, client, transport, action_json, volume):
        transport.add(
            "POST",
            "/volumes/1/actions/change_protection",
            {"action": action_json(6, "change_protection")},
        )

        await client.volume.change_protection(volume, VolumeChangeProtectionOpts(delete=True))

        assert transport.calls("POST", "/volumes/1/actions/change_protection")[0].json == {
            "delete": True
        }

    @pytest.mark.asyncio
    async def test_action_response_without_action(self, client, transport, volume):
        transport.add("POST", "/volumes/1/actions/detach", {})

        with pytest.raises(MalformedDataError):
            await client.volume.detach(volume)
