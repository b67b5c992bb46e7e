"""Tests for the operations every resource kind shares."""

import pytest

from src.infracore.models import FirewallListOpts, Volume, VolumeListOpts, VolumeStatus
from src.infracore.utils.exceptions import (
    AmbiguousNameError,
    AuthenticationError,
    MalformedDataError,
    ResourceNotFoundError,
    TransportError,
)


class TestGetByID:
    """Test get_by_id and the not-found contract."""

    @pytest.mark.asyncio
    async def test_found(self, client, transport, volume_json):
        transport.add("GET", "/volumes/1", {"volume": volume_json()})

        volume, response = await client.volume.get_by_id(1)

        assert isinstance(volume, Volume)
        assert volume.id == 1
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_not_found_is_none(self, client, transport):
        transport.add_error("GET", "/volumes/1", ResourceNotFoundError())

        volume, response = await client.volume.get_by_id(1)

        assert volume is None
        assert response is None

    @pytest.mark.asyncio
    async def test_not_found_code_on_plain_transport_error(self, client, transport):
        """Test the not_found code is honoured whatever the exception class."""
        transport.add_error("GET", "/firewalls/5", TransportError("gone", code="not_found"))

        firewall, _ = await client.firewall.get_by_id(5)

        assert firewall is None

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, client, transport):
        transport.add_error("GET", "/volumes/1", AuthenticationError())

        with pytest.raises(AuthenticationError):
            await client.volume.get_by_id(1)

    @pytest.mark.asyncio
    async def test_missing_entity_key(self, client, transport):
        transport.add("GET", "/volumes/1", {"something": {}})

        with pytest.raises(MalformedDataError):
            await client.volume.get_by_id(1)

    @pytest.mark.asyncio
    async def test_invalid_entity_payload(self, client, transport, volume_json):
        transport.add("GET", "/volumes/1", {"volume": volume_json(size="huge")})

        with pytest.raises(MalformedDataError):
            await client.volume.get_by_id(1)


class TestGetByName:
    """Test get_by_name and get."""

    @pytest.mark.asyncio
    async def test_get_by_name(self, client, transport, volume_json):
        transport.add("GET", "/volumes", {"volumes": [volume_json(name="my-volume")]})

        volume, _ = await client.volume.get_by_name("my-volume")

        assert volume.name == "my-volume"
        assert transport.requests[0].params == [("name", "my-volume")]

    @pytest.mark.asyncio
    async def test_get_by_name_no_match(self, client, transport):
        transport.add("GET", "/volumes", {"volumes": []})

        volume, response = await client.volume.get_by_name("missing")

        assert volume is None
        assert response is not None

    @pytest.mark.asyncio
    async def test_get_by_empty_name(self, client, transport):
        assert await client.volume.get_by_name("") == (None, None)
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_get_by_name_ambiguous(self, client, transport, volume_json):
        transport.add(
            "GET", "/volumes", {"volumes": [volume_json(1, "dup"), volume_json(2, "dup")]}
        )

        with pytest.raises(AmbiguousNameError):
            await client.volume.get_by_name("dup")

    @pytest.mark.asyncio
    async def test_get_with_id(self, client, transport, volume_json):
        transport.add("GET", "/volumes/42", {"volume": volume_json(42)})

        volume, _ = await client.volume.get("42")

        assert volume.id == 42
        assert [r.path for r in transport.requests] == ["/volumes/42"]

    @pytest.mark.asyncio
    async def test_get_with_name(self, client, transport, volume_json):
        transport.add("GET", "/volumes", {"volumes": [volume_json(3, "my-volume")]})

        volume, _ = await client.volume.get("my-volume")

        assert volume.id == 3
        assert transport.calls("GET", "/volumes")[0].params == [("name", "my-volume")]

    @pytest.mark.asyncio
    async def test_get_with_leading_zeros(self, client, transport, volume_json):
        transport.add("GET", "/volumes/7", {"volume": volume_json(7)})

        volume, _ = await client.volume.get("007")

        assert volume.id == 7

    @pytest.mark.asyncio
    async def test_get_numeric_name(self, client, transport, volume_json):
        """Test a numeric name is found after the ID lookup misses."""
        transport.add_error("GET", "/volumes/2024", ResourceNotFoundError())
        transport.add("GET", "/volumes", {"volumes": [volume_json(9, "2024")]})

        volume, _ = await client.volume.get("2024")

        assert volume.id == 9
        assert [r.path for r in transport.requests] == ["/volumes/2024", "/volumes"]


class TestList:
    """Test list, all and all_with_opts."""

    @pytest.mark.asyncio
    async def test_list_renders_only_set_filters(self, client, transport):
        transport.add("GET", "/volumes", {"volumes": []})

        await client.volume.list(
            VolumeListOpts(
                page=2,
                per_page=10,
                label_selector="env=prod",
                name="db",
                sort=["id:asc", "name:desc"],
                status=[VolumeStatus.AVAILABLE, VolumeStatus.CREATING],
            )
        )

        assert transport.requests[0].params == [
            ("page", "2"),
            ("per_page", "10"),
            ("label_selector", "env=prod"),
            ("name", "db"),
            ("sort", "id:asc"),
            ("sort", "name:desc"),
            ("status", "available"),
            ("status", "creating"),
        ]

    @pytest.mark.asyncio
    async def test_list_without_opts(self, client, transport):
        transport.add("GET", "/firewalls", {"firewalls": []})

        firewalls, response = await client.firewall.list()

        assert firewalls == []
        assert response.status_code == 200
        assert transport.requests[0].params == []

    @pytest.mark.asyncio
    async def test_list_missing_collection(self, client, transport):
        transport.add("GET", "/volumes", {"error": "nope"})

        with pytest.raises(MalformedDataError):
            await client.volume.list()

    @pytest.mark.asyncio
    async def test_all_walks_every_page(self, client, transport, volume_json, meta):
        """Test three pages of two volumes each yield six volumes in three fetches."""
        for page in (1, 2, 3):
            transport.add(
                "GET",
                "/volumes",
                {
                    "volumes": [volume_json(page * 10 + 1), volume_json(page * 10 + 2)],
                    "meta": meta(page, page + 1 if page < 3 else None, per_page=2),
                },
            )

        volumes = await client.volume.all()

        assert [v.id for v in volumes] == [11, 12, 21, 22, 31, 32]
        requests = transport.calls("GET", "/volumes")
        assert len(requests) == 3
        assert [dict(r.params)["page"] for r in requests] == ["1", "2", "3"]
        assert all(dict(r.params)["per_page"] == "50" for r in requests)

    @pytest.mark.asyncio
    async def test_all_with_opts_page_size_two(self, client, transport, volume_json, meta):
        """Test page size 2 over three pages yields six volumes in three fetches."""
        for page in (1, 2, 3):
            transport.add(
                "GET",
                "/volumes",
                {
                    "volumes": [volume_json(page * 10 + 1), volume_json(page * 10 + 2)],
                    "meta": meta(page, page + 1 if page < 3 else None, per_page=2),
                },
            )

        volumes = await client.volume.all_with_opts(VolumeListOpts(per_page=2))

        assert [v.id for v in volumes] == [11, 12, 21, 22, 31, 32]
        requests = transport.calls("GET", "/volumes")
        assert len(requests) == 3
        assert [dict(r.params)["page"] for r in requests] == ["1", "2", "3"]
        assert all(dict(r.params)["per_page"] == "2" for r in requests)

    @pytest.mark.asyncio
    async def test_all_with_opts_caps_page_size(self, client, transport, volume_json, meta):
        transport.add("GET", "/volumes", {"volumes": [volume_json()], "meta": meta(1, None)})

        await client.volume.all_with_opts(VolumeListOpts(per_page=500))

        assert dict(transport.requests[0].params)["per_page"] == "50"

    @pytest.mark.asyncio
    async def test_all_keeps_volume_with_unknown_status(self, client, transport, volume_json, meta):
        transport.add(
            "GET",
            "/volumes",
            {
                "volumes": [volume_json(1), volume_json(2, "x", status="deleting")],
                "meta": meta(1, None),
            },
        )

        volumes = await client.volume.all()

        assert [v.id for v in volumes] == [1, 2]
        assert volumes[0].status == VolumeStatus.AVAILABLE
        assert volumes[1].status == "deleting"

    @pytest.mark.asyncio
    async def test_all_with_opts_keeps_filters(self, client, transport, firewall_json, meta):
        transport.add("GET", "/firewalls", {"firewalls": [firewall_json()], "meta": meta(1, None)})

        firewalls = await client.firewall.all_with_opts(
            FirewallListOpts(page=9, per_page=5, label_selector="a=b")
        )

        assert len(firewalls) == 1
        assert transport.requests[0].params == [
            ("page", "1"),
            ("per_page", "5"),
            ("label_selector", "a=b"),
        ]

    @pytest.mark.asyncio
    async def test_all_propagates_errors(self, client, transport, volume_json, meta):
        transport.add("GET", "/volumes", {"volumes": [volume_json()], "meta": meta(1, 2)})
        transport.add_error("GET", "/volumes", TransportError("server error"))

        with pytest.raises(TransportError):
            await client.volume.all()


class TestDelete:
    """Test delete."""

    @pytest.mark.asyncio
    async def test_delete(self, client, transport, volume_json):
        transport.add("GET", "/volumes/1", {"volume": volume_json()})
        transport.add("DELETE", "/volumes/1", status_code=204)
        volume, _ = await client.volume.get_by_id(1)

        response = await client.volume.delete(volume)

        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_delete_not_found_is_raised(self, client, transport, firewall_json):
        transport.add("GET", "/firewalls/1", {"firewall": firewall_json()})
        transport.add_error("DELETE", "/firewalls/1", ResourceNotFoundError())
        firewall, _ = await client.firewall.get_by_id(1)

        with pytest.raises(ResourceNotFoundError):
            await client.firewall.delete(firewall)
