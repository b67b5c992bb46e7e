"""Tests for the identifier resolver."""

import pytest

from src.infracore.api.transport import Response
from src.infracore.core.resolver import first_by_name, get_by_id_or_name, parse_id
from src.infracore.utils.exceptions import AmbiguousNameError, AuthenticationError

OK = Response(status_code=200)


class TestParseID:
    """Test parse_id."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("42", 42),
            ("007", 7),
            ("-1", -1),
            ("+5", 5),
            ("9223372036854775807", 9223372036854775807),
        ],
    )
    def test_ids(self, value, expected):
        assert parse_id(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "my-volume", " 42", "42 ", "4_2", "0x2a", "1.0", "9223372036854775808", "٤٢"],
    )
    def test_not_ids(self, value):
        assert parse_id(value) is None


class TestGetByIDOrName:
    """Test ID-or-name dispatch."""

    @pytest.fixture
    def lookups(self, mocker):
        get_by_id = mocker.AsyncMock(return_value=("by-id", OK))
        get_by_name = mocker.AsyncMock(return_value=("by-name", OK))
        return get_by_id, get_by_name

    @pytest.mark.asyncio
    async def test_numeric_string_uses_id(self, lookups):
        get_by_id, get_by_name = lookups

        result, _ = await get_by_id_or_name("42", get_by_id, get_by_name)

        assert result == "by-id"
        get_by_id.assert_awaited_once_with(42)
        get_by_name.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_name_uses_name(self, lookups):
        get_by_id, get_by_name = lookups

        result, _ = await get_by_id_or_name("my-volume", get_by_id, get_by_name)

        assert result == "by-name"
        get_by_id.assert_not_awaited()
        get_by_name.assert_awaited_once_with("my-volume")

    @pytest.mark.asyncio
    async def test_leading_zeros_are_an_id(self, lookups):
        get_by_id, get_by_name = lookups

        await get_by_id_or_name("007", get_by_id, get_by_name)

        get_by_id.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_numeric_name_falls_back_to_name(self, lookups):
        """Test a numeric string that matches no ID is tried as a name."""
        get_by_id, get_by_name = lookups
        get_by_id.return_value = (None, None)

        result, _ = await get_by_id_or_name("2024", get_by_id, get_by_name)

        assert result == "by-name"
        get_by_name.assert_awaited_once_with("2024")

    @pytest.mark.asyncio
    async def test_id_lookup_error_propagates(self, lookups):
        get_by_id, get_by_name = lookups
        get_by_id.side_effect = AuthenticationError()

        with pytest.raises(AuthenticationError):
            await get_by_id_or_name("42", get_by_id, get_by_name)
        get_by_name.assert_not_awaited()


class TestFirstByName:
    """Test first_by_name."""

    @pytest.mark.asyncio
    async def test_empty_name_sends_nothing(self, mocker):
        list_by_name = mocker.AsyncMock()

        assert await first_by_name("Volume", "", list_by_name) == (None, None)
        list_by_name.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_match(self, mocker):
        list_by_name = mocker.AsyncMock(return_value=([], OK))

        assert await first_by_name("Volume", "x", list_by_name) == (None, OK)

    @pytest.mark.asyncio
    async def test_single_match(self, mocker):
        list_by_name = mocker.AsyncMock(return_value=(["vol"], OK))

        assert await first_by_name("Volume", "x", list_by_name) == ("vol", OK)

    @pytest.mark.asyncio
    async def test_ambiguous_match(self, mocker):
        list_by_name = mocker.AsyncMock(return_value=(["a", "b"], OK))

        with pytest.raises(AmbiguousNameError) as exc_info:
            await first_by_name("Volume", "x", list_by_name)

        assert exc_info.value.count == 2
        assert exc_info.value.resource_type == "Volume"
