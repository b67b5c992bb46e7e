"""Identifier resolver: numeric ID first, then name; not found is None."""

import re
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from ..api.transport import Response
from ..constants import MAX_RESOURCE_ID
from ..utils.exceptions import AmbiguousNameError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")

GetByIDFunc = Callable[[int], Awaitable[tuple[T | None, Response | None]]]
GetByNameFunc = Callable[[str], Awaitable[tuple[T | None, Response | None]]]
ListByNameFunc = Callable[[], Awaitable[tuple[list[T], Response]]]


def parse_id(value: str) -> int | None:
    """
    Parse a base-10 resource ID.

    Only an optional sign followed by ASCII digits is accepted, within the
    signed 64-bit range. Anything else (whitespace, underscores, overflow)
    is not an ID and returns None.
    """
    if not _INT_PATTERN.fullmatch(value):
        return None
    parsed = int(value)
    if not -MAX_RESOURCE_ID - 1 <= parsed <= MAX_RESOURCE_ID:
        return None
    return parsed


async def get_by_id_or_name(
    id_or_name: str,
    get_by_id: GetByIDFunc[T],
    get_by_name: GetByNameFunc[T],
) -> tuple[T | None, Response | None]:
    """
    Resolve a caller-supplied string to an entity.

    Strings that parse as an ID are looked up by ID first ("007" is ID 7).
    When that finds nothing the string is tried as a name, since names may
    look numeric. Errors from the ID lookup propagate without a name lookup.

    Returns:
        (entity, response); entity is None when neither lookup matches
    """
    resource_id = parse_id(id_or_name)
    if resource_id is not None:
        result, response = await get_by_id(resource_id)
        if result is not None:
            return result, response
        logger.debug("No match by ID, trying name", id_or_name=id_or_name)
    return await get_by_name(id_or_name)


async def first_by_name(
    resource_type: str,
    name: str,
    list_by_name: ListByNameFunc[T],
) -> tuple[T | None, Response | None]:
    """
    Look up the single entity carrying ``name``.

    Args:
        resource_type: Display name used in error messages
        name: Exact name to look up; an empty name matches nothing
        list_by_name: Coroutine listing entities filtered by that name

    Returns:
        (entity, response); (None, None) for an empty name

    Raises:
        AmbiguousNameError: If the server returns more than one match
    """
    if not name:
        return None, None

    items, response = await list_by_name()
    if not items:
        return None, response
    if len(items) > 1:
        logger.error(
            "Name lookup returned multiple entries",
            resource_type=resource_type,
            name=name,
            count=len(items),
        )
        raise AmbiguousNameError(resource_type, name, len(items))
    return items[0], response
